from fastapi import APIRouter

from api.v1.routes.finance import router as finance_router
from api.v1.routes.groups import router as groups_router
from api.v1.routes.users import router as users_router
from api.v1.routes.wishlist import router as wishlist_router

# Main v1 router, mounted under /api/v1
router = APIRouter()
router.include_router(finance_router)
router.include_router(wishlist_router)
router.include_router(users_router)
router.include_router(groups_router)
