from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.router import api_router
from api.dependencies.rate_limits import setup_rate_limiter
from infrastructure.auth.middleware import AuthRedirectMiddleware
from infrastructure.logging import get_module_logger
from infrastructure.services import get_settings
from server.lifespan import lifespan
from server.utils import is_request_authenticated

logger = get_module_logger()


def create_app() -> FastAPI:
    """Build the FastAPI application with auth redirects and API routes."""
    settings = get_settings()

    app = FastAPI(lifespan=lifespan)
    setup_rate_limiter(app)

    allow_origins = (
        ["*"]
        if settings.is_production
        else [
            "http://localhost:3000",
            "http://127.0.0.1:3000",
        ]
    )
    app.add_middleware(
        AuthRedirectMiddleware,
        is_authenticated=is_request_authenticated,
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=allow_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(api_router)
    return app


handler = create_app()
