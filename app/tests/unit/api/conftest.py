"""Fixtures for the v1 API routes.

Routes run against the real domain services, wired to the fake Supabase
client and the instant-sleep executor from the root conftest.
"""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from api.dependencies.rate_limits import get_limiter, setup_rate_limiter
from api.dependencies.services import get_request_executor, get_user_client_manager
from api.v1.router import router as v1_router
from infrastructure.auth.session import Session
from server.utils import get_current_session


@pytest.fixture
def caller():
    return Session(access_token="access-1", refresh_token="refresh-1", user_id="user-123")


@pytest.fixture
def app(caller, client_manager, executor):
    get_limiter().reset()
    application = FastAPI()
    setup_rate_limiter(application)
    application.include_router(v1_router, prefix="/api/v1")
    application.dependency_overrides[get_current_session] = lambda: caller
    application.dependency_overrides[get_user_client_manager] = lambda: client_manager
    application.dependency_overrides[get_request_executor] = lambda: executor
    yield application
    application.dependency_overrides.clear()


@pytest.fixture
def api(app):
    return TestClient(app)
