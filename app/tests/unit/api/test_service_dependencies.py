"""Unit tests for the request-scoped service providers."""

import pytest

from api.dependencies import services
from infrastructure.auth.session import Session
from infrastructure.clients.supabase import RequestSessionProvider, UserClientManager
from infrastructure.configuration import Settings
from infrastructure.services import providers
from modules.finance import FinanceService
from modules.groups import GroupService
from modules.users import UserService
from modules.wishlist import WishlistService

pytestmark = pytest.mark.unit


@pytest.fixture
def session():
    return Session(access_token="access-1", refresh_token="refresh-1", user_id="u1")


@pytest.fixture
def client_manager(session):
    return services.get_user_client_manager(Settings(), session)


class TestRequestDependencies:
    def test_client_manager_carries_callers_token(self, client_manager):
        assert isinstance(client_manager, UserClientManager)
        assert client_manager.access_token == "access-1"

    def test_executor_refreshes_the_callers_session(self, session, client_manager):
        session_provider = services.get_request_session_provider(
            session, client_manager
        )
        executor = services.get_request_executor(session_provider)

        assert isinstance(session_provider, RequestSessionProvider)
        assert session_provider._client_manager is client_manager
        assert executor._session_provider is session_provider
        assert executor.policy is providers.get_retry_policy()
        assert executor._idempotency is providers.get_idempotency_service()

    def test_each_request_gets_its_own_executor(self, session, client_manager):
        session_provider = services.get_request_session_provider(
            session, client_manager
        )

        assert services.get_request_executor(
            session_provider
        ) is not services.get_request_executor(session_provider)

    @pytest.mark.parametrize(
        "provider, service_class",
        [
            (services.get_finance_service, FinanceService),
            (services.get_wishlist_service, WishlistService),
            (services.get_user_service, UserService),
            (services.get_group_service, GroupService),
        ],
    )
    def test_services_share_request_client(
        self, client_manager, executor, provider, service_class
    ):
        service = provider(client_manager, executor)

        assert isinstance(service, service_class)
        assert service._client_manager is client_manager
        assert service._executor is executor
