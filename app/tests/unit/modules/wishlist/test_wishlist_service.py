"""Unit tests for WishlistService."""

import pytest

from infrastructure.auth.session import RefreshResult
from modules.wishlist.service import WishlistService

pytestmark = pytest.mark.unit


@pytest.fixture
def service(client_manager, executor):
    return WishlistService(client_manager, executor)


def item_row(**overrides):
    row = {
        "id": "w1",
        "name": "Bicycle",
        "price": 45000,
        "created_by": "user-123",
        "created_at": "2024-05-01T00:00:00+00:00",
    }
    row.update(overrides)
    return row


class TestWishlistService:
    @pytest.mark.asyncio
    async def test_fetch_wishlist(self, service, fake_client):
        fake_client.queue("wishlist", [item_row(), item_row(id="w2", name="Camera")])

        items = await service.fetch_wishlist("user-123")

        assert [item.name for item in items] == ["Bicycle", "Camera"]
        assert fake_client.last_query.called("order") == [
            (("created_at",), {"desc": True})
        ]

    @pytest.mark.asyncio
    async def test_fetch_wishlist_failure_returns_empty_list(
        self, service, fake_client, api_error
    ):
        fake_client.queue("wishlist", api_error("network error"))

        assert await service.fetch_wishlist("user-123") == []

    @pytest.mark.asyncio
    async def test_add_wishlist_item(self, service, fake_client):
        fake_client.queue("wishlist", [item_row()])

        item = await service.add_wishlist_item(
            "user-123", {"name": "Bicycle", "price": 45000}
        )

        assert item.price == 45000
        assert fake_client.last_query.called("insert") == [
            (({"name": "Bicycle", "price": 45000, "created_by": "user-123"},), {})
        ]

    @pytest.mark.asyncio
    async def test_add_wishlist_item_failure(self, service, fake_client, api_error):
        fake_client.queue("wishlist", api_error("network error"))

        assert await service.add_wishlist_item("user-123", {"name": "x"}) is None

    @pytest.mark.asyncio
    async def test_update_wishlist_item(self, service, fake_client):
        fake_client.queue("wishlist", [item_row(price=40000)])

        assert await service.update_wishlist_item("user-123", "w1", {"price": 40000})
        assert fake_client.last_query.called("eq") == [
            (("id", "w1"), {}),
            (("created_by", "user-123"), {}),
        ]

    @pytest.mark.asyncio
    async def test_delete_wishlist_item_auth_unrecoverable(
        self, service, fake_client, api_error, session_provider
    ):
        session_provider.refresh_session.return_value = RefreshResult(session=None)
        fake_client.queue("wishlist", api_error("JWT expired", "PGRST301"))

        assert await service.delete_wishlist_item("user-123", "w1") is False
        assert len(fake_client.queries) == 1
