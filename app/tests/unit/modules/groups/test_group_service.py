"""Unit tests for GroupService."""

from datetime import datetime, timezone

import pytest

from modules.groups.errors import (
    AlreadyInGroupError,
    GroupPermissionError,
    InvalidInviteCodeError,
)
from modules.groups.models import Group
from modules.groups.service import GroupService, new_invite_code

pytestmark = pytest.mark.unit

NOW = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def service(client_manager, executor):
    return GroupService(
        client_manager, executor, clock=lambda: NOW, code_factory=lambda: "ABCD1234"
    )


def group_row(**overrides):
    row = {
        "id": "g1",
        "group_name": "Household",
        "description": "Shared budget",
        "author_user_id": "user-123",
        "invited_user_id": None,
        "created_at": "2024-05-01T00:00:00+00:00",
    }
    row.update(overrides)
    return row


def group(**overrides):
    return Group(
        id="g1", group_name="Household", author_user_id="user-123", **overrides
    )


class TestFetchUserGroup:
    @pytest.mark.asyncio
    async def test_returns_group_of_user(self, service, fake_client):
        fake_client.queue("users", {"group_id": "g1"})
        fake_client.queue("groups", group_row())

        result = await service.fetch_user_group("user-123")

        assert result.group_name == "Household"
        assert fake_client.last_query.called("eq") == [(("id", "g1"), {})]

    @pytest.mark.asyncio
    async def test_user_without_group(self, service, fake_client):
        fake_client.queue("users", {"group_id": None})

        assert await service.fetch_user_group("user-123") is None
        assert [query.table for query in fake_client.queries] == ["users"]

    @pytest.mark.asyncio
    async def test_store_failure_returns_none(self, service, fake_client, api_error):
        fake_client.queue("users", api_error("network error"))

        assert await service.fetch_user_group("user-123") is None


class TestCreateUserGroup:
    @pytest.mark.asyncio
    async def test_creates_group_and_links_author(self, service, fake_client):
        fake_client.queue("users", {"group_id": None}, [{"id": "user-123"}])
        fake_client.queue("groups", [group_row()])

        result = await service.create_user_group(
            "user-123",
            {"group_name": "Household", "author_user_id": "intruder", "id": "x"},
        )

        assert result.id == "g1"
        insert, = [q for q in fake_client.queries if q.called("insert")]
        assert insert.called("insert") == [
            (({"group_name": "Household", "author_user_id": "user-123"},), {})
        ]
        link = fake_client.last_query
        assert link.called("update") == [(({"group_id": "g1"},), {})]
        assert link.called("eq") == [(("id", "user-123"), {})]

    @pytest.mark.asyncio
    async def test_user_already_in_group_is_refused(self, service, fake_client):
        fake_client.queue("users", {"group_id": "g-existing"})

        with pytest.raises(AlreadyInGroupError):
            await service.create_user_group("user-123", {"group_name": "Second"})

        assert not any(query.table == "groups" for query in fake_client.queries)

    @pytest.mark.asyncio
    async def test_failed_link_discards_group(
        self, service, fake_client, api_error
    ):
        fake_client.queue("users", {"group_id": None}, api_error("network error"))
        fake_client.queue("groups", [group_row()], [])

        assert await service.create_user_group("user-123", {"group_name": "H"}) is None
        discard = fake_client.last_query
        assert discard.table == "groups"
        assert discard.called("delete") == [((), {})]

    @pytest.mark.asyncio
    async def test_membership_lookup_failure_returns_none(
        self, service, fake_client, api_error
    ):
        fake_client.queue("users", api_error("network error"))

        assert await service.create_user_group("user-123", {"group_name": "H"}) is None


class TestUpdateUserGroup:
    @pytest.mark.asyncio
    async def test_scoped_to_author(self, service, fake_client):
        fake_client.queue("groups", [group_row(group_name="Renamed")])

        result = await service.update_user_group(
            "user-123", "g1", {"group_name": "Renamed", "invited_user_id": "x"}
        )

        assert result.group_name == "Renamed"
        query = fake_client.last_query
        assert query.called("update") == [(({"group_name": "Renamed"},), {})]
        assert query.called("eq") == [
            (("id", "g1"), {}),
            (("author_user_id", "user-123"), {}),
        ]


class TestFetchGroupMembers:
    @pytest.mark.asyncio
    async def test_marks_author_as_admin(self, service, fake_client):
        fake_client.queue(
            "users",
            [
                {"id": "user-123", "email": "a@example.com", "username": "A"},
                {"id": "user-456", "email": "b@example.com", "username": None},
            ],
        )
        fake_client.queue("groups", {"author_user_id": "user-123"})

        members = await service.fetch_group_members("g1")

        assert [(m.id, m.is_admin) for m in members] == [
            ("user-123", True),
            ("user-456", False),
        ]

    @pytest.mark.asyncio
    async def test_known_author_skips_lookup(self, service, fake_client):
        fake_client.queue("users", [{"id": "user-456", "email": "b@example.com"}])

        members = await service.fetch_group_members("g1", author_user_id="user-123")

        assert members[0].is_admin is False
        assert [query.table for query in fake_client.queries] == ["users"]

    @pytest.mark.asyncio
    async def test_failure_returns_empty_list(self, service, fake_client, api_error):
        fake_client.queue("users", api_error("network error"))

        assert await service.fetch_group_members("g1") == []


class TestInviteCodes:
    @pytest.mark.asyncio
    async def test_generate_invite_code(self, service, fake_client):
        fake_client.queue("group_invites", [{"id": "i1", "code": "ABCD1234"}])

        code = await service.generate_invite_code("user-123", "g1")

        assert code == "ABCD1234"
        assert fake_client.last_query.called("insert") == [
            (
                (
                    {
                        "group_id": "g1",
                        "code": "ABCD1234",
                        "created_by": "user-123",
                        "expires_at": "2024-05-08T12:00:00+00:00",
                    },
                ),
                {},
            )
        ]

    @pytest.mark.asyncio
    async def test_generate_invite_code_failure(self, service, fake_client, api_error):
        fake_client.queue("group_invites", api_error("network error"))

        assert await service.generate_invite_code("user-123", "g1") is None

    def test_new_invite_code_format(self):
        code = new_invite_code()

        assert len(code) == 8
        assert code.isalnum() and code.upper() == code


class TestJoinGroupWithInviteCode:
    @pytest.mark.asyncio
    async def test_joins_and_consumes_invite(self, service, fake_client):
        fake_client.queue("users", {"group_id": None}, [{"id": "user-456"}])
        fake_client.queue(
            "group_invites",
            {"id": "i1", "group_id": "g1", "expires_at": "2024-05-08T00:00:00+00:00"},
            [{"id": "i1"}],
        )
        fake_client.queue("groups", [group_row(invited_user_id="user-456")])

        assert await service.join_group_with_invite_code("user-456", "ABCD1234") is True

        lookup = fake_client.queries[1]
        assert lookup.called("eq") == [(("code", "ABCD1234"), {})]
        assert lookup.called("gt") == [(("expires_at", NOW.isoformat()), {})]
        assert lookup.called("is_") == [(("used_by", "null"), {})]
        join, mark_used, record = fake_client.queries[2:]
        assert join.called("update") == [(({"group_id": "g1"},), {})]
        assert mark_used.called("update") == [
            (({"used_by": "user-456", "used_at": NOW.isoformat()},), {})
        ]
        assert record.called("update") == [(({"invited_user_id": "user-456"},), {})]

    @pytest.mark.asyncio
    async def test_user_already_in_group(self, service, fake_client):
        fake_client.queue("users", {"group_id": "g-existing"})

        with pytest.raises(AlreadyInGroupError):
            await service.join_group_with_invite_code("user-456", "ABCD1234")

    @pytest.mark.asyncio
    async def test_unknown_or_expired_code(self, service, fake_client):
        fake_client.queue("users", {"group_id": None})
        fake_client.queue("group_invites", None)

        with pytest.raises(InvalidInviteCodeError):
            await service.join_group_with_invite_code("user-456", "NOPE0000")

        assert not any(query.called("update") for query in fake_client.queries)

    @pytest.mark.asyncio
    async def test_invite_lookup_failure_returns_false(
        self, service, fake_client, api_error
    ):
        fake_client.queue("users", {"group_id": None})
        fake_client.queue("group_invites", api_error("network error"))

        assert await service.join_group_with_invite_code("user-456", "X") is False


class TestRemoveGroupMember:
    @pytest.mark.asyncio
    async def test_author_removes_member(self, service, fake_client):
        fake_client.queue("groups", {"author_user_id": "user-123"}, [])
        fake_client.queue("users", [{"id": "user-456"}])

        assert await service.remove_group_member("user-123", "g1", "user-456") is True

        removal = next(q for q in fake_client.queries if q.table == "users")
        assert removal.called("update") == [(({"group_id": None},), {})]
        assert removal.called("eq") == [
            (("id", "user-456"), {}),
            (("group_id", "g1"), {}),
        ]

    @pytest.mark.asyncio
    async def test_non_author_is_refused(self, service, fake_client):
        fake_client.queue("groups", {"author_user_id": "user-123"})

        with pytest.raises(GroupPermissionError):
            await service.remove_group_member("user-456", "g1", "user-789")

        assert not any(query.table == "users" for query in fake_client.queries)

    @pytest.mark.asyncio
    async def test_author_cannot_remove_themselves(self, service, fake_client):
        with pytest.raises(GroupPermissionError):
            await service.remove_group_member("user-123", "g1", "user-123")

        assert fake_client.queries == []


class TestLeaveGroup:
    @pytest.mark.asyncio
    async def test_member_clears_own_membership(self, service, fake_client):
        fake_client.queue("users", [{"id": "user-456"}])
        fake_client.queue("groups", [])

        assert await service.leave_group("user-456", group()) is True

        leave, clear = fake_client.queries
        assert leave.called("eq") == [
            (("id", "user-456"), {}),
            (("group_id", "g1"), {}),
        ]
        assert clear.called("update") == [(({"invited_user_id": None},), {})]
        assert clear.called("eq") == [
            (("id", "g1"), {}),
            (("invited_user_id", "user-456"), {}),
        ]

    @pytest.mark.asyncio
    async def test_author_dissolves_group(self, service, fake_client):
        fake_client.queue("users", [])
        fake_client.queue("groups", [])

        assert await service.leave_group("user-123", group()) is True

        release, delete = fake_client.queries
        assert release.called("eq") == [(("group_id", "g1"), {})]
        assert delete.called("delete") == [((), {})]

    @pytest.mark.asyncio
    async def test_failure_returns_false(self, service, fake_client, api_error):
        fake_client.queue("users", api_error("network error"))

        assert await service.leave_group("user-456", group()) is False
