"""Unit tests for the TableService base class."""

from unittest.mock import AsyncMock

import pytest

from infrastructure.idempotency.key_builder import record_id
from infrastructure.persistence import PROTECTED_FIELDS, TableService
from infrastructure.resilience.models import OperationKind

pytestmark = pytest.mark.unit


class NotesService(TableService):
    namespace = "notes"


@pytest.fixture
def service(client_manager, executor):
    return NotesService(client_manager, executor)


class TestRun:
    @pytest.mark.asyncio
    async def test_returns_query_data(self, service, fake_client):
        fake_client.queue("notes", [{"id": "n1"}])

        rows = await service.run(
            lambda client: client.table("notes").select("*"),
            operation_name="fetch_notes",
        )

        assert rows == [{"id": "n1"}]
        assert fake_client.last_query.called("select") == [(("*",), {})]

    @pytest.mark.asyncio
    async def test_builds_fresh_query_per_attempt(
        self, service, fake_client, api_error
    ):
        fake_client.queue("notes", api_error("network error"), [{"id": "n1"}])

        rows = await service.run(
            lambda client: client.table("notes").select("*"),
            operation_name="fetch_notes",
        )

        assert rows == [{"id": "n1"}]
        assert len(fake_client.queries) == 2

    @pytest.mark.asyncio
    async def test_expired_jwt_refreshes_session(
        self, service, fake_client, api_error, session_provider
    ):
        fake_client.queue("notes", api_error("JWT expired", "PGRST301"), [])

        rows = await service.run(
            lambda client: client.table("notes").select("*"),
            operation_name="fetch_notes",
        )

        assert rows == []
        session_provider.refresh_session.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_failure_returns_none(self, service, fake_client, api_error):
        fake_client.queue("notes", api_error("network error"))

        rows = await service.run(
            lambda client: client.table("notes").select("*"),
            operation_name="fetch_notes",
        )

        assert rows is None
        assert len(fake_client.queries) == 4

    @pytest.mark.asyncio
    async def test_client_configuration_error_propagates(self, service, client_manager):
        client_manager.get_client = AsyncMock(side_effect=ValueError("missing"))

        with pytest.raises(ValueError):
            await service.run(lambda client: None, operation_name="fetch_notes")

    @pytest.mark.asyncio
    async def test_passes_kind_and_key_to_executor(self, service, executor):
        executor.execute = AsyncMock(return_value="row")

        await service.run(
            lambda client: None,
            operation_name="add_note",
            kind=OperationKind.WRITE,
            idempotency_key="notes:add_note:abc",
        )

        kwargs = executor.execute.call_args.kwargs
        assert kwargs["kind"] is OperationKind.WRITE
        assert kwargs["idempotency_key"] == "notes:add_note:abc"
        assert kwargs["operation_name"] == "add_note"


class TestRunResult:
    @pytest.mark.asyncio
    async def test_missing_row_is_a_success(self, service, fake_client):
        fake_client.queue("notes", None)

        result = await service.run_result(
            lambda client: client.table("notes").select("*").maybe_single(),
            operation_name="fetch_note",
        )

        assert result.is_success
        assert result.data is None

    @pytest.mark.asyncio
    async def test_failure_is_tagged(self, service, fake_client, api_error):
        fake_client.queue("notes", api_error("network error"))

        result = await service.run_result(
            lambda client: client.table("notes").select("*"),
            operation_name="fetch_notes",
        )

        assert not result.is_success
        assert result.error_code == "RETRIES_EXHAUSTED"


class TestInsert:
    @pytest.mark.asyncio
    async def test_plain_insert_is_a_write(self, service, fake_client):
        fake_client.queue("notes", [{"id": "n1", "body": "hi"}])

        row = await service.insert(
            "notes", {"body": "hi"}, user_id="u1", operation_name="add_note"
        )

        assert row == {"id": "n1", "body": "hi"}
        assert fake_client.last_query.called("insert") == [(({"body": "hi"},), {})]

    @pytest.mark.asyncio
    async def test_plain_insert_lost_acknowledgement_is_not_repeated(
        self, service, fake_client, api_error
    ):
        fake_client.queue("notes", api_error("network error"), [{"id": "n1"}])

        row = await service.insert(
            "notes", {"body": "hi"}, user_id="u1", operation_name="add_note"
        )

        assert row is None
        assert len(fake_client.queries) == 1

    @pytest.mark.asyncio
    async def test_keyed_insert_upserts_on_derived_id(self, service, fake_client):
        fake_client.queue("notes", [{"id": "derived", "body": "hi"}])

        await service.insert(
            "notes",
            {"body": "hi"},
            user_id="u1",
            operation_name="add_note",
            request_id="req-1",
        )

        key = service.idempotency_key("add_note", "u1", "req-1")
        assert fake_client.last_query.called("upsert") == [
            (
                ({"body": "hi", "id": record_id(key)},),
                {"on_conflict": "id", "ignore_duplicates": True},
            )
        ]

    @pytest.mark.asyncio
    async def test_keyed_insert_lost_acknowledgement_lands_on_same_row(
        self, service, fake_client, api_error
    ):
        # First upsert is applied but its response is lost; the retry is
        # ignored as a duplicate and the stored row is read back.
        fake_client.queue(
            "notes", api_error("network error"), [], {"id": "stored", "body": "hi"}
        )

        row = await service.insert(
            "notes",
            {"body": "hi"},
            user_id="u1",
            operation_name="add_note",
            request_id="req-1",
        )

        assert row == {"id": "stored", "body": "hi"}
        first, second, read_back = fake_client.queries
        assert first.called("upsert") == second.called("upsert")
        assert read_back.called("eq") == [
            (("id", first.called("upsert")[0][0][0]["id"]), {})
        ]


class TestHelpers:
    def test_idempotency_key_requires_request_id(self, service):
        assert service.idempotency_key("add_note", "u1", None) is None
        assert service.idempotency_key("add_note", "u1", "") is None

    def test_idempotency_key_is_namespaced(self, service):
        key = service.idempotency_key("add_note", "u1", "req-1")

        assert key.startswith("notes:add_note:")
        assert key == service.idempotency_key("add_note", "u1", "req-1")
        assert key != service.idempotency_key("add_note", "u2", "req-1")

    def test_writable_drops_protected_fields(self):
        payload = {"id": "x", "created_by": "other", "created_at": "t", "title": "t"}

        assert TableService.writable(payload) == {"title": "t"}
        assert PROTECTED_FIELDS == {"id", "created_by", "created_at"}

    @pytest.mark.parametrize(
        "data,expected",
        [([{"id": 1}, {"id": 2}], {"id": 1}), ([], None), ({"id": 3}, {"id": 3}), (None, None)],
    )
    def test_first_row(self, data, expected):
        assert TableService.first_row(data) == expected
