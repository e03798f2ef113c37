"""Shared fixtures for the kakeibo test suite.

Data-store and auth collaborators are replaced by in-memory fakes so tests
never reach a Supabase project, and sleeps are injected so retries finish
instantly.
"""

from types import SimpleNamespace
from typing import Any, Dict, List
from unittest.mock import AsyncMock, MagicMock

import pytest
from supabase import PostgrestAPIError

from infrastructure.auth.session import RefreshResult, Session
from infrastructure.idempotency.memory import InMemoryCache
from infrastructure.resilience.config import RetryPolicy
from infrastructure.resilience.executor import ResilientExecutor


class FakeQuery:
    """Chainable stand-in for a PostgREST query builder.

    Every builder method (select, eq, order, ...) is recorded and returns the
    query itself; ``execute()`` replays the next queued outcome. An outcome
    that is an exception is raised, anything else is returned as ``data``.
    """

    def __init__(self, table: str, outcomes: List[Any]):
        self.table = table
        self.calls: List[tuple] = []
        self._outcomes = outcomes

    def __getattr__(self, name: str):
        def method(*args, **kwargs):
            self.calls.append((name, args, kwargs))
            return self

        return method

    def called(self, name: str) -> List[tuple]:
        return [(args, kwargs) for call, args, kwargs in self.calls if call == name]

    async def execute(self):
        outcome = self._outcomes.pop(0) if len(self._outcomes) > 1 else self._outcomes[0]
        if isinstance(outcome, BaseException):
            raise outcome
        return SimpleNamespace(data=outcome)


class FakeClient:
    """Stand-in for supabase.AsyncClient exposing ``table()``."""

    def __init__(self):
        self.outcomes: Dict[str, List[Any]] = {}
        self.queries: List[FakeQuery] = []

    def queue(self, table: str, *outcomes: Any) -> None:
        self.outcomes.setdefault(table, []).extend(outcomes)

    def table(self, name: str) -> FakeQuery:
        query = FakeQuery(name, self.outcomes.setdefault(name, [None]))
        self.queries.append(query)
        return query

    @property
    def last_query(self) -> FakeQuery:
        return self.queries[-1]


@pytest.fixture
def make_session():
    """Factory for Session objects."""

    def _make(user_id: str = "user-123", access_token: str = "access-1"):
        return Session(
            access_token=access_token,
            refresh_token="refresh-1",
            user_id=user_id,
        )

    return _make


@pytest.fixture
def session_provider(make_session):
    """SessionProvider whose refresh succeeds by default."""
    provider = MagicMock()
    provider.get_session = AsyncMock(return_value=make_session())
    provider.refresh_session = AsyncMock(
        return_value=RefreshResult(session=make_session(access_token="access-2"))
    )
    provider.sign_out = AsyncMock(return_value=None)
    return provider


@pytest.fixture
def sleep():
    """Recording replacement for asyncio.sleep (receives seconds)."""
    return AsyncMock(return_value=None)


@pytest.fixture
def idempotency_service():
    """IdempotencyService backed by a fresh in-memory cache."""
    from infrastructure.idempotency.service import IdempotencyService

    settings = MagicMock()
    settings.idempotency.IDEMPOTENCY_TTL_SECONDS = 3600
    return IdempotencyService(settings, cache=InMemoryCache())


@pytest.fixture
def executor(session_provider, sleep, idempotency_service):
    """ResilientExecutor with the default policy and an instant sleep."""
    return ResilientExecutor(
        session_provider,
        RetryPolicy(),
        idempotency=idempotency_service,
        sleep=sleep,
    )


@pytest.fixture
def api_error():
    """Factory for PostgREST API errors as raised by query builders."""

    def _make(message: str = "network error", code: str = "08006"):
        return PostgrestAPIError({"message": message, "code": code})

    return _make


@pytest.fixture
def fake_client():
    return FakeClient()


@pytest.fixture
def client_manager(fake_client):
    """SupabaseClientManager stand-in returning the fake client."""
    manager = MagicMock()
    manager.get_client = AsyncMock(return_value=fake_client)
    return manager
