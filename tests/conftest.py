"""Shared fixtures: an in-memory user store and a recording logger."""

from collections.abc import AsyncIterator, Mapping
from typing import Any

import pytest
import pytest_asyncio
from bson import ObjectId
from httpx import ASGITransport, AsyncClient

from user_api.database import ID_FIELD, parse_object_id
from user_api.dependencies import get_event_logger, get_user_store
from user_api.main import app


class InMemoryUserStore:
    """Stand-in for :class:`user_api.database.UserStore` backed by a list."""

    def __init__(self) -> None:
        self.documents: list[dict[str, Any]] = []
        self.error: Exception | None = None
        self.connected = True

    def _check(self) -> None:
        if self.error is not None:
            raise self.error

    async def insert_one(self, document: Mapping[str, Any]) -> str:
        self._check()
        stored = dict(document)
        stored[ID_FIELD] = ObjectId()
        self.documents.append(stored)
        return str(stored[ID_FIELD])

    async def update_one(self, user_id: str, fields: Mapping[str, Any]) -> bool:
        self._check()
        object_id = parse_object_id(user_id)
        for document in self.documents:
            if document[ID_FIELD] == object_id:
                document.update(fields)
                return True
        return False

    async def find_all(self) -> list[dict[str, Any]]:
        self._check()
        return [dict(document) for document in self.documents]


class RecordingLogger:
    """Collects ``(level, message)`` pairs instead of emitting them."""

    def __init__(self) -> None:
        self.records: list[tuple[str, str]] = []

    def _record(self, level: str, msg: str, *args: Any, **kwargs: Any) -> None:
        self.records.append((level, msg % args if args else msg))

    def info(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self._record("info", msg, *args)

    def warning(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self._record("warning", msg, *args)

    def error(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self._record("error", msg, *args)

    def exception(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self._record("error", msg, *args)

    def levels(self) -> list[str]:
        return [level for level, _ in self.records]


@pytest.fixture()
def user_store() -> InMemoryUserStore:
    return InMemoryUserStore()


@pytest.fixture()
def event_logger() -> RecordingLogger:
    return RecordingLogger()


@pytest_asyncio.fixture()
async def api_client(
    user_store: InMemoryUserStore, event_logger: RecordingLogger
) -> AsyncIterator[AsyncClient]:
    app.dependency_overrides[get_user_store] = lambda: user_store
    app.dependency_overrides[get_event_logger] = lambda: event_logger
    transport = ASGITransport(app=app)
    try:
        async with AsyncClient(transport=transport, base_url="http://testserver") as client:
            yield client
    finally:
        app.dependency_overrides.clear()


@pytest_asyncio.fixture()
async def bare_client() -> AsyncIterator[AsyncClient]:
    """Client for an application whose store was never attached."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as client:
        yield client
