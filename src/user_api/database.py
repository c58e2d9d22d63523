"""MongoDB gateway for the users collection."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any

from bson import ObjectId
from bson.errors import InvalidId
from pymongo import AsyncMongoClient
from pymongo.asynchronous.collection import AsyncCollection
from pymongo.errors import PyMongoError

from user_api.config import Settings
from user_api.errors import StartupError
from user_api.logging import get_logger

_logger = get_logger("database")

ID_FIELD = "_id"


def parse_object_id(value: str) -> ObjectId | None:
    """Convert a path identifier to an ObjectId, or ``None`` when it is malformed."""

    try:
        return ObjectId(value)
    except (InvalidId, TypeError):
        return None


def serialize_document(document: Mapping[str, Any]) -> dict[str, Any]:
    """Return a JSON-ready copy of a stored document with its identifier as a string."""

    data = dict(document)
    if isinstance(data.get(ID_FIELD), ObjectId):
        data[ID_FIELD] = str(data[ID_FIELD])
    return data


class UserStore:
    """Owns the MongoDB client and exposes the three user operations."""

    def __init__(
        self,
        url: str,
        database_name: str,
        collection_name: str = "users",
        client_factory: Callable[[str], AsyncMongoClient] = AsyncMongoClient,
    ):
        self.url = url
        self.database_name = database_name
        self.collection_name = collection_name
        self._client_factory = client_factory
        self._client: AsyncMongoClient | None = None
        self._collection: AsyncCollection | None = None

    @classmethod
    def from_settings(cls, settings: Settings) -> UserStore:
        return cls(settings.mongodb_url, settings.database_name, settings.collection_name)

    async def connect(self) -> None:
        """Create the client and make sure the server answers."""
        try:
            client = self._client_factory(self.url)
        except PyMongoError as exc:
            raise StartupError(f"Invalid MongoDB connection settings: {exc}") from exc

        try:
            await client.admin.command("ping")
        except PyMongoError as exc:
            await client.close()
            raise StartupError(f"Could not connect to MongoDB: {exc}") from exc

        self._client = client
        self._collection = client[self.database_name][self.collection_name]
        _logger.info(
            "database.connected database=%s collection=%s",
            self.database_name,
            self.collection_name,
        )

    async def disconnect(self) -> None:
        """Close the client."""
        if self._client is not None:
            await self._client.close()
            _logger.info("database.disconnected")
        self._client = None
        self._collection = None

    @property
    def connected(self) -> bool:
        return self._collection is not None

    @property
    def collection(self) -> AsyncCollection:
        if self._collection is None:
            raise RuntimeError("Database connection not initialized")
        return self._collection

    async def insert_one(self, document: Mapping[str, Any]) -> str:
        """Store a new document and return its generated identifier."""
        result = await self.collection.insert_one(dict(document))
        return str(result.inserted_id)

    async def update_one(self, user_id: str, fields: Mapping[str, Any]) -> bool:
        """Merge ``fields`` into the matching document.

        Returns whether a document matched, whether or not any value changed.
        A malformed identifier never matches.
        """
        object_id = parse_object_id(user_id)
        if object_id is None:
            return False

        query = {ID_FIELD: object_id}
        if not fields:
            # $set refuses an empty document
            return await self.collection.count_documents(query, limit=1) > 0

        result = await self.collection.update_one(query, {"$set": dict(fields)})
        return result.matched_count > 0

    async def find_all(self) -> list[dict[str, Any]]:
        """Return every document in store order."""
        cursor = self.collection.find()
        return await cursor.to_list(None)

    async def ping(self) -> bool:
        if self._client is None:
            return False
        try:
            await self._client.admin.command("ping")
        except PyMongoError as exc:
            _logger.warning("database.ping_failed error=%s", exc)
            return False
        return True
