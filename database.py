import logging
from typing import Any, NamedTuple, Optional

from bson import ObjectId
from bson.errors import InvalidId
from fastapi import Request
from pymongo import MongoClient
from pymongo.collection import Collection
from pymongo.database import Database

from config import Settings

logger = logging.getLogger("boardgames.database")


class InvalidIdentifierError(ValueError):
    """Raised when a client-supplied id is not a valid ObjectId."""


class UpdateCounts(NamedTuple):
    matched: int
    modified: int


def parse_object_id(doc_id: str) -> ObjectId:
    try:
        return ObjectId(doc_id)
    except (InvalidId, TypeError) as exc:
        raise InvalidIdentifierError(f"'{doc_id}' is not a valid id") from exc


class DocumentCollection:
    """Thin wrapper over one MongoDB collection, keyed by ``_id``."""

    def __init__(self, collection: Collection):
        self._collection = collection

    @property
    def name(self) -> str:
        return self._collection.name

    def find_all(self) -> list[dict[str, Any]]:
        # No sort: documents come back in whatever order the server yields.
        return list(self._collection.find({}))

    def find_by_id(self, doc_id: str) -> Optional[dict[str, Any]]:
        return self._collection.find_one({"_id": parse_object_id(doc_id)})

    def insert(self, document: dict[str, Any]) -> str:
        # insert_one mutates its argument with the generated _id
        result = self._collection.insert_one(dict(document))
        return str(result.inserted_id)

    def update_by_id(self, doc_id: str, fields: dict[str, Any]) -> UpdateCounts:
        result = self._collection.update_one(
            {"_id": parse_object_id(doc_id)}, {"$set": fields}
        )
        return UpdateCounts(result.matched_count, result.modified_count)

    def delete_by_id(self, doc_id: str) -> int:
        result = self._collection.delete_one({"_id": parse_object_id(doc_id)})
        return result.deleted_count


class MongoStore:
    def __init__(self, database: Database):
        self._database = database

    def collection(self, name: str) -> DocumentCollection:
        return DocumentCollection(self._database[name])


def connect(settings: Settings) -> MongoClient:
    """Open a client and ping the server so an unreachable database fails startup."""
    client = MongoClient(settings.mongodb_uri)
    client.admin.command("ping")
    logger.info("Connected to MongoDB database '%s'", settings.database_name)
    return client


def disconnect(client: MongoClient) -> None:
    client.close()
    logger.info("MongoDB connection closed")


def get_store(request: Request) -> MongoStore:
    return request.app.state.store
