import logging
from datetime import datetime, timezone
from typing import Any, Optional

from fastapi import Depends
from pydantic import BaseModel

from database import DocumentCollection, MongoStore, UpdateCounts, get_store
from models import GAME, USER, ResourceKind

logger = logging.getLogger("boardgames.services")


class ResourceService:
    """CRUD over one collection. Store errors propagate to the caller."""

    def __init__(self, collection: DocumentCollection, kind: ResourceKind):
        self.collection = collection
        self.kind = kind

    def get_all(self) -> list[dict[str, Any]]:
        documents = self.collection.find_all()
        logger.info("Found %d %s", len(documents), self.kind.collection)
        return documents

    def get_by_id(self, doc_id: str) -> Optional[dict[str, Any]]:
        document = self.collection.find_by_id(doc_id)
        if document is None:
            logger.info("%s not found with ID: %s", self.kind.label, doc_id)
        return document

    def create(self, record: BaseModel) -> str:
        document = self.prepare_insert(record.model_dump(exclude_none=True))
        return self.collection.insert(document)

    def update(self, doc_id: str, record: BaseModel) -> UpdateCounts:
        fields = self.prepare_update(record.model_dump(exclude_unset=True))
        return self.collection.update_by_id(doc_id, fields)

    def delete(self, doc_id: str) -> int:
        return self.collection.delete_by_id(doc_id)

    def prepare_insert(self, document: dict[str, Any]) -> dict[str, Any]:
        return document

    def prepare_update(self, fields: dict[str, Any]) -> dict[str, Any]:
        return fields


class UserService(ResourceService):
    def prepare_insert(self, document: dict[str, Any]) -> dict[str, Any]:
        # Server timestamp wins over anything the client sent.
        return {**document, "dateJoined": datetime.now(timezone.utc)}

    def prepare_update(self, fields: dict[str, Any]) -> dict[str, Any]:
        if "dateJoined" in fields:
            logger.warning("Update is overwriting dateJoined with a client-supplied value")
        return fields


def get_game_service(store: MongoStore = Depends(get_store)) -> ResourceService:
    return ResourceService(store.collection(GAME.collection), GAME)


def get_user_service(store: MongoStore = Depends(get_store)) -> ResourceService:
    return UserService(store.collection(USER.collection), USER)
