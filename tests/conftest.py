"""
Shared fixtures: an in-memory stand-in for MongoStore so API tests run
without a MongoDB server. Ids are real ObjectIds and malformed ids raise the
same InvalidIdentifierError as the pymongo-backed collection.
"""

import copy

import pytest
from bson import ObjectId
from fastapi.testclient import TestClient

from config import Settings, get_settings
from database import UpdateCounts, get_store, parse_object_id
from main import app


class MemoryCollection:
    def __init__(self, name: str):
        self.name = name
        self.documents: dict[ObjectId, dict] = {}

    def find_all(self):
        return [copy.deepcopy(d) for d in self.documents.values()]

    def find_by_id(self, doc_id):
        document = self.documents.get(parse_object_id(doc_id))
        return copy.deepcopy(document) if document is not None else None

    def insert(self, document):
        oid = ObjectId()
        self.documents[oid] = {"_id": oid, **copy.deepcopy(document)}
        return str(oid)

    def update_by_id(self, doc_id, fields):
        document = self.documents.get(parse_object_id(doc_id))
        if document is None:
            return UpdateCounts(0, 0)
        updated = {**document, **copy.deepcopy(fields)}
        if updated == document:
            return UpdateCounts(1, 0)
        self.documents[document["_id"]] = updated
        return UpdateCounts(1, 1)

    def delete_by_id(self, doc_id):
        return 1 if self.documents.pop(parse_object_id(doc_id), None) else 0


class MemoryStore:
    def __init__(self):
        self.collections: dict[str, MemoryCollection] = {}

    def collection(self, name):
        return self.collections.setdefault(name, MemoryCollection(name))


class BrokenCollection:
    """Every call fails the way an unreachable server would."""

    def __init__(self, message="connection refused"):
        self.message = message

    def __getattr__(self, name):
        def fail(*args, **kwargs):
            raise ConnectionError(self.message)
        return fail


class BrokenStore:
    def collection(self, name):
        return BrokenCollection()


def make_settings(environment="production"):
    return Settings(
        mongodb_uri="mongodb://unused",
        database_name="test",
        environment=environment,
        port=8000,
        log_level="INFO",
    )


@pytest.fixture
def store():
    return MemoryStore()


@pytest.fixture
def client(store):
    """TestClient against the in-memory store (lifespan not run, so no MongoDB needed)."""
    app.dependency_overrides[get_store] = lambda: store
    app.dependency_overrides[get_settings] = lambda: make_settings()
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def broken_client():
    def _client(environment="production"):
        app.dependency_overrides[get_store] = BrokenStore
        app.dependency_overrides[get_settings] = lambda: make_settings(environment)
        return TestClient(app)
    yield _client
    app.dependency_overrides.clear()
