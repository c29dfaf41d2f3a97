"""Shared pytest fixtures: settings env, in-memory customers collection, API client."""

import copy
import os

os.environ.setdefault("MONGO_URI", "mongodb://localhost:27017")
os.environ.setdefault("JWT_TOKEN", "test-signing-secret")

import pytest
from bson import ObjectId
from fastapi.testclient import TestClient
from pymongo.results import DeleteResult, InsertOneResult, UpdateResult

from retail_api.core.security import create_access_token
from retail_api.db.base import get_customers_collection
from retail_api.main import app


# ---------------------------------------------------------------------------
# In-memory collection
# ---------------------------------------------------------------------------

def _matches(document: dict, query: dict) -> bool:
    return all(document.get(key) == value for key, value in query.items())


class FakeCursor:
    def __init__(self, documents: list[dict]):
        self._documents = documents

    async def to_list(self, length=None):
        return self._documents if length is None else self._documents[:length]


class FakeCollection:
    """Implements the slice of AsyncCollection the customer endpoints use."""

    def __init__(self):
        self.documents: list[dict] = []

    async def insert_one(self, document: dict) -> InsertOneResult:
        document.setdefault("_id", ObjectId())
        self.documents.append(copy.deepcopy(document))
        return InsertOneResult(document["_id"], True)

    def find(self, query: dict | None = None, projection: dict | None = None) -> FakeCursor:
        hidden = {key for key, flag in (projection or {}).items() if not flag}
        found = [
            {key: value for key, value in doc.items() if key not in hidden}
            for doc in self.documents
            if _matches(doc, query or {})
        ]
        return FakeCursor(copy.deepcopy(found))

    async def update_one(self, query: dict, update: dict) -> UpdateResult:
        for doc in self.documents:
            if _matches(doc, query):
                changes = update["$set"]
                modified = any(doc.get(key) != value for key, value in changes.items())
                doc.update(copy.deepcopy(changes))
                return UpdateResult({"n": 1, "nModified": int(modified)}, True)
        return UpdateResult({"n": 0, "nModified": 0}, True)

    async def delete_one(self, query: dict) -> DeleteResult:
        for index, doc in enumerate(self.documents):
            if _matches(doc, query):
                del self.documents[index]
                return DeleteResult({"n": 1}, True)
        return DeleteResult({"n": 0}, True)


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def collection() -> FakeCollection:
    return FakeCollection()


@pytest.fixture
def client(collection):
    # Not entered as a context manager: the lifespan would dial a real server.
    app.dependency_overrides[get_customers_collection] = lambda: collection
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers() -> dict:
    return {"Authorization": f"Bearer {create_access_token('alice')}"}


@pytest.fixture
def customer_payload() -> dict:
    return {
        "username": "jdoe",
        "email": "jdoe@example.com",
        "password": "s3cret-pass",
        "first_name": "John",
        "last_name": "Doe",
        "phone": "555-0100",
        "address": {"street": "1 Main St", "city": "Springfield"},
    }
