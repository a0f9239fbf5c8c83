"""
Shared fixtures: an app wired to an in-memory reviews collection and a
mocked TMDB session.
"""

from types import SimpleNamespace
from unittest.mock import Mock

import pytest
from bson import ObjectId
from pymongo import DESCENDING

from app import create_app
from movies.movies_service import TmdbClient
from reviews.reviews_service import ReviewsService


class InMemoryDatabase:
    def __init__(self, collection):
        self.collection = collection

    def command(self, name):
        self.collection.check()
        return {"ok": 1.0}


class InMemoryCollection:
    """The part of pymongo's Collection API the reviews service uses."""

    def __init__(self):
        self.documents = {}
        self.indexes = []
        self.error = None
        self.database = InMemoryDatabase(self)

    def check(self):
        if self.error is not None:
            raise self.error

    def insert_one(self, document):
        self.check()
        object_id = ObjectId()
        document["_id"] = object_id
        self.documents[object_id] = dict(document)
        return SimpleNamespace(inserted_id=object_id)

    def find(self, query, sort=None, limit=0):
        self.check()
        matches = [dict(d) for d in self.documents.values() if self.__matches(d, query)]
        for key, direction in reversed(sort or []):
            matches.sort(key=lambda d: d[key], reverse=direction == DESCENDING)
        return matches[:limit] if limit else matches

    def find_one(self, query):
        self.check()
        for document in self.documents.values():
            if self.__matches(document, query):
                return dict(document)
        return None

    def update_one(self, query, update):
        self.check()
        document = self.documents.get(query["_id"])
        if document is not None:
            document.update(update["$set"])
        return SimpleNamespace(matched_count=int(document is not None))

    def delete_one(self, query):
        self.check()
        removed = self.documents.pop(query["_id"], None)
        return SimpleNamespace(deleted_count=int(removed is not None))

    def create_index(self, keys):
        self.check()
        name = "_".join(f"{field}_{direction}" for field, direction in keys)
        self.indexes.append(name)
        return name

    @staticmethod
    def __matches(document, query):
        return all(document.get(key) == value for key, value in query.items())


class FakeClock:
    def __init__(self, start=1_700_000_000_000, step=1000):
        self.now = start
        self.step = step

    def __call__(self):
        self.now += self.step
        return self.now


def tmdb_response(status_code=200, payload=None):
    response = Mock()
    response.status_code = status_code
    response.ok = 200 <= status_code < 300
    response.json.return_value = payload if payload is not None else {}
    return response


@pytest.fixture
def collection():
    return InMemoryCollection()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def service(collection, clock):
    return ReviewsService(collection, clock=clock)


@pytest.fixture
def tmdb_session():
    return Mock()


@pytest.fixture
def tmdb_client(tmdb_session):
    return TmdbClient("test-key", session=tmdb_session)


@pytest.fixture
def app(collection, clock, tmdb_client):
    app = create_app(
        {"TESTING": True, "FORCE_HTTPS": False},
        reviews_collection=collection,
        tmdb_client=tmdb_client,
    )
    app.extensions["reviews_service"].clock = clock
    return app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def make_tmdb_response():
    return tmdb_response
