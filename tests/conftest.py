import mongomock
import pytest
from fastapi.testclient import TestClient

from db import get_db, ensure_indexes
from main import app
from tests.data import MOVIES


@pytest.fixture
def mongo_db():
    database = mongomock.MongoClient().movieDB
    ensure_indexes(database)
    database.movies.insert_many([dict(movie) for movie in MOVIES])
    return database


@pytest.fixture
def client(mongo_db):
    app.dependency_overrides[get_db] = lambda: mongo_db
    # no context manager: the lifespan would reach for the real server
    yield TestClient(app)
    app.dependency_overrides.clear()
