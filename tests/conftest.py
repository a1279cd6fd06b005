# tests/conftest.py

import pytest
from fastapi.testclient import TestClient

from taskboard.database import InMemoryDocumentStore
from taskboard.main import create_application


@pytest.fixture()
def store() -> InMemoryDocumentStore:
    return InMemoryDocumentStore()


@pytest.fixture()
def client(store: InMemoryDocumentStore):
    """
    App wired to the in-memory store. Used as a context manager so the
    lifespan runs; the injected store is kept instead of connecting to MongoDB.
    """
    with TestClient(create_application(store=store)) as test_client:
        yield test_client
