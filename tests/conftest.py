"""
Shared fixtures: a fixed admin secret, fresh pools and a test client per test.
"""
import pytest
from fastapi.testclient import TestClient

from merlin.config import Settings
from merlin.main import create_app
from merlin.storage import MemoryMessageStore

ADMIN_SECRET = "s3cret"


@pytest.fixture
def settings() -> Settings:
    return Settings(secret=ADMIN_SECRET)


@pytest.fixture
def pending_store() -> MemoryMessageStore:
    return MemoryMessageStore("pending")


@pytest.fixture
def approved_store() -> MemoryMessageStore:
    return MemoryMessageStore("approved")


@pytest.fixture
def client(settings, pending_store, approved_store):
    app = create_app(settings, pending_store, approved_store)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def admin_secret() -> str:
    return ADMIN_SECRET
