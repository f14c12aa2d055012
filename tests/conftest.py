import fnmatch
import os
import sys

import pytest

CURRENT_DIR = os.path.dirname(__file__)
SERVICE_ROOT = os.path.dirname(CURRENT_DIR)
if SERVICE_ROOT not in sys.path:
    sys.path.insert(0, SERVICE_ROOT)

# must be set before lms_api.config is imported
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["SEED_DEFAULT_DATA"] = "false"
os.environ["LOG_LEVEL"] = "WARNING"

from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from lms_api.config import settings
from lms_api.domain.errors import BackendFailure
from lms_api.infrastructure.cache import get_cache
from lms_api.infrastructure.db import enable_sqlite_foreign_keys, get_db
from lms_api.infrastructure.models import Base
from lms_api.infrastructure.seed import seed_defaults

# one shared in-memory database for every session
test_engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
enable_sqlite_foreign_keys(test_engine)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)

import lms_api.infrastructure.db
import lms_api.main
lms_api.infrastructure.db.engine = test_engine
lms_api.infrastructure.db.SessionLocal = TestingSessionLocal
lms_api.main.engine = test_engine
lms_api.main.SessionLocal = TestingSessionLocal

from lms_api.main import app


class FakeCache:
    """In-memory stand-in for RedisCache with switchable failures."""

    def __init__(self):
        self.store: dict[str, str] = {}
        self.ttls: dict[str, int] = {}
        self.fail_reads = False
        self.fail_writes = False
        self.fail_deletes = False

    def get(self, key):
        if self.fail_reads:
            raise BackendFailure(f"cache read failed for {key}")
        return self.store.get(key)

    def set(self, key, value, ttl):
        if self.fail_writes:
            raise BackendFailure(f"cache write failed for {key}")
        self.store[key] = value
        self.ttls[key] = ttl

    def delete(self, key):
        if self.fail_deletes:
            raise BackendFailure(f"cache delete failed for {key}")
        self.ttls.pop(key, None)
        return self.store.pop(key, None) is not None

    def delete_pattern(self, pattern):
        if self.fail_deletes:
            raise BackendFailure(f"cache delete failed for {pattern}")
        doomed = fnmatch.filter(list(self.store), pattern)
        for key in doomed:
            self.delete(key)
        return len(doomed)


def override_get_db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def cache():
    return FakeCache()


@pytest.fixture
def db_session():
    Base.metadata.drop_all(bind=test_engine)
    Base.metadata.create_all(bind=test_engine)
    db = TestingSessionLocal()
    yield db
    db.close()
    Base.metadata.drop_all(bind=test_engine)


@pytest.fixture
def seeded(db_session):
    seed_defaults(db_session)
    return db_session


@pytest.fixture
def client(seeded, cache):
    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_cache] = lambda: cache
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def login(client):
    """Log in as a seeded user and return the Authorization header."""
    def _login(username: str, password: str | None = None) -> dict:
        response = client.post(
            "/api/users/login",
            json={"username": username, "password": password or settings.SEED_PASSWORD},
        )
        assert response.status_code == 200, response.text
        return {"Authorization": f"Bearer {response.json()['Token']}"}
    return _login


@pytest.fixture
def admin(login):
    return login("admin")


@pytest.fixture
def instructor(login):
    return login("instructor")


@pytest.fixture
def student(login):
    return login("student")
