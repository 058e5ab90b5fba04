import os
import sys

import mongomock
import pytest
import redis

CURRENT_DIR = os.path.dirname(__file__)
SERVICE_ROOT = os.path.dirname(CURRENT_DIR)
if SERVICE_ROOT not in sys.path:
    sys.path.insert(0, SERVICE_ROOT)

# settings are read at import time and these two are mandatory
os.environ.setdefault("MONGODB_URI", "mongodb://localhost:27017")
os.environ.setdefault("ACCESS_TOKEN_SECRET", "test-secret")
os.environ.setdefault("STRIPE_SECRET_KEY", "sk_test_dummy")

from fastapi.testclient import TestClient

from eduspark.infrastructure import cache
from eduspark.infrastructure.db import Store, get_store
from eduspark.infrastructure.security import issue_token
from eduspark.interfaces.http.routers import auth as auth_router
from eduspark.main import app

auth_router.limiter.enabled = False


@pytest.fixture(autouse=True)
def no_redis(monkeypatch):
    """Cache calls behave as if Redis were down, i.e. always miss."""
    def unavailable():
        raise redis.ConnectionError("redis disabled in tests")
    monkeypatch.setattr(cache, "get_redis", unavailable)


@pytest.fixture
def store():
    s = Store(mongomock.MongoClient(), "EduSparkTest")
    s.ensure_indexes()
    return s


@pytest.fixture
def client(store):
    app.dependency_overrides[get_store] = lambda: store
    yield TestClient(app)
    app.dependency_overrides.pop(get_store, None)


@pytest.fixture
def add_user(store):
    def _add(email: str, role: str = "student", **fields):
        store.users.insert_one({"email": email, "role": role, **fields})
        return email
    return _add


@pytest.fixture
def auth_headers():
    def _headers(email: str, **claims) -> dict:
        token = issue_token({"email": email, **claims})
        return {"Authorization": f"Bearer {token}"}
    return _headers


@pytest.fixture
def admin(add_user, auth_headers):
    return auth_headers(add_user("admin@example.com", "admin"))


@pytest.fixture
def teacher(add_user, auth_headers):
    return auth_headers(add_user("teacher@example.com", "teacher"))


@pytest.fixture
def student(add_user, auth_headers):
    return auth_headers(add_user("student@example.com", "student"))


@pytest.fixture
def add_class(store):
    def _add(title: str = "Algebra", status: str = "approved", total: int = 0,
             owner: str = "teacher@example.com") -> str:
        result = store.classes.insert_one(
            {"title": title, "email": owner, "price": 10, "status": status, "totalEnrollment": total}
        )
        return str(result.inserted_id)
    return _add


@pytest.fixture
def lenient_client(store):
    """Client that returns 500 responses instead of re-raising server errors."""
    app.dependency_overrides[get_store] = lambda: store
    yield TestClient(app, raise_server_exceptions=False)
    app.dependency_overrides.pop(get_store, None)
