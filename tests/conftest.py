import pytest
from fastapi.testclient import TestClient

from nexus.auth.security import create_session_token
from nexus.db import build_engine
from nexus.main import create_app
from nexus.schemas.records import User, UserRole
from nexus.storage import SqlDocumentStore
from nexus.storage.gateway import SUPERADMIN_ID, utc_now_iso


@pytest.fixture
def store():
    return SqlDocumentStore(build_engine("sqlite://"))


@pytest.fixture
def client(store):
    app = create_app(store=store)
    with TestClient(app) as c:
        yield c


@pytest.fixture
def gateway(client):
    return client.app.state.gateway


def _add_user(gateway, username: str, role: UserRole) -> User:
    user = User(
        id=f"user-{username.lower()}",
        username=username,
        email=f"{username.lower()}@example.com",
        password="Sample-Pass-123",
        full_name=username,
        role=role,
        created_at=utc_now_iso(),
    )
    gateway.add_user(user)
    return user


def _headers(user) -> dict:
    return {"Authorization": f"Bearer {create_session_token(user)}"}


@pytest.fixture
def superadmin_headers(gateway):
    return _headers(gateway.get_user(SUPERADMIN_ID))


@pytest.fixture
def admin_user(gateway):
    return _add_user(gateway, "PlainAdmin", UserRole.ADMIN)


@pytest.fixture
def admin_headers(admin_user):
    return _headers(admin_user)


@pytest.fixture
def regular_user(gateway):
    return _add_user(gateway, "RegularUser", UserRole.USER)


@pytest.fixture
def user_headers(regular_user):
    return _headers(regular_user)
