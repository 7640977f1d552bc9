from __future__ import annotations

import os
from typing import Any

import pytest
from fastapi.testclient import TestClient


def pytest_configure() -> None:
    # Point the ORM at a throwaway sqlite file before the app modules load.
    os.environ["DB_URL"] = "sqlite:///./test.db"
    os.environ["ENVIRONMENT"] = "test"
    os.environ["JWT_SECRET"] = "test-secret"
    # Minimum bcrypt cost keeps the suite fast.
    os.environ["BCRYPT_ROUNDS"] = "4"
    os.environ.pop("GITHUB_TOKEN", None)


def reset_database() -> None:
    from devconnector.database import Base, engine
    from devconnector import models  # noqa: F401

    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)


@pytest.fixture()
def client() -> Any:
    from devconnector.main import create_app

    reset_database()
    # 500 responses are part of the contract, so let them reach the test.
    with TestClient(create_app(), raise_server_exceptions=False) as c:
        yield c


@pytest.fixture()
def db() -> Any:
    from devconnector.database import SessionLocal

    reset_database()
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def make_user(db) -> Any:
    from devconnector.models.user import User
    from devconnector.utils.password_hash import hash_password

    def _make(email: str = "jane@example.com", name: str = "Jane") -> User:
        user = User(name=name, email=email, password=hash_password("secret123"))
        db.add(user)
        db.commit()
        db.refresh(user)
        return user

    return _make


def register(client, *, name: str = "Jane", email: str = "jane@example.com", password: str = "secret123") -> str:
    r = client.post("/users", json={"name": name, "email": email, "password": password})
    assert r.status_code == 200, r.text
    return r.json()["token"]


def auth_headers(token: str) -> dict[str, str]:
    return {"x-auth-token": token}
