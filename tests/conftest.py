# tests/conftest.py

from __future__ import annotations

from typing import Callable, Iterator

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from taskboard.core.config import Settings
from taskboard.core.security import PasswordHasher, TokenManager
from taskboard.main import create_app

PASSWORD = "secret1"


@pytest.fixture()
def settings() -> Settings:
    """
    In-memory SQLite and the cheapest bcrypt cost, so each test gets a
    fresh database and hashing stays fast.
    """
    return Settings(
        DATABASE_URL="sqlite://",
        SECRET_KEY="test-secret-key",
        BCRYPT_ROUNDS=4,
        LOG_LEVEL="WARNING",
    )


@pytest.fixture()
def app(settings: Settings) -> FastAPI:
    return create_app(settings)


@pytest.fixture()
def client(app: FastAPI) -> Iterator[TestClient]:
    # the context manager runs the lifespan, which creates the tables
    with TestClient(app) as c:
        yield c


@pytest.fixture()
def db(app: FastAPI) -> Iterator[Session]:
    """Plain session for service-level tests, no HTTP involved."""
    app.state.database.create_all()
    session = app.state.database.SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def passwords(settings: Settings) -> PasswordHasher:
    return PasswordHasher(rounds=settings.BCRYPT_ROUNDS)


@pytest.fixture()
def tokens(settings: Settings) -> TokenManager:
    return TokenManager(settings.SECRET_KEY, expire_minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)


@pytest.fixture()
def register(client: TestClient) -> Callable[..., dict]:
    def _register(email: str, password: str = PASSWORD, display_name: str = "Alice") -> dict:
        resp = client.post(
            "/api/auth/register",
            json={"email": email, "password": password, "display_name": display_name},
        )
        assert resp.status_code == 201, resp.text
        return resp.json()["data"]["user"]

    return _register


@pytest.fixture()
def login_headers(client: TestClient, register: Callable[..., dict]) -> Callable[..., dict]:
    """Register a user, log in, return the Authorization header."""

    def _login(email: str, password: str = PASSWORD, display_name: str = "Alice") -> dict:
        register(email, password, display_name)
        resp = client.post("/api/auth/login", json={"email": email, "password": password})
        assert resp.status_code == 200, resp.text
        return {"Authorization": f"Bearer {resp.json()['data']['token']}"}

    return _login


@pytest.fixture()
def alice(login_headers: Callable[..., dict]) -> dict:
    return login_headers("a@x.com", display_name="Alice")


@pytest.fixture()
def bob(login_headers: Callable[..., dict]) -> dict:
    return login_headers("b@x.com", display_name="Bob")
