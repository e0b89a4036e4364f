# tests/conftest.py
import os

# settings 는 import 시점에 읽히므로 app import 전에 env 확정
os.environ.setdefault("DB_URL", "sqlite://")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key-for-music-catalog-api")
os.environ["ENV"] = "test"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.api.deps import get_password_hasher, get_token_issuer
from app.core.db import get_db
from app.core.security import PasswordHasher, TokenConfig, TokenIssuer
from app.domain.models import Base
from app.main import app


@pytest.fixture
def engine():
    eng = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(eng)
    yield eng
    eng.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


@pytest.fixture
def db(session_factory):
    s = session_factory()
    yield s
    s.close()


@pytest.fixture
def hasher():
    # 테스트 속도를 위해 최소 cost
    return PasswordHasher(rounds=4)


@pytest.fixture
def tokens():
    return TokenIssuer(TokenConfig(secret_key="test-secret-key-for-music-catalog-api", access_token_expire_minutes=5))


@pytest.fixture
def client(session_factory, hasher, tokens):
    def _get_db():
        s = session_factory()
        try:
            yield s
        finally:
            s.close()

    app.dependency_overrides[get_db] = _get_db
    app.dependency_overrides[get_password_hasher] = lambda: hasher
    app.dependency_overrides[get_token_issuer] = lambda: tokens
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def auth_header(client, tokens):
    """회원가입 후 Bearer 헤더와 user id 반환"""
    r = client.post(
        "/api/auth/register",
        json={"email": "fan@x.com", "password": "pw", "userType": "listener"},
    )
    token = r.json()["data"]["accessToken"]
    user_id = tokens.decode(token)["id"]
    return {"Authorization": f"Bearer {token}"}, user_id
