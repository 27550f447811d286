# tests/conftest.py
import os
import uuid
from datetime import datetime, timedelta, timezone

# Settings are read at import time, so the environment must be ready first.
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("SUPABASE_JWT_SECRET", "test-secret")

import pytest
from fastapi.testclient import TestClient
from jose import jwt
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel, Session, create_engine

from textile_shop.database import get_session
from textile_shop.main import app
from textile_shop.models.profile import Profile
from textile_shop.services.cart_sessions import CartSessionStore


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    SQLModel.metadata.drop_all(engine)


@pytest.fixture
def session(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture
def client(engine):
    def _get_session():
        with Session(engine) as session:
            yield session

    app.dependency_overrides[get_session] = _get_session
    app.state.cart_sessions = CartSessionStore()
    yield TestClient(app)
    app.dependency_overrides.clear()


def make_token(sub: uuid.UUID, email: str, **extra) -> str:
    claims = {
        "sub": str(sub),
        "email": email,
        "exp": datetime.now(timezone.utc) + timedelta(hours=1),
        **extra,
    }
    return jwt.encode(claims, os.environ["SUPABASE_JWT_SECRET"], algorithm="HS256")


def auth_headers(sub: uuid.UUID, email: str, **extra) -> dict[str, str]:
    return {"Authorization": f"Bearer {make_token(sub, email, **extra)}"}


@pytest.fixture
def client_headers():
    """A shopper; the profile is auto-provisioned on first request."""
    return auth_headers(uuid.uuid4(), "awa@tissus-dakar.sn")


@pytest.fixture
def other_client_headers():
    return auth_headers(uuid.uuid4(), "kofi@tissus-dakar.sn")


@pytest.fixture
def admin_headers(session):
    admin = Profile(
        id=uuid.uuid4(),
        email="admin@tissus-dakar.sn",
        full_name="Back Office",
        role="admin",
    )
    session.add(admin)
    session.commit()
    return auth_headers(admin.id, admin.email)


@pytest.fixture
def token_headers():
    """Factory for headers carrying arbitrary extra token claims."""
    return auth_headers
