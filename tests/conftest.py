# tests/conftest.py
from __future__ import annotations

import os
from collections.abc import Callable, Generator, Iterator

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

os.environ.setdefault("SECRET_KEY", "test-secret-key")

from waste_cycle.core.identity import Subject, create_identity_token
from waste_cycle.db.session import Base
from waste_cycle.db.session import get_db as app_get_session
from waste_cycle.main import app as fastapi_app
from waste_cycle.models import Listing, User, UserRole
from waste_cycle.services.chat_rooms import ChatRoomService

TEST_DB_URL = "sqlite://"


@pytest.fixture()
def engine() -> Generator[Engine, None, None]:
    engine = create_engine(
        TEST_DB_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture()
def db_session(engine: Engine) -> Iterator[Session]:
    SessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture(scope="session")
def app() -> FastAPI:
    return fastapi_app


@pytest.fixture(autouse=True)
def override_session_dependency(app: FastAPI, db_session: Session) -> Iterator[None]:
    def _get_session_override() -> Generator[Session, None, None]:
        yield db_session

    app.dependency_overrides[app_get_session] = _get_session_override
    try:
        yield
    finally:
        app.dependency_overrides.pop(app_get_session, None)


@pytest.fixture()
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app, base_url="http://test") as test_client:
        yield test_client


def _persist_user(db: Session, uid: str, name: str, role: UserRole = UserRole.USER) -> User:
    user = User(id=uid, name=name, email=f"{uid}@example.com", role=role.value)
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def auth_headers(uid: str, **claims: str) -> dict[str, str]:
    """Return authorization headers carrying an identity token for ``uid``."""
    token = create_identity_token(uid, **claims)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture()
def buyer(db_session: Session) -> User:
    """Persisted buyer profile (``u1``)."""
    return _persist_user(db_session, "u1", "Buyer Bee")


@pytest.fixture()
def seller(db_session: Session) -> User:
    """Persisted listing owner profile (``u2``)."""
    return _persist_user(db_session, "u2", "Farmer Fah")


@pytest.fixture()
def outsider(db_session: Session) -> User:
    """Persisted user who takes part in no room (``u3``)."""
    return _persist_user(db_session, "u3", "Nosy Neighbour")


@pytest.fixture()
def admin_user(db_session: Session) -> User:
    """Persisted administrator profile."""
    return _persist_user(db_session, "admin-1", "Site Admin", role=UserRole.ADMIN)


@pytest.fixture()
def listing(db_session: Session, seller: User) -> Listing:
    """Listing ``p1`` owned by the seller."""
    item = Listing(
        id="p1",
        owner_id=seller.id,
        title="Composted cow manure",
        description="Two tonnes, well rotted",
        waste_type="manure",
        quantity=2.0,
        unit="tonne",
        price=1500.0,
        images=["https://img.example/manure-1.jpg", "https://img.example/manure-2.jpg"],
    )
    db_session.add(item)
    db_session.commit()
    db_session.refresh(item)
    return item


@pytest.fixture()
def subject_for() -> Callable[[User], Subject]:
    """Build the gateway subject for a persisted user."""

    def _subject(user: User) -> Subject:
        return Subject(uid=user.id, display_name=None, email=user.email)

    return _subject


@pytest.fixture()
def room_service(db_session: Session) -> ChatRoomService:
    return ChatRoomService(db_session)


@pytest.fixture()
def buyer_headers(buyer: User) -> dict[str, str]:
    return auth_headers(buyer.id)


@pytest.fixture()
def seller_headers(seller: User) -> dict[str, str]:
    return auth_headers(seller.id)


@pytest.fixture()
def outsider_headers(outsider: User) -> dict[str, str]:
    return auth_headers(outsider.id)


@pytest.fixture()
def admin_headers(admin_user: User) -> dict[str, str]:
    return auth_headers(admin_user.id)
