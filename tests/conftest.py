import itertools

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.db.base_class import Base
from app.db.session import get_db
from app.main import app
from app.models.friendship import Friendship  # noqa: F401
from app.models.user import User
from app.services.friend_service import FriendService
from app.services.friendship_service import FriendshipService

# ============================================================================
# Database fixtures
# ============================================================================


@pytest.fixture
def engine():
    """Fresh in-memory SQLite database shared by every connection in a test."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    @event.listens_for(engine, "connect")
    def _enable_foreign_keys(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def db_session(engine):
    session = sessionmaker(autocommit=False, autoflush=False, bind=engine)()
    try:
        yield session
    finally:
        session.close()


# ============================================================================
# Graph building fixtures
# ============================================================================


@pytest.fixture
def make_user(db_session):
    """Insert a user directly; skips bcrypt to keep graph tests fast."""
    counter = itertools.count(1)

    def _make_user(full_name=None):
        n = next(counter)
        user = User(
            full_name=full_name if full_name is not None else f"User {n}",
            phone_number=f"+1555000{n:04d}",
            hashed_password="not-a-real-hash",
        )
        db_session.add(user)
        db_session.commit()
        return user.id

    return _make_user


@pytest.fixture
def friend_service(db_session):
    return FriendService(db=db_session)


@pytest.fixture
def friendship_service(db_session):
    return FriendshipService(db=db_session)


@pytest.fixture
def befriend(friendship_service):
    """user_id requests friend_user_id, who accepts."""

    def _befriend(user_id, friend_user_id):
        friendship_service.send_request(user_id, friend_user_id)
        friendship_service.accept_request(friend_user_id, user_id)

    return _befriend


@pytest.fixture
def users(make_user):
    """Five users named A to E, as a dict of name -> id."""
    return {name: make_user(full_name=f"User {name}") for name in "ABCDE"}


# ============================================================================
# API fixtures
# ============================================================================


@pytest.fixture
def client(db_session):
    app.dependency_overrides[get_db] = lambda: db_session
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
