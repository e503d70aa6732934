import os

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("LOG_LEVEL", "WARNING")

from datetime import datetime, timedelta, timezone
from typing import Callable

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from correspondence_tracker.core.db import enable_sqlite_foreign_keys, get_db
from correspondence_tracker.core.jwt import create_access_token
from correspondence_tracker.correspondence.repository import CorrespondenceRepository
from correspondence_tracker.correspondence.services import CorrespondenceService
from correspondence_tracker.main import app as fast_api_app
from correspondence_tracker.models import Base, Department, User
from correspondence_tracker.users.schemas import ActingUser
from correspondence_tracker.utils.logger import get_logger
from correspondence_tracker.utils.security import get_password_hash

logger = get_logger(__name__)

TEST_PASSWORD = "Secret#123"

# Database engine and session setup
engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
enable_sqlite_foreign_keys(engine)
TestSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Hash once, bcrypt is slow on purpose
_password_hash = get_password_hash(TEST_PASSWORD)


def _seed(db) -> None:
    db.add_all([
        User(name="Ada Admin", email_address="admin@records.org", password=_password_hash, role="admin"),
        User(name="Max Manager", email_address="manager@records.org", password=_password_hash, role="manager"),
        User(name="Sam Staff", email_address="staff@records.org", password=_password_hash, role="staff"),
        User(name="Ivy Inactive", email_address="inactive@records.org", password=_password_hash,
             role="staff", is_active=False),
        Department(name="Finance", code="FIN"),
        Department(name="Administration", code="ADM"),
    ])
    db.commit()


@pytest.fixture
def db_session():
    """
    Fresh schema with seed users and departments for every test.
    """
    Base.metadata.create_all(bind=engine)
    db = TestSessionLocal()
    _seed(db)
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db_session):
    """TestClient with get_db pointed at the test database."""
    def override_get_db():
        db = TestSessionLocal()
        try:
            yield db
            db.commit()
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()

    fast_api_app.dependency_overrides[get_db] = override_get_db
    with TestClient(fast_api_app) as test_client:
        yield test_client
    fast_api_app.dependency_overrides.clear()


@pytest.fixture
def users(db_session) -> dict:
    """Seeded users keyed by role, inactive one under 'inactive'."""
    rows = db_session.query(User).all()
    return {
        ("inactive" if not user.is_active else user.role): user
        for user in rows
    }


@pytest.fixture
def departments(db_session) -> dict:
    return {dept.code: dept for dept in db_session.query(Department).all()}


@pytest.fixture
def admin(users) -> ActingUser:
    return ActingUser(id=users["admin"].id, role="admin")


@pytest.fixture
def auth_headers(users) -> Callable[[str], dict]:
    """Bearer headers for a seeded role."""
    def _headers(role: str) -> dict:
        user = users[role]
        token = create_access_token({"sub": user.email_address, "id": user.id, "role": user.role})
        return {"Authorization": f"Bearer {token}"}
    return _headers


@pytest.fixture
def service(db_session) -> CorrespondenceService:
    return CorrespondenceService(CorrespondenceRepository(db_session))


@pytest.fixture
def make_correspondence(service, users) -> Callable[..., object]:
    """Create a correspondence with sensible defaults."""
    def _make(**overrides):
        data = {
            "subject": "Request for records",
            "description": "Copies of the 2023 permits",
            "type": "request",
            "sender_name": "Jordan Reyes",
            "due_date": datetime.now(timezone.utc) + timedelta(days=10),
        }
        data.update(overrides)
        return service.create_correspondence(data, created_by=users["admin"].id)
    return _make


@pytest.fixture
def seed_password() -> str:
    """Plain-text password shared by all seeded users."""
    return TEST_PASSWORD
