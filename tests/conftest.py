"""
Swim school backend - fixtures de teste
"""
import os
from datetime import date, datetime, timezone

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

# Ambiente de teste (antes de importar o pacote)
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["IDP_SECRET_KEY"] = "test-idp-secret"
os.environ["ROLE_ALLOWLIST"] = "admin@example.com=ADMIN,instructor@example.com=INSTRUCTOR"
os.environ["LOG_LEVEL"] = "WARNING"

from swimschool.api import deps
from swimschool.core.errors import BlobUploadFailed
from swimschool.core.tokens import issue_identity_token
from swimschool.db.base import Base
from swimschool.main import api
from swimschool.models.enrollment import PaymentStatus
from swimschool.models.user import UserProfile, UserRole
from swimschool.schemas.enrollment import EnrollmentCreate
from swimschool.services import enrollments as lifecycle
from swimschool.services.confirm import ConfirmGate
from swimschool.services.realtime import ChangeFeed

class FakeBlobHost:
    def __init__(self, fail: bool = False):
        self.fail = fail
        self.uploads = []

    def upload(self, data: bytes, filename: str = "image.png") -> str:
        if self.fail:
            raise BlobUploadFailed("Image upload failed. Please try again.", {"reason": "offline"})
        self.uploads.append((filename, data))
        return f"https://i.ibb.co/test/{len(self.uploads)}-{filename}"

class FakeClock:
    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds

@pytest.fixture
def engine():
    eng = create_engine("sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool)
    Base.metadata.create_all(eng)
    yield eng
    Base.metadata.drop_all(eng)
    eng.dispose()

@pytest.fixture
def db(engine):
    session = sessionmaker(bind=engine, autocommit=False, autoflush=False)()
    yield session
    session.close()

@pytest.fixture
def make_user(db):
    def _make(uid: str, role: str = UserRole.STUDENT.value, name: str | None = None, email: str | None = None) -> UserProfile:
        user = UserProfile(uid=uid, email=email or f"{uid}@example.org", display_name=name or uid, role=role)
        db.add(user)
        db.commit()
        db.refresh(user)
        return user
    return _make

@pytest.fixture
def admin(make_user):
    return make_user("admin-1", UserRole.ADMIN.value, "Admin")

@pytest.fixture
def instructor(make_user):
    # nome igual ao instructorName do course-a
    return make_user("instructor-1", UserRole.INSTRUCTOR.value, "Kru Fluke")

@pytest.fixture
def student(make_user):
    return make_user("student-1", UserRole.STUDENT.value, "Parent One")

@pytest.fixture
def blob_host():
    return FakeBlobHost()

@pytest.fixture
def feed():
    return ChangeFeed()

@pytest.fixture
def clock():
    return FakeClock()

@pytest.fixture
def gate(clock):
    return ConfirmGate(window_seconds=3, clock=clock)

@pytest.fixture
def enroll(db, blob_host):
    """Inscrição direta pelo serviço (sem HTTP)."""
    def _enroll(user, course_id="course-a", start=date(2025, 1, 10), today=date(2025, 1, 10), name="Nong Nam", **extra):
        payload = EnrollmentCreate(
            course_id=course_id,
            start_date=start,
            student_name=name,
            gender="F",
            age=6,
            **extra,
        )
        return lifecycle.create_enrollment(db, user, payload, b"slip-bytes", blob_host, today=today, feed=None)
    return _enroll

@pytest.fixture
def pay(db, admin):
    def _pay(e, decision=PaymentStatus.PAID.value):
        return lifecycle.apply_payment_decision(db, admin, e, decision, feed=None)
    return _pay

# ------------------------------ HTTP ------------------------------

FIXED_NOW = datetime(2025, 1, 10, 3, 0, tzinfo=timezone.utc)

@pytest.fixture
def client(db, blob_host, feed, gate):
    def override_get_db():
        yield db

    api.dependency_overrides[deps.get_db] = override_get_db
    api.dependency_overrides[deps.get_blob_host] = lambda: blob_host
    api.dependency_overrides[deps.get_change_feed] = lambda: feed
    api.dependency_overrides[deps.get_confirm_gate] = lambda: gate
    api.dependency_overrides[deps.get_now] = lambda: FIXED_NOW

    with TestClient(api) as c:
        yield c

    api.dependency_overrides.clear()

@pytest.fixture
def auth_headers():
    def _headers(uid: str, email: str = "", name: str = "") -> dict:
        token = issue_identity_token(sub=uid, email=email, name=name)
        return {"Authorization": f"Bearer {token}"}
    return _headers
