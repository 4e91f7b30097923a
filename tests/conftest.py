import os
import tempfile

os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ["TESTING"] = "true"
os.environ["AUTH_MODE"] = "dev"
os.environ.setdefault("EMAIL_ARCHIVE_DIR", tempfile.mkdtemp(prefix="emails-"))

import pytest
from fastapi.testclient import TestClient

from app.api.dependencies import get_email_service, get_storage_service
from app.core.security import create_access_token
from app.db.database import SessionLocal, engine
from app.db.models import Base
from app.domain.enums import DeliveryMethod, UserRole, UserStatus
from app.infrastructure.external_services.email_service import EmailArchive, EmailService
from app.infrastructure.orm import SubmissionModel, UserModel
from app.main import app


class FakeStorageService:
    """In-memory blob store"""

    def __init__(self):
        self.objects = {}
        self.deleted = []
        self.signed = 0

    async def upload_file(self, file_data, object_name, content_type, length=None):
        data = file_data if isinstance(file_data, bytes) else file_data.read()
        self.objects[object_name] = data
        return await self.get_file_url(object_name)

    async def get_file_url(self, object_name):
        self.signed += 1
        return f"memory://tracks/{object_name}?signature={self.signed}"

    async def delete_file(self, object_name):
        self.deleted.append(object_name)
        return self.objects.pop(object_name, None) is not None


class FakeEmailProvider:

    def __init__(self, method=DeliveryMethod.SENDGRID, fail=False):
        self.method = method
        self.fail = fail
        self.sent = []

    async def send(self, email):
        if self.fail:
            raise RuntimeError(f"{self.method.value} is down")
        self.sent.append(email)
        return f"<{self.method.value}-{len(self.sent)}@test>"


@pytest.fixture(autouse=True)
def database():
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def storage():
    return FakeStorageService()


@pytest.fixture
def primary_provider():
    return FakeEmailProvider(DeliveryMethod.SENDGRID)


@pytest.fixture
def fallback_provider():
    return FakeEmailProvider(DeliveryMethod.SMTP)


@pytest.fixture
def email_service(primary_provider, fallback_provider, tmp_path):
    return EmailService(
        providers=[primary_provider, fallback_provider],
        archive=EmailArchive(str(tmp_path / "emails"))
    )


@pytest.fixture
def client(storage, email_service):
    app.dependency_overrides[get_storage_service] = lambda: storage
    app.dependency_overrides[get_email_service] = lambda: email_service
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


def add_user(uid, email, role, status=UserStatus.ACTIVE, artist_name=None):
    db = SessionLocal()
    try:
        db.add(UserModel(
            id=uid,
            email=email,
            display_name=uid.title(),
            role=role,
            status=status,
            artist_name=artist_name,
            social_media={},
            permissions=["review_submissions"] if role == UserRole.ADMIN else [],
            is_active=True,
        ))
        db.commit()
    finally:
        db.close()
    return uid


def auth(uid, email=None):
    return {"Authorization": f"Bearer {create_access_token(uid, email=email)}"}


@pytest.fixture
def artist():
    add_user("artist-a", "a@example.com", UserRole.ARTIST, artist_name="DJ Alpha")
    return auth("artist-a")


@pytest.fixture
def other_artist():
    add_user("artist-b", "b@example.com", UserRole.ARTIST, artist_name="Beta Beats")
    return auth("artist-b")


@pytest.fixture
def admin():
    add_user("admin-1", "admin@example.com", UserRole.ADMIN)
    return auth("admin-1")


def create_submission(client, headers, title="Summer Demo"):
    resp = client.post("/api/submissions/create", json={"title": title, "description": "Three tracks"}, headers=headers)
    assert resp.status_code == 201, resp.text
    return resp.json()["submissionId"]


def upload(client, headers, submission_id, filename="demo.mp3", content=b"ID3" + b"\x00" * 1024,
           title="Opening", genre="House", **extra):
    data = {"trackTitle": title, "genre": genre}
    data.update(extra)
    return client.post(
        f"/api/submissions/upload/{submission_id}",
        files={"track": (filename, content, "audio/mpeg")},
        data=data,
        headers=headers,
    )


def force_review(submission_id, status, score):
    """Commit a review decision from a separate session, as another admin would"""
    db = SessionLocal()
    try:
        model = db.query(SubmissionModel).filter(SubmissionModel.id == submission_id).one()
        model.status = status
        model.review_score = score
        db.commit()
    finally:
        db.close()
