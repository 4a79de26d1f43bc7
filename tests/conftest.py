"""Shared fixtures and helpers for tests."""

import os

# Settings are read once at import time, so the environment goes first.
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("SECRET_KEY_FOR_AUTH", "test-secret-key-for-jobboard-tests")
os.environ.setdefault("LOG_LEVEL", "WARNING")

import functools

import bcrypt
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from jobboard.core.config import settings
from jobboard.db.database import enable_sqlite_foreign_keys, get_db
from jobboard.db.models import Base
from jobboard.main import app
from jobboard.security import passwords
from jobboard.storage.resumes import ResumeStore, get_resume_store

PDF_BYTES = b"%PDF-1.4\n1 0 obj<</Type/Catalog>>endobj\ntrailer<</Root 1 0 R>>\n%%EOF"
PDF_TYPE = "application/pdf"
DOCX_TYPE = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"


@pytest.fixture(autouse=True)
def fast_bcrypt(monkeypatch):
    """Cheap bcrypt rounds so every registration does not cost a quarter second."""
    monkeypatch.setattr(passwords.bcrypt, "gensalt", functools.partial(bcrypt.gensalt, rounds=4))


@pytest.fixture
def engine():
    test_engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    enable_sqlite_foreign_keys(test_engine)
    Base.metadata.create_all(bind=test_engine)
    yield test_engine
    Base.metadata.drop_all(bind=test_engine)
    test_engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def store(tmp_path):
    return ResumeStore(
        base_dir=tmp_path / "uploads",
        max_size=settings.MAX_RESUME_SIZE,
        allowed_types=settings.ALLOWED_RESUME_TYPES,
    )


@pytest.fixture
def client(session_factory, store):
    """Test client wired to the per-test database and upload directory."""

    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_resume_store] = lambda: store
    yield TestClient(app, raise_server_exceptions=False)
    app.dependency_overrides.clear()


class Api:
    """Thin wrapper around the test client for the calls most tests repeat."""

    prefix = "/api/v1"

    def __init__(self, client: TestClient):
        self.client = client

    @staticmethod
    def headers(token: str | None) -> dict:
        return {"Authorization": f"Bearer {token}"} if token else {}

    def register(self, name, email, role="APPLICANT", password="secret123", **extra):
        payload = {"name": name, "email": email, "password": password, "role": role, **extra}
        return self.client.post(f"{self.prefix}/auth/register", json=payload)

    def register_company(self, name="Acme", email="hr@acme.com", company_name=None):
        response = self.register(
            f"{name} HR", email, role="COMPANY",
            companyName=company_name or name,
            companyDescription=f"{name} builds things",
            website=f"https://{name.lower()}.com",
        )
        assert response.status_code == 201, response.text
        return response.json()["token"]

    def register_applicant(self, name="Bob", email="bob@example.com"):
        response = self.register(name, email, role="APPLICANT")
        assert response.status_code == 201, response.text
        return response.json()["token"]

    def create_job(self, token, **overrides):
        payload = {
            "title": "Engineer",
            "description": "Build and run the product",
            "location": "Berlin",
            "category": "Technology",
            "salary": "60k",
            "type": "Full-time",
        }
        payload.update(overrides)
        return self.client.post(f"{self.prefix}/jobs", json=payload, headers=self.headers(token))

    def create_job_id(self, token, **overrides) -> int:
        response = self.create_job(token, **overrides)
        assert response.status_code == 201, response.text
        return response.json()["id"]

    def apply(self, token, job_id, content=PDF_BYTES, filename="resume.pdf",
              content_type=PDF_TYPE, cover_letter="cover"):
        files = {"resume": (filename, content, content_type)} if content is not None else None
        data = {"coverLetter": cover_letter} if cover_letter is not None else None
        return self.client.post(
            f"{self.prefix}/applications/apply/{job_id}",
            files=files,
            data=data,
            headers=self.headers(token),
        )

    def set_status(self, token, application_id, status):
        return self.client.put(
            f"{self.prefix}/applications/{application_id}/status",
            json={"status": status},
            headers=self.headers(token),
        )

    def get(self, path, token=None, **kwargs):
        return self.client.get(f"{self.prefix}{path}", headers=self.headers(token), **kwargs)


@pytest.fixture
def api(client):
    return Api(client)
