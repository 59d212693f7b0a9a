import io
import os

# Must be set before portal modules build the settings/engine
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key")

import pytest
from fastapi.testclient import TestClient
from PyPDF2 import PdfWriter
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker

from portal.core.auth import AccessGate, get_access_gate, hash_password
from portal.core.config import get_settings
from portal.db.database import Base, get_db
from portal.main import app
from portal.models import User

TEST_PASSWORD = "password123"


def _set_sqlite_pragmas(dbapi_conn, connection_record):
    cursor = dbapi_conn.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def make_pdf(pages: int = 1) -> bytes:
    writer = PdfWriter()
    for _ in range(pages):
        writer.add_blank_page(width=72, height=72)
    buf = io.BytesIO()
    writer.write(buf)
    return buf.getvalue()


@pytest.fixture
def test_db(tmp_path):
    db_path = tmp_path / "portal.sqlite"
    engine = create_engine(
        f"sqlite:///{db_path}",
        connect_args={"check_same_thread": False},
    )
    event.listen(engine, "connect", _set_sqlite_pragmas)
    Base.metadata.create_all(bind=engine)
    TestSession = sessionmaker(bind=engine, autoflush=False, autocommit=False)

    def override_get_db():
        db = TestSession()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestSession
    app.dependency_overrides.pop(get_db, None)
    engine.dispose()


@pytest.fixture
def gate():
    test_gate = AccessGate(secret_key="test-secret-key")
    app.dependency_overrides[get_access_gate] = lambda: test_gate
    yield test_gate
    app.dependency_overrides.pop(get_access_gate, None)


@pytest.fixture(autouse=True)
def upload_dir(tmp_path, monkeypatch):
    path = tmp_path / "uploads"
    monkeypatch.setattr(get_settings(), "upload_dir", str(path))
    return path


def create_user(TestSession, email: str, role: str, name: str = "Test User") -> str:
    with TestSession() as db:
        user = User(email=email, password=hash_password(TEST_PASSWORD), name=name, role=role)
        db.add(user)
        db.commit()
        return user.id


@pytest.fixture
def student_id(test_db):
    return create_user(test_db, "student@uni.edu", "student", "Priya Sharma")


@pytest.fixture
def admin_id(test_db):
    return create_user(test_db, "admin@uni.edu", "admin", "Placement Cell")


@pytest.fixture
def client(test_db, gate):
    """Anonymous client (no auth cookie)."""
    return TestClient(app)


@pytest.fixture
def student_client(test_db, gate, student_id):
    return TestClient(app, cookies={"token": gate.issue_token(student_id, "student")})


@pytest.fixture
def admin_client(test_db, gate, admin_id):
    return TestClient(app, cookies={"token": gate.issue_token(admin_id, "admin")})


@pytest.fixture
def job_payload():
    return {
        "company_name": "Google",
        "title": "Software Engineer",
        "description": "Backend services",
        "location": "Bangalore",
        "package": "30 LPA",
        "min_cgpa": 7.0,
        "allowed_branches": ["CSE", "IT"],
        "allowed_courses": ["B.Tech"],
        "deadline": "2099-12-31T23:59:00Z",
    }


@pytest.fixture
def created_job(admin_client, job_payload):
    r = admin_client.post("/api/jobs", json=job_payload)
    assert r.status_code == 201
    return r.json()


@pytest.fixture
def eligible_student(student_client):
    r = student_client.patch("/api/profile", json={
        "roll_number": "21CS001", "cgpa": 7.5, "branch": "CSE", "course": "B.Tech",
    })
    assert r.status_code == 200
    return student_client
