import os
import sys
from pathlib import Path

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker


# Ensure `import backend.sufopoc...` works regardless of where pytest is run from.
PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

# Must be set before any test module imports the config, so a developer's .env never leaks in.
os.environ["DISABLE_DOTENV"] = "1"
os.environ["SMTP_HOST"] = ""
os.environ["ADMIN_EMAIL"] = "customer@sufopoc.com"
os.environ["VERIFICATION_CODE_TTL_HOURS"] = "24"

DEFAULT_PASSWORD = "Testpass123!"


@pytest.fixture(scope="session")
def test_db_path(tmp_path_factory: pytest.TempPathFactory) -> Path:
    return tmp_path_factory.mktemp("db") / "test.sqlite3"


@pytest.fixture()
def app(test_db_path: Path, monkeypatch: pytest.MonkeyPatch) -> FastAPI:
    """
    Create the FastAPI app wired to a temporary SQLite DB.
    """
    os.environ["DATABASE_URL"] = f"sqlite+pysqlite:///{test_db_path}"

    from backend.sufopoc import config
    from backend.sufopoc import database as db

    # Tests never talk to a real mail server.
    monkeypatch.setattr(config, "SMTP_HOST", "")

    engine = create_engine(
        os.environ["DATABASE_URL"],
        connect_args={"check_same_thread": False},
    )
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    # Patch the shared database module so router dependencies use the test DB.
    monkeypatch.setattr(db, "engine", engine)
    monkeypatch.setattr(db, "SessionLocal", TestingSessionLocal)

    # Import models so Base metadata is populated, then create tables.
    from backend.sufopoc import models  # noqa: F401

    db.Base.metadata.drop_all(bind=engine)
    db.Base.metadata.create_all(bind=engine)

    from backend.sufopoc.main import create_app

    return create_app()


@pytest.fixture()
def client(app: FastAPI) -> TestClient:
    return TestClient(app)


@pytest.fixture()
def db_session(app: FastAPI):
    """
    Direct SQLAlchemy session bound to the same temporary SQLite DB used by the test app.
    """
    from backend.sufopoc import database

    db = database.SessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture()
def outbox(monkeypatch: pytest.MonkeyPatch) -> list[dict]:
    """Every email the app tries to send, in order."""
    from backend.sufopoc.services import emailer

    sent: list[dict] = []

    def _capture(*, to_email: str, subject: str, text: str) -> None:
        sent.append({"to": to_email, "subject": subject, "text": text})

    monkeypatch.setattr(emailer, "send_email", _capture)
    return sent


@pytest.fixture()
def make_user(db_session):
    """Insert a user row directly (bypassing signup) and return it."""
    from backend.sufopoc.models.user import User
    from backend.sufopoc.utils.security import hash_password

    def _make(
        *,
        email: str,
        role: str = "STUDENT",
        name: str = "Test User",
        password: str = DEFAULT_PASSWORD,
        is_verified: bool = False,
        is_business_verified: bool | None = None,
        cv_url: str | None = None,
    ):
        if role == "BUSINESS" and is_business_verified is None:
            is_business_verified = False
        user = User(
            name=name,
            email=email,
            password=hash_password(password),
            role=role,
            is_verified=is_verified,
            is_business_verified=is_business_verified,
            cv_url=cv_url,
        )
        db_session.add(user)
        db_session.commit()
        db_session.refresh(user)
        return user

    return _make


@pytest.fixture()
def auth_headers():
    from backend.sufopoc.utils.jwt import create_session_token

    def _headers(user) -> dict:  # noqa: ANN001
        return {"Authorization": f"Bearer {create_session_token(user)}"}

    return _headers


@pytest.fixture()
def job_payload():
    def _payload(**overrides) -> dict:
        body = {
            "title": "React Developer",
            "companyName": "Acme BV",
            "category": "IT",
            "jobType": "FULL_TIME",
            "seniorityLevel": "MEDIOR",
            "employmentType": "PERMANENT",
            "country": "Netherlands",
            "city": "Amsterdam",
            "shortDescription": "Build UIs",
            "fullDescription": "Build and maintain our React front-end.",
            "requirements": ["React", "TypeScript"],
            "requiredLanguages": ["English"],
            "tags": ["frontend"],
        }
        body.update(overrides)
        return body

    return _payload


@pytest.fixture()
def opleiding_payload():
    def _payload(**overrides) -> dict:
        body = {
            "title": "Welding Certificate",
            "description": "Six-week practical welding course.",
            "requirements": "Basic technical skills",
            "location": "Rotterdam",
            "duration": "6 weeks",
            "category": "Technical",
        }
        body.update(overrides)
        return body

    return _payload
