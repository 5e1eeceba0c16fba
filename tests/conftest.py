import os

os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("DB_URL", "sqlite://")
os.environ["SETUP_DELAY_SECONDS"] = "0"
os.environ["SETUP_ACCOUNT_COUNT"] = "3"
os.environ["PUBLIC_BASE_URL"] = "http://testserver"

from types import SimpleNamespace  # noqa: E402
from datetime import date  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from scoreboard.database import get_db, init_db  # noqa: E402
from scoreboard.main import app  # noqa: E402
from scoreboard.schema.account import Role, SignupRequest  # noqa: E402
from scoreboard.services.auth import sign_up  # noqa: E402

PASSWORD = "secret-pass"


@pytest.fixture
def session_factory():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(bind=engine)
    yield sessionmaker(autocommit=False, autoflush=False, bind=engine)
    engine.dispose()


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def client(session_factory):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def make_headers(client, db):
    """Register a user with the given role and return its auth headers."""

    def _make(role: Role = Role.ADMIN, email: str = None) -> dict:
        email = email or f"{role.value}@example.com"
        sign_up(
            SignupRequest(email=email, password=PASSWORD, name=role.value.title()),
            db,
            role=role,
        )
        response = client.post("/auth/login", json={"email": email, "password": PASSWORD})
        assert response.status_code == 200, response.text
        token = response.json()["data"]["access_token"]
        return {"Authorization": f"Bearer {token}"}

    return _make


@pytest.fixture
def admin_headers(make_headers):
    return make_headers(Role.ADMIN)


@pytest.fixture
def viewer_headers(make_headers):
    return make_headers(Role.VIEWER)


def make_round(name, score, interview_date=date(2024, 1, 1), round_number=1):
    return SimpleNamespace(
        student_name=name,
        score=score,
        interview_date=interview_date,
        round_number=round_number,
    )


def make_score(name, module_number, activeness_score):
    return SimpleNamespace(
        student_name=name,
        module_number=module_number,
        activeness_score=activeness_score,
    )
