"""Test configuration and fixtures."""

import os

# Settings are read at import time, so they must be in place before examgate loads
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")
os.environ.setdefault("BCRYPT_SALT_ROUNDS", "4")
os.environ.setdefault("COOKIE_SECURE", "false")
os.environ.setdefault("OTP_IN_RESPONSE", "true")

import pytest
from unittest.mock import MagicMock
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from examgate.database import Base, get_db
from examgate.models import User, Role, Submission
from examgate.notifications import EmailNotifier, get_notifier
from examgate.exam_config.service import ExamConfigService
from examgate.auth.tokens import TokenIssuer


# Use in-memory SQLite for testing
TEST_DATABASE_URL = "sqlite:///:memory:"


@pytest.fixture
def engine():
    """Create a fresh test database per test."""
    engine = create_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db_session(session_factory):
    """Create test database session."""
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def exam_config(db_session):
    return ExamConfigService(db_session).ensure_config()


def _make_user(db_session, email, role, name=None):
    user = User(email=email, name=name, role=role)
    db_session.add(user)
    db_session.commit()
    db_session.refresh(user)
    return user


@pytest.fixture
def student(db_session):
    return _make_user(db_session, "student@example.com", Role.STUDENT, name="Sam Student")


@pytest.fixture
def other_student(db_session):
    return _make_user(db_session, "other@example.com", Role.STUDENT, name="Olive Other")


@pytest.fixture
def supervisor(db_session):
    return _make_user(db_session, "supervisor@example.com", Role.SUPERVISOR, name="Sue Pervisor")


@pytest.fixture
def admin(db_session):
    return _make_user(db_session, "admin@example.com", Role.ADMIN, name="Ada Admin")


@pytest.fixture
def notifier():
    return MagicMock(spec=EmailNotifier)


@pytest.fixture
def make_answers():
    """Build a questions-and-answers list with the first `correct` entries marked correct."""
    def _make(total, correct=None):
        answers = []
        for i in range(total):
            answer = {"question": f"Question {i + 1}", "image_url": None, "answer": f"Answer {i + 1}", "correct": None}
            if correct is not None:
                answer["correct"] = i < correct
            answers.append(answer)
        return answers
    return _make


@pytest.fixture
def make_submission(db_session):
    """Insert a submission directly, bypassing eligibility rules."""
    def _make(owner, step, level=None, answers=None, created_at=None):
        submission = Submission(
            submitted_by_id=owner.id,
            step=step,
            level=level,
            questions_and_answers=answers or [{"question": "Q1", "image_url": None, "answer": "", "correct": None}],
        )
        if created_at is not None:
            submission.created_at = created_at
        db_session.add(submission)
        db_session.commit()
        db_session.refresh(submission)
        return submission
    return _make


@pytest.fixture
def auth_headers():
    """Bearer headers for a user."""
    issuer = TokenIssuer()

    def _headers(user):
        return {"Authorization": f"Bearer {issuer.create_access_token(user.id)}"}
    return _headers


@pytest.fixture
def client(session_factory, notifier):
    """Test client wired to the per-test database and a mocked notifier."""
    from examgate.main import app

    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_notifier] = lambda: notifier

    with TestClient(app) as test_client:
        yield test_client

    # Clean up
    app.dependency_overrides.clear()
