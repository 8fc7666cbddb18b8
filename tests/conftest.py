"""Shared fixtures: an in-memory SQLite database, sessions and an API client."""

import os

os.environ.setdefault("BOOSTLY_DATABASE_URL", "sqlite+pysqlite:///:memory:")
os.environ.setdefault("BOOSTLY_ENVIRONMENT", "test")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from boostly.core.database import Base, get_db
from boostly.main import create_app
from boostly.models import Student
from boostly.utils.datetime import current_month

CURRENT_MONTH = current_month()


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite+pysqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        future=True,
    )
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autoflush=False, autocommit=False, expire_on_commit=False, future=True)


@pytest.fixture
def session(session_factory):
    db = session_factory()
    yield db
    db.close()


@pytest.fixture
def make_student(session_factory):
    """Create a committed student already rolled into the current month unless told otherwise."""

    def _make(student_id, *, name=None, email=None, last_reset_month=CURRENT_MONTH, **fields):
        db = session_factory()
        try:
            student = Student(
                student_id=student_id,
                name=name or f"Student {student_id}",
                email=email or f"{student_id.lower()}@example.edu",
                last_reset_month=last_reset_month,
                **fields,
            )
            db.add(student)
            db.commit()
            return student
        finally:
            db.close()

    return _make


@pytest.fixture
def get_student(session_factory):
    """Read a student's committed state in a fresh session."""

    def _get(student_id):
        db = session_factory()
        try:
            return db.get(Student, student_id)
        finally:
            db.close()

    return _get


@pytest.fixture
def app(session_factory):
    application = create_app()

    def _override_get_db():
        db = session_factory()
        try:
            yield db
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()

    application.dependency_overrides[get_db] = _override_get_db
    return application


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client
