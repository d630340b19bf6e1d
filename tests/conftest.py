"""
Pytest configuration and fixtures for testing.

This file provides reusable test fixtures for:
- Database setup/teardown
- FastAPI test client
- Users and their bearer tokens
- Sample companies and jobs
"""

import os

# Point the app's engine at SQLite before anything imports app.core.database
os.environ.setdefault("DATABASE_URL_OVERRIDE", "sqlite://")
os.environ.setdefault("JSON_LOGS", "false")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.database import Base, get_db
from app.core.security import create_token_for_user, get_password_hash
from app.models.company import Company
from app.models.job import Job
from app.models.user import User
from main import app


# Use in-memory SQLite for testing (fast, isolated)
SQLALCHEMY_TEST_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db_session():
    """
    Create a fresh database session for each test.
    Tables are dropped after the test completes.
    """
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db_session):
    """
    FastAPI test client with overridden database dependency.
    """
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


def _insert_user(db_session, username: str, is_admin: bool = False, password: str = "password1") -> User:
    user = User(
        username=username,
        password=get_password_hash(password),
        first_name=f"{username}-first",
        last_name=f"{username}-last",
        email=f"{username}@example.com",
        is_admin=is_admin,
    )
    db_session.add(user)
    db_session.commit()
    return user


def _bearer(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def make_user(db_session):
    """Factory inserting a user directly; password defaults to "password1" """
    def _make_user(username: str, is_admin: bool = False, password: str = "password1") -> User:
        return _insert_user(db_session, username, is_admin=is_admin, password=password)
    return _make_user


@pytest.fixture
def admin_headers(db_session):
    """Auth headers for an admin user named "admin" """
    _insert_user(db_session, "admin", is_admin=True)
    return _bearer(create_token_for_user("admin", is_admin=True))


@pytest.fixture
def user_headers(db_session):
    """Auth headers for a regular user named "u1" """
    _insert_user(db_session, "u1")
    return _bearer(create_token_for_user("u1", is_admin=False))


@pytest.fixture
def sample_companies(db_session):
    """Three companies, c1..c3, with 1..3 employees"""
    companies = [
        Company(handle="c1", name="C1", description="Desc1", num_employees=1, logo_url="http://c1.img"),
        Company(handle="c2", name="C2", description="Desc2", num_employees=2, logo_url="http://c2.img"),
        Company(handle="c3", name="C3", description="Desc3", num_employees=3, logo_url="http://c3.img"),
    ]
    db_session.add_all(companies)
    db_session.commit()
    return companies


@pytest.fixture
def sample_jobs(db_session, sample_companies):
    """Four jobs: three at c1, one at c2"""
    jobs = [
        Job(title="J1", salary=100, equity=0.1, company_handle="c1"),
        Job(title="J2", salary=200, equity=0.2, company_handle="c1"),
        Job(title="J3", salary=300, equity=0.0, company_handle="c1"),
        Job(title="Junior", salary=None, equity=None, company_handle="c2"),
    ]
    db_session.add_all(jobs)
    db_session.commit()
    return jobs
