"""Shared pytest fixtures for the application tests."""

from __future__ import annotations

import sys
from datetime import timedelta
from pathlib import Path

import pytest
from flask import Flask
from flask.testing import FlaskClient

ROOT_DIR = Path(__file__).resolve().parent.parent
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from app import create_app  # noqa: E402
from config import Config  # noqa: E402
from models import db, utcnow  # noqa: E402
from models.user import User  # noqa: E402
from scripts.seed_categories import seed_categories  # noqa: E402

DEFAULT_PASSWORD = "Passw0rd!"


class _BaseTestConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = "sqlite:///:memory:"
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    RATELIMIT_ENABLED = False
    MAIL_SERVER = None
    SECRET_KEY = "test-secret"
    JWT_SECRET_KEY = "test-jwt-secret-with-enough-length"
    SIGNUP_TOKEN_SECRET = "test-signup-secret-with-enough-length"


@pytest.fixture()
def app() -> Flask:
    """Create a Flask application instance for tests."""

    application = create_app(_BaseTestConfig)

    with application.app_context():
        db.create_all()
        seed_categories(db.session)

    yield application

    with application.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def client(app: Flask) -> FlaskClient:
    """Return a test client for the Flask app."""

    return app.test_client()


@pytest.fixture()
def make_user(app: Flask):
    """Insert a user directly and return its id."""

    def _make_user(email: str, password: str = DEFAULT_PASSWORD, role: str = "USER") -> str:
        with app.app_context():
            user = User(email=email, role=role, is_logout=False)
            user.set_password(password)
            db.session.add(user)
            db.session.commit()
            return user.id

    return _make_user


@pytest.fixture()
def login_client(app: Flask, make_user):
    """Return ``(client, user_id)`` for a freshly created, logged in user."""

    def _login_client(email: str, role: str = "USER"):
        user_id = make_user(email, role=role)
        test_client = app.test_client()
        response = test_client.post(
            "/api/user/login", json={"email": email, "password": DEFAULT_PASSWORD}
        )
        assert response.status_code == 200
        return test_client, user_id

    return _login_client


def study_payload(**overrides) -> dict:
    payload = {
        "title": "Algorithms study",
        "studyAbout": "Weekly problem solving",
        "weekday": ["mon", "wed"],
        "frequency": "twice",
        "location": ["library"],
        "capacity": 4,
        "categoryCode": 100,
        "dueDate": (utcnow() + timedelta(days=7)).isoformat(),
    }
    payload.update(overrides)
    return payload


def create_study(test_client: FlaskClient, **overrides) -> str:
    response = test_client.post("/api/study", json=study_payload(**overrides))
    assert response.status_code == 201, response.get_json()
    return response.get_json()["id"]
