"""Pytest fixtures for Flask application testing."""

import os

import pytest


# Disable OpenTelemetry for tests
os.environ["OTEL_SDK_DISABLED"] = "true"


@pytest.fixture
def app():
    """Create test application."""
    from taskboard import create_app
    from taskboard.config import TestConfig

    app = create_app(TestConfig)
    app.config["TESTING"] = True

    yield app


@pytest.fixture
def client(app):
    """Create test client."""
    return app.test_client()


@pytest.fixture
def db(app):
    """Create test database."""
    from taskboard.extensions import db as _db

    with app.app_context():
        _db.create_all()
        yield _db
        _db.session.remove()
        _db.drop_all()


def _make_user(db, email, name, password="password123"):
    from taskboard.models import User

    user = User(email=email, name=name)
    user.set_password(password)
    db.session.add(user)
    db.session.commit()
    return user


def _headers_for(app, user):
    from taskboard.services.auth import generate_token

    with app.app_context():
        return {"Authorization": f"Bearer {generate_token(user)}"}


@pytest.fixture
def user(db):
    """Create test user."""
    return _make_user(db, "test@example.com", "Test User")


@pytest.fixture
def auth_headers(app, user):
    """Authorization headers for the test user."""
    return _headers_for(app, user)


@pytest.fixture
def other_user(db):
    """Create a second user who owns nothing of the first user's."""
    return _make_user(db, "other@example.com", "Other User")


@pytest.fixture
def other_headers(app, other_user):
    """Authorization headers for the second user."""
    return _headers_for(app, other_user)


@pytest.fixture
def create_task(client, auth_headers):
    """Create a task through the API and return its JSON."""

    def _create(title="Write report", description="Quarterly numbers", due_date="2030-01-15",
                headers=None, **extra):
        payload = {"title": title, "description": description, "dueDate": due_date, **extra}
        response = client.post("/api/tasks", json=payload, headers=headers or auth_headers)
        assert response.status_code == 201, response.get_json()
        return response.get_json()["task"]

    return _create
