"""
Test fixtures and configuration for pytest.
"""

import pytest

from xman.db import create_user, insert_category
from xman.models import db
from xman.webapp import create_app

PASSWORD = "correct horse"


@pytest.fixture
def app():
    """Application over a fresh in-memory database."""
    app = create_app(
        overrides={
            "TESTING": True,
            "SECRET_KEY": "test-secret",
            "SQLALCHEMY_DATABASE_URI": "sqlite://",
        }
    )
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


def _make_user(app, username):
    with app.app_context():
        user = create_user(username, f"{username}@example.com", PASSWORD)
        return user.id


@pytest.fixture
def user_id(app):
    return _make_user(app, "ada")


@pytest.fixture
def other_user_id(app):
    return _make_user(app, "grace")


@pytest.fixture
def auth_client(client, user_id):
    """Test client holding a logged-in session for ``user_id``."""
    response = client.post("/login", data={"username": "ada", "password": PASSWORD})
    assert response.status_code == 302
    return client


@pytest.fixture
def category_id(app, user_id):
    with app.app_context():
        return insert_category(user_id, name="Groceries", expense=True).category.id


@pytest.fixture
def other_category_id(app, other_user_id):
    with app.app_context():
        return insert_category(other_user_id, name="Bonus", expense=False).category.id
