import pytest

from db import init_db
from main import create_app
from services import QuestionStore


@pytest.fixture
def store():
    """Fresh in-memory database for every test."""
    init_db("sqlite://")
    return QuestionStore()


@pytest.fixture
def app():
    """Flask app bound to its own in-memory database."""
    app = create_app("sqlite://")
    app.config["TESTING"] = True
    return app


@pytest.fixture
def client(app):
    """Return a Flask test client."""
    return app.test_client()
