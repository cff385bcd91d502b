"""Shared fixtures for host tests."""
import os

import pytest

os.environ["FLASK_ENV"] = "testing"
os.environ["TESTING"] = "true"


@pytest.fixture
def app(tmp_path):
    """Create application for testing with an empty sqlite database."""
    from lms.app import create_app
    from lms.extensions import db

    test_config = {
        "TESTING": True,
        "SQLALCHEMY_DATABASE_URI": "sqlite:///:memory:",
        "SQLALCHEMY_ENGINE_OPTIONS": {},
        "RATELIMIT_ENABLED": False,
        "RATELIMIT_STORAGE_URI": "memory://",
        "JWT_SECRET_KEY": "lms-test-jwt-secret-key-0123456789abcdef",
        "PLUGINS_DIR": str(tmp_path / "plugin-state"),
    }

    app = create_app(test_config)

    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    """Create test client."""
    return app.test_client()


@pytest.fixture
def make_user(app):
    """Persist a user and return its id."""
    from lms.extensions import db
    from lms.models import User, UserStatus

    def factory(username="alice", status=UserStatus.ACTIVE):
        user = User(username=username, email=f"{username}@example.com", status=status)
        db.session.add(user)
        db.session.commit()
        return user.id

    return factory


@pytest.fixture
def auth_headers(app):
    """Bearer headers for a user id."""
    from flask_jwt_extended import create_access_token

    def factory(user_id):
        token = create_access_token(identity=str(user_id))
        return {"Authorization": f"Bearer {token}"}

    return factory
