"""
Pytest fixtures for Shelfkeep tests
"""
import os
import tempfile

import bcrypt
import pytest

from app import create_app
from app.config import TestingConfig
from app.db import get_db, init_db
from app.repositories import UserRepository


@pytest.fixture
def db_path():
    """Temporary SQLite database file"""
    db_fd, path = tempfile.mkstemp(suffix='.db')
    yield path
    os.close(db_fd)
    os.unlink(path)


@pytest.fixture
def app(db_path):
    """Create application for testing"""
    flask_app = create_app(TestingConfig, {'DATABASE_PATH': db_path})

    # Initialize the test database (seeds the admin user with id 1)
    init_db(db_path)

    yield flask_app


@pytest.fixture
def db_factory(db_path):
    return lambda: get_db(db_path)


@pytest.fixture
def token_service(app):
    return app.extensions['shelfkeep']['api_token_service']


@pytest.fixture
def make_user(db_factory):
    """Create extra users: make_user('bob', role='editor') -> User"""
    repo = UserRepository(db_factory)

    def _make(username, role='editor', password='password'):
        password_hash = bcrypt.hashpw(password.encode('utf-8'), bcrypt.gensalt(rounds=4)).decode('utf-8')
        user_id = repo.create(username, password_hash, role)
        return repo.get_by_id(user_id)

    return _make


@pytest.fixture
def admin(app, db_factory):
    return UserRepository(db_factory).get_by_id(1)


@pytest.fixture
def client(app):
    """Create a test client"""
    return app.test_client()


def _force_login(client, user_id):
    with client.session_transaction() as sess:
        sess['_user_id'] = str(user_id)
        sess['_fresh'] = True
    return client


@pytest.fixture
def login_as(app):
    """Return a fresh client logged in as the given user id"""
    return lambda user_id: _force_login(app.test_client(), user_id)


@pytest.fixture
def authenticated_client(app, client):
    """Create an authenticated test client"""
    # Force-login default admin user without hitting rate limits
    return _force_login(client, 1)


@pytest.fixture
def runner(app):
    """Create a CLI test runner"""
    return app.test_cli_runner()
