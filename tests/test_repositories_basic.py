"""Repository coverage tests for core persistence layers."""

from datetime import datetime

import pytest

from app.repositories import ApiTokenRepository, ClientIdConflict, PermissionRepository, UserRepository


def test_user_repository(app, db_factory):
    repo = UserRepository(db_factory)
    admin = repo.get_by_id(1)
    assert admin.username == 'admin'
    assert admin.role == 'admin'

    login_row = repo.get_for_login('admin')
    assert login_row[0] == 1
    assert login_row[2].startswith('$2')

    repo.update_last_login(1, datetime.utcnow())
    assert repo.get_by_id(999) is None


def test_permission_repository(app, db_factory):
    repo = PermissionRepository(db_factory)
    assert repo.list_for_role('admin') == {'access-api', 'manage-users'}
    assert repo.list_for_role('viewer') == frozenset()

    repo.grant('viewer', 'access-api')
    assert 'access-api' in repo.list_for_role('viewer')
    repo.revoke('viewer', 'access-api')
    assert repo.list_for_role('viewer') == frozenset()


def test_api_token_repository_crud(app, db_factory):
    repo = ApiTokenRepository(db_factory)
    token = repo.create(user_id=1, name='repo', client_id='a' * 32, client_secret='hash', expires_at='2030-01-01')
    assert token.id > 0
    assert token.created_at is not None

    assert repo.client_id_exists('a' * 32) is True
    assert repo.client_id_exists('b' * 32) is False
    assert repo.get_by_client_id('a' * 32).id == token.id
    assert repo.get_for_user(token.id, 1).name == 'repo'
    assert repo.get_for_user(token.id, 2) is None
    assert [t.id for t in repo.list_for_user(1)] == [token.id]

    updated = repo.update_details(token.id, name='renamed', expires_at='2031-01-01')
    assert updated.name == 'renamed'
    assert updated.client_secret == 'hash'

    assert repo.delete_for_user(token.id, 2) is False
    assert repo.delete_for_user(token.id, 1) is True
    assert repo.get_for_user(token.id, 1) is None


def test_api_token_repository_enforces_unique_client_id(app, db_factory):
    repo = ApiTokenRepository(db_factory)
    repo.create(user_id=1, name='one', client_id='d' * 32, client_secret='hash', expires_at='2030-01-01')
    with pytest.raises(ClientIdConflict):
        repo.create(user_id=1, name='two', client_id='d' * 32, client_secret='hash', expires_at='2030-01-01')


def test_api_token_repository_requires_existing_user(app, db_factory):
    import sqlite3

    repo = ApiTokenRepository(db_factory)
    with pytest.raises(sqlite3.IntegrityError):
        repo.create(user_id=999, name='orphan', client_id='e' * 32, client_secret='hash', expires_at='2030-01-01')
