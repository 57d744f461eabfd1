"""Tests for API auth endpoints"""
import json


def _issue_credentials(client, user_id=1):
    response = client.post(f'/users/{user_id}/api-tokens', data={'name': 'API client'})
    token = json.loads(client.get(response.headers['Location']).data)
    return token['client_id'], token['secret']


def test_api_login_success(client):
    response = client.post('/api/login', data={
        'username': 'admin',
        'password': 'admin',
    })
    assert response.status_code == 200
    data = response.get_json()
    assert data['success'] is True
    assert data['username'] == 'admin'


def test_api_login_wrong_password(client):
    response = client.post('/api/login', data={
        'username': 'admin',
        'password': 'nope',
    })
    assert response.status_code == 401


def test_api_user_requires_authentication(client):
    response = client.get('/api/user')
    assert response.status_code == 401


def test_api_user_after_login(client):
    login = client.post('/api/login', data={
        'username': 'admin',
        'password': 'admin',
    })
    assert login.status_code == 200
    response = client.get('/api/user')
    assert response.status_code == 200
    data = response.get_json()
    assert data['username'] == 'admin'
    assert data['via_api_token'] is False


def test_api_logout(client):
    client.post('/api/login', data={
        'username': 'admin',
        'password': 'admin',
    })
    response = client.post('/api/logout')
    assert response.status_code == 200
    data = response.get_json()
    assert data['success'] is True


def test_api_user_with_token(app, authenticated_client):
    client_id, secret = _issue_credentials(authenticated_client)

    with app.test_client() as client:
        response = client.get('/api/user', headers={'Authorization': f'Token {client_id}:{secret}'})
        assert response.status_code == 200
        data = response.get_json()
        assert data['username'] == 'admin'
        assert data['via_api_token'] is True


def test_api_user_with_wrong_secret(app, authenticated_client):
    client_id, _ = _issue_credentials(authenticated_client)

    with app.test_client() as client:
        response = client.get('/api/user', headers={'Authorization': f'Token {client_id}:wrongsecret'})
        assert response.status_code == 401


def test_api_user_with_malformed_header(app):
    with app.test_client() as client:
        response = client.get('/api/user', headers={'Authorization': 'Bearer something'})
        assert response.status_code == 401
        assert 'format was invalid' in response.get_json()['error']


def test_api_user_with_deleted_token(app, authenticated_client):
    response = authenticated_client.post('/users/1/api-tokens', data={'name': 'short lived'})
    location = response.headers['Location']
    token = json.loads(authenticated_client.get(location).data)
    authenticated_client.delete(f"{location}/delete")

    with app.test_client() as client:
        response = client.get(
            '/api/user',
            headers={'Authorization': f"Token {token['client_id']}:{token['secret']}"},
        )
        assert response.status_code == 401
