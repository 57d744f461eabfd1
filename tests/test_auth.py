"""
Tests for authentication endpoints
"""
import json


class TestLoginEndpoint:
    """Tests for /login endpoint"""

    def test_login_page_returns_200(self, client):
        """Login prompt should be accessible"""
        response = client.get('/login')
        assert response.status_code == 200

    def test_login_with_valid_credentials(self, client):
        """Login with valid credentials should redirect to the user's tokens"""
        response = client.post('/login', data={
            'username': 'admin',
            'password': 'admin'
        })
        assert response.status_code == 302
        assert response.headers['Location'].endswith('/users/1/api-tokens')

    def test_login_follows_local_next(self, client):
        response = client.post('/login?next=/users/1/api-tokens/create', data={
            'username': 'admin',
            'password': 'admin'
        })
        assert response.headers['Location'].endswith('/users/1/api-tokens/create')

    def test_login_ignores_external_next(self, client):
        response = client.post('/login?next=https://evil.example/', data={
            'username': 'admin',
            'password': 'admin'
        })
        assert 'evil.example' not in response.headers['Location']

    def test_login_with_invalid_credentials(self, client):
        """Login with invalid credentials should fail"""
        response = client.post('/login', data={
            'username': 'admin',
            'password': 'wrongpassword'
        })
        assert response.status_code == 401
        assert b'Invalid username or password' in response.data

    def test_login_with_empty_credentials(self, client):
        """Login with empty credentials should fail"""
        response = client.post('/login', data={
            'username': '',
            'password': ''
        })
        assert response.status_code == 400
        assert b'Username and password are required' in response.data


class TestLogoutEndpoint:
    """Tests for /logout endpoint"""

    def test_logout_redirects_to_login(self, authenticated_client):
        """Logout should redirect to login page"""
        response = authenticated_client.get('/logout')
        assert response.status_code == 302
        assert '/login' in response.headers.get('Location', '')

        response = authenticated_client.get('/users/1/api-tokens')
        assert response.status_code == 302


class TestProtectedEndpoints:
    """Tests for protected endpoints"""

    def test_tokens_require_login(self, client):
        response = client.get('/users/1/api-tokens/create')
        assert response.status_code == 302
        assert '/login' in response.headers.get('Location', '')

    def test_authenticated_user_can_list_tokens(self, authenticated_client):
        response = authenticated_client.get('/users/1/api-tokens')
        assert response.status_code == 200
        assert json.loads(response.data) == []
