"""
Tests for health and version endpoints
"""
import json


class TestHealthEndpoint:
    """Tests for /health endpoint"""

    def test_health_endpoint_returns_200(self, client):
        """Health endpoint should return 200 when healthy"""
        response = client.get('/health')
        assert response.status_code == 200

    def test_health_endpoint_checks_database(self, client):
        """Health endpoint should check database"""
        response = client.get('/health')
        data = json.loads(response.data)
        assert data['status'] == 'healthy'
        assert data['checks']['database']['status'] == 'ok'

    def test_health_endpoint_reports_broken_database(self, tmp_path):
        from app import create_app
        from app.config import TestingConfig

        broken = create_app(TestingConfig, {'DATABASE_PATH': str(tmp_path / 'missing' / 'db.sqlite')})
        response = broken.test_client().get('/health')
        assert response.status_code == 503
        assert json.loads(response.data)['status'] == 'unhealthy'

    def test_security_headers_present(self, client):
        response = client.get('/health')
        assert response.headers['X-Content-Type-Options'] == 'nosniff'


class TestVersionEndpoint:
    """Tests for /api/version endpoint"""

    def test_version_endpoint(self, client):
        response = client.get('/api/version')
        data = json.loads(response.data)
        assert response.status_code == 200
        assert data['api_version'] == 'v1'
        assert 'version' in data
