from __future__ import annotations

import sys
from typing import Callable

from flask import Blueprint, jsonify


def create_health_blueprint(db_factory: Callable[[], object], version: str):
    """Create health and version routes with injected dependencies."""
    blueprint = Blueprint('health', __name__)

    @blueprint.route('/health')
    def health_check():
        """Health check endpoint for orchestration and monitoring."""
        health = {
            'status': 'healthy',
            'version': version,
            'checks': {},
        }

        try:
            conn = db_factory()
            try:
                conn.execute('SELECT 1')
            finally:
                conn.close()
            health['checks']['database'] = {'status': 'ok'}
        except Exception as e:
            health['status'] = 'unhealthy'
            health['checks']['database'] = {'status': 'error', 'message': str(e)}

        status_code = 200 if health['status'] == 'healthy' else 503
        return jsonify(health), status_code

    @blueprint.route('/api/version')
    def get_version():
        """Get application version and build info."""
        return jsonify({
            'version': version,
            'python_version': sys.version.split()[0],
            'api_version': 'v1',
        })

    return blueprint
