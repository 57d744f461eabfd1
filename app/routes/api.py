from __future__ import annotations

from functools import wraps

from flask import Blueprint, g, jsonify, request
from flask_login import current_user

from app.services import AuthenticationError


def make_api_token_or_login_required(auth_service, logger):
    """Build a decorator that accepts a session login or an API token."""
    def api_token_or_login_required(f):
        @wraps(f)
        def decorated_function(*args, **kwargs):
            header = request.headers.get('Authorization')
            if header:
                try:
                    g.api_user = auth_service.authenticate_token(header)
                except AuthenticationError as e:
                    logger.warning(f"API token authentication failed: {e.message}")
                    return jsonify(e.to_dict()), e.status_code
                g.api_token_auth = True
                return f(*args, **kwargs)

            if current_user.is_authenticated:
                g.api_user = current_user
                g.api_token_auth = False
                return f(*args, **kwargs)

            return jsonify({'error': 'Authentication required'}), 401

        return decorated_function
    return api_token_or_login_required


def create_api_blueprint(*, auth_service, csrf, logger):
    """Create API routes authenticated by token or session."""
    blueprint = Blueprint('api', __name__)
    api_token_or_login_required = make_api_token_or_login_required(auth_service, logger)

    @blueprint.route('/api/user', methods=['GET'])
    @api_token_or_login_required
    def whoami():
        """Return the user behind the current request."""
        body = g.api_user.to_dict()
        body['via_api_token'] = g.api_token_auth
        return jsonify(body)

    csrf.exempt(blueprint)

    return blueprint
