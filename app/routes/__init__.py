"""Routes package."""
from .api import create_api_blueprint, make_api_token_or_login_required
from .api_tokens import create_api_tokens_blueprint
from .auth import create_auth_blueprint
from .health import create_health_blueprint

__all__ = [
    'create_api_blueprint',
    'create_api_tokens_blueprint',
    'create_auth_blueprint',
    'create_health_blueprint',
    'make_api_token_or_login_required',
]
