"""Domain models."""
from .api_token import ApiToken, IssuedToken
from .user import User

__all__ = [
    'ApiToken',
    'IssuedToken',
    'User',
]
