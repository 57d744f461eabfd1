"""services package."""
from .api_token_service import ApiTokenService
from .auth_service import AuthService
from .base import (
    AuthenticationError,
    IssuanceFailed,
    NotFound,
    PermissionDenied,
    ServiceError,
    ValidationError,
)
from .permission_service import PermissionService
from .secret_slots import SecretSlotStore

__all__ = [
    'ApiTokenService',
    'AuthService',
    'AuthenticationError',
    'IssuanceFailed',
    'NotFound',
    'PermissionDenied',
    'PermissionService',
    'SecretSlotStore',
    'ServiceError',
    'ValidationError',
]
