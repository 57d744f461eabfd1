"""repositories package."""
from .api_tokens import ApiTokenRepository, ClientIdConflict
from .permissions import PermissionRepository
from .users import UserRepository

__all__ = [
    'ApiTokenRepository',
    'ClientIdConflict',
    'PermissionRepository',
    'UserRepository',
]
