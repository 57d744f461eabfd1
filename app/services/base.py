"""Service-layer error taxonomy."""
from __future__ import annotations

from typing import Dict, List, Optional


class ServiceError(Exception):
    """Base error surfaced to callers of the service layer."""
    status_code = 500

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code

    def to_dict(self) -> dict:
        return {'error': self.message}


class PermissionDenied(ServiceError):
    status_code = 403

    def __init__(self, message: str = 'You do not have permission to perform this action'):
        super().__init__(message)


class NotFound(ServiceError):
    status_code = 404


class AuthenticationError(ServiceError):
    status_code = 401


class IssuanceFailed(ServiceError):
    status_code = 500


class ValidationError(ServiceError):
    status_code = 422

    def __init__(self, errors: Dict[str, List[str]]):
        super().__init__('The given data was invalid')
        self.errors = errors

    def to_dict(self) -> dict:
        return {'error': self.message, 'errors': self.errors}
