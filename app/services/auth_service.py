from __future__ import annotations

import logging
from datetime import date
from typing import Callable, Optional

from app.models import User
from app.repositories import ApiTokenRepository, UserRepository
from app.services.base import AuthenticationError
from app.services.permission_service import PermissionService
from app.utils.credentials import verify_secret

logger = logging.getLogger(__name__)

TOKEN_AUTH_SCHEME = 'Token'


class AuthService:
    """Authentication logic for sessions and API tokens."""

    def __init__(
        self,
        user_repo: UserRepository,
        token_repo: ApiTokenRepository,
        permissions: PermissionService,
        today: Callable[[], date] = date.today,
    ):
        self._user_repo = user_repo
        self._token_repo = token_repo
        self._permissions = permissions
        self._today = today

    def get_user_by_id(self, user_id: int) -> Optional[User]:
        return self._user_repo.get_by_id(user_id)

    @staticmethod
    def parse_authorization(header: Optional[str]):
        """Split ``Token <client_id>:<secret>`` into its two parts."""
        if not header:
            raise AuthenticationError('No authorization token found on the request')
        scheme, _, credentials = header.strip().partition(' ')
        if scheme != TOKEN_AUTH_SCHEME or ':' not in credentials:
            raise AuthenticationError('An authorization token was found but its format was invalid')
        client_id, _, secret = credentials.strip().partition(':')
        if not client_id or not secret:
            raise AuthenticationError('An authorization token was found but its format was invalid')
        return client_id, secret

    def authenticate_token(self, header: Optional[str]) -> User:
        client_id, secret = self.parse_authorization(header)

        token = self._token_repo.get_by_client_id(client_id)
        if token is None:
            raise AuthenticationError('No matching API token was found for the provided authorization token')

        if not verify_secret(secret, token.client_secret):
            logger.warning(f"API token {token.id} presented with a wrong secret")
            raise AuthenticationError('The secret provided for the given used API token is incorrect')

        if token.is_expired(self._today()):
            raise AuthenticationError('The authorization token used has expired')

        user = self._user_repo.get_by_id(token.user_id)
        if user is None or not self._permissions.has_capability(user, 'access-api'):
            raise AuthenticationError('The owner of the used API token does not have permission to make API calls', 403)

        return user
