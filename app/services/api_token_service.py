from __future__ import annotations

import logging
from datetime import date
from typing import Callable, Dict, List, Optional, Tuple

from app.models import ApiToken, IssuedToken
from app.repositories import ApiTokenRepository, UserRepository
from app.repositories.api_tokens import ClientIdConflict
from app.services.base import IssuanceFailed, NotFound, ValidationError
from app.services.permission_service import PermissionService
from app.services.secret_slots import SecretSlotStore
from app.utils.credentials import CREDENTIAL_LENGTH, hash_secret, random_string
from app.utils.validators import add_years, validate_date, validate_token_name

logger = logging.getLogger(__name__)

ACCESS_API = 'access-api'
MANAGE_USERS = 'manage-users'


class ApiTokenService:
    """Issue, inspect, update and revoke per-user API tokens.

    Every operation is gated on the actor holding ``access-api`` and either
    being the token owner or holding ``manage-users``.
    """

    def __init__(
        self,
        token_repo: ApiTokenRepository,
        user_repo: UserRepository,
        permissions: PermissionService,
        *,
        max_attempts: int = 10,
        hash_rounds: int = 12,
        default_expiry_years: int = 100,
        generate_credential: Callable[[int], str] = random_string,
        today: Callable[[], date] = date.today,
    ):
        if max_attempts < 1:
            raise ValueError('max_attempts must be at least 1')
        self._token_repo = token_repo
        self._user_repo = user_repo
        self._permissions = permissions
        self._max_attempts = max_attempts
        self._hash_rounds = hash_rounds
        self._default_expiry_years = default_expiry_years
        self._generate = generate_credential
        self._today = today

    def _authorize(self, actor, user_id: int) -> None:
        self._permissions.require(actor, ACCESS_API)
        self._permissions.require_current_user_or(actor, MANAGE_USERS, user_id)

    def _validate(self, name, expires_at) -> Tuple[str, Optional[str]]:
        errors: Dict[str, List[str]] = {}
        valid, message = validate_token_name(name)
        if not valid:
            errors['name'] = [message]
        if expires_at in (None, ''):
            expires_at = None
        else:
            valid, message = validate_date(expires_at)
            if not valid:
                errors['expires_at'] = [message]
        if errors:
            raise ValidationError(errors)
        return name, expires_at

    def _get_user(self, user_id: int):
        user = self._user_repo.get_by_id(user_id)
        if user is None:
            raise NotFound(f'User {user_id} not found')
        return user

    def _get_token(self, user_id: int, token_id: int) -> ApiToken:
        token = self._token_repo.get_for_user(token_id, user_id)
        if token is None:
            raise NotFound(f'API token {token_id} not found')
        return token

    def get_owner(self, actor, user_id: int):
        """Authorize the actor against ``user_id`` and return that user."""
        self._authorize(actor, user_id)
        return self._get_user(user_id)

    def default_expiry(self) -> str:
        return add_years(self._today(), self._default_expiry_years).isoformat()

    def issue(
        self,
        actor,
        user_id: int,
        name,
        expires_at=None,
        slots: Optional[SecretSlotStore] = None,
    ) -> IssuedToken:
        self._authorize(actor, user_id)
        name, expires_at = self._validate(name, expires_at)
        user = self._get_user(user_id)

        secret = self._generate(CREDENTIAL_LENGTH)
        secret_hash = hash_secret(secret, rounds=self._hash_rounds)
        expiry = expires_at or self.default_expiry()

        token = None
        for attempt in range(1, self._max_attempts + 1):
            client_id = self._generate(CREDENTIAL_LENGTH)
            if self._token_repo.client_id_exists(client_id):
                logger.warning(f"Client id collision on attempt {attempt}, regenerating")
                continue
            try:
                token = self._token_repo.create(
                    user_id=user.id,
                    name=name,
                    client_id=client_id,
                    client_secret=secret_hash,
                    expires_at=expiry,
                )
                break
            except ClientIdConflict:
                logger.warning(f"Client id taken at insert on attempt {attempt}, regenerating")

        if token is None:
            logger.error(f"Failed to issue API token for user {user.id} after {self._max_attempts} attempts")
            raise IssuanceFailed('Could not generate a unique client id, please try again')

        if slots is not None:
            slots.put(token.id, secret)
        logger.info(f"API token {token.id} issued for user {user.id}")
        return IssuedToken(token=token, secret=secret)

    def retrieve(
        self,
        actor,
        user_id: int,
        token_id: int,
        slots: Optional[SecretSlotStore] = None,
    ) -> Tuple[ApiToken, Optional[str]]:
        self._authorize(actor, user_id)
        self._get_user(user_id)
        token = self._get_token(user_id, token_id)
        secret = slots.consume(token.id) if slots is not None else None
        return token, secret

    def list_for_user(self, actor, user_id: int) -> List[ApiToken]:
        self._authorize(actor, user_id)
        self._get_user(user_id)
        return self._token_repo.list_for_user(user_id)

    def update(self, actor, user_id: int, token_id: int, name, expires_at=None) -> ApiToken:
        self._authorize(actor, user_id)
        name, expires_at = self._validate(name, expires_at)
        self._get_user(user_id)
        token = self._get_token(user_id, token_id)

        updated = self._token_repo.update_details(
            token.id,
            name=name,
            expires_at=expires_at or token.expires_at,
        )
        logger.info(f"API token {token.id} updated for user {user_id}")
        return updated

    def delete(self, actor, user_id: int, token_id: int) -> None:
        self._authorize(actor, user_id)
        self._get_user(user_id)
        token = self._get_token(user_id, token_id)
        if not self._token_repo.delete_for_user(token.id, user_id):
            raise NotFound(f'API token {token_id} not found')
        logger.info(f"API token {token.id} deleted for user {user_id}")
