from __future__ import annotations

from app.repositories import PermissionRepository
from app.services.base import PermissionDenied


class PermissionService:
    """Capability checks for the acting user."""

    def __init__(self, permission_repo: PermissionRepository):
        self._permission_repo = permission_repo

    def capabilities_for(self, actor) -> frozenset:
        if actor is None or not getattr(actor, 'role', None):
            return frozenset()
        return self._permission_repo.list_for_role(actor.role)

    def has_capability(self, actor, capability: str) -> bool:
        return capability in self.capabilities_for(actor)

    def is_current_user_or_has_capability(self, actor, capability: str, user_id: int) -> bool:
        if actor is not None and int(actor.id) == int(user_id):
            return True
        return self.has_capability(actor, capability)

    def require(self, actor, capability: str) -> None:
        if not self.has_capability(actor, capability):
            raise PermissionDenied()

    def require_current_user_or(self, actor, capability: str, user_id: int) -> None:
        if not self.is_current_user_or_has_capability(actor, capability, user_id):
            raise PermissionDenied()
