from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional


@dataclass
class ApiToken:
    id: int
    user_id: int
    name: str
    client_id: str
    client_secret: str
    expires_at: str
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    def is_expired(self, today: Optional[date] = None) -> bool:
        today = today or date.today()
        return date.fromisoformat(self.expires_at) < today

    def to_dict(self) -> dict:
        """Public view of the token; the secret hash is never exposed."""
        return {
            'id': self.id,
            'user_id': self.user_id,
            'name': self.name,
            'client_id': self.client_id,
            'expires_at': self.expires_at,
            'created_at': self.created_at,
            'updated_at': self.updated_at,
        }


@dataclass
class IssuedToken:
    """A freshly persisted token together with its one-time plaintext secret."""
    token: ApiToken
    secret: str
