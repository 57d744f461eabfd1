from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from flask_login import UserMixin


@dataclass(eq=False)
class User(UserMixin):
    id: int
    username: str
    role: str
    created_at: Optional[str] = None

    def to_dict(self) -> dict:
        return {'id': self.id, 'username': self.username, 'role': self.role}
