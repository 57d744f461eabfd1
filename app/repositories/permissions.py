from __future__ import annotations

from typing import Callable, FrozenSet

import sqlite3


class PermissionRepository:
    """Repository for role capabilities."""
    def __init__(self, db_factory: Callable[[], sqlite3.Connection]):
        self._db_factory = db_factory

    def list_for_role(self, role: str) -> FrozenSet[str]:
        conn = self._db_factory()
        try:
            cursor = conn.cursor()
            cursor.execute('SELECT permission FROM role_permissions WHERE role = ?', (role,))
            return frozenset(row[0] for row in cursor.fetchall())
        finally:
            conn.close()

    def grant(self, role: str, permission: str) -> None:
        conn = self._db_factory()
        try:
            cursor = conn.cursor()
            cursor.execute(
                'INSERT OR IGNORE INTO role_permissions (role, permission) VALUES (?, ?)',
                (role, permission),
            )
            conn.commit()
        finally:
            conn.close()

    def revoke(self, role: str, permission: str) -> None:
        conn = self._db_factory()
        try:
            cursor = conn.cursor()
            cursor.execute(
                'DELETE FROM role_permissions WHERE role = ? AND permission = ?',
                (role, permission),
            )
            conn.commit()
        finally:
            conn.close()
