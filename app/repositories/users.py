from __future__ import annotations

from datetime import datetime
from typing import Callable, Optional, Tuple

import sqlite3

from app.models import User


class UserRepository:
    """Repository for users."""
    def __init__(self, db_factory: Callable[[], sqlite3.Connection]):
        self._db_factory = db_factory

    def get_by_id(self, user_id: int) -> Optional[User]:
        conn = self._db_factory()
        try:
            cursor = conn.cursor()
            cursor.execute('SELECT id, username, role, created_at FROM users WHERE id = ?', (user_id,))
            row = cursor.fetchone()
            return User(*row) if row else None
        finally:
            conn.close()

    def get_for_login(self, username: str) -> Optional[Tuple[int, str, str, str]]:
        conn = self._db_factory()
        try:
            cursor = conn.cursor()
            cursor.execute('SELECT id, username, password_hash, role FROM users WHERE username = ?', (username,))
            return cursor.fetchone()
        finally:
            conn.close()

    def update_last_login(self, user_id: int, timestamp: datetime) -> None:
        conn = self._db_factory()
        try:
            cursor = conn.cursor()
            cursor.execute('UPDATE users SET last_login = ? WHERE id = ?', (timestamp, user_id))
            conn.commit()
        finally:
            conn.close()

    def create(self, username: str, password_hash: str, role: str) -> int:
        conn = self._db_factory()
        try:
            cursor = conn.cursor()
            cursor.execute(
                'INSERT INTO users (username, password_hash, role) VALUES (?, ?, ?)',
                (username, password_hash, role),
            )
            user_id = cursor.lastrowid
            conn.commit()
            return user_id
        finally:
            conn.close()

    def delete(self, user_id: int) -> None:
        conn = self._db_factory()
        try:
            cursor = conn.cursor()
            cursor.execute('DELETE FROM users WHERE id = ?', (user_id,))
            conn.commit()
        finally:
            conn.close()
