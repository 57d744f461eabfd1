from __future__ import annotations

from typing import Callable, List, Optional

import sqlite3

from app.models import ApiToken

_TOKEN_COLUMNS = 'id, user_id, name, client_id, client_secret, expires_at, created_at, updated_at'


class ClientIdConflict(Exception):
    """Raised when an insert collides with an existing client_id."""

    def __init__(self, client_id: str):
        super().__init__(f'client_id already in use: {client_id}')
        self.client_id = client_id


class ApiTokenRepository:
    """Repository for user API tokens."""
    def __init__(self, db_factory: Callable[[], sqlite3.Connection]):
        self._db_factory = db_factory

    @staticmethod
    def _to_model(row) -> Optional[ApiToken]:
        return ApiToken(*row) if row else None

    def client_id_exists(self, client_id: str) -> bool:
        conn = self._db_factory()
        try:
            cursor = conn.cursor()
            cursor.execute('SELECT 1 FROM api_tokens WHERE client_id = ? LIMIT 1', (client_id,))
            return cursor.fetchone() is not None
        finally:
            conn.close()

    def create(
        self,
        user_id: int,
        name: str,
        client_id: str,
        client_secret: str,
        expires_at: str,
    ) -> ApiToken:
        conn = self._db_factory()
        try:
            cursor = conn.cursor()
            try:
                cursor.execute(
                    '''
                    INSERT INTO api_tokens (user_id, name, client_id, client_secret, expires_at)
                    VALUES (?, ?, ?, ?, ?)
                    ''',
                    (user_id, name, client_id, client_secret, expires_at),
                )
            except sqlite3.IntegrityError as exc:
                if 'api_tokens.client_id' in str(exc):
                    raise ClientIdConflict(client_id) from exc
                raise
            token_id = cursor.lastrowid
            conn.commit()
            cursor.execute(f'SELECT {_TOKEN_COLUMNS} FROM api_tokens WHERE id = ?', (token_id,))
            return self._to_model(cursor.fetchone())
        finally:
            conn.close()

    def get_for_user(self, token_id: int, user_id: int) -> Optional[ApiToken]:
        conn = self._db_factory()
        try:
            cursor = conn.cursor()
            cursor.execute(
                f'SELECT {_TOKEN_COLUMNS} FROM api_tokens WHERE id = ? AND user_id = ?',
                (token_id, user_id),
            )
            return self._to_model(cursor.fetchone())
        finally:
            conn.close()

    def get_by_client_id(self, client_id: str) -> Optional[ApiToken]:
        conn = self._db_factory()
        try:
            cursor = conn.cursor()
            cursor.execute(f'SELECT {_TOKEN_COLUMNS} FROM api_tokens WHERE client_id = ?', (client_id,))
            return self._to_model(cursor.fetchone())
        finally:
            conn.close()

    def list_for_user(self, user_id: int) -> List[ApiToken]:
        conn = self._db_factory()
        try:
            cursor = conn.cursor()
            cursor.execute(
                f'SELECT {_TOKEN_COLUMNS} FROM api_tokens WHERE user_id = ? ORDER BY id DESC',
                (user_id,),
            )
            return [self._to_model(row) for row in cursor.fetchall()]
        finally:
            conn.close()

    def update_details(self, token_id: int, name: str, expires_at: str) -> Optional[ApiToken]:
        """Write the mutable columns only; credentials are never touched here."""
        conn = self._db_factory()
        try:
            cursor = conn.cursor()
            cursor.execute(
                '''
                UPDATE api_tokens
                SET name = ?, expires_at = ?, updated_at = CURRENT_TIMESTAMP
                WHERE id = ?
                ''',
                (name, expires_at, token_id),
            )
            conn.commit()
            cursor.execute(f'SELECT {_TOKEN_COLUMNS} FROM api_tokens WHERE id = ?', (token_id,))
            return self._to_model(cursor.fetchone())
        finally:
            conn.close()

    def delete_for_user(self, token_id: int, user_id: int) -> bool:
        conn = self._db_factory()
        try:
            cursor = conn.cursor()
            cursor.execute('DELETE FROM api_tokens WHERE id = ? AND user_id = ?', (token_id, user_id))
            conn.commit()
            return cursor.rowcount > 0
        finally:
            conn.close()
