from __future__ import annotations

import logging
import os
import sqlite3

import bcrypt

from app.config import Config

logger = logging.getLogger(__name__)

DATABASE_PATH = Config.DATABASE_PATH

# Capabilities granted to each built-in role
ROLE_PERMISSIONS = {
    'admin': ('access-api', 'manage-users'),
    'editor': ('access-api',),
    'viewer': (),
}
CAPABILITIES = sorted({permission for permissions in ROLE_PERMISSIONS.values() for permission in permissions})


def _get_database_path() -> str:
    """Resolve database path at runtime (supports tests overriding env)."""
    return os.getenv('DATABASE_PATH', DATABASE_PATH)


def get_db(path: str | None = None) -> sqlite3.Connection:
    """Get database connection."""
    conn = sqlite3.connect(path or _get_database_path())
    conn.execute('PRAGMA foreign_keys = ON')
    return conn


def init_db(path: str | None = None) -> None:
    """Initialize SQLite database."""
    conn = get_db(path)
    cursor = conn.cursor()

    # Create users table for authentication
    cursor.execute('''
        CREATE TABLE IF NOT EXISTS users (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            username TEXT NOT NULL UNIQUE,
            password_hash TEXT NOT NULL,
            role TEXT NOT NULL DEFAULT 'viewer',
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
            last_login TIMESTAMP
        )
    ''')

    cursor.execute('''
        CREATE TABLE IF NOT EXISTS role_permissions (
            role TEXT NOT NULL,
            permission TEXT NOT NULL,
            PRIMARY KEY (role, permission)
        )
    ''')

    # client_id uniqueness is enforced here, not only by the issuing service
    cursor.execute('''
        CREATE TABLE IF NOT EXISTS api_tokens (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            name TEXT NOT NULL,
            client_id TEXT NOT NULL UNIQUE,
            client_secret TEXT NOT NULL,
            user_id INTEGER NOT NULL,
            expires_at DATE NOT NULL,
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
            updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
            FOREIGN KEY (user_id) REFERENCES users(id) ON DELETE CASCADE
        )
    ''')

    for role, permissions in ROLE_PERMISSIONS.items():
        for permission in permissions:
            cursor.execute(
                'INSERT OR IGNORE INTO role_permissions (role, permission) VALUES (?, ?)',
                (role, permission),
            )

    # Create default admin user if no users exist
    cursor.execute('SELECT COUNT(*) FROM users')
    user_count = cursor.fetchone()[0]
    if user_count == 0:
        default_password = 'admin'
        password_hash = bcrypt.hashpw(default_password.encode('utf-8'), bcrypt.gensalt())
        cursor.execute('''
            INSERT INTO users (username, password_hash, role)
            VALUES (?, ?, ?)
        ''', ('admin', password_hash.decode('utf-8'), 'admin'))
        logger.info("Created default admin user (username: admin, password: admin) - PLEASE CHANGE THE PASSWORD!")

    cursor.execute('CREATE INDEX IF NOT EXISTS idx_api_tokens_user_id ON api_tokens(user_id)')

    conn.commit()
    conn.close()
    logger.info('Database initialized')


def ensure_data_dir(path: str | None = None) -> None:
    data_dir = os.path.dirname(path or _get_database_path()) or '.'
    os.makedirs(data_dir, exist_ok=True)
