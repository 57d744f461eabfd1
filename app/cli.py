"""Flask CLI commands for Shelfkeep."""
from __future__ import annotations

import sqlite3

import bcrypt
import click
from flask import Flask

from app.db import CAPABILITIES, ROLE_PERMISSIONS, ensure_data_dir, init_db


def register_cli(app: Flask, *, user_repo, permission_repo) -> None:
    """Attach maintenance commands to the app's ``flask`` CLI."""

    @app.cli.command('init-db')
    def init_db_command():
        """Create tables and seed roles and the default admin."""
        path = app.config['DATABASE_PATH']
        try:
            ensure_data_dir(path)
        except OSError as exc:
            app.logger.warning("Failed to ensure database directory %s", exc)
        init_db(path)
        click.echo(f'Initialized database at {path}')

    @app.cli.command('create-user')
    @click.argument('username')
    @click.option('--password', prompt=True, hide_input=True, confirmation_prompt=True)
    @click.option('--role', type=click.Choice(sorted(ROLE_PERMISSIONS)), default='viewer', show_default=True)
    def create_user_command(username: str, password: str, role: str):
        """Create a user with the given role."""
        if len(password) < 6:
            raise click.BadParameter('Password must be at least 6 characters', param_hint='--password')
        password_hash = bcrypt.hashpw(
            password.encode('utf-8'),
            bcrypt.gensalt(rounds=app.config['BCRYPT_ROUNDS']),
        ).decode('utf-8')
        try:
            user_id = user_repo.create(username, password_hash, role)
        except sqlite3.IntegrityError:
            raise click.ClickException(f'User {username} already exists') from None
        click.echo(f'Created user {username} (id {user_id}, role {role})')

    @app.cli.command('grant-permission')
    @click.argument('role', type=click.Choice(sorted(ROLE_PERMISSIONS)))
    @click.argument('permission', type=click.Choice(CAPABILITIES))
    def grant_permission_command(role: str, permission: str):
        """Give a role a capability."""
        permission_repo.grant(role, permission)
        click.echo(f'Granted {permission} to {role}')

    @app.cli.command('revoke-permission')
    @click.argument('role', type=click.Choice(sorted(ROLE_PERMISSIONS)))
    @click.argument('permission', type=click.Choice(CAPABILITIES))
    def revoke_permission_command(role: str, permission: str):
        """Take a capability away from a role."""
        permission_repo.revoke(role, permission)
        click.echo(f'Revoked {permission} from {role}')
