"""Initial schema baseline

Revision ID: 001
Revises:
Create Date: 2026-10-19

Users, role capabilities and per-user API tokens. Databases created by
``flask init-db`` already match this revision and can be marked with:
    alembic stamp 001
"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '001'
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    """Create the initial database schema"""

    op.create_table(
        'users',
        sa.Column('id', sa.Integer, primary_key=True, autoincrement=True),
        sa.Column('username', sa.Text, nullable=False, unique=True),
        sa.Column('password_hash', sa.Text, nullable=False),
        sa.Column('role', sa.Text, nullable=False, server_default='viewer'),
        sa.Column('created_at', sa.DateTime, server_default=sa.func.current_timestamp()),
        sa.Column('last_login', sa.DateTime, nullable=True)
    )

    op.create_table(
        'role_permissions',
        sa.Column('role', sa.Text, primary_key=True),
        sa.Column('permission', sa.Text, primary_key=True)
    )

    op.create_table(
        'api_tokens',
        sa.Column('id', sa.Integer, primary_key=True, autoincrement=True),
        sa.Column('name', sa.Text, nullable=False),
        sa.Column('client_id', sa.Text, nullable=False, unique=True),
        sa.Column('client_secret', sa.Text, nullable=False),
        sa.Column('user_id', sa.Integer, sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('expires_at', sa.Date, nullable=False),
        sa.Column('created_at', sa.DateTime, server_default=sa.func.current_timestamp()),
        sa.Column('updated_at', sa.DateTime, server_default=sa.func.current_timestamp())
    )
    op.create_index('idx_api_tokens_user_id', 'api_tokens', ['user_id'])

    op.bulk_insert(
        sa.table('role_permissions', sa.column('role', sa.Text), sa.column('permission', sa.Text)),
        [
            {'role': 'admin', 'permission': 'access-api'},
            {'role': 'admin', 'permission': 'manage-users'},
            {'role': 'editor', 'permission': 'access-api'},
        ]
    )


def downgrade() -> None:
    op.drop_index('idx_api_tokens_user_id', table_name='api_tokens')
    op.drop_table('api_tokens')
    op.drop_table('role_permissions')
    op.drop_table('users')
