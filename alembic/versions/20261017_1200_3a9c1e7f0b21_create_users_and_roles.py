"""Create users, roles and user_roles with unique constraints

Revision ID: 3a9c1e7f0b21
Revises:
Create Date: 2026-10-17 12:00:00.000000+00:00

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3a9c1e7f0b21'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema with unique constraints backing reconciliation."""

    # =================================================================
    # TABLE: users
    # =================================================================
    op.create_table(
        'users',
        sa.Column('id', sa.String(length=255), nullable=False),
        sa.Column('external_subject_id', sa.String(length=255), nullable=False),
        sa.Column('wallet_address', sa.String(length=255), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id', name='users_pkey'),
        sa.UniqueConstraint(
            'external_subject_id', name='uq_users_external_subject_id'
        ),
        # NULLs are distinct, so any number of users may have no wallet
        sa.UniqueConstraint('wallet_address', name='uq_users_wallet_address'),
    )

    # =================================================================
    # TABLE: roles
    # =================================================================
    op.create_table(
        'roles',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('name', sa.String(length=50), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('name'),
    )

    # =================================================================
    # TABLE: user_roles
    # =================================================================
    op.create_table(
        'user_roles',
        sa.Column('user_id', sa.String(length=255), nullable=False),
        sa.Column('role_id', sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['role_id'], ['roles.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('user_id', 'role_id'),
    )
    op.create_index(
        op.f('ix_user_roles_role_id'),
        'user_roles',
        ['role_id'],
        unique=False
    )


def downgrade() -> None:
    """Drop all tables."""
    op.drop_index(op.f('ix_user_roles_role_id'), table_name='user_roles')
    op.drop_table('user_roles')
    op.drop_table('roles')
    op.drop_table('users')
