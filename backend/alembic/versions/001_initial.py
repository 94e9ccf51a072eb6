"""Initial migration - users and races

Revision ID: 001_initial
Revises:
Create Date: 2025-10-01

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '001_initial'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # Create users table
    op.create_table(
        'users',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('name', sa.String(100), nullable=False),
        sa.Column('role', sa.String(10), nullable=False, server_default='user'),
        sa.Column('avatar', sa.String(500), nullable=True),
        sa.Column('password_hash', sa.String(255), nullable=True),
        sa.Column('google_id', sa.String(64), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
    )
    op.create_index('ix_users_email', 'users', ['email'], unique=True)

    # Create races table
    op.create_table(
        'races',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('user_id', sa.String(36), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('name', sa.String(200), nullable=False),
        sa.Column('date', sa.String(10), nullable=False),
        sa.Column('time', sa.String(5), nullable=False),
        sa.Column('price', sa.Float(), nullable=False),
        sa.Column('distance', sa.Float(), nullable=False),
        sa.Column('registration_url', sa.String(500), nullable=False, server_default=''),
        sa.Column('status', sa.String(20), nullable=False),
        sa.Column('completion_time', sa.String(8), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
    )
    op.create_index('ix_races_user_id', 'races', ['user_id'])
    op.create_index('ix_races_user_date', 'races', ['user_id', 'date'])
    op.create_index('ix_races_user_status', 'races', ['user_id', 'status'])


def downgrade() -> None:
    op.drop_index('ix_races_user_status', table_name='races')
    op.drop_index('ix_races_user_date', table_name='races')
    op.drop_index('ix_races_user_id', table_name='races')
    op.drop_table('races')
    op.drop_index('ix_users_email', table_name='users')
    op.drop_table('users')
