"""Casefolded race names for search and import matching

Revision ID: 002_race_name_folded
Revises: 001_initial
Create Date: 2025-10-20

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '002_race_name_folded'
down_revision: Union[str, None] = '001_initial'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


races = sa.table(
    'races',
    sa.column('id', sa.String),
    sa.column('name', sa.String),
    sa.column('name_folded', sa.String),
)


def upgrade() -> None:
    op.add_column('races', sa.Column('name_folded', sa.String(200), nullable=True))

    # Backfill in Python: SQL lower() folds ASCII only on SQLite
    conn = op.get_bind()
    for race_id, name in conn.execute(sa.select(races.c.id, races.c.name)).all():
        conn.execute(
            races.update()
            .where(races.c.id == race_id)
            .values(name_folded=name.casefold())
        )

    with op.batch_alter_table('races') as batch_op:
        batch_op.alter_column('name_folded', existing_type=sa.String(200), nullable=False)
    op.create_index('ix_races_user_name_folded', 'races', ['user_id', 'name_folded'])


def downgrade() -> None:
    op.drop_index('ix_races_user_name_folded', table_name='races')
    with op.batch_alter_table('races') as batch_op:
        batch_op.drop_column('name_folded')
