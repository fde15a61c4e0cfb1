"""create garden_entries

Revision ID: c57a0d93e1f6
Revises: 8d4e61b0c2a9
Create Date: 2026-10-19 14:37:52.301846

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


revision: str = 'c57a0d93e1f6'
down_revision: Union[str, None] = '8d4e61b0c2a9'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'garden_entries',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('entry_date', sa.Date(), nullable=False),
        sa.Column('body', sa.Text(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_garden_entries_user_id'), 'garden_entries', ['user_id'], unique=False)
    op.create_index(op.f('ix_garden_entries_entry_date'), 'garden_entries', ['entry_date'], unique=False)


def downgrade() -> None:
    op.drop_index(op.f('ix_garden_entries_entry_date'), table_name='garden_entries')
    op.drop_index(op.f('ix_garden_entries_user_id'), table_name='garden_entries')
    op.drop_table('garden_entries')
