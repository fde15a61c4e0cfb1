"""add muted_at to plants

Revision ID: 8d4e61b0c2a9
Revises: 3a1c9e2f7b40
Create Date: 2026-02-22 01:25:07.662113

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


revision: str = '8d4e61b0c2a9'
down_revision: Union[str, None] = '3a1c9e2f7b40'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # NULL = active; muted plants keep their tasks but drop out of task views
    op.add_column('plants', sa.Column('muted_at', sa.DateTime(timezone=True), nullable=True))
    op.create_index(op.f('ix_plants_muted_at'), 'plants', ['muted_at'], unique=False)


def downgrade() -> None:
    op.drop_index(op.f('ix_plants_muted_at'), table_name='plants')
    op.drop_column('plants', 'muted_at')
