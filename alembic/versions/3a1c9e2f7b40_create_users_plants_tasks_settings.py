"""create users, plants, tasks and settings

Revision ID: 3a1c9e2f7b40
Revises:
Create Date: 2026-01-10 18:02:11.418220

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


revision: str = '3a1c9e2f7b40'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

SOWING_METHODS = ('indoor_start', 'direct_sow', 'outdoor_start', 'fridge_stratify')
TASK_TYPES = (
    'plant_seeds', 'observe_sprouts', 'begin_hardening_off',
    'plant_seedlings', 'begin_stratification', 'garden_task',
)
TASK_STATUSES = ('pending', 'done', 'skipped')


def upgrade() -> None:
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('first_name', sa.String(length=100), nullable=False),
        sa.Column('last_name', sa.String(length=100), nullable=True),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_users_email'), 'users', ['email'], unique=True)

    op.create_table(
        'plants',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=200), nullable=False),
        sa.Column('variety', sa.String(length=200), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('sowing_method', sa.Enum(*SOWING_METHODS, name='sowing_method_enum'), nullable=False),
        sa.Column('seed_start_offset_days', sa.Integer(), nullable=True),
        sa.Column('hardening_offset_days', sa.Integer(), nullable=True),
        sa.Column('transplant_offset_days', sa.Integer(), nullable=True),
        sa.Column('days_to_sprout', sa.String(length=50), nullable=True),
        sa.Column('seed_depth', sa.String(length=50), nullable=True),
        sa.Column('plant_spacing', sa.String(length=50), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_plants_user_id'), 'plants', ['user_id'], unique=False)

    op.create_table(
        'tasks',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('plant_id', sa.Integer(), nullable=True),
        sa.Column('task_type', sa.Enum(*TASK_TYPES, name='task_type_enum'), nullable=False),
        sa.Column('due_date', sa.Date(), nullable=False),
        sa.Column('end_date', sa.Date(), nullable=True),
        sa.Column('status', sa.Enum(*TASK_STATUSES, name='task_status_enum'), nullable=False),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['plant_id'], ['plants.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_tasks_user_id'), 'tasks', ['user_id'], unique=False)
    op.create_index(op.f('ix_tasks_plant_id'), 'tasks', ['plant_id'], unique=False)
    op.create_index(op.f('ix_tasks_due_date'), 'tasks', ['due_date'], unique=False)

    op.create_table(
        'settings',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('key', sa.String(length=100), nullable=False),
        sa.Column('value', sa.String(length=255), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('user_id', 'key', name='uq_settings_user_key'),
    )
    op.create_index(op.f('ix_settings_user_id'), 'settings', ['user_id'], unique=False)


def downgrade() -> None:
    op.drop_index(op.f('ix_settings_user_id'), table_name='settings')
    op.drop_table('settings')
    op.drop_index(op.f('ix_tasks_due_date'), table_name='tasks')
    op.drop_index(op.f('ix_tasks_plant_id'), table_name='tasks')
    op.drop_index(op.f('ix_tasks_user_id'), table_name='tasks')
    op.drop_table('tasks')
    op.drop_index(op.f('ix_plants_user_id'), table_name='plants')
    op.drop_table('plants')
    op.drop_index(op.f('ix_users_email'), table_name='users')
    op.drop_table('users')

    sa.Enum(name='task_status_enum').drop(op.get_bind(), checkfirst=True)
    sa.Enum(name='task_type_enum').drop(op.get_bind(), checkfirst=True)
    sa.Enum(name='sowing_method_enum').drop(op.get_bind(), checkfirst=True)
