"""create goals, archived_goals, weekly_recaps and app_preferences tables

Revision ID: 5d2e8b41c7a9
Revises:
Create Date: 2026-01-14 09:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '5d2e8b41c7a9'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    bind = op.get_bind()
    inspector = sa.inspect(bind)
    tables = inspector.get_table_names()

    if 'goals' not in tables:
        op.create_table(
            'goals',
            sa.Column('id', sa.String(length=36), primary_key=True, nullable=False),
            sa.Column('title', sa.String(), nullable=False),
            sa.Column('category', sa.String(length=20), nullable=False, server_default='Personal'),
            sa.Column('is_completed', sa.Boolean(), nullable=False),
            sa.Column('week_start', sa.Date(), nullable=False),
            sa.Column('created_at', sa.DateTime(), nullable=False),
            sa.Column('completed_at', sa.DateTime(), nullable=True),
            sa.Column('rolled_over_from', sa.String(length=36), nullable=True),
            sa.Column('focus_date', sa.DateTime(), nullable=True),
            sa.Column('notes', sa.String(), nullable=True),
            sa.Column('sort_order', sa.Integer(), nullable=False),
            sa.Column('due_date', sa.Date(), nullable=True),
        )
        op.create_index('ix_goals_week_start', 'goals', ['week_start'])
        op.create_index('ix_goals_completed_at', 'goals', ['completed_at'])
        op.create_index('ix_goals_due_date', 'goals', ['due_date'])

    if 'archived_goals' not in tables:
        op.create_table(
            'archived_goals',
            sa.Column('id', sa.String(length=36), primary_key=True, nullable=False),
            sa.Column('original_goal_id', sa.String(length=36), nullable=True),
            sa.Column('title', sa.String(), nullable=False),
            sa.Column('category', sa.String(length=20), nullable=False, server_default='Personal'),
            sa.Column('notes', sa.String(), nullable=True),
            sa.Column('week_start', sa.Date(), nullable=True),
            sa.Column('created_at', sa.DateTime(), nullable=True),
            sa.Column('completed_at', sa.DateTime(), nullable=True),
            sa.Column('due_date', sa.Date(), nullable=True),
            sa.Column('archived_at', sa.DateTime(), nullable=False),
        )
        op.create_index('ix_archived_goals_original_goal_id', 'archived_goals', ['original_goal_id'])
        op.create_index('ix_archived_goals_week_start', 'archived_goals', ['week_start'])
        op.create_index('ix_archived_goals_completed_at', 'archived_goals', ['completed_at'])

    if 'weekly_recaps' not in tables:
        op.create_table(
            'weekly_recaps',
            sa.Column('id', sa.String(length=36), primary_key=True, nullable=False),
            sa.Column('week_start', sa.Date(), nullable=False),
            sa.Column('overview', sa.Text(), nullable=True),
            sa.Column('wins', sa.Text(), nullable=True),
            sa.Column('challenges', sa.Text(), nullable=True),
            sa.Column('grateful_for', sa.Text(), nullable=True),
            sa.Column('song_of_week', sa.String(), nullable=True),
            sa.Column('lessons', sa.Text(), nullable=True),
            sa.Column('next_week_focus', sa.Text(), nullable=True),
            sa.Column('created_at', sa.DateTime(), nullable=False),
            sa.Column('updated_at', sa.DateTime(), nullable=False),
        )
        op.create_index('ix_weekly_recaps_week_start', 'weekly_recaps', ['week_start'])

    if 'app_preferences' not in tables:
        op.create_table(
            'app_preferences',
            sa.Column('key', sa.String(length=64), primary_key=True, nullable=False),
            sa.Column('value', sa.String(), nullable=True),
        )


def downgrade() -> None:
    # Safe drops if exist
    op.execute('DROP TABLE IF EXISTS app_preferences')
    op.execute('DROP TABLE IF EXISTS weekly_recaps')
    op.execute('DROP TABLE IF EXISTS archived_goals')
    op.execute('DROP TABLE IF EXISTS goals')
