"""create_wellness_tables

Revision ID: 3f1c2a9d7b10
Revises:
Create Date: 2025-09-02 10:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# Import custom types
import wellness_planner.db.models


# revision identifiers, used by Alembic.
revision: str = '3f1c2a9d7b10'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create wellness areas, goals and reflections."""
    op.create_table('wellness_areas',
        sa.Column('id', wellness_planner.db.models.GUID(), nullable=False),
        sa.Column('user_id', sa.String(length=255), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('icon', sa.String(length=64), nullable=True),
        sa.Column('sort_order', sa.Integer(), nullable=True),
        sa.Column('created_at', wellness_planner.db.models.UTCDateTime(), nullable=False),
        sa.Column('updated_at', wellness_planner.db.models.UTCDateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_wellness_area_user', 'wellness_areas', ['user_id'], unique=False)

    op.create_table('wellness_goals',
        sa.Column('id', wellness_planner.db.models.GUID(), nullable=False),
        sa.Column('area_id', wellness_planner.db.models.GUID(), nullable=True),
        sa.Column('user_id', sa.String(length=255), nullable=False),
        sa.Column('title', sa.String(length=500), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('target_date', wellness_planner.db.models.UTCDateTime(), nullable=True),
        sa.Column('status', sa.String(length=20), nullable=False),
        sa.Column('priority', sa.String(length=10), nullable=False),
        sa.Column('progress_percent', sa.Integer(), nullable=True),
        sa.Column('created_at', wellness_planner.db.models.UTCDateTime(), nullable=False),
        sa.Column('updated_at', wellness_planner.db.models.UTCDateTime(), nullable=False),
        sa.CheckConstraint(
            'progress_percent IS NULL OR (progress_percent >= 0 AND progress_percent <= 100)',
            name='ck_wellness_goal_progress_range'
        ),
        sa.ForeignKeyConstraint(['area_id'], ['wellness_areas.id'], ),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_wellness_goal_user', 'wellness_goals', ['user_id'], unique=False)
    op.create_index('ix_wellness_goal_user_area', 'wellness_goals', ['user_id', 'area_id'], unique=False)

    op.create_table('wellness_reflections',
        sa.Column('id', wellness_planner.db.models.GUID(), nullable=False),
        sa.Column('user_id', sa.String(length=255), nullable=False),
        sa.Column('area_id', wellness_planner.db.models.GUID(), nullable=True),
        sa.Column('goal_id', wellness_planner.db.models.GUID(), nullable=True),
        sa.Column('entry_date', wellness_planner.db.models.UTCDateTime(), nullable=False),
        sa.Column('mood', sa.String(length=64), nullable=True),
        sa.Column('energy_level', sa.Integer(), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('created_at', wellness_planner.db.models.UTCDateTime(), nullable=False),
        sa.CheckConstraint(
            'energy_level IS NULL OR (energy_level >= 1 AND energy_level <= 10)',
            name='ck_wellness_reflection_energy_range'
        ),
        sa.ForeignKeyConstraint(['area_id'], ['wellness_areas.id'], ),
        sa.ForeignKeyConstraint(['goal_id'], ['wellness_goals.id'], ),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_wellness_reflection_user_entry', 'wellness_reflections', ['user_id', 'entry_date'], unique=False)
    op.create_index('ix_wellness_reflection_area', 'wellness_reflections', ['area_id'], unique=False)
    op.create_index('ix_wellness_reflection_goal', 'wellness_reflections', ['goal_id'], unique=False)


def downgrade() -> None:
    """Drop the wellness tables."""
    op.drop_index('ix_wellness_reflection_goal', table_name='wellness_reflections')
    op.drop_index('ix_wellness_reflection_area', table_name='wellness_reflections')
    op.drop_index('ix_wellness_reflection_user_entry', table_name='wellness_reflections')
    op.drop_table('wellness_reflections')

    op.drop_index('ix_wellness_goal_user_area', table_name='wellness_goals')
    op.drop_index('ix_wellness_goal_user', table_name='wellness_goals')
    op.drop_table('wellness_goals')

    op.drop_index('ix_wellness_area_user', table_name='wellness_areas')
    op.drop_table('wellness_areas')
