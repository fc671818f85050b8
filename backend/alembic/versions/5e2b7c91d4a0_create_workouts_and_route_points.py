"""create workouts and workout_route_points tables

Revision ID: 5e2b7c91d4a0
Revises:
Create Date: 2025-12-02 00:10:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '5e2b7c91d4a0'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    bind = op.get_bind()
    inspector = sa.inspect(bind)
    tables = inspector.get_table_names()

    if 'workouts' not in tables:
        op.create_table(
            'workouts',
            sa.Column('id', sa.String(length=36), primary_key=True),
            sa.Column('exercise_type', sa.String(length=20), nullable=False),
            sa.Column('start_time', sa.DateTime(timezone=True), nullable=False),
            sa.Column('end_time', sa.DateTime(timezone=True), nullable=False),
            sa.Column('duration_seconds', sa.Float(), nullable=False),
            sa.Column('distance_m', sa.Float(), nullable=False),
            sa.Column('calories_kcal', sa.Float(), nullable=False),
            sa.Column('pace_s_per_km', sa.Float(), nullable=False),
            sa.Column('notes', sa.String(), nullable=True),
            sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
        )
        op.create_index('ix_workouts_exercise_type', 'workouts', ['exercise_type'])
        op.create_index('ix_workouts_start_time', 'workouts', ['start_time'])

    if 'workout_route_points' not in tables:
        op.create_table(
            'workout_route_points',
            sa.Column('id', sa.String(length=36), primary_key=True),
            sa.Column('workout_id', sa.String(length=36), sa.ForeignKey('workouts.id', ondelete='CASCADE'), nullable=False),
            sa.Column('seq', sa.Integer(), nullable=False),
            sa.Column('latitude', sa.Float(), nullable=False),
            sa.Column('longitude', sa.Float(), nullable=False),
            sa.Column('altitude_m', sa.Float(), nullable=False),
            sa.Column('timestamp_ms', sa.BigInteger(), nullable=False),
            sa.Column('speed_mps', sa.Float(), nullable=False),
        )
        op.create_index('ix_workout_route_points_workout_id', 'workout_route_points', ['workout_id'])


def downgrade() -> None:
    # Safe drop if exists
    op.execute('DROP TABLE IF EXISTS workout_route_points')
    op.execute('DROP TABLE IF EXISTS workouts')
