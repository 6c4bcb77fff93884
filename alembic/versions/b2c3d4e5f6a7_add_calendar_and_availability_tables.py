"""add_calendar_and_availability_tables

Revision ID: b2c3d4e5f6a7
Revises: a1b2c3d4e5f6
Create Date: 2026-10-18 09:30:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = 'b2c3d4e5f6a7'
down_revision: Union[str, Sequence[str], None] = 'a1b2c3d4e5f6'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create calendar_events and availability_blocks tables."""
    op.create_table('calendar_events',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('household_id', sa.Integer(), nullable=False),
        sa.Column('title', sa.String(length=500), nullable=False, comment='Event title'),
        sa.Column('location', sa.String(length=500), nullable=True, comment='Event location'),
        sa.Column('description', sa.Text(), nullable=True, comment='Event description'),
        sa.Column('start_time', sa.Integer(), nullable=False, comment='Event start, seconds since epoch'),
        sa.Column('end_time', sa.Integer(), nullable=False, comment='Event end (exclusive), seconds since epoch'),
        sa.Column('responsible_user_id', sa.Integer(), nullable=True, comment='Member responsible for this event'),
        sa.Column('created_by', sa.Integer(), nullable=False, comment='Member who created the event (immutable)'),
        sa.Column('recurrence_rule', sa.String(length=32), nullable=True, comment="Recurrence rule of the series (only 'weekly')"),
        sa.Column('recurrence_parent_id', sa.Integer(), nullable=True, comment='Series head id for generated occurrences'),
        sa.Column('created_at', sa.Integer(), nullable=True),
        sa.Column('updated_at', sa.Integer(), nullable=True),
        sa.ForeignKeyConstraint(['household_id'], ['households.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['responsible_user_id'], ['users.id'], ondelete='SET NULL'),
        sa.ForeignKeyConstraint(['created_by'], ['users.id']),
        sa.ForeignKeyConstraint(['recurrence_parent_id'], ['calendar_events.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('idx_events_household_time', 'calendar_events', ['household_id', 'start_time', 'end_time'], unique=False)
    op.create_index('idx_events_recurrence_parent', 'calendar_events', ['recurrence_parent_id'], unique=False)

    op.create_table('availability_blocks',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('household_id', sa.Integer(), nullable=False),
        sa.Column('start_time', sa.Integer(), nullable=False),
        sa.Column('end_time', sa.Integer(), nullable=False),
        sa.Column('reason', sa.String(length=500), nullable=True, comment="Free-text reason (e.g. 'Work', 'Travel')"),
        sa.Column('recurring_day', sa.Integer(), nullable=True, comment='Weekday tag 0-6, stored only'),
        sa.Column('created_at', sa.Integer(), nullable=True),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['household_id'], ['households.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('idx_avail_user_time', 'availability_blocks', ['user_id', 'start_time', 'end_time'], unique=False)
    op.create_index('idx_avail_household_time', 'availability_blocks', ['household_id', 'start_time', 'end_time'], unique=False)


def downgrade() -> None:
    """Drop calendar_events and availability_blocks tables."""
    op.drop_index('idx_avail_household_time', table_name='availability_blocks')
    op.drop_index('idx_avail_user_time', table_name='availability_blocks')
    op.drop_table('availability_blocks')
    op.drop_index('idx_events_recurrence_parent', table_name='calendar_events')
    op.drop_index('idx_events_household_time', table_name='calendar_events')
    op.drop_table('calendar_events')
