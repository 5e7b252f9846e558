"""Initial schema - users, events, participants, friendships

Revision ID: 3f7b2a9c1d04
Revises:
Create Date: 2026-10-19

Tables:
- users: Profiles mirrored from the auth provider
- events: Pickup event listings
- event_participants: Ordered event rosters
- friendships: Symmetric friendships stored as (low, high) pairs
- friend_requests: Pending directed friend requests
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

from pickup.models.base import GUID, get_json_type


# revision identifiers, used by Alembic.
revision: str = '3f7b2a9c1d04'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _common_columns() -> list[sa.Column]:
    return [
        sa.Column('id', GUID(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
    ]


def upgrade() -> None:
    op.create_table('users',
        sa.Column('uid', sa.String(length=255), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('display_name', sa.String(length=100), nullable=False),
        sa.Column('photo_url', sa.String(length=500), nullable=True),
        *_common_columns(),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('uid'),
        sa.UniqueConstraint('email'),
    )
    with op.batch_alter_table('users', schema=None) as batch_op:
        batch_op.create_index('idx_user_email', ['email'], unique=False)

    op.create_table('events',
        sa.Column('title', sa.String(length=200), nullable=False),
        sa.Column('activity', sa.String(length=50), nullable=False),
        sa.Column('subtype', sa.String(length=100), nullable=True),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('location_name', sa.String(length=200), nullable=False),
        sa.Column('location_address', sa.String(length=300), nullable=False),
        sa.Column('latitude', sa.Float(), nullable=False),
        sa.Column('longitude', sa.Float(), nullable=False),
        sa.Column('creator_id', sa.String(length=255), nullable=True),
        sa.Column('creator_name', sa.String(length=100), nullable=False),
        sa.Column('start_time', sa.DateTime(timezone=True), nullable=True),
        sa.Column('end_time', sa.DateTime(timezone=True), nullable=False),
        sa.Column('duration_minutes', sa.Integer(), nullable=False),
        sa.Column('max_participants', sa.Integer(), nullable=True),
        sa.Column('status', sa.String(length=20), nullable=False),
        sa.Column('is_private', sa.Boolean(), nullable=False),
        sa.Column('invited', get_json_type(), nullable=False),
        *_common_columns(),
        sa.PrimaryKeyConstraint('id'),
    )
    with op.batch_alter_table('events', schema=None) as batch_op:
        batch_op.create_index('idx_event_end_time', ['end_time'], unique=False)
        batch_op.create_index('idx_event_status_end', ['status', 'end_time'], unique=False)
        batch_op.create_index('idx_event_creator', ['creator_id'], unique=False)
        batch_op.create_index('idx_event_activity', ['activity'], unique=False)

    op.create_table('event_participants',
        sa.Column('event_id', GUID(), nullable=False),
        sa.Column('user_id', sa.String(length=255), nullable=False),
        sa.Column('position', sa.Integer(), nullable=False),
        *_common_columns(),
        sa.ForeignKeyConstraint(['event_id'], ['events.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('event_id', 'user_id', name='uq_event_participant'),
    )
    with op.batch_alter_table('event_participants', schema=None) as batch_op:
        batch_op.create_index('idx_participant_event', ['event_id'], unique=False)
        batch_op.create_index('idx_participant_user', ['user_id'], unique=False)

    op.create_table('friendships',
        sa.Column('user_low_id', sa.String(length=255), nullable=False),
        sa.Column('user_high_id', sa.String(length=255), nullable=False),
        *_common_columns(),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('user_low_id', 'user_high_id', name='uq_friendship_pair'),
        sa.CheckConstraint('user_low_id < user_high_id', name='ck_friendship_ordered'),
    )
    with op.batch_alter_table('friendships', schema=None) as batch_op:
        batch_op.create_index('idx_friendship_low', ['user_low_id'], unique=False)
        batch_op.create_index('idx_friendship_high', ['user_high_id'], unique=False)

    op.create_table('friend_requests',
        sa.Column('from_user_id', sa.String(length=255), nullable=False),
        sa.Column('to_user_id', sa.String(length=255), nullable=False),
        sa.Column('status', sa.String(length=20), nullable=False),
        *_common_columns(),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('from_user_id', 'to_user_id', name='uq_friend_request_pair'),
    )
    with op.batch_alter_table('friend_requests', schema=None) as batch_op:
        batch_op.create_index('idx_friend_request_to', ['to_user_id', 'status'], unique=False)
        batch_op.create_index('idx_friend_request_from', ['from_user_id', 'status'], unique=False)


def downgrade() -> None:
    op.drop_table('friend_requests')
    op.drop_table('friendships')
    op.drop_table('event_participants')
    op.drop_table('events')
    op.drop_table('users')
