"""Create user subsystem tables

Revision ID: 001
Revises: 
Create Date: 2025-01-23 10:00:00.000000

"""
from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create users, subscriptions, videos and watch_history tables"""
    
    # 1. Create users table
    op.create_table('users',
        sa.Column('id', sa.Uuid(as_uuid=False), nullable=False),
        sa.Column('username', sa.String(100), nullable=False),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('full_name', sa.String(255), nullable=False),
        sa.Column('avatar', sa.Text(), nullable=False),
        sa.Column('avatar_public_id', sa.String(512), nullable=True),
        sa.Column('cover_image', sa.Text(), nullable=True),
        sa.Column('cover_image_public_id', sa.String(512), nullable=True),
        sa.Column('password_hash', sa.String(255), nullable=False),
        sa.Column('refresh_token', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('username'),
        sa.UniqueConstraint('email'),
    )
    
    op.create_index('ix_users_username', 'users', ['username'])
    op.create_index('ix_users_email', 'users', ['email'])
    op.create_index('ix_users_full_name', 'users', ['full_name'])
    
    # 2. Create subscriptions table
    op.create_table('subscriptions',
        sa.Column('id', sa.Uuid(as_uuid=False), nullable=False),
        sa.Column('subscriber_id', sa.Uuid(as_uuid=False), nullable=False),
        sa.Column('channel_id', sa.Uuid(as_uuid=False), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['subscriber_id'], ['users.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['channel_id'], ['users.id'], ondelete='CASCADE'),
        sa.UniqueConstraint('subscriber_id', 'channel_id', name='uq_subscriptions_subscriber_channel'),
    )
    
    op.create_index('ix_subscriptions_subscriber_id', 'subscriptions', ['subscriber_id'])
    op.create_index('ix_subscriptions_channel_id', 'subscriptions', ['channel_id'])
    
    # 3. Create videos table
    op.create_table('videos',
        sa.Column('id', sa.Uuid(as_uuid=False), nullable=False),
        sa.Column('video_file', sa.Text(), nullable=False),
        sa.Column('thumbnail', sa.Text(), nullable=False),
        sa.Column('title', sa.String(255), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('duration', sa.Float(), nullable=False),
        sa.Column('views', sa.Integer(), nullable=False),
        sa.Column('is_published', sa.Boolean(), nullable=False),
        sa.Column('owner_id', sa.Uuid(as_uuid=False), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        
        sa.PrimaryKeyConstraint('id'),
    )
    
    op.create_index('ix_videos_owner_id', 'videos', ['owner_id'])
    
    # 4. Create watch_history table
    op.create_table('watch_history',
        sa.Column('user_id', sa.Uuid(as_uuid=False), nullable=False),
        sa.Column('position', sa.Integer(), nullable=False),
        sa.Column('video_id', sa.Uuid(as_uuid=False), nullable=False),
        sa.Column('watched_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        
        sa.PrimaryKeyConstraint('user_id', 'position'),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
    )
    
    op.create_index('ix_watch_history_video_id', 'watch_history', ['video_id'])


def downgrade() -> None:
    """Drop user subsystem tables"""
    op.drop_table('watch_history')
    op.drop_table('videos')
    op.drop_table('subscriptions')
    op.drop_table('users')
