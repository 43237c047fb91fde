# 📄 File: app/modules/user_management/infrastructure/database/models.py
# 🧭 Purpose (Layman Explanation):
# This file defines how VideoTube accounts, channel subscriptions, videos and each
# user's watch history are stored in the database.
#
# 🧪 Purpose (Technical Summary):
# SQLAlchemy ORM models implementing the database schema for the user subsystem,
# mapping domain models to relational tables with keys and uniqueness constraints.
#
# 🔗 Dependencies:
# - SQLAlchemy ORM
# - app.shared.infrastructure.database.connection (declarative base)
# - UUID and datetime utilities for primary keys and timestamps
#
# 🔄 Connected Modules / Calls From:
# - user_repository_impl.py, subscription_repository_impl.py, video_repository_impl.py
# - Database migration scripts (schema generation)

"""
SQLAlchemy Models for the User Subsystem

Models:
- UserModel: Account data, credentials and media references
- SubscriptionModel: subscriber -> channel relation
- VideoModel: Content items referenced by watch history
- WatchHistoryModel: Ordered list of watched video ids per account

Identifiers use the generic Uuid type with string values so the schema works on
PostgreSQL and on SQLite for tests. Watch history rows are not foreign keys to
videos: a history entry may outlive the video it points to.
"""

from uuid import uuid4

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
    Uuid,
    func,
)

from app.shared.infrastructure.database.connection import Base


def _new_id() -> str:
    return str(uuid4())


# =============================================================================
# USER MODEL
# =============================================================================

class UserModel(Base):
    """
    SQLAlchemy model for VideoTube accounts.
    
    Username and email are stored lower-cased and are unique.
    """
    __tablename__ = "users"
    
    id = Column(
        Uuid(as_uuid=False),
        primary_key=True,
        default=_new_id,
        nullable=False,
        comment="Unique identifier for each user"
    )
    
    username = Column(
        String(100),
        unique=True,
        nullable=False,
        index=True,
        comment="Lower-cased unique handle"
    )
    email = Column(
        String(255),
        unique=True,
        nullable=False,
        index=True,
        comment="Lower-cased unique email address"
    )
    full_name = Column(
        String(255),
        nullable=False,
        index=True,
        comment="Display name"
    )
    
    # Media references
    avatar = Column(Text, nullable=False, comment="Avatar public URL")
    avatar_public_id = Column(String(512), nullable=True, comment="Avatar provider identifier")
    cover_image = Column(Text, nullable=True, comment="Cover image public URL")
    cover_image_public_id = Column(String(512), nullable=True, comment="Cover image provider identifier")
    
    # Credentials
    password_hash = Column(
        String(255),
        nullable=False,
        comment="Hashed password using bcrypt"
    )
    refresh_token = Column(
        Text,
        nullable=True,
        comment="The single active refresh token (nullable)"
    )
    
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        comment="Account creation date"
    )
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        comment="Last modification date"
    )
    
    def __repr__(self) -> str:
        return f"<UserModel(id={self.id}, username={self.username})>"


# =============================================================================
# SUBSCRIPTION MODEL
# =============================================================================

class SubscriptionModel(Base):
    """subscriber -> channel relation, unique per pair."""
    __tablename__ = "subscriptions"
    __table_args__ = (
        UniqueConstraint("subscriber_id", "channel_id", name="uq_subscriptions_subscriber_channel"),
    )
    
    id = Column(Uuid(as_uuid=False), primary_key=True, default=_new_id, nullable=False)
    subscriber_id = Column(
        Uuid(as_uuid=False),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
        comment="Account that subscribes"
    )
    channel_id = Column(
        Uuid(as_uuid=False),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
        comment="Account being subscribed to"
    )
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    
    def __repr__(self) -> str:
        return f"<SubscriptionModel(subscriber_id={self.subscriber_id}, channel_id={self.channel_id})>"


# =============================================================================
# VIDEO MODEL
# =============================================================================

class VideoModel(Base):
    """
    Content item. Only the fields watch history needs are read by this subsystem.
    
    owner_id is not a foreign key so a video can be listed after its owner is gone.
    """
    __tablename__ = "videos"
    
    id = Column(Uuid(as_uuid=False), primary_key=True, default=_new_id, nullable=False)
    video_file = Column(Text, nullable=False, comment="Video public URL")
    thumbnail = Column(Text, nullable=False, comment="Thumbnail public URL")
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=False, default="")
    duration = Column(Float, nullable=False, default=0.0)
    views = Column(Integer, nullable=False, default=0)
    is_published = Column(Boolean, nullable=False, default=True)
    owner_id = Column(Uuid(as_uuid=False), nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now()
    )
    
    def __repr__(self) -> str:
        return f"<VideoModel(id={self.id}, title={self.title})>"


# =============================================================================
# WATCH HISTORY MODEL
# =============================================================================

class WatchHistoryModel(Base):
    """
    One entry of an account's ordered watch history.
    
    (user_id, position) is the key; duplicates of the same video are allowed.
    """
    __tablename__ = "watch_history"
    
    user_id = Column(
        Uuid(as_uuid=False),
        ForeignKey("users.id", ondelete="CASCADE"),
        primary_key=True,
        nullable=False
    )
    position = Column(Integer, primary_key=True, nullable=False, comment="0-based history order")
    video_id = Column(Uuid(as_uuid=False), nullable=False, index=True)
    watched_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    
    def __repr__(self) -> str:
        return f"<WatchHistoryModel(user_id={self.user_id}, position={self.position})>"


__all__ = [
    "UserModel",
    "SubscriptionModel",
    "VideoModel",
    "WatchHistoryModel",
]
