# 📄 File: app/modules/user_management/domain/models/video.py
# 🧭 Purpose (Layman Explanation):
# Describes a video as it appears in someone's watch history, together with
# a small card about who uploaded it.
# 🧪 Purpose (Technical Summary):
# Read models for content items referenced by watch history: Video with an optional
# VideoOwner projection (id, full name, username, avatar only).
# 🔗 Dependencies:
# pydantic, datetime
# 🔄 Connected Modules / Calls From:
# video_repository.py, user_service.py (get_watch_history), user_schemas.py

import uuid
from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, Field


class VideoOwner(BaseModel):
    """Reduced projection of the account that owns a video."""

    id: str
    full_name: str
    username: str
    avatar: str


class Video(BaseModel):
    """A content item."""

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    video_file: str
    thumbnail: str
    title: str
    description: str = ""
    duration: float = 0.0
    views: int = 0
    is_published: bool = True
    owner_id: str
    owner: Optional[VideoOwner] = None
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
