# 📄 File: app/modules/user_management/domain/models/channel.py
# 🧭 Purpose (Layman Explanation):
# The public face of a user's channel: who they are, how many people follow them,
# how many channels they follow, and whether the person looking is a subscriber.
# 🧪 Purpose (Technical Summary):
# Read model assembled by UserService from an account and subscription aggregates.
# 🔗 Dependencies:
# pydantic, datetime
# 🔄 Connected Modules / Calls From:
# user_service.py (get_channel_profile), user_schemas.py (ChannelProfileResponse)

from datetime import datetime
from typing import Optional

from pydantic import BaseModel


class ChannelProfile(BaseModel):
    """Channel view of an account with subscription aggregates."""

    id: str
    username: str
    full_name: str
    email: str
    avatar: str
    cover_image: Optional[str] = None
    created_at: datetime

    subscribers_count: int = 0
    channels_subscribed_to_count: int = 0
    is_subscribed: bool = False
