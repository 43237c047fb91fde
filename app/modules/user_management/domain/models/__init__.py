# 📄 File: app/modules/user_management/domain/models/__init__.py
# 🧭 Purpose (Layman Explanation):
# Organizes the core data models: users, the channels they subscribe to, and the videos they watched
# 🧪 Purpose (Technical Summary):
# Package initialization for domain models: User (Account), Subscription relation,
# ChannelProfile read model, and Video/VideoOwner read models
# 🔗 Dependencies:
# Domain model classes, pydantic base models
# 🔄 Connected Modules / Calls From:
# Domain services, repositories, infrastructure layer, presentation schemas

from .user import User, normalize_email, normalize_username
from .subscription import Subscription
from .channel import ChannelProfile
from .video import Video, VideoOwner

__all__ = [
    "User",
    "normalize_email",
    "normalize_username",
    "Subscription",
    "ChannelProfile",
    "Video",
    "VideoOwner",
]
