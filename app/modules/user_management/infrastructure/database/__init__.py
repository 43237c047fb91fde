# 📄 File: app/modules/user_management/infrastructure/database/__init__.py
# 🧭 Purpose (Layman Explanation):
# Groups the database tables and storage code for accounts, subscriptions, videos and watch history
# 🧪 Purpose (Technical Summary):
# Package initialization exporting SQLAlchemy models and repository implementations
# 🔗 Dependencies:
# models.py, *_repository_impl.py
# 🔄 Connected Modules / Calls From:
# presentation dependencies, migrations/env.py, tests

from .models import SubscriptionModel, UserModel, VideoModel, WatchHistoryModel
from .user_repository_impl import UserRepositoryImpl
from .subscription_repository_impl import SubscriptionRepositoryImpl
from .video_repository_impl import VideoRepositoryImpl

__all__ = [
    "UserModel",
    "SubscriptionModel",
    "VideoModel",
    "WatchHistoryModel",
    "UserRepositoryImpl",
    "SubscriptionRepositoryImpl",
    "VideoRepositoryImpl",
]
