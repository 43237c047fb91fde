# 📄 File: app/modules/user_management/domain/repositories/__init__.py
# 🧭 Purpose (Layman Explanation):
# Collects the storage contracts for accounts, subscriptions and videos
# 🧪 Purpose (Technical Summary):
# Package initialization exporting repository interfaces
# 🔗 Dependencies:
# Repository interface modules
# 🔄 Connected Modules / Calls From:
# Domain services, infrastructure implementations, presentation dependencies

from .user_repository import UserRepository
from .subscription_repository import SubscriptionRepository
from .video_repository import VideoRepository

__all__ = ["UserRepository", "SubscriptionRepository", "VideoRepository"]
