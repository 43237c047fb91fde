# 📄 File: app/modules/user_management/domain/repositories/subscription_repository.py
# 🧭 Purpose (Layman Explanation):
# Defines how we store and count who is subscribed to which channel
# 🧪 Purpose (Technical Summary):
# Repository interface for the Subscription relation and the aggregates used by the channel profile
# 🔗 Dependencies:
# Domain models (Subscription), abc
# 🔄 Connected Modules / Calls From:
# user_service.py (channel profile), infrastructure implementation, test fakes

from abc import ABC, abstractmethod

from ..models.subscription import Subscription


class SubscriptionRepository(ABC):
    """Repository interface for subscriber -> channel relations."""

    @abstractmethod
    async def create(self, subscription: Subscription) -> Subscription:
        """
        Persist a subscription.

        Raises:
            ConflictError: If the subscriber already follows the channel
        """
        pass

    @abstractmethod
    async def count_subscribers(self, channel_id: str) -> int:
        """Number of relations whose channel is channel_id."""
        pass

    @abstractmethod
    async def count_subscriptions(self, subscriber_id: str) -> int:
        """Number of relations whose subscriber is subscriber_id."""
        pass

    @abstractmethod
    async def is_subscribed(self, subscriber_id: str, channel_id: str) -> bool:
        pass
