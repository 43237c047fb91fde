# 📄 File: app/modules/user_management/infrastructure/database/subscription_repository_impl.py
# 🧭 Purpose (Layman Explanation): 
# This file handles the actual database work for channel subscriptions - recording that someone
# subscribed, and counting followers and followed channels for a channel page.
# 🧪 Purpose (Technical Summary): 
# SQLAlchemy-based implementation of the SubscriptionRepository interface with count
# aggregates and membership checks used by the channel profile.
# 🔗 Dependencies: 
# SQLAlchemy, app.shared.infrastructure.database.session, app.shared.core.exceptions, logging
# 🔄 Connected Modules / Calls From: 
# user_service.py (channel profile), presentation dependencies, repository tests

import logging

from fastapi import Depends
from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.shared.core.exceptions import ConflictError, RepositoryError
from app.modules.user_management.domain.repositories.subscription_repository import SubscriptionRepository
from app.modules.user_management.domain.models.subscription import Subscription
from app.modules.user_management.infrastructure.database.models import SubscriptionModel
from app.shared.infrastructure.database.session import get_db_session

logger = logging.getLogger(__name__)


class SubscriptionRepositoryImpl(SubscriptionRepository):
    """
    SQLAlchemy implementation of subscription repository.
    """

    def __init__(self, session: AsyncSession = Depends(get_db_session)):
        self.session = session

    async def create(self, subscription: Subscription) -> Subscription:
        try:
            model = SubscriptionModel(
                id=subscription.id,
                subscriber_id=subscription.subscriber_id,
                channel_id=subscription.channel_id,
                created_at=subscription.created_at,
            )
            self.session.add(model)
            await self.session.commit()

            logger.info(f"User {subscription.subscriber_id} subscribed to {subscription.channel_id}")
            return subscription

        except IntegrityError as e:
            await self.session.rollback()
            raise ConflictError("Already subscribed to this channel") from e

        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error(f"Database error creating subscription: {str(e)}")
            raise RepositoryError("Failed to create subscription", operation="create") from e

    async def count_subscribers(self, channel_id: str) -> int:
        return await self._count(SubscriptionModel.channel_id == channel_id)

    async def count_subscriptions(self, subscriber_id: str) -> int:
        return await self._count(SubscriptionModel.subscriber_id == subscriber_id)

    async def is_subscribed(self, subscriber_id: str, channel_id: str) -> bool:
        count = await self._count(
            SubscriptionModel.subscriber_id == subscriber_id,
            SubscriptionModel.channel_id == channel_id,
        )
        return count > 0

    async def _count(self, *conditions) -> int:
        try:
            stmt = select(func.count()).select_from(SubscriptionModel).where(*conditions)
            result = await self.session.execute(stmt)
            return result.scalar_one() or 0

        except SQLAlchemyError as e:
            logger.error(f"Database error counting subscriptions: {str(e)}")
            raise RepositoryError("Failed to count subscriptions", operation="count") from e
