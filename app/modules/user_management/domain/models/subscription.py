# 📄 File: app/modules/user_management/domain/models/subscription.py
# 🧭 Purpose (Layman Explanation):
# Records that one user follows another user's channel, so we can count subscribers
# and show a "subscribed" button state.
# 🧪 Purpose (Technical Summary):
# Domain model for the subscriber -> channel relation entity. Subscriptions are never
# embedded in the account; counts and membership are queried through the repository.
# 🔗 Dependencies:
# pydantic, datetime, uuid
# 🔄 Connected Modules / Calls From:
# subscription_repository.py, user_service.py (channel profile)

import uuid
from datetime import datetime, timezone

from pydantic import BaseModel, Field, model_validator


class Subscription(BaseModel):
    """
    A subscriber -> channel relation.

    - subscriber_id: the account that subscribes
    - channel_id: the account being subscribed to
    """

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    subscriber_id: str
    channel_id: str
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @model_validator(mode="after")
    def validate_not_self(self) -> "Subscription":
        if self.subscriber_id == self.channel_id:
            raise ValueError("A channel cannot subscribe to itself")
        return self
