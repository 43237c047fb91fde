# 📄 File: app/modules/user_management/infrastructure/__init__.py
# 🧭 Purpose (Layman Explanation):
# This file sets up the infrastructure layer for the user subsystem, which handles how our app
# actually stores and retrieves accounts, subscriptions and videos from the database.
#
# 🧪 Purpose (Technical Summary):
# Infrastructure layer initialization exposing the SQLAlchemy repository implementations.
#
# 🔗 Dependencies:
# - app.modules.user_management.domain.repositories (repository interfaces)
# - app.shared.infrastructure.database (database connection)
#
# 🔄 Connected Modules / Calls From:
# - app.modules.user_management.presentation (dependency injection)

from app.modules.user_management.infrastructure.database import (
    SubscriptionRepositoryImpl,
    UserRepositoryImpl,
    VideoRepositoryImpl,
)

__all__ = [
    "UserRepositoryImpl",
    "SubscriptionRepositoryImpl",
    "VideoRepositoryImpl",
]
