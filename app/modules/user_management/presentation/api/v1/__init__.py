# 📄 File: app/modules/user_management/presentation/api/v1/__init__.py
# 🧭 Purpose (Layman Explanation):
# This file organizes version 1 of the users API endpoints
#
# 🧪 Purpose (Technical Summary):
# API version 1 package exposing the users router
#
# 🔗 Dependencies:
# - app.modules.user_management.presentation.api.v1.users
#
# 🔄 Connected Modules / Calls From:
# - app.api.v1.router (router inclusion)

from app.modules.user_management.presentation.api.v1.users import users_router

__all__ = ["users_router"]
