# 📄 File: app/modules/user_management/presentation/api/__init__.py
# 🧭 Purpose (Layman Explanation):
# This file organizes the API endpoints for VideoTube accounts
#
# 🧪 Purpose (Technical Summary):
# API package initialization for the user subsystem: versioned routers and schemas
#
# 🔗 Dependencies:
# - app.modules.user_management.presentation.api.v1 (versioned API endpoints)
# - app.modules.user_management.presentation.api.schemas (Pydantic request/response schemas)
#
# 🔄 Connected Modules / Calls From:
# - app.api.v1.router

from app.modules.user_management.presentation.api.v1 import users_router

__all__ = ["users_router"]
