# 📄 File: app/modules/user_management/presentation/__init__.py
# 🧭 Purpose (Layman Explanation):
# This file organizes the presentation layer for VideoTube accounts: the web endpoints apps call
#
# 🧪 Purpose (Technical Summary):
# Presentation layer initialization: FastAPI routers, Pydantic schemas and dependency wiring
#
# 🔗 Dependencies:
# - FastAPI for HTTP endpoint routing and OpenAPI documentation
# - app.modules.user_management.domain (services and models)
#
# 🔄 Connected Modules / Calls From:
# - app.api.v1.router (includes the users router)

"""
User Subsystem Presentation Layer

- API Routers: /api/v1/users endpoints
- Pydantic Schemas: camelCase request/response validation
- Dependencies: authentication gate, service wiring, upload staging
"""
