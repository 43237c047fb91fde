# 📄 File: app/modules/user_management/__init__.py
# 🧭 Purpose (Layman Explanation): 
# Organizes the VideoTube account system: sign-up, login/logout, profile pictures, channel pages and watch history
# 🧪 Purpose (Technical Summary): 
# Package initialization for the user subsystem, layered as domain / infrastructure / presentation
# 🔗 Dependencies: 
# FastAPI, SQLAlchemy, app.shared.core, pydantic, passlib, python-jose, supabase
# 🔄 Connected Modules / Calls From: 
# app.api.v1.router, migrations/env.py

"""
User Management Module

Architecture:
- Domain: Entities, repository interfaces, AuthService and UserService
- Infrastructure: SQLAlchemy models and repository implementations
- Presentation: /api/v1/users endpoints, schemas and dependencies

Key Features:
- JWT access tokens plus one rotating refresh token per account
- Avatar and cover image uploads through the media host
- Channel profile with subscription aggregates
- Ordered watch history
"""

__version__ = "1.0.0"
__module_name__ = "user_management"
__description__ = "VideoTube accounts, sessions, channels and watch history"
