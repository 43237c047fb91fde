# 📄 File: app/modules/user_management/domain/services/__init__.py
# 🧭 Purpose (Layman Explanation): 
# Organizes the business logic services that handle account operations like registration, login and channel pages
# 🧪 Purpose (Technical Summary): 
# Package initialization for domain services implementing core business logic
# 🔗 Dependencies: 
# Domain models, repositories, media host port, security manager
# 🔄 Connected Modules / Calls From: 
# Presentation dependencies, API endpoints

"""
User Subsystem Domain Services

- UserService: Registration, profile and media updates, channel profile, watch history
- AuthService: Login, logout, refresh token rotation, password change, access token resolution
"""

from .user_service import UserService
from .auth_service import AuthService

__all__ = [
    "UserService",
    "AuthService",
]
