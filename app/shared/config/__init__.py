# 📄 File: app/shared/config/__init__.py
#
# 🧭 Purpose (Layman Explanation):
# Contains the settings that tell the VideoTube API how to connect to the database,
# the media host, and how to sign session tokens.
#
# 🧪 Purpose (Technical Summary):
# Configuration package initialization with exports for settings management.
#
# 🔗 Dependencies:
# - settings.py (application settings)
#
# 🔄 Connected Modules / Calls From:
# - app.main (application startup)
# - All modules requiring configuration

from .settings import get_app_settings, get_settings, Settings

__all__ = [
    "get_app_settings",
    "get_settings",
    "Settings",
]
