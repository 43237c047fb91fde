# 📄 File: app/api/v1/__init__.py
# 🧭 Purpose (Layman Explanation): 
# This file organizes version 1 of the VideoTube API so later versions can be added
# without breaking existing apps.
# 🧪 Purpose (Technical Summary): 
# Package initialization for API version 1: version metadata, route prefixes and OpenAPI tags.
# 🔗 Dependencies: 
# None
# 🔄 Connected Modules / Calls From: 
# app.api.v1.router, app.main.py

from typing import Any, Dict

# API v1 metadata
__version__ = "1.0.0"
__api_version__ = "v1"
__status__ = "stable"

API_V1_CONFIG = {
    "version": __version__,
    "api_version": __api_version__,
    "status": __status__,
    "description": "VideoTube API Version 1",
    "features": ["users"],
}

# API v1 route prefixes
ROUTE_PREFIXES = {
    "users": "/users",
}

# API v1 tags for OpenAPI documentation
API_TAGS = [
    {
        "name": "Users",
        "description": "Registration, sessions, account, channel profile and watch history",
    },
    {
        "name": "Health Check",
        "description": "System health and status monitoring",
    },
]


def get_api_info() -> Dict[str, Any]:
    """
    Get API v1 information and configuration
    
    Returns:
        Dictionary with API v1 metadata and route prefixes
    """
    return {
        "api_info": API_V1_CONFIG,
        "route_prefixes": ROUTE_PREFIXES,
    }


__all__ = [
    "API_V1_CONFIG",
    "ROUTE_PREFIXES",
    "API_TAGS",
    "get_api_info",
]
