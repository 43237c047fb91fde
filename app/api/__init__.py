# 📄 File: app/api/__init__.py
# 🧭 Purpose (Layman Explanation): 
# This file marks the api folder as a Python package so other parts of the app can import
# the web layer: versioned routes, middleware and the request pipeline.
# 🧪 Purpose (Technical Summary): 
# Package initialization for the API layer with version constants.
# 🔗 Dependencies: 
# None (package initialization)
# 🔄 Connected Modules / Calls From: 
# app.main.py

"""
VideoTube API Package

Structure:
    api/
    ├── __init__.py          # This file
    ├── pipeline.py          # Ordered middleware stages
    ├── middleware/          # Error handling, request logging, body size limit
    └── v1/                  # API version 1
        ├── router.py        # Main v1 router
        └── health.py        # Health check endpoints
"""

__version__ = "1.0.0"

# API configuration constants
API_PREFIX = "/api"
CURRENT_VERSION = "v1"
SUPPORTED_VERSIONS = ["v1"]

__all__ = [
    "API_PREFIX",
    "CURRENT_VERSION",
    "SUPPORTED_VERSIONS",
]
