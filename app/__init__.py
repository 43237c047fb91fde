# 📄 File: app/__init__.py
#
# 🧭 Purpose (Layman Explanation):
# The main entry point that tells Python this 'app' folder contains the VideoTube API code
# and sets up the basic version and package information.
#
# 🧪 Purpose (Technical Summary):
# Application package initialization with version info and package metadata
# for the VideoTube users FastAPI application.
#
# 🔗 Dependencies:
# - Python packaging system
#
# 🔄 Connected Modules / Calls From:
# - main.py (application entry point)
# - Package imports throughout the application

"""
VideoTube API - user accounts, sessions and channels

Backend service for the user subsystem of a video-sharing platform:
registration with media upload, JWT sessions, profiles, channel
lookup and watch history.
"""

__version__ = "1.0.0"
__title__ = "VideoTube API"
__description__ = "User accounts, sessions and channels for the VideoTube platform"
__license__ = "MIT"

__all__ = [
    "__version__",
    "__title__",
    "__description__",
    "__license__",
]
