"""
Infrastructure layer package for the VideoTube API.
Provides the database connection manager and media storage.
"""

__all__ = []
