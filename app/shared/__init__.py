# 📄 File: app/shared/__init__.py
#
# 🧭 Purpose (Layman Explanation):
# Marks the 'shared' folder as a Python package containing common tools
# that every part of the VideoTube API uses, like configuration, security and storage.
#
# 🧪 Purpose (Technical Summary):
# Shared kernel package for configuration, infrastructure and
# cross-cutting concerns used by the application modules.
#
# 🔗 Dependencies:
# - Python packaging system
#
# 🔄 Connected Modules / Calls From:
# - All application modules importing shared utilities

"""
Shared Kernel - Common Utilities and Infrastructure

- Configuration management
- Database infrastructure
- Security (password hashing, JWT signing)
- Media storage and upload staging
- Response envelopes and error types
- Logging
"""

__all__ = []
