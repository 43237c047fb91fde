# 📄 File: app/shared/utils/__init__.py

# 🧭 Purpose (Layman Explanation):
# This file sets up the helper tools other parts of the app share, which today
# means the structured logging that ties every log line to its request.

# 🧪 Purpose (Technical Summary):
# Initializes the utilities package and re-exports the logging setup and the
# request/user context variables.

# 🔗 Dependencies:
# - logging: Structured logging utilities

# 🔄 Connected Modules / Calls From:
# Used by: app.main, request logging middleware, authentication gate

from .logging import request_id_var, setup_logging, user_id_var

__all__ = [
    "request_id_var",
    "setup_logging",
    "user_id_var",
]
