# 📄 File: app/modules/user_management/domain/__init__.py
# 🧭 Purpose (Layman Explanation): 
# Holds the core rules about accounts, channels and videos, independent of any database or web framework
# 🧪 Purpose (Technical Summary): 
# Domain layer package: models, repository interfaces and domain services
# 🔗 Dependencies: 
# pydantic, app.shared.core
# 🔄 Connected Modules / Calls From: 
# Infrastructure implementations, presentation dependencies and endpoints
