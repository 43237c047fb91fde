# 📄 File: app/shared/infrastructure/storage/__init__.py
#
# 🧭 Purpose (Layman Explanation):
# Sets up the file storage system that holds uploaded pictures on disk for a moment
# and then sends avatars and cover images to Supabase Storage.
#
# 🧪 Purpose (Technical Summary):
# Storage infrastructure package: the MediaHost port, its Supabase Storage adapter,
# and the request-scoped upload stager.
#
# 🔗 Dependencies:
# - app/shared/infrastructure/storage/media_host.py
# - app/shared/infrastructure/storage/supabase_storage.py
# - app/shared/infrastructure/storage/file_manager.py
#
# 🔄 Connected Modules / Calls From:
# - app.main (media host construction)
# - User management dependencies and services

"""
Storage Infrastructure Package

Storage Organization:
- avatars/ - Profile pictures
- covers/ - Channel cover images
- local temp dir - Staged uploads, removed at the end of every request
"""

from .file_manager import UploadStager
from .media_host import MediaAsset, MediaHost
from .supabase_storage import SupabaseMediaHost

__all__ = [
    "MediaAsset",
    "MediaHost",
    "SupabaseMediaHost",
    "UploadStager",
]
