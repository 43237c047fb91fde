# 📄 File: app/shared/infrastructure/storage/supabase_storage.py

# 🧭 Purpose (Layman Explanation):
# This file sends avatars and cover images to cloud storage, gives back the public link
# for each one, and removes old pictures when a user replaces them.

# 🧪 Purpose (Technical Summary):
# Supabase Storage implementation of MediaHost. Uploads staged files into a bucket under
# organized object paths, returns the public URL and object path (the provider identifier),
# and always deletes the local staged copy. The synchronous SDK runs in the thread pool.

# 🔗 Dependencies:
# - supabase: Storage client
# - starlette.concurrency: thread pool offloading
# - pathlib, mimetypes: local file handling

# 🔄 Connected Modules / Calls From:
# Called by: user_service.py (register, avatar and cover image updates)
# Built by: app.main (application factory), presentation dependencies

import logging
import mimetypes
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional
from uuid import uuid4

from starlette.concurrency import run_in_threadpool
from supabase import Client, create_client

from app.shared.config.settings import Settings
from app.shared.core.exceptions import MediaUploadError, StorageError
from app.shared.infrastructure.storage.media_host import MediaAsset, MediaHost

logger = logging.getLogger(__name__)


class SupabaseMediaHost(MediaHost):
    """
    Supabase Storage client wrapper for user media.

    Object paths look like ``avatars/20250101_120000_1a2b3c4d.png``.
    """

    def __init__(
        self,
        supabase_url: str,
        supabase_key: str,
        bucket_name: str,
        client: Optional[Client] = None
    ):
        self.supabase_url = supabase_url
        self.supabase_key = supabase_key
        self.bucket_name = bucket_name
        self._client = client

    @classmethod
    def from_settings(cls, settings: Settings) -> "SupabaseMediaHost":
        return cls(
            supabase_url=settings.SUPABASE_URL,
            supabase_key=settings.SUPABASE_SERVICE_ROLE_KEY,
            bucket_name=settings.SUPABASE_STORAGE_BUCKET,
        )

    def _bucket(self) -> Any:
        if self._client is None:
            try:
                self._client = create_client(self.supabase_url, self.supabase_key)
            except Exception as e:
                logger.error(f"Failed to initialize Supabase Storage: {e}")
                raise StorageError(f"Storage initialization failed: {e}") from e
        return self._client.storage.from_(self.bucket_name)

    @staticmethod
    def _generate_object_path(folder: str, filename: str) -> str:
        timestamp = datetime.now(timezone.utc).strftime("%Y%m%d_%H%M%S")
        file_ext = Path(filename).suffix.lower() or ".bin"
        return f"{folder}/{timestamp}_{uuid4().hex[:8]}{file_ext}"

    async def upload(self, local_path: Path, folder: str) -> MediaAsset:
        local_path = Path(local_path)
        object_path = self._generate_object_path(folder, local_path.name)
        content_type = mimetypes.guess_type(local_path.name)[0] or "application/octet-stream"

        try:
            data = await run_in_threadpool(local_path.read_bytes)
            bucket = self._bucket()
            await run_in_threadpool(
                bucket.upload,
                object_path,
                data,
                {"content-type": content_type},
            )
            url = await run_in_threadpool(bucket.get_public_url, object_path)
        except StorageError as e:
            raise MediaUploadError(e.message) from e
        except Exception as e:
            logger.error(f"Upload to media host failed for {local_path.name}: {e}", exc_info=True)
            raise MediaUploadError("Error while uploading file") from e
        finally:
            local_path.unlink(missing_ok=True)

        logger.info(f"Uploaded {object_path} to bucket {self.bucket_name}")
        return MediaAsset(url=url, public_id=object_path)

    async def delete(self, public_id: str) -> None:
        try:
            bucket = self._bucket()
            await run_in_threadpool(bucket.remove, [public_id])
        except StorageError:
            raise
        except Exception as e:
            logger.error(f"Failed to delete {public_id} from media host: {e}")
            raise StorageError(f"Failed to delete media asset: {e}") from e

        logger.info(f"Deleted {public_id} from bucket {self.bucket_name}")
