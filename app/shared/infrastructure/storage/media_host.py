# 📄 File: app/shared/infrastructure/storage/media_host.py
# 🧭 Purpose (Layman Explanation):
# Describes what any remote picture host must be able to do for us: take a file
# we saved locally, give back a public link, and delete an old picture later.
# 🧪 Purpose (Technical Summary):
# MediaHost abstract interface and the MediaAsset value returned by uploads
# (public URL plus provider-side identifier used for later deletion).
# 🔗 Dependencies:
# abc, dataclasses, pathlib
# 🔄 Connected Modules / Calls From:
# supabase_storage.py (implementation), user_service.py, presentation dependencies, test fakes

from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class MediaAsset:
    """A file stored on the media host."""

    url: str
    public_id: str


class MediaHost(ABC):
    """
    Remote media host contract.

    Implementations must remove the local file passed to upload() whether
    or not the remote call succeeds.
    """

    @abstractmethod
    async def upload(self, local_path: Path, folder: str) -> MediaAsset:
        """
        Forward a staged file and delete the local copy.

        Raises:
            MediaUploadError: If the host rejects the file or cannot be reached
        """

    @abstractmethod
    async def delete(self, public_id: str) -> None:
        """
        Delete a previously uploaded asset.

        Raises:
            StorageError: If the host cannot delete the asset
        """
