# 📄 File: app/shared/infrastructure/storage/file_manager.py

# 🧭 Purpose (Layman Explanation):
# This file saves pictures sent by users into a temporary folder on our server, checks that
# they really are pictures, and cleans the folder up when the request is finished.

# 🧪 Purpose (Technical Summary):
# Upload staging service: writes multipart UploadFile objects to the temp directory,
# validates extension, size and image integrity with Pillow, and tracks staged paths so
# anything the media host did not consume is removed at the end of the request.

# 🔗 Dependencies:
# - PIL: Image validation
# - fastapi.UploadFile: multipart file handle
# - starlette.concurrency: thread pool offloading for disk I/O

# 🔄 Connected Modules / Calls From:
# Called by: presentation dependencies (get_upload_stager), user endpoints (register, avatar, cover image)

import logging
import shutil
from pathlib import Path
from typing import Iterable, List, Optional
from uuid import uuid4

from fastapi import UploadFile
from PIL import Image, UnidentifiedImageError
from starlette.concurrency import run_in_threadpool

from app.shared.config.settings import Settings
from app.shared.core.exceptions import MediaUploadError, PayloadTooLargeError

logger = logging.getLogger(__name__)


class UploadStager:
    """
    Stages uploaded files on local disk before they go to the media host.

    One stager lives for one request; discard_all() removes every staged
    file that is still on disk.
    """

    def __init__(
        self,
        temp_dir: Path,
        allowed_extensions: Iterable[str],
        max_file_size: int
    ):
        self.temp_dir = Path(temp_dir)
        self.allowed_extensions = {ext.lower() for ext in allowed_extensions}
        self.max_file_size = max_file_size
        self._staged: List[Path] = []

    @classmethod
    def from_settings(cls, settings: Settings) -> "UploadStager":
        return cls(
            temp_dir=Path(settings.UPLOAD_TEMP_DIR),
            allowed_extensions=settings.allowed_image_extensions,
            max_file_size=settings.MAX_UPLOAD_SIZE,
        )

    @property
    def staged_paths(self) -> List[Path]:
        return list(self._staged)

    async def stage(self, upload: Optional[UploadFile], field: str) -> Optional[Path]:
        """
        Write an uploaded file to the temp directory.

        Returns None when no file was sent for the field.

        Raises:
            MediaUploadError: Unsupported extension or not a readable image
            PayloadTooLargeError: File larger than the upload limit
        """
        if upload is None or not upload.filename:
            return None

        file_ext = Path(upload.filename).suffix.lower()
        if file_ext not in self.allowed_extensions:
            raise MediaUploadError(
                f"Unsupported file type '{file_ext or upload.filename}' for {field}",
                field=field,
            )

        self.temp_dir.mkdir(parents=True, exist_ok=True)
        path = self.temp_dir / f"{uuid4().hex}{file_ext}"
        self._staged.append(path)

        await run_in_threadpool(self._write, upload, path)

        size = path.stat().st_size
        if size > self.max_file_size:
            raise PayloadTooLargeError(f"{field} exceeds the upload size limit", limit=self.max_file_size)
        if size == 0:
            raise MediaUploadError(f"{field} file is empty", field=field)

        await run_in_threadpool(self._verify_image, path, field)
        logger.debug(f"Staged {field} upload '{upload.filename}' at {path}")
        return path

    @staticmethod
    def _write(upload: UploadFile, path: Path) -> None:
        upload.file.seek(0)
        with open(path, "wb") as out:
            shutil.copyfileobj(upload.file, out)

    @staticmethod
    def _verify_image(path: Path, field: str) -> None:
        try:
            with Image.open(path) as image:
                image.verify()
        except (UnidentifiedImageError, OSError, SyntaxError) as e:
            raise MediaUploadError(f"{field} is not a valid image", field=field) from e

    def discard_all(self) -> None:
        """Remove every staged file still present on disk."""
        for path in self._staged:
            if path.exists():
                path.unlink(missing_ok=True)
                logger.debug(f"Removed leftover staged file {path}")
        self._staged.clear()
