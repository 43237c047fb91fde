import io
from types import SimpleNamespace

import pytest
from fastapi import UploadFile

from app.shared.core.exceptions import MediaUploadError, PayloadTooLargeError, StorageError
from app.shared.infrastructure.storage.file_manager import UploadStager
from app.shared.infrastructure.storage.supabase_storage import SupabaseMediaHost


def _upload(filename: str, content: bytes) -> UploadFile:
    return UploadFile(file=io.BytesIO(content), filename=filename)


@pytest.fixture
def stager(tmp_path) -> UploadStager:
    return UploadStager(tmp_path / "temp", allowed_extensions=[".png", ".jpg"], max_file_size=1024)


class TestUploadStager:
    async def test_stage_and_discard(self, stager, png_bytes):
        path = await stager.stage(_upload("Avatar.PNG", png_bytes), "avatar")

        assert path.exists()
        assert path.suffix == ".png"
        assert path.read_bytes() == png_bytes

        stager.discard_all()
        assert not path.exists()
        assert stager.staged_paths == []

    async def test_no_file(self, stager):
        assert await stager.stage(None, "avatar") is None
        assert await stager.stage(_upload("", b""), "avatar") is None

    async def test_rejects_extension(self, stager, png_bytes):
        with pytest.raises(MediaUploadError):
            await stager.stage(_upload("avatar.exe", png_bytes), "avatar")

    async def test_rejects_non_image_and_keeps_path_for_cleanup(self, stager):
        with pytest.raises(MediaUploadError):
            await stager.stage(_upload("avatar.png", b"plain text"), "avatar")

        assert len(stager.staged_paths) == 1
        stager.discard_all()
        assert not any(stager.temp_dir.iterdir())

    async def test_rejects_oversized_file(self, stager):
        with pytest.raises(PayloadTooLargeError):
            await stager.stage(_upload("avatar.png", b"x" * 2048), "avatar")

    async def test_rejects_empty_file(self, stager):
        with pytest.raises(MediaUploadError):
            await stager.stage(_upload("avatar.png", b""), "avatar")


class FakeBucket:
    def __init__(self, fail_upload: bool = False, fail_remove: bool = False):
        self.fail_upload = fail_upload
        self.fail_remove = fail_remove
        self.objects = {}
        self.removed = []

    def upload(self, path, data, options):
        if self.fail_upload:
            raise RuntimeError("bucket unavailable")
        self.objects[path] = (data, options)

    def get_public_url(self, path):
        return f"https://example.supabase.co/storage/v1/object/public/media/{path}"

    def remove(self, paths):
        if self.fail_remove:
            raise RuntimeError("bucket unavailable")
        self.removed.extend(paths)


def _host(bucket: FakeBucket) -> SupabaseMediaHost:
    client = SimpleNamespace(storage=SimpleNamespace(from_=lambda name: bucket))
    return SupabaseMediaHost("https://example.supabase.co", "key", "media", client=client)


class TestSupabaseMediaHost:
    async def test_upload_returns_asset_and_removes_local_file(self, tmp_path, png_bytes):
        bucket = FakeBucket()
        local = tmp_path / "staged.png"
        local.write_bytes(png_bytes)

        asset = await _host(bucket).upload(local, "avatars")

        assert asset.public_id.startswith("avatars/")
        assert asset.public_id.endswith(".png")
        assert asset.url.endswith(asset.public_id)
        data, options = bucket.objects[asset.public_id]
        assert data == png_bytes
        assert options["content-type"] == "image/png"
        assert not local.exists()

    async def test_upload_failure_still_removes_local_file(self, tmp_path, png_bytes):
        local = tmp_path / "staged.png"
        local.write_bytes(png_bytes)

        with pytest.raises(MediaUploadError):
            await _host(FakeBucket(fail_upload=True)).upload(local, "avatars")
        assert not local.exists()

    async def test_delete(self):
        bucket = FakeBucket()
        await _host(bucket).delete("avatars/old.png")
        assert bucket.removed == ["avatars/old.png"]

    async def test_delete_failure(self):
        with pytest.raises(StorageError):
            await _host(FakeBucket(fail_remove=True)).delete("avatars/old.png")
