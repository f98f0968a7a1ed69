"""
Tests for LocalMediaStore.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from vidshare.exceptions import MediaDeleteError, MediaUploadError
from vidshare.services.media_store import LocalMediaStore, UploadedFile

pytestmark = pytest.mark.asyncio


class TestUpload:
    async def test_writes_file_and_returns_reference(
        self, media_store: LocalMediaStore
    ) -> None:
        ref = await media_store.upload(b"\x00\x01", "clip.MP4", "videos")

        assert ref.public_id.startswith("videos/")
        assert ref.public_id.endswith(".mp4")
        assert ref.url == f"http://test/media/{ref.public_id}"
        assert ref.duration == 0.0
        assert (media_store.root / ref.public_id).read_bytes() == b"\x00\x01"

    async def test_unsafe_suffix_is_dropped(self, media_store: LocalMediaStore) -> None:
        ref = await media_store.upload(b"x", "evil.p h p", "thumbnails")

        assert "." not in Path(ref.public_id).name

    async def test_empty_upload_is_rejected(self, media_store: LocalMediaStore) -> None:
        with pytest.raises(MediaUploadError):
            await media_store.upload(b"", "empty.mp4", "videos")

    async def test_no_temp_files_left_behind(self, media_store: LocalMediaStore) -> None:
        await media_store.upload(b"data", "a.png", "thumbnails")

        leftovers = [p for p in media_store.root.rglob("*") if ".tmp." in p.name]
        assert leftovers == []


class TestDelete:
    async def test_delete_removes_file(self, media_store: LocalMediaStore) -> None:
        ref = await media_store.upload(b"data", "a.png", "thumbnails")

        await media_store.delete(ref.public_id)

        assert not (media_store.root / ref.public_id).exists()

    async def test_missing_object_is_not_an_error(
        self, media_store: LocalMediaStore
    ) -> None:
        await media_store.delete("thumbnails/missing.png")

    async def test_path_escape_is_rejected(self, media_store: LocalMediaStore) -> None:
        with pytest.raises(MediaDeleteError):
            await media_store.delete("../../etc/passwd")

    async def test_delete_quietly_swallows_failures(
        self, media_store: LocalMediaStore
    ) -> None:
        assert await media_store.delete_quietly("../outside") is False
        assert await media_store.delete_quietly("thumbnails/missing.png") is True


async def test_uploaded_file_size() -> None:
    assert UploadedFile(data=b"abc", filename="a.txt").size == 3
