"""
Media store.

Videos and thumbnails are persisted by a media store that hands back a
public URL plus an opaque ``public_id`` used to delete the object later.
:class:`LocalMediaStore` keeps files under ``settings.media_dir`` and is
what the API uses unless another store is injected.
"""

from __future__ import annotations

import asyncio
import logging
import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path, PurePosixPath
from uuid import uuid4

from pydantic import BaseModel, Field

from vidshare.config.settings import settings
from vidshare.exceptions import MediaDeleteError, MediaUploadError

logger = logging.getLogger(__name__)

_SAFE_SUFFIX = re.compile(r"^\.[A-Za-z0-9]{1,10}$")


@dataclass(frozen=True)
class UploadedFile:
    """File received from a client, read into memory."""

    data: bytes
    filename: str
    content_type: str | None = None

    @property
    def size(self) -> int:
        return len(self.data)


class MediaReference(BaseModel):
    """Location of a stored media object."""

    url: str = Field(..., description="Public URL clients fetch the object from")
    public_id: str = Field(..., description="Store-specific id used for deletion")
    duration: float = Field(0.0, ge=0, description="Duration in seconds, if known")


class MediaStore(ABC):
    """Interface of the media collaborator."""

    @abstractmethod
    async def upload(self, data: bytes, filename: str, folder: str) -> MediaReference:
        """
        Persist ``data`` and return where it can be fetched from.

        Raises
        ------
        MediaUploadError
            If the object could not be stored.
        """

    @abstractmethod
    async def delete(self, public_id: str) -> None:
        """
        Delete a stored object.

        Raises
        ------
        MediaDeleteError
            If the object could not be deleted.
        """

    async def delete_quietly(self, public_id: str) -> bool:
        """Best-effort delete used during cleanup; failures are only logged."""
        try:
            await self.delete(public_id)
        except MediaDeleteError:
            logger.warning("Failed to clean up media object %s", public_id, exc_info=True)
            return False
        return True


class LocalMediaStore(MediaStore):
    """
    Media store backed by a local directory.

    Objects are written to ``<root>/<folder>/<uuid><suffix>``; the public id
    is that relative path and the URL is ``<base_url>/<public_id>``.

    Parameters
    ----------
    root : Path | None
        Storage directory; defaults to ``settings.media_dir``.
    base_url : str | None
        URL prefix objects are served under; defaults to
        ``settings.media_base_url``.
    """

    def __init__(self, root: Path | None = None, base_url: str | None = None) -> None:
        self.root = (root or settings.media_dir).resolve()
        self.base_url = (base_url or settings.media_base_url).rstrip("/")

    def _path_for(self, public_id: str) -> Path:
        path = (self.root / public_id).resolve()
        if self.root not in path.parents:
            raise ValueError(f"public id escapes the media root: {public_id}")
        return path

    @staticmethod
    def _suffix(filename: str) -> str:
        suffix = PurePosixPath(filename).suffix.lower()
        return suffix if _SAFE_SUFFIX.match(suffix) else ""

    def _write(self, target: Path, data: bytes) -> None:
        # Atomic write: temp file then rename
        target.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = target.with_name(f".{target.stem}.tmp.{uuid4()}")
        try:
            tmp_path.write_bytes(data)
            tmp_path.replace(target)
        finally:
            tmp_path.unlink(missing_ok=True)

    async def upload(self, data: bytes, filename: str, folder: str) -> MediaReference:
        if not data:
            raise MediaUploadError(
                message=f"{filename or 'upload'} is empty",
                details={"filename": filename},
            )

        folder = folder.strip("/") or "misc"
        public_id = f"{folder}/{uuid4().hex}{self._suffix(filename)}"
        try:
            target = self._path_for(public_id)
            await asyncio.to_thread(self._write, target, data)
        except (OSError, ValueError) as e:
            logger.error("Failed to store %s as %s", filename, public_id, exc_info=True)
            raise MediaUploadError(
                details={"filename": filename}, original_error=e
            ) from e

        logger.info("Stored media %s (%d bytes)", public_id, len(data))
        return MediaReference(url=f"{self.base_url}/{public_id}", public_id=public_id)

    async def delete(self, public_id: str) -> None:
        try:
            path = self._path_for(public_id)
            await asyncio.to_thread(path.unlink, True)
        except (OSError, ValueError) as e:
            raise MediaDeleteError(public_id, original_error=e) from e
        logger.info("Deleted media %s", public_id)
