"""
Local filesystem storage for uploaded photos.
Files live flat in the upload directory and are addressed by their public
path (``/uploads/<filename>``).
"""
import asyncio
import logging
import os
import re
import time
from pathlib import Path
from typing import Optional

import aiofiles
import aiofiles.os

from app.config import get_settings
from app.exceptions import StorageError

logger = logging.getLogger("app.storage")

_UNSAFE_CHARS = re.compile(r"[^\w.-]+")


def sanitize_filename(filename: str) -> str:
    """
    Strip directories and replace characters unsafe in a URL path.
    Unicode letters are kept; the extension always survives.
    """
    name = Path(filename.replace("\\", "/")).name
    stem, dot, suffix = name.rpartition(".")
    if not dot:
        stem, suffix = name, ""
    stem = _UNSAFE_CHARS.sub("_", stem).strip("._") or "photo"
    suffix = _UNSAFE_CHARS.sub("", suffix).strip("._")
    return f"{stem}.{suffix}" if suffix else stem


def format_size(size_in_bytes: int) -> str:
    """Render a byte count with the largest unit at 1024 thresholds."""
    if size_in_bytes >= 1024 ** 3:
        return f"{size_in_bytes / 1024 ** 3:.2f} GB"
    if size_in_bytes >= 1024 ** 2:
        return f"{size_in_bytes / 1024 ** 2:.2f} MB"
    if size_in_bytes >= 1024:
        return f"{size_in_bytes / 1024:.2f} KB"
    return f"{size_in_bytes} bytes"


def folder_size(directory: Path) -> int:
    """Recursive size of all files under directory; 0 if it does not exist."""
    total = 0
    if not directory.exists():
        return 0
    for root, _dirs, files in os.walk(directory):
        for name in files:
            try:
                total += (Path(root) / name).stat().st_size
            except FileNotFoundError:
                # Removed while walking
                continue
    return total


class LocalStorageService:
    """
    Stores photo binaries in a local directory.

    Layout:
        uploads_dir/
            <epoch-ms>-<sanitized original name>
    """

    def __init__(self, uploads_dir: Path, url_prefix: str = "/uploads"):
        self.uploads_dir = Path(uploads_dir)
        self.url_prefix = "/" + url_prefix.strip("/")

    def ensure_dir(self) -> None:
        """Create the upload directory if needed."""
        self.uploads_dir.mkdir(parents=True, exist_ok=True)

    def build_filename(self, original_filename: str, now_ms: Optional[int] = None) -> str:
        """Unique stored filename: ``<epoch-ms>-<sanitized name>``."""
        stamp = now_ms if now_ms is not None else int(time.time() * 1000)
        return f"{stamp}-{sanitize_filename(original_filename)}"

    def public_path(self, filename: str) -> str:
        """Public URL path for a stored filename."""
        return f"{self.url_prefix}/{filename}"

    def resolve(self, public_path: str) -> Path:
        """
        Filesystem path for a public path.
        Only the last segment is used, so a path can never escape the upload dir.
        """
        return self.uploads_dir / Path(public_path).name

    async def save(self, original_filename: str, content: bytes) -> str:
        """
        Write content to a new file in the upload directory.

        Args:
            original_filename: Client-provided filename
            content: File bytes

        Returns:
            Public path of the stored file
        """
        filename = self.build_filename(original_filename)
        target = self.uploads_dir / filename
        # Same millisecond and name: disambiguate
        counter = 1
        while target.exists():
            filename = self.build_filename(f"{counter}-{original_filename}")
            target = self.uploads_dir / filename
            counter += 1

        try:
            await asyncio.to_thread(self.ensure_dir)
            async with aiofiles.open(target, "wb") as f:
                await f.write(content)
        except OSError as e:
            logger.error(
                "File write failed",
                exc_info=e,
                extra={"event": "storage", "target": str(target)},
            )
            raise StorageError("Failed to store uploaded file") from e

        return self.public_path(filename)

    async def delete(self, public_path: str) -> bool:
        """
        Delete a stored file.

        Returns:
            True if the file was removed, False if it was missing or could not
            be removed (logged). Row deletion never depends on this.
        """
        target = self.resolve(public_path)
        try:
            await aiofiles.os.remove(target)
            return True
        except FileNotFoundError:
            logger.warning(
                "File already missing",
                extra={"event": "storage", "target": str(target)},
            )
            return False
        except OSError as e:
            logger.error(
                "File deletion failed",
                exc_info=e,
                extra={"event": "storage", "target": str(target)},
            )
            return False

    async def delete_many(self, public_paths) -> int:
        """Delete several files; returns how many were removed."""
        removed = 0
        for path in public_paths:
            if await self.delete(path):
                removed += 1
        return removed

    async def directory_size(self) -> int:
        """Total bytes under the upload directory."""
        return await asyncio.to_thread(folder_size, self.uploads_dir)


_storage_service: Optional[LocalStorageService] = None


def get_storage_service() -> LocalStorageService:
    """Get the singleton storage service instance."""
    global _storage_service
    if _storage_service is None:
        settings = get_settings()
        _storage_service = LocalStorageService(
            settings.uploads_dir, settings.uploads_url_prefix
        )
    return _storage_service
