"""
Local disk storage for course resources.

Files live under ``UPLOAD_DIR/<course_id>/<ms-timestamp>-<sanitized name>``
and are referenced by the URL ``/uploads/<course_id>/<filename>``.
"""
import asyncio
import re
import shutil
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import aiofiles
import aiofiles.os
import structlog
from fastapi import UploadFile

from webacademy.core.config import settings
from webacademy.core.exceptions import NotFoundError, ValidationError
from webacademy.domain.constants import ResourceType

logger = structlog.get_logger(__name__)

URL_PREFIX = "/uploads"
CHUNK_SIZE = 1024 * 1024
_UNSAFE_CHARS = re.compile(r"[^a-zA-Z0-9.-]")


@dataclass
class StoredFile:
    name: str
    filename: str
    url: str
    type: str
    size: int


def sanitize_filename(name: Optional[str]) -> str:
    return _UNSAFE_CHARS.sub("_", name or "file")


def resource_type_for(content_type: Optional[str]) -> str:
    if (content_type or "").startswith("image/"):
        return ResourceType.IMAGE.value
    return ResourceType.FILE.value


class UploadStorage:
    """Stores, serves and removes course files."""

    def __init__(self, base_dir: Optional[str] = None):
        self.base_dir = Path(base_dir or settings.UPLOAD_DIR).resolve()

    async def save_course_file(
        self,
        course_id: str,
        upload: UploadFile,
        max_size_mb: int,
    ) -> StoredFile:
        """
        Validate and store an uploaded file.

        Raises:
            ValidationError: Disallowed MIME type or file above the size limit
        """
        if upload.content_type not in settings.ALLOWED_UPLOAD_MIME_TYPES:
            raise ValidationError(
                "Type non autorisé. Autorisés: images, PDF, Word, Excel, ZIP.",
                field="file",
            )

        max_bytes = max_size_mb * 1024 * 1024
        directory = self.base_dir / course_id
        await aiofiles.os.makedirs(directory, exist_ok=True)

        filename = f"{int(time.time() * 1000)}-{sanitize_filename(upload.filename)}"
        path = directory / filename

        size = 0
        async with aiofiles.open(path, "wb") as f:
            while chunk := await upload.read(CHUNK_SIZE):
                size += len(chunk)
                if size > max_bytes:
                    break
                await f.write(chunk)

        if size > max_bytes:
            await self._remove(path)
            logger.info("upload_rejected_too_large", course_id=course_id, max_size_mb=max_size_mb)
            raise ValidationError(f"Fichier trop volumineux (max {max_size_mb} Mo).", field="file")

        logger.info("upload_stored", course_id=course_id, filename=filename, size=size)
        return StoredFile(
            name=upload.filename or filename,
            filename=filename,
            url=f"{URL_PREFIX}/{course_id}/{filename}",
            type=resource_type_for(upload.content_type),
            size=size,
        )

    async def delete_by_url(self, url: str) -> None:
        """Remove the file behind a resource URL; a missing file is fine."""
        relative = url[len(URL_PREFIX):].lstrip("/") if url.startswith(URL_PREFIX) else url
        path = (self.base_dir / relative).resolve()
        if not path.is_relative_to(self.base_dir):
            logger.warning("upload_delete_outside_root", url=url)
            return
        await self._remove(path)

    async def delete_course_files(self, course_id: str) -> None:
        directory = (self.base_dir / course_id).resolve()
        if directory.is_relative_to(self.base_dir) and directory != self.base_dir:
            await asyncio.to_thread(shutil.rmtree, directory, True)

    def resolve(self, course_id: str, filename: str) -> Path:
        """
        Locate a stored file for serving.

        Raises:
            ValidationError: Path escapes the upload directory
            NotFoundError: No such file
        """
        path = (self.base_dir / course_id / filename).resolve()
        if not path.is_relative_to(self.base_dir):
            raise ValidationError("Chemin invalide")
        if not path.is_file():
            raise NotFoundError("Fichier non disponible")
        return path

    async def _remove(self, path: Path) -> None:
        try:
            await aiofiles.os.remove(path)
        except FileNotFoundError:
            logger.info("upload_already_removed", path=str(path))


def get_upload_storage() -> UploadStorage:
    return UploadStorage()
