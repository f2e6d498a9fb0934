"""Storage of uploaded images (avatars, posters, news images, company logos)."""

from __future__ import annotations

import io
import os
import uuid
from typing import Iterable, Optional, Sequence

import structlog
from fastapi import HTTPException, UploadFile
from PIL import Image

from alumni_api.domain.images import ImageFolder

logger = structlog.get_logger(__name__)

JPEG_MAGIC = b"\xff\xd8\xff"
PNG_MAGIC = b"\x89PNG\r\n\x1a\n"
MAX_IMAGE_BYTES = 5 * 1024 * 1024


def _has_valid_signature(data: bytes) -> bool:
    if data.startswith(JPEG_MAGIC) or data.startswith(PNG_MAGIC):
        return True
    return data[:4] == b"RIFF" and data[8:12] == b"WEBP"


def _decodes_as_image(data: bytes) -> bool:
    try:
        with Image.open(io.BytesIO(data)) as image:
            image.verify()
    except Exception:
        return False
    return True


class ImageService:
    """Saves, resolves and removes image files under one root directory per folder."""

    def __init__(self, root_dir: str) -> None:
        self.root_dir = root_dir
        for folder in ImageFolder:
            os.makedirs(os.path.join(root_dir, folder.value), exist_ok=True)

    def _path(self, folder: ImageFolder, filename: str) -> str:
        # Reject anything that would escape the folder (../, absolute paths).
        safe = os.path.basename(filename or "")
        if not safe or safe != filename:
            raise HTTPException(404, "Image not found")
        return os.path.join(self.root_dir, folder.value, safe)

    def _read_valid(self, upload: UploadFile) -> bytes:
        data = upload.file.read()
        if not data:
            raise HTTPException(400, "Empty image file.")
        if len(data) > MAX_IMAGE_BYTES:
            raise HTTPException(400, "Image file is too large.")
        if not _has_valid_signature(data) or not _decodes_as_image(data):
            raise HTTPException(400, "Invalid image file.")
        return data

    def _write(self, folder: ImageFolder, original_name: Optional[str], data: bytes) -> str:
        compact = "".join((original_name or "image").split())
        filename = f"{folder.value}-{uuid.uuid4()}-{os.path.basename(compact)}"
        with open(os.path.join(self.root_dir, folder.value, filename), "wb") as f:
            f.write(data)
        logger.info("image_saved", folder=folder.value, filename=filename)
        return filename

    def save_uploads(self, uploads: Sequence[tuple[ImageFolder, UploadFile]]) -> list[str]:
        """
        Store several uploads as one unit: every file is validated before any is
        written, and files already written are removed if a later write fails.
        Returns the stored names in input order.
        """
        payloads = [(folder, upload.filename, self._read_valid(upload)) for folder, upload in uploads]
        written: list[tuple[ImageFolder, str]] = []
        try:
            for folder, original_name, data in payloads:
                written.append((folder, self._write(folder, original_name, data)))
        except Exception:
            self.remove_images(written)
            raise
        return [name for _, name in written]

    def save_upload(self, folder: ImageFolder, upload: UploadFile) -> str:
        return self.save_uploads([(folder, upload)])[0]

    def save_optional(self, folder: ImageFolder, upload: Optional[UploadFile]) -> Optional[str]:
        if upload is None or not upload.filename:
            return None
        return self.save_upload(folder, upload)

    def remove_image(self, folder: ImageFolder, filename: Optional[str]) -> None:
        if not filename:
            return
        path = os.path.join(self.root_dir, folder.value, os.path.basename(filename))
        if os.path.exists(path):
            os.remove(path)
            logger.info("image_removed", folder=folder.value, filename=filename)

    def remove_images(self, images: Iterable[tuple[ImageFolder, Optional[str]]]) -> None:
        for folder, filename in images:
            self.remove_image(folder, filename)

    def image_path(self, folder: ImageFolder, filename: str) -> str:
        path = self._path(folder, filename)
        if not os.path.isfile(path):
            raise HTTPException(404, "Image not found")
        return path
