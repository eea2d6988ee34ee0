from __future__ import annotations

import logging
import os
import random
import time
from pathlib import Path
from typing import BinaryIO, Optional

from civicreport.config import settings
from civicreport.services.errors import InvalidUploadError, UploadTooLargeError

logger = logging.getLogger(__name__)


ALLOWED_IMAGE_EXTENSIONS = {".jpeg", ".jpg", ".png", ".gif"}
ALLOWED_IMAGE_SUBTYPES = {"jpeg", "jpg", "png", "gif"}
CHUNK_SIZE = 64 * 1024


class UploadStore:
    """Directory-backed store for report images, keyed by generated filename."""

    def __init__(self, root, max_bytes: int = settings.MAX_UPLOAD_BYTES):
        self.root = Path(root)
        self.max_bytes = max_bytes

    def ensure_root(self) -> Path:
        self.root.mkdir(parents=True, exist_ok=True)
        return self.root

    @staticmethod
    def validate(filename: Optional[str], content_type: Optional[str]) -> None:
        extension = os.path.splitext(filename or "")[1].lower()
        subtype = (content_type or "").split(";", 1)[0].strip().lower()
        subtype = subtype.split("/", 1)[1] if "/" in subtype else ""
        if extension not in ALLOWED_IMAGE_EXTENSIONS or subtype not in ALLOWED_IMAGE_SUBTYPES:
            raise InvalidUploadError("Only image files are allowed!")

    @staticmethod
    def generate_filename(original_name: str) -> str:
        """Build ``<epoch-ms>-<random-int>-<original-name>``."""
        base_name = os.path.basename((original_name or "").replace("\\", "/"))
        unique_prefix = f"{int(time.time() * 1000)}-{random.randint(0, 10**9)}"
        return f"{unique_prefix}-{base_name}"

    def save(self, fileobj: BinaryIO, original_name: str, content_type: Optional[str]) -> str:
        """Validate and write an upload, returning the stored filename."""
        self.validate(original_name, content_type)
        stored_name = self.generate_filename(original_name)
        target = self.ensure_root() / stored_name

        written = 0
        try:
            with open(target, "wb") as out:
                while True:
                    chunk = fileobj.read(CHUNK_SIZE)
                    if not chunk:
                        break
                    written += len(chunk)
                    if written > self.max_bytes:
                        raise UploadTooLargeError("Image exceeds the upload size limit.")
                    out.write(chunk)
        except Exception:
            target.unlink(missing_ok=True)
            raise

        logger.info("Stored upload %s (%d bytes)", stored_name, written)
        return stored_name

    def path_for(self, filename: str) -> Optional[Path]:
        if not filename or os.path.basename(filename) != filename or filename.startswith("."):
            return None
        path = self.root / filename
        return path if path.is_file() else None

    def delete(self, filename: Optional[str]) -> bool:
        """Remove a stored image. Returns False and logs on failure; never raises."""
        if not filename:
            return False
        path = self.path_for(filename)
        if path is None:
            logger.warning("Image %s not found in %s; nothing to delete", filename, self.root)
            return False
        try:
            path.unlink()
        except OSError as exc:
            logger.warning("Failed to delete image %s: %s", filename, exc)
            return False
        return True


def get_upload_store() -> UploadStore:
    """Request dependency returning the store configured in settings."""
    return UploadStore(settings.UPLOAD_DIR, settings.MAX_UPLOAD_BYTES)
