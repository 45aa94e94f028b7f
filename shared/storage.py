"""
Storage utilities.

Local uploads directory holding uploaded images/music, composed videos and
NFT metadata documents. Files are addressed by their bare name and exposed
under /uploads/<name>.
"""

import json
import mimetypes
import time
import uuid
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

from fastapi import UploadFile

from shared.errors import StorageError, ValidationError
from shared.logging import get_logger
from shared.validation import sanitize_filename

logger = get_logger("storage")

UPLOADS_URL_PREFIX = "/uploads/"
CHUNK_SIZE = 1024 * 1024  # 1MB


@dataclass
class StoredFile:
    """A file written to the uploads directory."""

    filename: str
    path: Path
    size: int

    @property
    def url(self) -> str:
        """Public path of the file (/uploads/<name>)."""
        return f"{UPLOADS_URL_PREFIX}{self.filename}"


class UploadStorage:
    """Uploads directory on local disk."""

    def __init__(self, root: Path):
        """
        Initialize storage and create the uploads directory.

        Args:
            root: Uploads directory
        """
        self.root = Path(root)
        try:
            self.root.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise StorageError(f"Failed to create uploads directory {self.root}: {e}") from e

    def generate_name(self, original_filename: str, default_stem: str = "file") -> str:
        """
        Build a unique stored name: <epoch_ms>-<8 hex>-<sanitized original>.
        """
        sanitized = sanitize_filename(original_filename, default_stem=default_stem)
        return f"{int(time.time() * 1000)}-{uuid.uuid4().hex[:8]}-{sanitized}"

    def resolve(self, filename: str) -> Path:
        """
        Map a bare file name to its path inside the uploads directory.

        Raises:
            StorageError: If the name is empty or tries to leave the directory
        """
        if not filename or filename == "." or ".." in filename or "/" in filename or "\\" in filename:
            raise StorageError(f"Invalid file name: {filename!r}")
        return self.root / filename

    def path_for_url(self, url: str) -> Path:
        """
        Map a stored URL (/uploads/<name> or a bare name) to its path.

        Only the last path segment is used, so URLs can never point outside
        the uploads directory.
        """
        name = url.split("?", 1)[0].rstrip("/").rsplit("/", 1)[-1]
        return self.resolve(name)

    async def save_upload(
        self,
        upload: UploadFile,
        max_size_bytes: int,
        default_stem: str = "file"
    ) -> StoredFile:
        """
        Stream an uploaded file to the uploads directory.

        Args:
            upload: File received by FastAPI
            max_size_bytes: Maximum allowed size
            default_stem: Name used when the client name sanitizes to nothing

        Returns:
            StoredFile describing the written file

        Raises:
            ValidationError: If the file is empty or exceeds max_size_bytes
            StorageError: If the file cannot be written
        """
        filename = self.generate_name(upload.filename or default_stem, default_stem=default_stem)
        path = self.resolve(filename)
        size = 0

        try:
            with open(path, "wb") as out:
                while True:
                    chunk = await upload.read(CHUNK_SIZE)
                    if not chunk:
                        break
                    size += len(chunk)
                    if size > max_size_bytes:
                        raise ValidationError(
                            f"File exceeds maximum size of {max_size_bytes / (1024 * 1024):.0f} MB"
                        )
                    out.write(chunk)
        except ValidationError:
            path.unlink(missing_ok=True)
            raise
        except OSError as e:
            path.unlink(missing_ok=True)
            raise StorageError(f"Failed to store upload: {e}") from e

        if size == 0:
            path.unlink(missing_ok=True)
            raise ValidationError("File is empty")

        logger.info(
            "Upload stored",
            extra={"stored_filename": filename, "original_filename": upload.filename, "size": size}
        )
        return StoredFile(filename=filename, path=path, size=size)

    def write_json(self, filename: str, data: Dict[str, Any]) -> StoredFile:
        """
        Write a JSON document to the uploads directory.

        Raises:
            StorageError: If the file cannot be written
        """
        path = self.resolve(filename)
        payload = json.dumps(data, indent=2)
        try:
            path.write_text(payload, encoding="utf-8")
        except OSError as e:
            raise StorageError(f"Failed to write {filename}: {e}") from e
        return StoredFile(filename=filename, path=path, size=len(payload.encode("utf-8")))

    @staticmethod
    def content_type(path: Path, default: Optional[str] = None) -> str:
        """Detect content type from file name."""
        content_type, _ = mimetypes.guess_type(str(path))
        if content_type:
            return content_type
        return default or "application/octet-stream"
