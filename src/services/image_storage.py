"""Image upload validation and file storage."""

import logging
import random
import time
from dataclasses import dataclass
from pathlib import Path

from fastapi import UploadFile

from src.config import Settings
from src.exceptions import UploadRejected

logger = logging.getLogger(__name__)

FIELD_NAME = "images"


@dataclass
class PendingImage:
    """An upload that passed validation and is ready to be written."""

    original_name: str
    content: bytes

    @property
    def size(self) -> int:
        return len(self.content)


class ImageStorage:
    """Stores item images in the content directory and removes them again."""

    def __init__(self, settings: Settings):
        self.directory = Path(settings.upload_dir)
        self.url_prefix = settings.uploads_url_prefix
        self.max_file_size = settings.max_file_size
        self.max_files = settings.max_files_per_request
        self.allowed_types = set(settings.allowed_file_types)

    async def read_batch(self, files: list[UploadFile] | None) -> list[PendingImage]:
        """Validate a whole batch before anything touches the disk.

        Count and type violations reject the batch; a single oversized file
        rejects it too, naming the file.
        """
        files = [f for f in files or [] if f.filename]
        if len(files) > self.max_files:
            raise UploadRejected(f"Too many files. Maximum: {self.max_files} files")

        for upload in files:
            if upload.content_type not in self.allowed_types:
                raise UploadRejected(
                    f"File type not allowed: {upload.content_type}. "
                    f"Allowed types: {', '.join(sorted(self.allowed_types))}"
                )

        for upload in files:
            if upload.size is not None and upload.size > self.max_file_size:
                raise self._too_large(upload.filename)

        pending = []
        for upload in files:
            content = await upload.read()
            if len(content) > self.max_file_size:
                raise self._too_large(upload.filename)
            pending.append(PendingImage(original_name=upload.filename, content=content))
        return pending

    def _too_large(self, filename: str) -> UploadRejected:
        return UploadRejected(
            f"File too large: {filename}. "
            f"Maximum size is {self.max_file_size // (1024 * 1024)}MB"
        )

    def generate_filename(self, original_name: str) -> str:
        """Time-based name with a random suffix, keeping the original extension."""
        unique_suffix = f"{int(time.time() * 1000)}-{random.randint(0, 10**9)}"
        return f"{FIELD_NAME}-{unique_suffix}{Path(original_name).suffix.lower()}"

    def save_batch(self, images: list[PendingImage]) -> list[dict]:
        """Write validated images and return their metadata records."""
        self.directory.mkdir(parents=True, exist_ok=True)
        records = []
        try:
            for image in images:
                filename = self.generate_filename(image.original_name)
                (self.directory / filename).write_bytes(image.content)
                records.append(
                    {
                        "filename": filename,
                        "original_name": image.original_name,
                        "path": f"{self.url_prefix}/{filename}",
                        "size": image.size,
                    }
                )
        except OSError:
            self.delete_files(records)
            raise

        if records:
            logger.info(f"Stored {len(records)} image(s) in {self.directory}")
        return records

    def delete_files(self, records: list[dict]) -> None:
        """Best-effort removal; failures are logged and never raised."""
        for record in records:
            path = self.directory / Path(record["filename"]).name
            try:
                path.unlink()
            except OSError as e:
                logger.warning(f"Failed to delete image {path}: {e}")
