"""
Upload Service - stores image files on disk and records their metadata.

Files are written under settings.upload_dir with a generated name
"<epoch-ms>-<random><ext>" and served back at "<uploads_url_prefix>/<name>".
"""

from __future__ import annotations

import os
import random
import time
from dataclasses import dataclass
from pathlib import Path

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from rest_api.models import Upload
from rest_api.services.audit import log_change
from rest_api.services.base_service import actor_id
from shared.config.constants import AuditAction
from shared.config.logging import upload_logger as logger
from shared.config.settings import settings
from shared.infrastructure.db import safe_commit
from shared.security.auth import Principal
from shared.utils.exceptions import DatabaseError, InternalError, ValidationError
from shared.utils.validators import is_allowed_image

CHUNK_SIZE = 64 * 1024


@dataclass
class StoredFile:
    """A file that has been written to the uploads directory."""

    file_name: str
    path: Path
    url: str
    mime: str
    size: int


def generate_file_name(original_name: str) -> str:
    """Unique name keeping the original extension: "1694710000000-123456789.jpg"."""
    ext = os.path.splitext(original_name)[1].lower()
    return f"{int(time.time() * 1000)}-{random.randint(0, 999_999_999)}{ext}"


class UploadService:
    """Validates, stores and records uploaded images."""

    def __init__(
        self,
        db: Session,
        upload_dir: str | Path | None = None,
        max_bytes: int | None = None,
        url_prefix: str | None = None,
    ):
        self._db = db
        self._upload_dir = Path(upload_dir or settings.upload_dir)
        self._max_bytes = max_bytes if max_bytes is not None else settings.upload_max_bytes
        self._url_prefix = (url_prefix or settings.uploads_url_prefix).rstrip("/")

    def validate(self, filename: str | None, content_type: str | None) -> None:
        """
        Raises:
            ValidationError: If no file was sent or it is not an accepted image.
        """
        if not filename:
            raise ValidationError("No file uploaded")
        if not is_allowed_image(filename, content_type):
            raise ValidationError(
                "Only image files are allowed",
                file_name=filename,
                content_type=content_type,
            )

    def store(self, stream, filename: str, content_type: str) -> StoredFile:
        """
        Copy a binary stream to the uploads directory, enforcing the size limit.

        Raises:
            ValidationError: If the file exceeds the size limit.
            InternalError: If the file cannot be written.
        """
        file_name = generate_file_name(filename)
        path = self._upload_dir / file_name
        size = 0

        try:
            self._upload_dir.mkdir(parents=True, exist_ok=True)
            with open(path, "wb") as out:
                while True:
                    chunk = stream.read(CHUNK_SIZE)
                    if not chunk:
                        break
                    size += len(chunk)
                    if size > self._max_bytes:
                        break
                    out.write(chunk)
        except OSError as e:
            path.unlink(missing_ok=True)
            logger.error("Failed to write upload", path=str(path), error=str(e), exc_info=True)
            raise InternalError("Failed to save uploaded file")

        if size > self._max_bytes:
            path.unlink(missing_ok=True)
            raise ValidationError(
                f"File too large (max {self._max_bytes // (1024 * 1024)}MB)",
                file_name=filename,
            )

        return StoredFile(
            file_name=file_name,
            path=path,
            url=f"{self._url_prefix}/{file_name}",
            mime=content_type.split(";", 1)[0].strip().lower(),
            size=size,
        )

    def record(self, stored: StoredFile, actor: Principal | None = None) -> Upload:
        """Persist upload metadata and its audit entry."""
        upload = Upload(
            file_name=stored.file_name,
            url=stored.url,
            mime=stored.mime,
            size=stored.size,
        )
        self._db.add(upload)
        try:
            self._db.flush()
            log_change(
                self._db,
                actor_user_id=actor_id(actor),
                target_type="upload",
                target_id=upload.id,
                action=AuditAction.UPLOAD,
                new_values={"fileName": stored.file_name, "url": stored.url, "size": stored.size},
            )
            safe_commit(self._db)
        except SQLAlchemyError as e:
            self._db.rollback()
            stored.path.unlink(missing_ok=True)
            logger.error("Failed to record upload", error=str(e), exc_info=True)
            raise DatabaseError("record upload")

        logger.info("Image uploaded", file_name=stored.file_name, size=stored.size, mime=stored.mime)
        return upload

    def save_image(
        self,
        stream,
        filename: str | None,
        content_type: str | None,
        actor: Principal | None = None,
    ) -> Upload:
        """Validate, store and record an uploaded image in one step."""
        self.validate(filename, content_type)
        stored = self.store(stream, filename, content_type)
        return self.record(stored, actor)
