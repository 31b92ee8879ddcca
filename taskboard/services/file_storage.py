# taskboard/services/file_storage.py
import logging
import mimetypes
import secrets
import shutil
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Tuple

import magic
from fastapi import HTTPException, UploadFile

from taskboard.config.settings import settings

logger = logging.getLogger(__name__)

GENERIC_MIME_TYPE = "application/octet-stream"


@dataclass(frozen=True)
class StoredFile:
    key: str
    url: str
    size: int
    mime_type: str


class FileStorageService:
    """Blob store for task attachments, kept on local disk.

    Objects are addressed by key (``{task_id}/{epoch_ms}-{random}.{ext}``) and
    served back through a public URL prefix; callers never see disk paths.
    """

    def __init__(self, upload_dir: Optional[str] = None, public_url: Optional[str] = None,
                 max_file_size: Optional[int] = None):
        self.upload_dir = Path(upload_dir or settings.STORAGE['upload_dir'])
        self.bucket_dir = self.upload_dir / settings.STORAGE['bucket']
        self.public_url_prefix = (public_url or settings.STORAGE['public_url']).rstrip('/')
        self.max_file_size = max_file_size or settings.STORAGE['max_file_size']

        # Create upload directory if it doesn't exist
        self.bucket_dir.mkdir(parents=True, exist_ok=True)

    def validate_file(self, file: UploadFile) -> Tuple[bool, str]:
        """
        Validate uploaded file name and declared size

        Returns:
            Tuple of (is_valid, error_message)
        """
        if not file.filename:
            return False, "File must have a filename"

        if file.size and file.size > self.max_file_size:
            return False, f"File size exceeds maximum allowed size of {self.max_file_size / (1024*1024):.1f}MB"

        file_ext = Path(file.filename).suffix.lower()
        if not settings.is_extension_allowed(file_ext):
            return False, f"File type '{file_ext or 'none'}' is not allowed"

        return True, ""

    def generate_key(self, task_id: int, original_filename: str) -> str:
        """Unique object key inside the task's folder"""
        file_ext = Path(original_filename).suffix.lower()
        stamp = int(time.time() * 1000)
        return f"{task_id}/{stamp}-{secrets.token_hex(4)}{file_ext}"

    def path_for(self, key: str) -> Path:
        path = (self.bucket_dir / key).resolve()
        if self.bucket_dir.resolve() not in path.parents:
            raise HTTPException(status_code=400, detail="Invalid file key")
        return path

    def public_url(self, key: str) -> str:
        return f"{self.public_url_prefix}/{settings.STORAGE['bucket']}/{key}"

    def validate_content(self, path: Path, declared_mime_type: Optional[str]) -> Tuple[bool, str]:
        """
        Check a saved file's real MIME type with libmagic

        The detected type must be allowed, and must be the same kind of file
        (``image``, ``text``, ...) the client declared.

        Returns:
            Tuple of (is_valid, error_message)
        """
        actual_mime_type = magic.from_file(str(path), mime=True)

        if actual_mime_type not in settings.STORAGE['allowed_mime_types']:
            return False, f"File type '{actual_mime_type}' is not allowed"

        declared = (declared_mime_type or "").split(";")[0].strip().lower()
        if declared and declared != GENERIC_MIME_TYPE:
            if declared.split("/")[0] != actual_mime_type.split("/")[0]:
                return False, f"MIME type mismatch: declared '{declared}' but actual '{actual_mime_type}'"

        return True, ""

    def upload(self, task_id: int, file: UploadFile) -> StoredFile:
        """
        Save an uploaded file for a task

        Raises:
            HTTPException 400 for rejected files, 413 when the stored file is too large
        """
        is_valid, error_msg = self.validate_file(file)
        if not is_valid:
            raise HTTPException(status_code=400, detail=error_msg)

        key = self.generate_key(task_id, file.filename)
        path = self.path_for(key)
        path.parent.mkdir(parents=True, exist_ok=True)

        with open(path, "wb") as buffer:
            shutil.copyfileobj(file.file, buffer)

        size = path.stat().st_size
        # Double-check file size after saving
        if size > self.max_file_size:
            path.unlink()
            raise HTTPException(
                status_code=413,
                detail=f"File size exceeds maximum allowed size of {self.max_file_size / (1024*1024):.1f}MB"
            )

        is_valid, error_msg = self.validate_content(path, file.content_type)
        if not is_valid:
            path.unlink()
            logger.warning(f"Rejected upload for task {task_id}: {error_msg}")
            raise HTTPException(status_code=400, detail=error_msg)

        mime_type = file.content_type or mimetypes.guess_type(file.filename)[0] or GENERIC_MIME_TYPE
        logger.info(f"File saved successfully: {key}")
        return StoredFile(key=key, url=self.public_url(key), size=size, mime_type=mime_type)

    def delete(self, key: str) -> bool:
        path = self.path_for(key)
        if path.exists():
            path.unlink()
            logger.info(f"File deleted successfully: {key}")
            return True
        logger.warning(f"File not found for deletion: {key}")
        return False

    def delete_task_files(self, task_id: int) -> None:
        task_dir = self.bucket_dir / str(task_id)
        if task_dir.is_dir():
            shutil.rmtree(task_dir)
            logger.info(f"Removed attachments folder for task {task_id}")


_file_storage: Optional[FileStorageService] = None


def get_file_storage() -> FileStorageService:
    global _file_storage
    if _file_storage is None:
        _file_storage = FileStorageService()
    return _file_storage
