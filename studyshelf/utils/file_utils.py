"""
File utilities for StudyShelf.

Uploaded PDFs are written to disk before the request is validated, so every
stored file is wrapped in a StoredUpload: an async context manager that
deletes the file again when the block exits with an exception.
"""
from pathlib import Path
from typing import Optional
import logging
import time
import uuid

import aiofiles
import aiofiles.os
from fastapi import UploadFile

from .exceptions import InvalidInputError, StorageError, UnsupportedFileTypeError

logger = logging.getLogger(__name__)

PDF_CONTENT_TYPE = "application/pdf"
CHUNK_SIZE = 1024 * 1024


def generate_unique_filename(original_filename: str) -> str:
    """
    Generate a unique filename preserving the original extension.

    The name starts with a millisecond timestamp; a short random suffix keeps
    two uploads landing in the same millisecond apart.

    Args:
        original_filename: Original file name

    Returns:
        Unique filename, e.g. ``1712345678901_3fa2c1.pdf``
    """
    ext = Path(original_filename).suffix.lower() if original_filename else ""
    timestamp = int(time.time() * 1000)
    return f"{timestamp}_{uuid.uuid4().hex[:6]}{ext or '.pdf'}"


def is_pdf_upload(file: UploadFile) -> bool:
    """Accept files declared as PDF by content type or by extension."""
    if file.content_type == PDF_CONTENT_TYPE:
        return True
    return bool(file.filename) and file.filename.lower().endswith(".pdf")


def stored_filename(file_path: str) -> str:
    """Last path component of a stored path, tolerating Windows separators."""
    return file_path.replace("\\", "/").rstrip("/").split("/")[-1]


def build_file_url(base_url: str, file_path: str, url_prefix: str = "/uploads") -> str:
    """
    Turn a stored file path into a fully-qualified URL.

    Args:
        base_url: Scheme and host the request came in on, e.g. ``http://host:8080/``
        file_path: Path the file was stored under
        url_prefix: Mount point of the upload directory

    Returns:
        ``<scheme>://<host>/<prefix>/<filename>``
    """
    prefix = url_prefix.strip("/")
    base = str(base_url).rstrip("/")
    return f"{base}/{prefix}/{stored_filename(file_path)}"


async def delete_file_quietly(file_path: Path) -> bool:
    """
    Remove a file from disk. Failures are logged, never raised.

    Returns:
        True if the file was removed.
    """
    try:
        await aiofiles.os.remove(file_path)
        logger.info(f"Removed uploaded file: {file_path}")
        return True
    except FileNotFoundError:
        return False
    except OSError as e:
        logger.error(f"Failed to remove uploaded file {file_path}: {e}")
        return False


class StoredUpload:
    """
    An uploaded file that has been written to disk but not yet committed.

    Use it as ``async with stored:``; leaving the block through an exception
    (cancellation included) deletes the file. A clean exit keeps it.
    """

    def __init__(self, path: Path, original_filename: str, size: int):
        self.path = path
        self.original_filename = original_filename
        self.size = size
        self.discarded = False

    async def __aenter__(self) -> "StoredUpload":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> bool:
        if exc_type is not None:
            logger.warning(
                f"Upload of {self.original_filename} failed ({exc_type.__name__}), discarding {self.path.name}"
            )
            await self.discard()
        return False

    async def discard(self) -> None:
        if not self.discarded:
            self.discarded = True
            await delete_file_quietly(self.path)


async def save_uploaded_file(
    file: UploadFile,
    destination_dir: Path,
    max_size: Optional[int] = None,
    filename: Optional[str] = None
) -> StoredUpload:
    """
    Save an uploaded PDF to disk.

    Args:
        file: FastAPI UploadFile object
        destination_dir: Directory to save the file
        max_size: Optional size limit in bytes
        filename: Optional custom filename (generates unique if None)

    Returns:
        StoredUpload guarding the written file

    Raises:
        UnsupportedFileTypeError: the file is not a PDF (nothing is written)
        InvalidInputError: the file exceeds max_size (partial file removed)
        StorageError: the file could not be written (partial file removed)
    """
    if not is_pdf_upload(file):
        raise UnsupportedFileTypeError(file.filename or "")

    destination_dir.mkdir(parents=True, exist_ok=True)

    if filename is None:
        filename = generate_unique_filename(file.filename or "file.pdf")

    file_path = destination_dir / filename
    size = 0

    try:
        async with aiofiles.open(file_path, "wb") as f:
            while True:
                chunk = await file.read(CHUNK_SIZE)
                if not chunk:
                    break
                size += len(chunk)
                if max_size is not None and size > max_size:
                    raise InvalidInputError(f"File exceeds the {max_size // (1024 * 1024)}MB limit")
                await f.write(chunk)
    except InvalidInputError:
        await delete_file_quietly(file_path)
        raise
    except OSError as e:
        logger.error(f"Failed to write upload {file.filename} to {file_path}: {e}", exc_info=True)
        await delete_file_quietly(file_path)
        raise StorageError()

    logger.info(f"Stored upload {file.filename} as {file_path} ({size} bytes)")
    return StoredUpload(path=file_path, original_filename=file.filename or filename, size=size)
