"""File handling utilities."""
from pathlib import Path

from fastapi import UploadFile


def read_upload(upload: UploadFile, max_bytes: int) -> bytes:
    """Read an uploaded file, at most one byte past ``max_bytes``.

    The extra byte lets callers tell "exactly at the limit" from "too large"
    without reading a huge upload into memory.
    """
    return upload.file.read(max_bytes + 1)


def upload_name(upload: UploadFile) -> str:
    """Client file name without any directory part."""
    return Path(upload.filename or "upload").name
