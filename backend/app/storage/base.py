# backend/app/storage/base.py
"""
Blob sink interface.

A sink stores raw bytes under a generated key and can delete them again.
It knows nothing about owners or metadata rows; that coupling lives in the
services.
"""
import secrets
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import PurePath
from typing import Iterable, Optional

from backend.app.core.errors import ValidationError


@dataclass(frozen=True)
class UploadPayload:
    """An upload as received from the client, not yet stored."""

    filename: str
    content_type: Optional[str]
    data: bytes

    @property
    def size(self) -> int:
        return len(self.data)


@dataclass(frozen=True)
class StoredBlob:
    """Descriptor of a blob after the sink accepted it."""

    name: str
    key: str
    size: int
    # Empty when the sink has no public URL of its own
    url: str = ""


def generate_key(filename: str) -> str:
    """<32 hex chars>-<basename>, so keys never collide and never escape a directory."""
    basename = PurePath(filename.replace("\\", "/")).name or "upload"
    return f"{secrets.token_hex(16)}-{basename}"


def validate_upload(
    payload: UploadPayload,
    max_size: int,
    allowed_mime_types: Iterable[str],
) -> None:
    if not payload.filename:
        raise ValidationError("A file is required")

    content_type = (payload.content_type or "").lower()
    if content_type not in set(allowed_mime_types):
        raise ValidationError("Invalid file type")

    if payload.size > max_size:
        raise ValidationError(f"File too large (max {max_size} bytes)")


class BlobSink(ABC):
    @abstractmethod
    async def put(self, payload: UploadPayload) -> StoredBlob:
        """Store the payload under a new key. Raises StorageError on failure."""

    @abstractmethod
    async def delete(self, key: str) -> None:
        """
        Remove the blob stored under `key`. A key that is already gone is
        not an error. Raises StorageError on failure.
        """
