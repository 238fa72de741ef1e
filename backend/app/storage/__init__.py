# backend/app/storage/__init__.py
from functools import lru_cache

from backend.app.core.config import Settings, get_settings
from backend.app.storage.base import (
    BlobSink,
    StoredBlob,
    UploadPayload,
    generate_key,
    validate_upload,
)
from backend.app.storage.local import LocalBlobSink
from backend.app.storage.s3 import S3BlobSink


def build_blob_sink(config: Settings) -> BlobSink:
    if config.STORAGE_TYPE == "s3":
        return S3BlobSink(
            bucket=config.BUCKET_NAME,
            region=config.AWS_DEFAULT_REGION,
            aws_access_key_id=config.AWS_ACCESS_KEY_ID,
            aws_secret_access_key=config.AWS_SECRET_ACCESS_KEY,
        )
    if config.STORAGE_TYPE == "local":
        return LocalBlobSink(config.UPLOAD_DIR)
    raise ValueError(f"Unknown storage type: {config.STORAGE_TYPE}")


@lru_cache()
def get_blob_sink() -> BlobSink:
    """The sink selected by STORAGE_TYPE, built once."""
    return build_blob_sink(get_settings())


__all__ = [
    "BlobSink",
    "StoredBlob",
    "UploadPayload",
    "LocalBlobSink",
    "S3BlobSink",
    "build_blob_sink",
    "get_blob_sink",
    "generate_key",
    "validate_upload",
]
