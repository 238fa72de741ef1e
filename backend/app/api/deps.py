# backend/app/api/deps.py
"""
Request pipeline stages shared by the routers.

FastAPI resolves these in declaration order; a stage either returns a
value for the next one or short-circuits by raising an AppError.
"""
from typing import Optional

from fastapi import Depends, File, UploadFile
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from backend.app.core.config import settings
from backend.app.core.errors import ValidationError
from backend.app.db.base import get_db
from backend.app.services.credentials import CredentialService
from backend.app.services.files import FileOwnershipGate
from backend.app.services.posts import PostGallery
from backend.app.storage import BlobSink, UploadPayload, get_blob_sink

# auto_error=False: a missing header must become AuthError("missing"), not 403
bearer_scheme = HTTPBearer(auto_error=False)


def get_credential_service(db: AsyncSession = Depends(get_db)) -> CredentialService:
    return CredentialService(db)


def get_file_gate(
        db: AsyncSession = Depends(get_db),
        sink: BlobSink = Depends(get_blob_sink),
) -> FileOwnershipGate:
    return FileOwnershipGate(db, sink)


def get_post_gallery(
        db: AsyncSession = Depends(get_db),
        sink: BlobSink = Depends(get_blob_sink),
) -> PostGallery:
    return PostGallery(db, sink)


async def get_current_account_id(
        credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> int:
    token = credentials.credentials if credentials else None
    return CredentialService.authenticate(token)


async def read_upload(file: Optional[UploadFile] = File(None)) -> UploadPayload:
    """
    Read the multipart "file" field.

    Starlette has already spooled the whole part by the time this runs, so
    reading MAX_UPLOAD_SIZE + 1 bytes only bounds what is copied into
    memory; one byte over the limit is enough to reject the upload.
    """
    if file is None or not file.filename:
        raise ValidationError("A file is required")

    try:
        data = await file.read(settings.MAX_UPLOAD_SIZE + 1)
    finally:
        await file.close()

    return UploadPayload(
        filename=file.filename,
        content_type=file.content_type,
        data=data,
    )
