# backend/app/services/files.py
"""
File Ownership Gate: every account owns at most one file.

The invariant is held by the unique index on files.owner_id. The read
check in upload() only exists to fail early, before anything is written
to the blob sink.

Update and delete share one discipline: load the record with a query
scoped to both the file id and the caller (row-locked where the database
supports it), then mutate it in the same transaction. A foreign id looks
exactly like a missing one.

Blob and metadata changes are ordered explicitly:

- upload: put blob, insert row; if the insert fails the blob is removed.
- update: put new blob, stage row change, delete old blob, commit; if the
  old blob cannot be deleted the row is rolled back and the new blob removed.
- delete: delete blob, then delete row; if the blob cannot be deleted the
  row is kept so the request can be retried.
"""
import logging
from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from backend.app.core.config import Settings, settings as default_settings
from backend.app.core.errors import ConflictError, NotFoundError, StorageError
from backend.app.models.file_record import FileRecord
from backend.app.storage import BlobSink, StoredBlob, UploadPayload, validate_upload

logger = logging.getLogger(__name__)

DUPLICATE_FILE_MESSAGE = "User already has a file associated"
FILE_NOT_FOUND_MESSAGE = "File not found or does not belong to the user"


def public_url(blob: StoredBlob, config: Settings) -> str:
    """The sink's own URL, or APP_URL/files/<key> when it has none."""
    if blob.url:
        return blob.url
    return f"{config.public_base_url}/files/{blob.key}"


async def discard_blob(sink: BlobSink, key: str) -> None:
    """Best-effort removal of a blob whose metadata never made it."""
    try:
        await sink.delete(key)
    except StorageError as e:
        logger.warning(f"Orphaned blob {key} left in storage: {e.message}")


class FileOwnershipGate:
    def __init__(self, db: AsyncSession, sink: BlobSink, config: Settings = None):
        self.db = db
        self.sink = sink
        self.config = config or default_settings

    def _validate(self, payload: UploadPayload) -> None:
        validate_upload(
            payload,
            max_size=self.config.MAX_UPLOAD_SIZE,
            allowed_mime_types=self.config.allowed_mime_types,
        )

    async def _find_for_owner(self, account_id: int) -> Optional[FileRecord]:
        result = await self.db.execute(
            select(FileRecord).where(FileRecord.owner_id == account_id)
        )
        return result.scalars().first()

    async def _owned_file(self, account_id: int, file_id: int) -> FileRecord:
        query = (
            select(FileRecord)
            .where(FileRecord.id == file_id, FileRecord.owner_id == account_id)
            .with_for_update()
        )
        result = await self.db.execute(query)
        record = result.scalars().first()
        if not record:
            raise NotFoundError(FILE_NOT_FOUND_MESSAGE)
        return record

    async def upload(self, account_id: int, payload: UploadPayload) -> FileRecord:
        if await self._find_for_owner(account_id):
            raise ConflictError(DUPLICATE_FILE_MESSAGE, status_code=400)

        self._validate(payload)
        blob = await self.sink.put(payload)

        record = FileRecord(
            owner_id=account_id,
            name=blob.name,
            size=blob.size,
            key=blob.key,
            url=public_url(blob, self.config),
        )
        self.db.add(record)
        try:
            await self.db.commit()
        except IntegrityError as e:
            await self.db.rollback()
            await discard_blob(self.sink, blob.key)
            # Lost the race against a concurrent upload, or the account is gone
            if await self._find_for_owner(account_id):
                raise ConflictError(DUPLICATE_FILE_MESSAGE, status_code=400) from e
            raise NotFoundError("User not found") from e
        except Exception:
            await self.db.rollback()
            await discard_blob(self.sink, blob.key)
            raise

        await self.db.refresh(record)
        logger.info(f"User {account_id} uploaded {record.key} ({record.size} bytes)")
        return record

    async def get(self, account_id: int) -> Optional[FileRecord]:
        """The caller's file with its owner loaded, or None."""
        result = await self.db.execute(
            select(FileRecord)
            .options(selectinload(FileRecord.owner))
            .where(FileRecord.owner_id == account_id)
            .execution_options(populate_existing=True)
        )
        return result.scalars().first()

    async def update(self, account_id: int, file_id: int, payload: UploadPayload) -> FileRecord:
        record = await self._owned_file(account_id, file_id)

        self._validate(payload)
        blob = await self.sink.put(payload)

        old_key = record.key
        record.name = blob.name
        record.size = blob.size
        record.key = blob.key
        record.url = public_url(blob, self.config)

        try:
            await self.db.flush()
            await self.sink.delete(old_key)
            await self.db.commit()
        except Exception:
            await self.db.rollback()
            await discard_blob(self.sink, blob.key)
            raise

        await self.db.refresh(record)
        logger.info(f"User {account_id} replaced {old_key} with {record.key}")
        return record

    async def delete(self, account_id: int, file_id: int) -> None:
        record = await self._owned_file(account_id, file_id)

        # StorageError propagates with the row untouched
        await self.sink.delete(record.key)

        await self.db.delete(record)
        await self.db.commit()
        logger.info(f"User {account_id} deleted {record.key}")
