# backend/app/storage/local.py
import logging
from pathlib import Path

from starlette.concurrency import run_in_threadpool

from backend.app.core.errors import StorageError
from backend.app.storage.base import BlobSink, StoredBlob, UploadPayload, generate_key

logger = logging.getLogger(__name__)


class LocalBlobSink(BlobSink):
    """
    Stores blobs as files in a single upload directory.

    URLs are left empty: the app serves UPLOAD_DIR at /files and the
    services derive APP_URL/files/<key>.
    """

    def __init__(self, upload_dir: str):
        self.upload_dir = Path(upload_dir)

    def ensure_directory(self) -> None:
        self.upload_dir.mkdir(parents=True, exist_ok=True)

    def _path_for(self, key: str) -> Path:
        path = (self.upload_dir / key).resolve()
        if path.parent != self.upload_dir.resolve():
            raise StorageError(f"Refusing key outside upload directory: {key}")
        return path

    async def put(self, payload: UploadPayload) -> StoredBlob:
        key = generate_key(payload.filename)
        path = self._path_for(key)

        try:
            await run_in_threadpool(self.ensure_directory)
            await run_in_threadpool(path.write_bytes, payload.data)
        except OSError as e:
            logger.error(f"Could not write {key}: {e}")
            raise StorageError("Could not store file") from e

        return StoredBlob(name=payload.filename, key=key, size=payload.size)

    async def delete(self, key: str) -> None:
        path = self._path_for(key)
        try:
            await run_in_threadpool(path.unlink, missing_ok=True)
        except OSError as e:
            logger.error(f"Could not delete {key}: {e}")
            raise StorageError("Could not delete stored file") from e
        logger.info(f"Blob {key} deleted from {self.upload_dir}")
