"""Test doubles and payload builders"""

from typing import Dict, List, Set

from backend.app.core.errors import StorageError
from backend.app.storage import BlobSink, StoredBlob, UploadPayload, generate_key

PNG_HEADER = b"\x89PNG\r\n\x1a\n"


class InMemoryBlobSink(BlobSink):
    """Blob sink keeping bytes in a dict, with switchable failures"""

    def __init__(self):
        self.blobs: Dict[str, bytes] = {}
        self.deleted: List[str] = []
        self.fail_put = False
        self.fail_delete_keys: Set[str] = set()

    async def put(self, payload: UploadPayload) -> StoredBlob:
        if self.fail_put:
            raise StorageError("Could not store file")
        key = generate_key(payload.filename)
        self.blobs[key] = payload.data
        return StoredBlob(name=payload.filename, key=key, size=payload.size)

    async def delete(self, key: str) -> None:
        if key in self.fail_delete_keys:
            raise StorageError("Could not delete stored file")
        self.blobs.pop(key, None)
        self.deleted.append(key)


def png_bytes(size: int = 1024) -> bytes:
    return PNG_HEADER + b"\0" * max(size - len(PNG_HEADER), 0)


def make_png(name: str = "photo.png", size: int = 1024) -> UploadPayload:
    return UploadPayload(filename=name, content_type="image/png", data=png_bytes(size))
