# backend/app/storage/s3.py
import logging
from typing import Any, Optional

import boto3
from botocore.exceptions import BotoCoreError, ClientError
from starlette.concurrency import run_in_threadpool

from backend.app.core.errors import StorageError
from backend.app.storage.base import BlobSink, StoredBlob, UploadPayload, generate_key

logger = logging.getLogger(__name__)


class S3BlobSink(BlobSink):
    """Stores blobs in an S3 bucket as public-read objects."""

    def __init__(
        self,
        bucket: str,
        region: str,
        aws_access_key_id: Optional[str] = None,
        aws_secret_access_key: Optional[str] = None,
        client: Any = None,
    ):
        self.bucket = bucket
        self.region = region
        self.client = client or boto3.client(
            "s3",
            aws_access_key_id=aws_access_key_id,
            aws_secret_access_key=aws_secret_access_key,
            region_name=region,
        )

    def url_for(self, key: str) -> str:
        return f"https://{self.bucket}.s3.{self.region}.amazonaws.com/{key}"

    async def put(self, payload: UploadPayload) -> StoredBlob:
        key = generate_key(payload.filename)

        try:
            await run_in_threadpool(
                self.client.put_object,
                Bucket=self.bucket,
                Key=key,
                Body=payload.data,
                ContentType=payload.content_type or "application/octet-stream",
                ACL="public-read",
            )
        except (BotoCoreError, ClientError) as e:
            logger.error(f"Error uploading object {key} to S3: {e}")
            raise StorageError("Could not store file") from e

        return StoredBlob(
            name=payload.filename,
            key=key,
            size=payload.size,
            url=self.url_for(key),
        )

    async def delete(self, key: str) -> None:
        # delete_object succeeds for keys that do not exist
        try:
            await run_in_threadpool(
                self.client.delete_object, Bucket=self.bucket, Key=key
            )
        except (BotoCoreError, ClientError) as e:
            logger.error(f"Error deleting object {key} from S3: {e}")
            raise StorageError(f"Error deleting object from S3: {e}") from e
        logger.info(f"Object {key} deleted from S3")
