# backend/app/services/posts.py
import logging
from typing import List

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from backend.app.core.config import Settings, settings as default_settings
from backend.app.core.errors import NotFoundError
from backend.app.models.post import Post
from backend.app.services.files import discard_blob, public_url
from backend.app.storage import BlobSink, UploadPayload, validate_upload

logger = logging.getLogger(__name__)


class PostGallery:
    """Anonymous uploads. Same blob/row ordering as FileOwnershipGate, no owner."""

    def __init__(self, db: AsyncSession, sink: BlobSink, config: Settings = None):
        self.db = db
        self.sink = sink
        self.config = config or default_settings

    async def create(self, payload: UploadPayload) -> Post:
        validate_upload(
            payload,
            max_size=self.config.MAX_UPLOAD_SIZE,
            allowed_mime_types=self.config.allowed_mime_types,
        )
        blob = await self.sink.put(payload)

        post = Post(
            name=blob.name,
            size=blob.size,
            key=blob.key,
            url=public_url(blob, self.config),
        )
        self.db.add(post)
        try:
            await self.db.commit()
        except Exception:
            await self.db.rollback()
            await discard_blob(self.sink, blob.key)
            raise

        await self.db.refresh(post)
        return post

    async def list(self) -> List[Post]:
        result = await self.db.execute(
            select(Post).order_by(Post.created_at.desc(), Post.id.desc())
        )
        return list(result.scalars().all())

    async def delete(self, post_id: int) -> None:
        post = await self.db.get(Post, post_id)
        if not post:
            raise NotFoundError("Post not found")

        await self.sink.delete(post.key)

        await self.db.delete(post)
        await self.db.commit()
        logger.info(f"Post {post_id} deleted ({post.key})")
