# backend/app/db/init_db.py
import logging

from sqlalchemy.ext.asyncio import AsyncEngine

from backend.app.db.base import Base

# Register every table on Base.metadata
from backend.app import models  # noqa: F401

logger = logging.getLogger(__name__)


async def init_models(engine: AsyncEngine, drop: bool = False) -> None:
    """Create all tables. With drop=True existing tables are dropped first."""
    try:
        async with engine.begin() as conn:
            if drop:
                await conn.run_sync(Base.metadata.drop_all)
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database tables ready")
    except Exception as e:
        logger.error(f"Could not create tables: {e}")
        raise
