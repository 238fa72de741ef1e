# backend/app/models/post.py
from sqlalchemy import BigInteger, Column, DateTime, Integer, String
from sqlalchemy.sql import func

from backend.app.db.base import Base


class Post(Base):
    """Anonymous upload, no owner."""

    __tablename__ = "posts"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    size = Column(BigInteger, nullable=False)
    key = Column(String(512), nullable=False)
    url = Column(String(1024), nullable=False, default="")

    created_at = Column(DateTime(timezone=True), server_default=func.now(), index=True)
