# backend/app/models/file_record.py
from sqlalchemy import BigInteger, Column, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from backend.app.db.base import Base


class FileRecord(Base):
    __tablename__ = "files"

    id = Column(Integer, primary_key=True, index=True)

    # unique=True is what actually guarantees one file per user; the
    # read check in the service only gives the friendlier error first
    owner_id = Column(
        Integer,
        ForeignKey("users.id"),
        unique=True,
        index=True,
        nullable=False,
    )

    name = Column(String(255), nullable=False)  # Name the user uploaded
    size = Column(BigInteger, nullable=False)  # Size in bytes
    key = Column(String(512), nullable=False)  # Locator in the blob sink
    url = Column(String(1024), nullable=False, default="")

    created_at = Column(DateTime(timezone=True), server_default=func.now())

    owner = relationship("User", back_populates="file")
