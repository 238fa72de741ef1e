# backend/app/schemas/file_record.py
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict


class FileOwner(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str


class FileRecordResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    owner_id: int
    name: str
    size: int
    key: str
    url: str
    created_at: Optional[datetime] = None


class FileRecordWithOwner(FileRecordResponse):
    owner: FileOwner


class FileUploadResponse(BaseModel):
    message: str
    file: FileRecordResponse
