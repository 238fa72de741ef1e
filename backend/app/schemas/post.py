# backend/app/schemas/post.py
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict


class PostResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    size: int
    key: str
    url: str
    created_at: Optional[datetime] = None


class PostCreatedResponse(BaseModel):
    message: str
    post: PostResponse
