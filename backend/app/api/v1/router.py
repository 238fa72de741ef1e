# backend/app/api/v1/router.py
from fastapi import APIRouter

from backend.app.api.v1.endpoints import auth, files, posts, users

api_router = APIRouter()
api_router.include_router(auth.router, prefix="/auth", tags=["auth"])
api_router.include_router(users.router, tags=["users"])
api_router.include_router(files.router, prefix="/files", tags=["files"])
# Anonymous uploads, no ownership
api_router.include_router(posts.router, prefix="/posts", tags=["posts"])
