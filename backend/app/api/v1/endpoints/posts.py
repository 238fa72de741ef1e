# backend/app/api/v1/endpoints/posts.py
from typing import List

from fastapi import APIRouter, Depends, status

from backend.app.api import deps
from backend.app.schemas.post import PostCreatedResponse, PostResponse
from backend.app.schemas.user import MessageResponse
from backend.app.services.posts import PostGallery
from backend.app.storage import UploadPayload

router = APIRouter()


@router.post("", response_model=PostCreatedResponse, status_code=status.HTTP_201_CREATED)
async def create_post(
        payload: UploadPayload = Depends(deps.read_upload),
        gallery: PostGallery = Depends(deps.get_post_gallery),
):
    post = await gallery.create(payload)
    return {"message": "File uploaded", "post": post}


@router.get("", response_model=List[PostResponse])
async def list_posts(gallery: PostGallery = Depends(deps.get_post_gallery)):
    return await gallery.list()


@router.delete("/{post_id}", response_model=MessageResponse)
async def delete_post(
        post_id: int,
        gallery: PostGallery = Depends(deps.get_post_gallery),
):
    await gallery.delete(post_id)
    return {"message": "Post deleted successfully"}
