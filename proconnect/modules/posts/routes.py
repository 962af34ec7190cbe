from fastapi import APIRouter, Depends, File, Form, Query, UploadFile
from proconnect.config import settings
from proconnect.core.dependencies import get_current_user, get_query_cache, get_user_client
from proconnect.core.query_cache import QueryCache
from proconnect.modules.posts.schemas import (
    PostResponse, PostUpdate, PostMutationResponse, MessageResponse
)
from proconnect.modules.posts.service import PostService
from supabase import Client
from typing import List, Optional, Dict

router = APIRouter(prefix="/posts", tags=["posts"])


def get_post_service(
    supabase: Client = Depends(get_user_client),
    cache: QueryCache = Depends(get_query_cache),
) -> PostService:
    return PostService(supabase, cache)


@router.get("", response_model=List[PostResponse])
async def list_feed(
    limit: int = Query(settings.feed_page_size, ge=1, le=100),
    offset: int = Query(0, ge=0),
    user_data: Dict = Depends(get_current_user),
    service: PostService = Depends(get_post_service),
):
    """Feed of all posts, newest first"""
    return service.list_feed(limit=limit, offset=offset)


@router.post("", response_model=PostMutationResponse, status_code=201)
async def create_post(
    content: Optional[str] = Form(None),
    image: Optional[UploadFile] = File(None),
    user_data: Dict = Depends(get_current_user),
    service: PostService = Depends(get_post_service),
):
    """Create a post with text, an image, or both"""
    post = await service.create_post(user_data["id"], content, image)
    return PostMutationResponse(message="Post created successfully!", post=post)


@router.put("/{post_id}", response_model=PostMutationResponse)
async def update_post(
    post_id: str,
    post_data: PostUpdate,
    user_data: Dict = Depends(get_current_user),
    service: PostService = Depends(get_post_service),
):
    """Edit own post"""
    post = service.update_post(user_data["id"], post_id, post_data.content)
    return PostMutationResponse(message="Post updated successfully", post=post)


@router.delete("/{post_id}", response_model=MessageResponse)
async def delete_post(
    post_id: str,
    confirm: bool = False,
    user_data: Dict = Depends(get_current_user),
    service: PostService = Depends(get_post_service),
):
    """Delete own post. Requires ?confirm=true."""
    service.delete_post(user_data["id"], post_id, confirm=confirm)
    return MessageResponse(message="Post deleted successfully")
