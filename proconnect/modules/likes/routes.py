from fastapi import APIRouter, Depends
from proconnect.core.dependencies import get_current_user, get_query_cache, get_user_client
from proconnect.core.query_cache import QueryCache
from proconnect.modules.likes.schemas import LikeSummary
from proconnect.modules.likes.service import LikeService
from supabase import Client
from typing import Dict

router = APIRouter(prefix="/posts/{post_id}/likes", tags=["likes"])


def get_like_service(
    supabase: Client = Depends(get_user_client),
    cache: QueryCache = Depends(get_query_cache),
) -> LikeService:
    return LikeService(supabase, cache)


@router.get("", response_model=LikeSummary)
async def get_likes(
    post_id: str,
    user_data: Dict = Depends(get_current_user),
    service: LikeService = Depends(get_like_service),
):
    """Like count and whether the caller likes the post"""
    return service.get_summary(post_id, user_data["id"])


@router.post("/toggle", response_model=LikeSummary)
async def toggle_like(
    post_id: str,
    user_data: Dict = Depends(get_current_user),
    service: LikeService = Depends(get_like_service),
):
    """Like or unlike the post"""
    return service.toggle_like(post_id, user_data["id"])
