from fastapi import APIRouter, Depends
from proconnect.core.dependencies import get_current_user, get_query_cache, get_user_client
from proconnect.core.query_cache import QueryCache
from proconnect.modules.comments.schemas import CommentCreate, CommentResponse, CommentCreateResponse
from proconnect.modules.comments.service import CommentService
from supabase import Client
from typing import List, Dict

router = APIRouter(prefix="/posts/{post_id}/comments", tags=["comments"])


def get_comment_service(
    supabase: Client = Depends(get_user_client),
    cache: QueryCache = Depends(get_query_cache),
) -> CommentService:
    return CommentService(supabase, cache)


@router.get("", response_model=List[CommentResponse])
async def list_comments(
    post_id: str,
    user_data: Dict = Depends(get_current_user),
    service: CommentService = Depends(get_comment_service),
):
    """Comment thread of a post, oldest first"""
    return service.list_comments(post_id)


@router.post("", response_model=CommentCreateResponse, status_code=201)
async def add_comment(
    post_id: str,
    comment_data: CommentCreate,
    user_data: Dict = Depends(get_current_user),
    service: CommentService = Depends(get_comment_service),
):
    comment = service.add_comment(post_id, user_data["id"], comment_data.content)
    return CommentCreateResponse(message="Comment added", comment=comment)
