from supabase import Client
from fastapi import HTTPException
from typing import List
import logging

from proconnect.core.errors import service_error
from proconnect.core.query_cache import QueryCache
from proconnect.modules.comments.schemas import CommentResponse

logger = logging.getLogger(__name__)

COMMENT_SELECT = "*, profiles:user_id(full_name, avatar_url)"


class CommentService:
    def __init__(self, supabase: Client, cache: QueryCache):
        self.supabase = supabase
        self.cache = cache

    def list_comments(self, post_id: str) -> List[CommentResponse]:
        """Comments of a post, oldest first"""
        def load():
            try:
                result = self.supabase.table("comments")\
                    .select(COMMENT_SELECT)\
                    .eq("post_id", post_id)\
                    .order("created_at", desc=False)\
                    .execute()
            except Exception as e:
                raise service_error(e, "Failed to load comments")
            return result.data or []

        rows = self.cache.fetch(("comments", post_id), load)
        return [CommentResponse(**row) for row in rows]

    def add_comment(self, post_id: str, user_id: str, content: str) -> CommentResponse:
        text = (content or "").strip()
        if not text:
            raise HTTPException(status_code=400, detail="Comment cannot be empty")

        try:
            result = self.supabase.table("comments").insert({
                "user_id": user_id,
                "post_id": post_id,
                "content": text,
            }).execute()
        except Exception as e:
            raise service_error(e, "Failed to add comment")

        if not result.data:
            raise HTTPException(status_code=500, detail="Failed to add comment")

        logger.info(f"User {user_id} commented on post {post_id}")
        self.cache.invalidate(("comments", post_id))
        return CommentResponse(**result.data[0])
