from supabase import Client
from typing import Any, Dict, List, Optional
import logging

from proconnect.core.errors import service_error
from proconnect.core.query_cache import QueryCache
from proconnect.modules.likes.schemas import LikeResponse, LikeSummary

logger = logging.getLogger(__name__)


class LikeService:
    def __init__(self, supabase: Client, cache: QueryCache):
        self.supabase = supabase
        self.cache = cache

    def list_likes(self, post_id: str) -> List[Dict[str, Any]]:
        def load():
            try:
                result = self.supabase.table("likes")\
                    .select("*")\
                    .eq("post_id", post_id)\
                    .execute()
            except Exception as e:
                raise service_error(e, "Failed to load likes")
            return result.data or []

        return self.cache.fetch(("likes", post_id), load)

    def get_summary(self, post_id: str, user_id: Optional[str]) -> LikeSummary:
        likes = self.list_likes(post_id)
        return LikeSummary(
            post_id=post_id,
            count=len(likes),
            liked=any(like["user_id"] == user_id for like in likes),
            likes=[LikeResponse(**like) for like in likes],
        )

    def toggle_like(self, post_id: str, user_id: str) -> LikeSummary:
        """Unlike when the user already likes the post, like it otherwise"""
        existing = next(
            (like for like in self.list_likes(post_id) if like["user_id"] == user_id),
            None,
        )
        try:
            if existing:
                self.supabase.table("likes")\
                    .delete()\
                    .eq("id", existing["id"])\
                    .execute()
                logger.info(f"User {user_id} unliked post {post_id}")
            else:
                self.supabase.table("likes").insert({
                    "user_id": user_id,
                    "post_id": post_id,
                }).execute()
                logger.info(f"User {user_id} liked post {post_id}")
        except Exception as e:
            raise service_error(e, "Failed to update like")
        finally:
            self.cache.invalidate(("likes", post_id))

        return self.get_summary(post_id, user_id)
