from supabase import Client
from fastapi import HTTPException, UploadFile
from typing import List, Optional
import logging
import time

from proconnect.config import settings
from proconnect.core.errors import service_error
from proconnect.core.query_cache import QueryCache
from proconnect.core.storage import MediaStorage, file_extension, read_image
from proconnect.modules.posts.schemas import PostResponse

logger = logging.getLogger(__name__)

POST_SELECT = "*, profiles:user_id(full_name, avatar_url, headline)"

DELETE_CONFIRMATION = "Are you sure you want to delete this post? This action cannot be undone."


def has_file(file: Optional[UploadFile]) -> bool:
    # browsers submit an empty part with no filename when nothing was picked
    return file is not None and bool(file.filename)


class PostService:
    def __init__(self, supabase: Client, cache: QueryCache, storage: Optional[MediaStorage] = None):
        self.supabase = supabase
        self.cache = cache
        self.storage = storage or MediaStorage(supabase)

    def list_feed(self, limit: int = 20, offset: int = 0) -> List[PostResponse]:
        """Feed: every post, newest first"""
        def load():
            try:
                result = self.supabase.table("posts")\
                    .select(POST_SELECT)\
                    .order("created_at", desc=True)\
                    .limit(limit)\
                    .offset(offset)\
                    .execute()
            except Exception as e:
                raise service_error(e, "Failed to load posts")
            return result.data or []

        rows = self.cache.fetch(("posts", limit, offset), load)
        return [PostResponse(**row) for row in rows]

    def list_user_posts(self, user_id: str) -> List[PostResponse]:
        """All posts of one user, newest first"""
        def load():
            try:
                result = self.supabase.table("posts")\
                    .select(POST_SELECT)\
                    .eq("user_id", user_id)\
                    .order("created_at", desc=True)\
                    .execute()
            except Exception as e:
                raise service_error(e, "Failed to load posts")
            return result.data or []

        rows = self.cache.fetch(("user-posts", user_id), load)
        return [PostResponse(**row) for row in rows]

    async def create_post(self, user_id: str, content: Optional[str], image: Optional[UploadFile] = None) -> PostResponse:
        """Create a post from text and/or an image"""
        text = (content or "").strip()
        if not has_file(image):
            image = None
        if not text and image is None:
            raise HTTPException(status_code=400, detail="Please add some content or an image")

        image_url = None
        if image is not None:
            image_content = await read_image(image)
            path = f"{user_id}/{int(time.time() * 1000)}.{file_extension(image.filename)}"
            image_url = self.storage.upload(
                settings.post_images_bucket, path, image_content, image.content_type
            )

        try:
            result = self.supabase.table("posts").insert({
                "user_id": user_id,
                "content": text,
                "image_url": image_url,
            }).execute()
        except Exception as e:
            raise service_error(e, "Failed to create post")

        if not result.data:
            raise HTTPException(status_code=500, detail="Failed to create post")

        post = PostResponse(**result.data[0])
        logger.info(f"User {user_id} created post {post.id}")
        self._invalidate(user_id)
        return post

    def update_post(self, user_id: str, post_id: str, content: str) -> PostResponse:
        """Edit the text of one of the caller's posts"""
        text = (content or "").strip()
        if not text:
            raise HTTPException(status_code=400, detail="Post content cannot be empty")

        try:
            result = self.supabase.table("posts")\
                .update({"content": text})\
                .eq("id", post_id)\
                .eq("user_id", user_id)\
                .execute()
        except Exception as e:
            raise service_error(e, "Failed to update post", use_fallback_message=True)

        if not result.data:
            raise HTTPException(status_code=404, detail="Post not found")

        logger.info(f"User {user_id} updated post {post_id}")
        self._invalidate(user_id)
        return PostResponse(**result.data[0])

    def delete_post(self, user_id: str, post_id: str, confirm: bool = False) -> bool:
        """Delete one of the caller's posts; the caller has to confirm first"""
        if not confirm:
            raise HTTPException(status_code=400, detail=DELETE_CONFIRMATION)

        try:
            result = self.supabase.table("posts")\
                .delete()\
                .eq("id", post_id)\
                .eq("user_id", user_id)\
                .execute()
        except Exception as e:
            raise service_error(e, "Failed to delete post", use_fallback_message=True)

        if not result.data:
            raise HTTPException(status_code=404, detail="Post not found")

        logger.info(f"User {user_id} deleted post {post_id}")
        self._invalidate(user_id)
        self.cache.invalidate(("likes", post_id))
        self.cache.invalidate(("comments", post_id))
        return True

    def _invalidate(self, user_id: str) -> None:
        self.cache.invalidate(("posts",))
        self.cache.invalidate(("user-posts", user_id))
