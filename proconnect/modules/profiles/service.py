from supabase import Client
from fastapi import HTTPException, UploadFile
from typing import Optional, Dict, Any
import logging

from proconnect.config import settings
from proconnect.core.errors import service_error
from proconnect.core.query_cache import QueryCache
from proconnect.core.storage import MediaStorage, file_extension, read_image
from proconnect.modules.profiles.schemas import ProfileResponse, ProfileUpdate

logger = logging.getLogger(__name__)


class ProfileService:
    def __init__(self, supabase: Client, cache: QueryCache, storage: Optional[MediaStorage] = None):
        self.supabase = supabase
        self.cache = cache
        self.storage = storage or MediaStorage(supabase)

    def _load_profile(self, user_id: str) -> Optional[Dict[str, Any]]:
        try:
            result = self.supabase.table("profiles")\
                .select("*")\
                .eq("id", user_id)\
                .maybe_single()\
                .execute()
        except Exception as e:
            raise service_error(e, "Failed to load profile")
        # maybe_single().execute() returns None instead of an empty response on newer clients
        return result.data if result else None

    def find_profile(self, user_id: str) -> Optional[ProfileResponse]:
        row = self.cache.fetch(("profile", user_id), lambda: self._load_profile(user_id))
        return ProfileResponse(**row) if row else None

    def get_profile(self, user_id: str) -> ProfileResponse:
        """Get profile by user ID"""
        profile = self.find_profile(user_id)
        if profile is None:
            raise HTTPException(status_code=404, detail="Profile not found")
        return profile

    async def update_profile(
        self,
        user_id: str,
        profile_data: ProfileUpdate,
        avatar: Optional[UploadFile] = None,
    ) -> ProfileResponse:
        """Update the caller's profile, replacing the avatar when a new image is given"""
        update_data = profile_data.model_dump(exclude_unset=True)

        if avatar is not None:
            content = await read_image(avatar)
            path = f"{user_id}/avatar.{file_extension(avatar.filename)}"
            update_data["avatar_url"] = self.storage.upload(
                settings.avatars_bucket, path, content, avatar.content_type, upsert=True
            )

        if not update_data:
            return self.get_profile(user_id)

        try:
            result = self.supabase.table("profiles")\
                .update(update_data)\
                .eq("id", user_id)\
                .execute()
        except Exception as e:
            raise service_error(e, "Failed to update profile")

        if not result.data:
            raise HTTPException(status_code=404, detail="Profile not found")

        logger.info(f"Updated profile {user_id} ({', '.join(sorted(update_data))})")
        self.cache.invalidate(("profile", user_id))
        self.cache.invalidate(("user-posts", user_id))
        # feed cards and comment threads embed the author's name and avatar
        self.cache.invalidate(("posts",))
        self.cache.invalidate(("comments",))
        return ProfileResponse(**result.data[0])
