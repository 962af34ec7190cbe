from fastapi import APIRouter, Depends, File, Request, UploadFile
from proconnect.core.dependencies import get_current_user, get_query_cache, get_user_client
from proconnect.core.query_cache import QueryCache
from proconnect.modules.posts.routes import get_post_service
from proconnect.modules.posts.schemas import PostResponse
from proconnect.modules.posts.service import PostService, has_file
from proconnect.modules.profiles.schemas import ProfileResponse, ProfileUpdate, ProfileUpdateResponse
from proconnect.modules.profiles.service import ProfileService
from supabase import Client
from typing import List, Optional, Dict

router = APIRouter(prefix="/profiles", tags=["profiles"])

# the raw form is read because FastAPI turns an empty Form value into its default
PROFILE_FIELDS = ("full_name", "headline", "bio")


def get_profile_service(
    supabase: Client = Depends(get_user_client),
    cache: QueryCache = Depends(get_query_cache),
) -> ProfileService:
    return ProfileService(supabase, cache)


@router.put("/me", response_model=ProfileUpdateResponse)
async def update_my_profile(
    request: Request,
    avatar: Optional[UploadFile] = File(None),
    user_data: Dict = Depends(get_current_user),
    service: ProfileService = Depends(get_profile_service),
):
    """Edit own profile from form fields full_name, headline, bio and an optional avatar.

    Omitted fields keep their value; a field sent empty is cleared. A new avatar
    overwrites the old one.
    """
    form = await request.form()
    fields = {name: form[name] for name in PROFILE_FIELDS if isinstance(form.get(name), str)}
    profile = await service.update_profile(
        user_data["id"],
        ProfileUpdate(**fields),
        avatar if has_file(avatar) else None,
    )
    return ProfileUpdateResponse(message="Profile updated successfully!", profile=profile)


@router.get("/{user_id}", response_model=ProfileResponse)
async def get_profile(
    user_id: str,
    user_data: Dict = Depends(get_current_user),
    service: ProfileService = Depends(get_profile_service),
):
    """Get profile by user ID"""
    return service.get_profile(user_id)


@router.get("/{user_id}/posts", response_model=List[PostResponse])
async def list_profile_posts(
    user_id: str,
    user_data: Dict = Depends(get_current_user),
    service: PostService = Depends(get_post_service),
):
    """Posts of one user, newest first"""
    return service.list_user_posts(user_id)
