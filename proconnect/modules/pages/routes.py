from fastapi import APIRouter, Depends, Query
from proconnect.config import settings
from proconnect.core.dependencies import get_current_user, get_query_cache, get_user_client
from proconnect.core.query_cache import QueryCache
from proconnect.modules.pages.schemas import HomePage, ProfilePage
from proconnect.modules.pages.service import PageService
from supabase import Client
from typing import Dict

router = APIRouter(prefix="/pages", tags=["pages"])


def get_page_service(
    supabase: Client = Depends(get_user_client),
    cache: QueryCache = Depends(get_query_cache),
) -> PageService:
    return PageService(supabase, cache)


@router.get("/home", response_model=HomePage)
async def home_page(
    limit: int = Query(settings.feed_page_size, ge=1, le=100),
    offset: int = Query(0, ge=0),
    user_data: Dict = Depends(get_current_user),
    service: PageService = Depends(get_page_service),
):
    """Navbar, post composer and feed"""
    return service.home(user_data, limit=limit, offset=offset)


@router.get("/profile/{user_id}", response_model=ProfilePage)
async def profile_page(
    user_id: str,
    user_data: Dict = Depends(get_current_user),
    service: PageService = Depends(get_page_service),
):
    """Profile card and the user's posts"""
    return service.profile(user_data, user_id)
