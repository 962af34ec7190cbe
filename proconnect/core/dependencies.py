"""
Core dependencies for session lookup, the user-scoped Supabase client and the query cache
"""

from fastapi import Depends, HTTPException, Security, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from proconnect.config import settings
from proconnect.core.query_cache import QueryCache
from proconnect.database.supabase_client import SupabaseClient, get_supabase
from proconnect.modules.auth.service import AuthService
from supabase import Client
from typing import Iterator, Optional
import logging

logger = logging.getLogger(__name__)

security = HTTPBearer(auto_error=False)

query_cache = QueryCache(
    ttl_seconds=settings.query_cache_ttl_seconds,
    max_entries=settings.query_cache_max_entries,
)


def get_query_cache() -> QueryCache:
    return query_cache


def get_auth_service(supabase: Client = Depends(get_supabase)) -> AuthService:
    return AuthService(supabase)


def get_access_token(
    credentials: Optional[HTTPAuthorizationCredentials] = Security(security),
) -> str:
    """Bearer token of the request; without one the client is sent to the login page."""
    if credentials is None or not credentials.credentials:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer", "Location": settings.login_path},
        )
    return credentials.credentials


def get_current_user(
    token: str = Depends(get_access_token),
    auth_service: AuthService = Depends(get_auth_service),
) -> dict:
    """Current user info from the access token"""
    try:
        return auth_service.get_current_user(token)
    except HTTPException as e:
        if e.status_code == status.HTTP_401_UNAUTHORIZED:
            raise HTTPException(
                status_code=e.status_code,
                detail=e.detail,
                headers={"WWW-Authenticate": "Bearer", "Location": settings.login_path},
            )
        raise


def get_user_client(token: str = Depends(get_access_token)) -> Iterator[Client]:
    """Supabase client carrying the caller's JWT, so RLS policies apply to every query.

    The client lives for one request; its HTTP sessions are closed afterwards.
    """
    client = SupabaseClient.for_user(token)
    try:
        yield client
    finally:
        SupabaseClient.close(client)
