from fastapi import APIRouter, Depends
from proconnect.config import settings
from proconnect.modules.auth.schemas import (
    LoginRequest, RegisterRequest, TokenResponse, RegisterResponse,
    LogoutResponse, SessionResponse
)
from proconnect.modules.auth.service import AuthService
from proconnect.core.dependencies import get_access_token, get_auth_service, get_current_user
from proconnect.modules.profiles.routes import get_profile_service
from proconnect.modules.profiles.service import ProfileService
from typing import Dict

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register", response_model=RegisterResponse, status_code=201)
async def register(
    register_data: RegisterRequest,
    service: AuthService = Depends(get_auth_service)
):
    """Register a new user"""
    return service.register(register_data)


@router.post("/login", response_model=TokenResponse)
async def login(
    login_data: LoginRequest,
    service: AuthService = Depends(get_auth_service)
):
    """Login and get access token"""
    return service.login(login_data)


@router.post("/logout", response_model=LogoutResponse)
async def logout(
    token: str = Depends(get_access_token),
    service: AuthService = Depends(get_auth_service)
):
    """Sign out and send the client back to the login page"""
    service.logout(token)
    return LogoutResponse(message="Signed out", redirect_to=settings.login_path)


@router.get("/me", response_model=SessionResponse)
async def get_session(
    current_user: Dict = Depends(get_current_user),
    profiles: ProfileService = Depends(get_profile_service),
):
    """Signed-in user with the profile bits the navbar shows."""
    return SessionResponse.from_user(current_user, profiles.find_profile(current_user["id"]))
