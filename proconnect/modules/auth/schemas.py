from pydantic import BaseModel, EmailStr, Field
from typing import Optional

from proconnect.modules.profiles.schemas import ProfileResponse


class LoginRequest(BaseModel):
    email: EmailStr
    password: str


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    refresh_token: Optional[str] = None
    expires_in: Optional[int] = None
    user_id: str
    email: str


class RegisterRequest(BaseModel):
    email: EmailStr
    password: str = Field(min_length=6)
    full_name: Optional[str] = None


class RegisterResponse(BaseModel):
    user_id: str
    email: str
    message: str


class LogoutResponse(BaseModel):
    message: str
    redirect_to: str


class SessionResponse(BaseModel):
    """What the navbar needs: who is signed in and how to show them."""
    id: str
    email: Optional[str] = None
    profile: Optional[ProfileResponse] = None
    display_name: str
    avatar_url: Optional[str] = None
    avatar_fallback: str
    profile_path: str

    @classmethod
    def from_user(cls, user_data: dict, profile: Optional[ProfileResponse]) -> "SessionResponse":
        full_name = profile.full_name if profile else None
        return cls(
            id=user_data["id"],
            email=user_data.get("email"),
            profile=profile,
            display_name=full_name or "User",
            avatar_url=profile.avatar_url if profile else None,
            avatar_fallback=profile.avatar_fallback if profile else "U",
            profile_path=f"/profile/{user_data['id']}",
        )
