from pydantic import BaseModel
from typing import Optional
from datetime import datetime


def avatar_initial(full_name: Optional[str]) -> str:
    """Fallback avatar letter: first character of the name, or "U"."""
    return full_name[0] if full_name else "U"


class ProfileResponse(BaseModel):
    id: str
    full_name: Optional[str] = None
    headline: Optional[str] = None
    bio: Optional[str] = None
    avatar_url: Optional[str] = None
    created_at: Optional[datetime] = None

    @property
    def avatar_fallback(self) -> str:
        return avatar_initial(self.full_name)

    class Config:
        from_attributes = True


class ProfileUpdate(BaseModel):
    full_name: Optional[str] = None
    headline: Optional[str] = None
    bio: Optional[str] = None


class ProfileUpdateResponse(BaseModel):
    message: str
    profile: ProfileResponse
