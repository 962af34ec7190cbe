from pydantic import AliasChoices, BaseModel, Field, field_validator
from typing import Optional
from datetime import datetime


class AuthorSummary(BaseModel):
    full_name: Optional[str] = None
    avatar_url: Optional[str] = None
    headline: Optional[str] = None


class PostUpdate(BaseModel):
    content: str


class PostResponse(BaseModel):
    id: str
    user_id: str
    content: str = ""
    image_url: Optional[str] = None
    created_at: datetime
    # filled from the PostgREST embed "profiles:user_id(...)"
    author: Optional[AuthorSummary] = Field(
        default=None, validation_alias=AliasChoices("profiles", "author")
    )

    @field_validator("content", mode="before")
    @classmethod
    def _null_content(cls, value):
        return value or ""

    class Config:
        from_attributes = True


class PostMutationResponse(BaseModel):
    message: str
    post: PostResponse


class MessageResponse(BaseModel):
    message: str
