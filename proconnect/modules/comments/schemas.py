from pydantic import AliasChoices, BaseModel, Field
from typing import Optional
from datetime import datetime


class CommentAuthor(BaseModel):
    full_name: Optional[str] = None
    avatar_url: Optional[str] = None


class CommentCreate(BaseModel):
    content: str


class CommentResponse(BaseModel):
    id: str
    post_id: str
    user_id: str
    content: str
    created_at: datetime
    author: Optional[CommentAuthor] = Field(
        default=None, validation_alias=AliasChoices("profiles", "author")
    )


class CommentCreateResponse(BaseModel):
    message: str
    comment: CommentResponse
