from pydantic import BaseModel
from typing import List, Optional

from proconnect.modules.auth.schemas import SessionResponse
from proconnect.modules.posts.schemas import PostResponse
from proconnect.modules.profiles.schemas import ProfileResponse


class PostCard(PostResponse):
    like_count: int = 0
    liked_by_me: bool = False
    comment_count: int = 0
    is_owner: bool = False


class Composer(BaseModel):
    avatar_url: Optional[str] = None
    avatar_fallback: str = "U"


class HomePage(BaseModel):
    navbar: SessionResponse
    composer: Composer
    feed: List[PostCard]


class ProfilePage(BaseModel):
    navbar: SessionResponse
    profile: ProfileResponse
    is_own_profile: bool
    post_count: int
    posts: List[PostCard]
