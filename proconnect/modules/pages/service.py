"""
Page views: the Index (feed) page and the Profile page.

Every read goes through the same services, and therefore the same cache keys,
as the individual endpoints, so a mutation invalidates the pages as well.
"""

from supabase import Client
from typing import Dict, List

from proconnect.core.query_cache import QueryCache
from proconnect.modules.auth.schemas import SessionResponse
from proconnect.modules.comments.service import CommentService
from proconnect.modules.likes.service import LikeService
from proconnect.modules.pages.schemas import Composer, HomePage, PostCard, ProfilePage
from proconnect.modules.posts.schemas import PostResponse
from proconnect.modules.posts.service import PostService
from proconnect.modules.profiles.service import ProfileService


class PageService:
    def __init__(self, supabase: Client, cache: QueryCache):
        self.profiles = ProfileService(supabase, cache)
        self.posts = PostService(supabase, cache, storage=self.profiles.storage)
        self.likes = LikeService(supabase, cache)
        self.comments = CommentService(supabase, cache)

    def post_cards(self, posts: List[PostResponse], user_id: str) -> List[PostCard]:
        cards = []
        for post in posts:
            likes = self.likes.list_likes(post.id)
            cards.append(PostCard(
                **post.model_dump(),
                like_count=len(likes),
                liked_by_me=any(like["user_id"] == user_id for like in likes),
                comment_count=len(self.comments.list_comments(post.id)),
                is_owner=post.user_id == user_id,
            ))
        return cards

    def home(self, user_data: Dict, limit: int, offset: int = 0) -> HomePage:
        user_id = user_data["id"]
        profile = self.profiles.find_profile(user_id)
        return HomePage(
            navbar=SessionResponse.from_user(user_data, profile),
            composer=Composer(
                avatar_url=profile.avatar_url if profile else None,
                avatar_fallback=profile.avatar_fallback if profile else "U",
            ),
            feed=self.post_cards(self.posts.list_feed(limit=limit, offset=offset), user_id),
        )

    def profile(self, user_data: Dict, user_id: str) -> ProfilePage:
        viewer_id = user_data["id"]
        profile = self.profiles.get_profile(user_id)
        viewer_profile = profile if viewer_id == user_id else self.profiles.find_profile(viewer_id)
        posts = self.post_cards(self.posts.list_user_posts(user_id), viewer_id)
        return ProfilePage(
            navbar=SessionResponse.from_user(user_data, viewer_profile),
            profile=profile,
            is_own_profile=viewer_id == user_id,
            post_count=len(posts),
            posts=posts,
        )
