from pydantic import BaseModel
from typing import List, Optional
from datetime import datetime


class LikeResponse(BaseModel):
    id: str
    post_id: str
    user_id: str
    created_at: Optional[datetime] = None


class LikeSummary(BaseModel):
    post_id: str
    count: int
    liked: bool
    likes: List[LikeResponse] = []
