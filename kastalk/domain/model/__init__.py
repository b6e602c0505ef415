"""Domain model entities for kastalk."""

from kastalk.domain.model.comment import Comment
from kastalk.domain.model.post import Post
from kastalk.domain.model.user import User
from kastalk.domain.model.vote import Vote

__all__ = [
    "User",
    "Post",
    "Comment",
    "Vote",
]
