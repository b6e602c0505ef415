"""Domain services."""

from .base import Service
from .comment_service import CommentNode, CommentService
from .post_service import PostService, PostView
from .user_service import UserService
from .vote_service import Aggregate, VoteResult, VoteService

__all__ = [
    "Aggregate",
    "CommentNode",
    "CommentService",
    "PostService",
    "PostView",
    "Service",
    "UserService",
    "VoteResult",
    "VoteService",
]
