"""Repository interfaces for kastalk domain.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the persistence layer.
"""

from kastalk.domain.repository.comment import CommentRepository
from kastalk.domain.repository.post import PostRepository
from kastalk.domain.repository.user import UserRepository
from kastalk.domain.repository.vote import VoteRepository

__all__ = [
    "UserRepository",
    "PostRepository",
    "CommentRepository",
    "VoteRepository",
]
