"""PostgreSQL repository implementations."""

from kastalk.persistence.repository.comment import PostgresCommentRepository
from kastalk.persistence.repository.post import PostgresPostRepository
from kastalk.persistence.repository.user import PostgresUserRepository
from kastalk.persistence.repository.vote import PostgresVoteRepository

__all__ = [
    "PostgresUserRepository",
    "PostgresPostRepository",
    "PostgresCommentRepository",
    "PostgresVoteRepository",
]
