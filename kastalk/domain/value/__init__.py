"""Domain value objects for kastalk."""

from kastalk.domain.value.identifiers import (
    CommentId,
    PostId,
    UserId,
    VoteId,
)
from kastalk.domain.value.types import (
    MAX_COMMENT_LEVEL,
    Media,
    MediaKind,
    VotableType,
    VoteSign,
    VoteTarget,
    WalletAddress,
)

__all__ = [
    # Identifiers
    "UserId",
    "PostId",
    "CommentId",
    "VoteId",
    # Types
    "MAX_COMMENT_LEVEL",
    "Media",
    "MediaKind",
    "VotableType",
    "VoteSign",
    "VoteTarget",
    "WalletAddress",
]
