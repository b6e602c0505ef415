"""Domain value objects for kastalk.

Value objects are immutable and defined by their values, not identity.
They encapsulate validation rules and business logic.
"""

from enum import Enum
from uuid import UUID

from pydantic import field_validator, model_validator

from kastalk.domain.value.common import RootValueObject, ValueObject
from kastalk.domain.value.identifiers import CommentId, PostId

# Threads are at most three levels deep: comment -> reply -> reply-to-reply
MAX_COMMENT_LEVEL = 2


class VoteSign(int, Enum):
    """Signed weight of a vote."""

    UP = 1
    DOWN = -1


class VotableType(str, Enum):
    """Type of entity that can be voted on."""

    POST = "post"
    COMMENT = "comment"


class MediaKind(str, Enum):
    """Kind of media attached to a post."""

    IMAGE = "image"
    VIDEO = "video"


class WalletAddress(RootValueObject[str]):
    """Wallet address supplied by the identity source.

    Addresses are opaque strings. They are normalized here (whitespace
    stripped, lowercased) so every lookup and uniqueness check agrees on
    a single spelling.
    """

    @field_validator("root")
    @classmethod
    def normalize_address(cls, v: str) -> str:
        """Strip and lowercase the address, rejecting empty values."""
        v = v.strip().lower()
        if len(v) < 1 or len(v) > 255:
            raise ValueError("Wallet address must be 1-255 characters")
        return v


class Media(ValueObject):
    """Media reference returned by the media store."""

    url: str
    kind: MediaKind

    @field_validator("url")
    @classmethod
    def validate_url_present(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Media URL must not be empty")
        return v


class VoteTarget(ValueObject):
    """The post or comment a vote applies to.

    Exactly one of post_id / comment_id is set.
    """

    post_id: PostId | None = None
    comment_id: CommentId | None = None

    @model_validator(mode="after")
    def validate_single_target(self) -> "VoteTarget":
        """Ensure exactly one target is referenced."""
        if (self.post_id is None) == (self.comment_id is None):
            raise ValueError("Exactly one of post_id or comment_id must be set")
        return self

    @classmethod
    def post(cls, post_id: PostId) -> "VoteTarget":
        return cls(post_id=post_id)

    @classmethod
    def comment(cls, comment_id: CommentId) -> "VoteTarget":
        return cls(comment_id=comment_id)

    @property
    def type(self) -> VotableType:
        return VotableType.POST if self.post_id is not None else VotableType.COMMENT

    @property
    def id(self) -> UUID:
        """ID of the referenced post or comment."""
        return self.post_id if self.post_id is not None else self.comment_id  # type: ignore[return-value]

    def __str__(self) -> str:
        return f"{self.type.value}:{self.id}"
