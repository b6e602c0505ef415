"""Comment entity.

Comments form a tree rooted at a post, bounded to three levels:
top-level comment (0) -> reply (1) -> reply-to-reply (2).
"""

from datetime import datetime
from typing import Optional

from pydantic import Field, model_validator

from kastalk.domain.model.common import DomainModel
from kastalk.domain.value import (
    MAX_COMMENT_LEVEL,
    CommentId,
    PostId,
    UserId,
    WalletAddress,
)


class Comment(DomainModel):
    """Comment entity.

    Threading is managed through:
    - parent_id: Direct parent comment (None for top-level)
    - level: 0 for top-level, parent.level + 1 for replies

    The parent always belongs to the same post. That check needs the parent
    row, so it lives in CommentService rather than here.
    """

    id: CommentId
    post_id: PostId
    author_id: UserId
    author_wallet_address: WalletAddress
    content: str = Field(min_length=1, max_length=10000)
    parent_id: Optional[CommentId] = None
    level: int = Field(default=0, ge=0, le=MAX_COMMENT_LEVEL)
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)

    @model_validator(mode="after")
    def validate_level_matches_parent(self) -> "Comment":
        """Top-level comments have level 0; replies never do."""
        if (self.level == 0) != (self.parent_id is None):
            raise ValueError("level must be 0 exactly when parent_id is unset")
        return self
