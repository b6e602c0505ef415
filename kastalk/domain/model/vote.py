"""Vote entity.

A vote is a signed preference by one user on exactly one post or comment.
"""

from datetime import datetime

from pydantic import Field, model_validator

from kastalk.domain.model.common import DomainModel
from kastalk.domain.value import CommentId, PostId, UserId, VoteId, VoteSign, VoteTarget


class Vote(DomainModel):
    """Vote entity.

    Business rules:
    - Exactly one of post_id / comment_id is set
    - One vote per user per target (enforced by partial unique indexes)
    - Repeating the same sign removes the vote, the opposite sign flips it
    """

    id: VoteId
    user_id: UserId
    post_id: PostId | None = None
    comment_id: CommentId | None = None
    value: VoteSign = VoteSign.UP
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)

    @model_validator(mode="after")
    def validate_single_target(self) -> "Vote":
        if (self.post_id is None) == (self.comment_id is None):
            raise ValueError("Vote must target exactly one of post or comment")
        return self

    @property
    def target(self) -> VoteTarget:
        return VoteTarget(post_id=self.post_id, comment_id=self.comment_id)
