"""Post aggregate root.

Posts are the top-level content unit; comments and votes hang off them.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from kastalk.domain.model.common import DomainModel
from kastalk.domain.value import Media, PostId, UserId, WalletAddress


class Post(DomainModel):
    """Post aggregate root.

    Owned exclusively by its author. Deleting a post removes its comments
    and every vote on the post or on those comments.
    """

    id: PostId
    title: str = Field(min_length=1, max_length=300)
    content: str = Field(min_length=1, max_length=10000)
    media: Optional[Media] = None
    author_id: UserId
    author_wallet_address: WalletAddress
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)
