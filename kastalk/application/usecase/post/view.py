"""Post response model shared by the post use cases."""

from datetime import datetime

from pydantic import BaseModel

from kastalk.domain.service import PostView
from kastalk.domain.value import MediaKind


class PostItem(BaseModel):
    """Post with its aggregates."""

    post_id: str
    title: str
    content: str
    media_url: str | None
    media_kind: MediaKind | None
    author_id: str
    author_wallet_address: str
    vote_count: int
    comment_count: int
    user_sign: int | None
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_view(cls, view: PostView) -> "PostItem":
        post = view.post
        return cls(
            post_id=str(post.id),
            title=post.title,
            content=post.content,
            media_url=post.media.url if post.media else None,
            media_kind=post.media.kind if post.media else None,
            author_id=str(post.author_id),
            author_wallet_address=post.author_wallet_address.root,
            vote_count=view.vote_count,
            comment_count=view.comment_count,
            user_sign=view.user_sign.value if view.user_sign else None,
            created_at=post.created_at,
            updated_at=post.updated_at,
        )
