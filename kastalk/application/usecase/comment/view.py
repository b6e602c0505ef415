"""Comment response model shared by the comment use cases."""

from datetime import datetime

from pydantic import BaseModel, Field

from kastalk.domain.service import CommentNode


class CommentItem(BaseModel):
    """Comment with aggregates and its nested replies."""

    comment_id: str
    post_id: str
    parent_id: str | None
    level: int
    author_id: str
    author_wallet_address: str
    content: str
    vote_count: int
    reply_count: int
    user_sign: int | None
    created_at: datetime
    updated_at: datetime
    replies: list["CommentItem"] = Field(default_factory=list)

    @classmethod
    def from_node(cls, node: CommentNode) -> "CommentItem":
        comment = node.comment
        return cls(
            comment_id=str(comment.id),
            post_id=str(comment.post_id),
            parent_id=str(comment.parent_id) if comment.parent_id else None,
            level=comment.level,
            author_id=str(comment.author_id),
            author_wallet_address=comment.author_wallet_address.root,
            content=comment.content,
            vote_count=node.vote_count,
            reply_count=node.reply_count,
            user_sign=node.user_sign.value if node.user_sign else None,
            created_at=comment.created_at,
            updated_at=comment.updated_at,
            replies=[cls.from_node(reply) for reply in node.replies],
        )
