"""Mappers for converting between database rows and domain models.

Since we're using Pydantic domain models (immutable), we use manual mapping
instead of SQLAlchemy's classical imperative mapping.
"""

from typing import Any, Dict
from uuid import UUID

from kastalk.domain.model import Comment, Post, User, Vote
from kastalk.domain.value import (
    CommentId,
    Media,
    MediaKind,
    PostId,
    UserId,
    VoteId,
    VoteSign,
    WalletAddress,
)


def _uuid(value: Any) -> UUID:
    return UUID(value) if isinstance(value, str) else value


def _optional_uuid(value: Any) -> UUID | None:
    return _uuid(value) if value is not None else None


def row_to_user(row: Dict[str, Any]) -> User:
    """Convert database row to User domain model.

    Args:
        row: Database row as dict

    Returns:
        User domain model
    """
    return User(
        id=UserId(_uuid(row["id"])),
        wallet_address=WalletAddress(row["wallet_address"]),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def user_to_dict(user: User) -> Dict[str, Any]:
    """Convert User domain model to database dict."""
    return user.model_dump()


def row_to_post(row: Dict[str, Any]) -> Post:
    """Convert database row to Post domain model.

    Args:
        row: Database row as dict

    Returns:
        Post domain model
    """
    media = None
    if row.get("media_url"):
        media = Media(url=row["media_url"], kind=MediaKind(row["media_kind"]))

    return Post(
        id=PostId(_uuid(row["id"])),
        title=row["title"],
        content=row["content"],
        media=media,
        author_id=UserId(_uuid(row["author_id"])),
        author_wallet_address=WalletAddress(row["author_wallet_address"]),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def post_to_dict(post: Post) -> Dict[str, Any]:
    """Convert Post domain model to database dict.

    The nested media value object is flattened into two columns.
    """
    post_dict = post.model_dump(exclude={"media"})
    post_dict["media_url"] = post.media.url if post.media else None
    post_dict["media_kind"] = post.media.kind.value if post.media else None
    return post_dict


def row_to_comment(row: Dict[str, Any]) -> Comment:
    """Convert database row to Comment domain model.

    Args:
        row: Database row as dict

    Returns:
        Comment domain model
    """
    parent_id = _optional_uuid(row.get("parent_id"))
    return Comment(
        id=CommentId(_uuid(row["id"])),
        post_id=PostId(_uuid(row["post_id"])),
        author_id=UserId(_uuid(row["author_id"])),
        author_wallet_address=WalletAddress(row["author_wallet_address"]),
        content=row["content"],
        parent_id=CommentId(parent_id) if parent_id else None,
        level=row["level"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def comment_to_dict(comment: Comment) -> Dict[str, Any]:
    """Convert Comment domain model to database dict."""
    return comment.model_dump()


def row_to_vote(row: Dict[str, Any]) -> Vote:
    """Convert database row to Vote domain model.

    Args:
        row: Database row as dict

    Returns:
        Vote domain model
    """
    post_id = _optional_uuid(row.get("post_id"))
    comment_id = _optional_uuid(row.get("comment_id"))
    return Vote(
        id=VoteId(_uuid(row["id"])),
        user_id=UserId(_uuid(row["user_id"])),
        post_id=PostId(post_id) if post_id else None,
        comment_id=CommentId(comment_id) if comment_id else None,
        value=VoteSign(row["value"]),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def vote_to_dict(vote: Vote) -> Dict[str, Any]:
    """Convert Vote domain model to database dict."""
    vote_dict = vote.model_dump()
    vote_dict["value"] = vote.value.value
    return vote_dict
