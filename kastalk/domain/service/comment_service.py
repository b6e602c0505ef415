"""Comment domain service (thread engine)."""

from collections import defaultdict
from dataclasses import dataclass, field
from datetime import datetime
from uuid import uuid4

import logfire
from sqlalchemy.exc import IntegrityError

from kastalk.domain.error import (
    ConflictError,
    DepthLimitExceededError,
    DomainError,
    InvalidInputError,
    NotAuthorizedError,
    NotFoundError,
)
from kastalk.domain.model.comment import Comment
from kastalk.domain.repository import CommentRepository, VoteRepository
from kastalk.domain.value import (
    MAX_COMMENT_LEVEL,
    CommentId,
    PostId,
    UserId,
    VoteSign,
)

from .base import Service
from .post_service import PostService
from .user_service import UserService


@dataclass
class CommentNode:
    """Node in a post's comment thread.

    Carries the comment, its derived counts, the viewer's vote and its
    direct replies (newest first).
    """

    comment: Comment
    vote_count: int = 0
    reply_count: int = 0
    user_sign: VoteSign | None = None
    replies: list["CommentNode"] = field(default_factory=list)


class CommentService(Service):
    """Domain service for comment operations."""

    def __init__(
        self,
        comment_repository: CommentRepository,
        vote_repository: VoteRepository,
        post_service: PostService,
        user_service: UserService,
    ) -> None:
        """Initialize comment service.

        Args:
            comment_repository: Comment repository
            vote_repository: Vote repository (aggregates and cascade)
            post_service: Post domain service
            user_service: User domain service
        """
        self.comment_repository = comment_repository
        self.vote_repository = vote_repository
        self.post_service = post_service
        self.user_service = user_service

    async def create_comment(
        self,
        post_id: PostId,
        author_id: UserId,
        content: str,
        parent_id: CommentId | None = None,
    ) -> CommentNode:
        """Create a comment on a post or reply to another comment.

        Args:
            post_id: Post ID
            author_id: Author user ID
            content: Comment text
            parent_id: Parent comment ID for replies (None for top-level)

        Returns:
            The created comment with zeroed counts

        Raises:
            NotFoundError: If the post, author or parent does not exist
            InvalidInputError: If content is empty or the parent is on another post
            DepthLimitExceededError: If the reply would be nested too deep
            ConflictError: If the insert failed for any other reason
        """
        with logfire.span(
            "comment_service.create_comment",
            post_id=str(post_id),
            author_id=str(author_id),
            parent_id=str(parent_id) if parent_id else None,
        ):
            if not content or not content.strip():
                raise InvalidInputError("Comment content must not be empty")
            if len(content) > 10000:
                raise InvalidInputError("Comment content must be at most 10000 characters")

            await self.post_service.get_post(post_id)
            author = await self.user_service.get_by_id(author_id)

            level = 0
            if parent_id:
                parent = await self.comment_repository.find_by_id(parent_id)
                if not parent:
                    logfire.warn(
                        "Parent comment not found",
                        parent_id=str(parent_id),
                        post_id=str(post_id),
                    )
                    raise NotFoundError("Comment", str(parent_id))
                if parent.post_id != post_id:
                    logfire.warn(
                        "Parent comment does not belong to post",
                        parent_id=str(parent_id),
                        parent_post_id=str(parent.post_id),
                        target_post_id=str(post_id),
                    )
                    raise InvalidInputError(
                        "Parent comment does not belong to this post"
                    )
                level = parent.level + 1
                if level > MAX_COMMENT_LEVEL:
                    logfire.warn(
                        "Comment nesting limit reached",
                        parent_id=str(parent_id),
                        parent_level=parent.level,
                    )
                    raise DepthLimitExceededError(str(parent_id), MAX_COMMENT_LEVEL)

            now = datetime.now()
            comment = Comment(
                id=CommentId(uuid4()),
                post_id=post_id,
                author_id=author.id,
                author_wallet_address=author.wallet_address,
                content=content,
                parent_id=parent_id,
                level=level,
                created_at=now,
                updated_at=now,
            )

            try:
                saved = await self.comment_repository.save(comment)
            except IntegrityError as e:
                raise await self._insert_conflict(post_id, parent_id) from e

            logfire.info(
                "Comment created",
                comment_id=str(saved.id),
                post_id=str(post_id),
                level=level,
            )
            return CommentNode(comment=saved)

    async def _insert_conflict(
        self, post_id: PostId, parent_id: CommentId | None
    ) -> DomainError:
        """Work out why a comment insert hit a constraint.

        A post or parent deleted after the checks in create_comment is
        NotFound; anything else is a Conflict.
        """
        if await self.post_service.get_post_by_id(post_id) is None:
            return NotFoundError("Post", str(post_id))
        if parent_id and await self.comment_repository.find_by_id(parent_id) is None:
            logfire.warn(
                "Parent comment deleted during reply",
                parent_id=str(parent_id),
                post_id=str(post_id),
            )
            return NotFoundError("Comment", str(parent_id))
        logfire.error("Comment insert conflicted", post_id=str(post_id))
        return ConflictError(f"Could not create comment on post {post_id}")

    async def get_comment_by_id(self, comment_id: CommentId) -> Comment | None:
        """Get a comment by ID.

        Args:
            comment_id: Comment ID

        Returns:
            Comment if found, None otherwise
        """
        with logfire.span(
            "comment_service.get_comment_by_id", comment_id=str(comment_id)
        ):
            comment = await self.comment_repository.find_by_id(comment_id)
            if not comment:
                logfire.warn("Comment not found", comment_id=str(comment_id))
            return comment

    async def get_thread(
        self, post_id: PostId, for_user_id: UserId | None = None
    ) -> list[CommentNode]:
        """Get the comment tree for a post.

        All comments are fetched in one query and grouped under their parent
        ID, so the tree is built from an adjacency list and the depth cap
        bounds it without recursion limits to worry about.

        Args:
            post_id: Post ID
            for_user_id: Viewer whose vote on each comment is included

        Returns:
            Top-level comments, newest first, each carrying its replies

        Raises:
            NotFoundError: If the post does not exist
        """
        with logfire.span(
            "comment_service.get_thread",
            post_id=str(post_id),
            for_user_id=str(for_user_id) if for_user_id else None,
        ):
            await self.post_service.get_post(post_id)

            comments = await self.comment_repository.find_by_post(post_id)
            comment_ids = [comment.id for comment in comments]

            vote_counts = await self.vote_repository.sum_by_comments(comment_ids)
            user_signs: dict[CommentId, VoteSign] = {}
            if for_user_id is not None and comment_ids:
                votes = await self.vote_repository.find_by_user_and_comments(
                    for_user_id, comment_ids
                )
                user_signs = {
                    vote.comment_id: vote.value for vote in votes if vote.comment_id
                }

            nodes = {
                comment.id: CommentNode(
                    comment=comment,
                    vote_count=vote_counts.get(comment.id, 0),
                    user_sign=user_signs.get(comment.id),
                )
                for comment in comments
            }

            children: dict[CommentId | None, list[CommentNode]] = defaultdict(list)
            for comment in comments:
                children[comment.parent_id].append(nodes[comment.id])

            for comment_id, node in nodes.items():
                node.replies = children.get(comment_id, [])
                node.reply_count = len(node.replies)

            roots = children.get(None, [])
            logfire.info(
                "Thread retrieved",
                post_id=str(post_id),
                top_level=len(roots),
                total=len(comments),
            )
            return roots

    async def get_comments_by_author(
        self, author_id: UserId, limit: int = 30, offset: int = 0
    ) -> list[Comment]:
        """Get comments written by a user, newest first."""
        with logfire.span(
            "comment_service.get_comments_by_author",
            author_id=str(author_id),
            limit=limit,
            offset=offset,
        ):
            return await self.comment_repository.find_by_author(
                author_id=author_id, limit=limit, offset=offset
            )

    async def delete_comment(
        self, comment_id: CommentId, requesting_user_id: UserId
    ) -> int:
        """Delete a comment together with its replies and their votes.

        Existence is not masked: a missing comment is NotFound, someone
        else's comment is NotAuthorized.

        Args:
            comment_id: Comment to delete
            requesting_user_id: User asking for the deletion

        Returns:
            Number of comments removed (the comment plus its descendants)

        Raises:
            NotFoundError: If the comment does not exist
            NotAuthorizedError: If the requester is not the author
        """
        with logfire.span(
            "comment_service.delete_comment",
            comment_id=str(comment_id),
            requesting_user_id=str(requesting_user_id),
        ):
            comment = await self.comment_repository.find_by_id(comment_id)
            if not comment:
                logfire.warn("Comment not found for delete", comment_id=str(comment_id))
                raise NotFoundError("Comment", str(comment_id))

            if comment.author_id != requesting_user_id:
                logfire.warn(
                    "Unauthorized comment deletion attempt",
                    comment_id=str(comment_id),
                    author_id=str(comment.author_id),
                    requesting_user_id=str(requesting_user_id),
                )
                raise NotAuthorizedError(
                    "comment", str(comment_id), str(requesting_user_id)
                )

            subtree_ids = await self.comment_repository.find_subtree_ids(comment_id)
            votes_deleted = await self.vote_repository.delete_by_comments(subtree_ids)
            comments_deleted = await self.comment_repository.delete_many(subtree_ids)

            logfire.info(
                "Comment deleted",
                comment_id=str(comment_id),
                post_id=str(comment.post_id),
                comments_deleted=comments_deleted,
                votes_deleted=votes_deleted,
            )
            return comments_deleted
