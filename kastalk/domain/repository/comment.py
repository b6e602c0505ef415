"""Comment repository interface."""

from abc import ABC, abstractmethod
from typing import List, Optional, Sequence

from kastalk.domain.model.comment import Comment
from kastalk.domain.value import CommentId, PostId, UserId


class CommentRepository(ABC):
    """Repository for Comment entity.

    Defines the contract for comment persistence operations.
    Implementations live in the persistence layer.
    """

    @abstractmethod
    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID.

        Args:
            comment_id: The comment's unique identifier

        Returns:
            The comment if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_post(self, post_id: PostId) -> List[Comment]:
        """Find every comment on a post, all levels.

        Comments are returned newest first (created_at desc, id desc) so
        that grouping them by parent keeps that order at every level.

        Args:
            post_id: The post ID

        Returns:
            List of comments
        """
        pass

    @abstractmethod
    async def find_by_author(
        self,
        author_id: UserId,
        limit: int = 30,
        offset: int = 0,
    ) -> List[Comment]:
        """Find comments by a specific author, newest first.

        Args:
            author_id: The author's user ID
            limit: Maximum number of comments to return
            offset: Number of comments to skip

        Returns:
            List of comments by the author
        """
        pass

    @abstractmethod
    async def find_subtree_ids(self, comment_id: CommentId) -> List[CommentId]:
        """Collect a comment and all of its descendants.

        Args:
            comment_id: Root of the subtree

        Returns:
            IDs ordered deepest level first, the root last.
            Empty if the comment does not exist.
        """
        pass

    @abstractmethod
    async def find_ids_by_post(self, post_id: PostId) -> List[CommentId]:
        """Collect the IDs of every comment on a post.

        Args:
            post_id: The post ID

        Returns:
            Comment IDs, deepest level first
        """
        pass

    @abstractmethod
    async def save(self, comment: Comment) -> Comment:
        """Save a comment (create or update).

        Args:
            comment: The comment to save

        Returns:
            The saved comment
        """
        pass

    @abstractmethod
    async def delete_many(self, comment_ids: Sequence[CommentId]) -> int:
        """Hard delete comments.

        Args:
            comment_ids: Comment IDs to delete

        Returns:
            Number of comments deleted
        """
        pass

    @abstractmethod
    async def count_by_post(self, post_id: PostId) -> int:
        """Count comments on a post, all levels.

        Args:
            post_id: The post ID

        Returns:
            Number of comments
        """
        pass

    @abstractmethod
    async def count_by_posts(self, post_ids: Sequence[PostId]) -> dict[PostId, int]:
        """Count comments for several posts (batch query).

        Args:
            post_ids: Post IDs

        Returns:
            Mapping of post ID to comment count (posts without comments are 0)
        """
        pass
