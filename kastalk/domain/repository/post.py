"""Post repository interface."""

from abc import ABC, abstractmethod
from typing import List, Optional

from kastalk.domain.model.post import Post
from kastalk.domain.value import PostId, UserId


class PostRepository(ABC):
    """Repository for Post aggregate.

    Defines the contract for post persistence operations.
    Implementations live in the persistence layer.
    """

    @abstractmethod
    async def find_by_id(self, post_id: PostId) -> Optional[Post]:
        """Find a post by ID.

        Args:
            post_id: The post's unique identifier

        Returns:
            The post if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_all(
        self,
        author_id: Optional[UserId] = None,
        limit: int = 30,
        offset: int = 0,
    ) -> List[Post]:
        """Find posts, newest first.

        Args:
            author_id: Only return posts by this author
            limit: Maximum number of posts to return
            offset: Number of posts to skip

        Returns:
            List of posts ordered by creation time descending
        """
        pass

    @abstractmethod
    async def save(self, post: Post) -> Post:
        """Save a post (create or update).

        Args:
            post: The post to save

        Returns:
            The saved post
        """
        pass

    @abstractmethod
    async def delete(self, post_id: PostId) -> None:
        """Delete a post row.

        Comments and votes are removed by the caller beforehand.

        Args:
            post_id: The post ID to delete
        """
        pass
