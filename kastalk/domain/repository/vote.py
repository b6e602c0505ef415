"""Vote repository interface."""

from abc import ABC, abstractmethod
from typing import List, Optional, Sequence

from kastalk.domain.model.vote import Vote
from kastalk.domain.value import CommentId, PostId, UserId, VoteSign, VoteTarget


class VoteRepository(ABC):
    """Repository for Vote entity.

    Defines the contract for vote persistence operations.
    Implementations live in the persistence layer.
    """

    @abstractmethod
    async def find_by_user_and_target(
        self,
        user_id: UserId,
        target: VoteTarget,
        for_update: bool = False,
    ) -> Optional[Vote]:
        """Find a user's vote on a specific post or comment.

        Args:
            user_id: The user's ID
            target: The voted post or comment
            for_update: Lock the row until the transaction ends

        Returns:
            The vote if found, None otherwise
        """
        pass

    @abstractmethod
    async def create(self, vote: Vote) -> Vote:
        """Insert a new vote.

        The insert must not poison the surrounding transaction when it
        loses a uniqueness race.

        Args:
            vote: The vote to insert

        Returns:
            The saved vote

        Raises:
            IntegrityError: If the user already voted on the target
        """
        pass

    @abstractmethod
    async def update_value(self, vote: Vote, value: VoteSign) -> Vote:
        """Change the sign of an existing vote in place.

        Args:
            vote: The existing vote
            value: New sign

        Returns:
            The updated vote
        """
        pass

    @abstractmethod
    async def delete(self, vote: Vote) -> None:
        """Delete a vote.

        Args:
            vote: The vote to delete
        """
        pass

    @abstractmethod
    async def delete_by_posts(self, post_ids: Sequence[PostId]) -> int:
        """Delete every vote on the given posts.

        Returns:
            Number of votes deleted
        """
        pass

    @abstractmethod
    async def delete_by_comments(self, comment_ids: Sequence[CommentId]) -> int:
        """Delete every vote on the given comments.

        Returns:
            Number of votes deleted
        """
        pass

    @abstractmethod
    async def sum_by_target(self, target: VoteTarget) -> int:
        """Sum vote values on a target.

        Args:
            target: The voted post or comment

        Returns:
            Aggregate vote count (0 when there are no votes)
        """
        pass

    @abstractmethod
    async def sum_by_posts(self, post_ids: Sequence[PostId]) -> dict[PostId, int]:
        """Sum vote values for several posts (batch query).

        Returns:
            Mapping of post ID to aggregate (posts without votes are 0)
        """
        pass

    @abstractmethod
    async def sum_by_comments(
        self, comment_ids: Sequence[CommentId]
    ) -> dict[CommentId, int]:
        """Sum vote values for several comments (batch query).

        Returns:
            Mapping of comment ID to aggregate (comments without votes are 0)
        """
        pass

    @abstractmethod
    async def find_by_user_and_posts(
        self, user_id: UserId, post_ids: Sequence[PostId]
    ) -> List[Vote]:
        """Find a user's votes on multiple posts (batch query)."""
        pass

    @abstractmethod
    async def find_by_user_and_comments(
        self, user_id: UserId, comment_ids: Sequence[CommentId]
    ) -> List[Vote]:
        """Find a user's votes on multiple comments (batch query)."""
        pass
