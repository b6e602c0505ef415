"""In-memory vote repository for testing."""

from datetime import datetime
from typing import Optional, Sequence

from sqlalchemy.exc import IntegrityError

from kastalk.domain.model.vote import Vote
from kastalk.domain.repository.vote import VoteRepository
from kastalk.domain.value import CommentId, PostId, UserId, VoteSign, VoteTarget


class InMemoryVoteRepository(VoteRepository):
    """In-memory implementation of VoteRepository for testing."""

    def __init__(self) -> None:
        self._votes: list[Vote] = []

    async def find_by_user_and_target(
        self,
        user_id: UserId,
        target: VoteTarget,
        for_update: bool = False,
    ) -> Optional[Vote]:
        """Find a vote by user and target (locking is a no-op here)."""
        for vote in self._votes:
            if vote.user_id == user_id and vote.target == target:
                return vote
        return None

    async def create(self, vote: Vote) -> Vote:
        """Insert a vote.

        Raises:
            IntegrityError: If the user already voted on the target
        """
        if await self.find_by_user_and_target(vote.user_id, vote.target):
            raise IntegrityError("Duplicate vote", None, Exception())

        self._votes.append(vote)
        return vote

    async def update_value(self, vote: Vote, value: VoteSign) -> Vote:
        """Replace a vote with a copy carrying the new sign."""
        updated = vote.model_copy(update={"value": value, "updated_at": datetime.now()})
        self._votes = [updated if v.id == vote.id else v for v in self._votes]
        return updated

    async def delete(self, vote: Vote) -> None:
        """Delete a vote."""
        self._votes = [v for v in self._votes if v.id != vote.id]

    async def delete_by_posts(self, post_ids: Sequence[PostId]) -> int:
        """Delete all votes on the given posts."""
        before = len(self._votes)
        self._votes = [v for v in self._votes if v.post_id not in post_ids]
        return before - len(self._votes)

    async def delete_by_comments(self, comment_ids: Sequence[CommentId]) -> int:
        """Delete all votes on the given comments."""
        before = len(self._votes)
        self._votes = [v for v in self._votes if v.comment_id not in comment_ids]
        return before - len(self._votes)

    async def sum_by_target(self, target: VoteTarget) -> int:
        """Sum vote values on a target."""
        return sum(v.value.value for v in self._votes if v.target == target)

    async def sum_by_posts(self, post_ids: Sequence[PostId]) -> dict[PostId, int]:
        """Sum vote values per post."""
        totals: dict[PostId, int] = {}
        for vote in self._votes:
            if vote.post_id is not None and vote.post_id in post_ids:
                totals[vote.post_id] = totals.get(vote.post_id, 0) + vote.value.value
        return totals

    async def sum_by_comments(
        self, comment_ids: Sequence[CommentId]
    ) -> dict[CommentId, int]:
        """Sum vote values per comment."""
        totals: dict[CommentId, int] = {}
        for vote in self._votes:
            if vote.comment_id is not None and vote.comment_id in comment_ids:
                totals[vote.comment_id] = (
                    totals.get(vote.comment_id, 0) + vote.value.value
                )
        return totals

    async def find_by_user_and_posts(
        self, user_id: UserId, post_ids: Sequence[PostId]
    ) -> list[Vote]:
        """Find a user's votes on multiple posts."""
        return [
            v
            for v in self._votes
            if v.user_id == user_id and v.post_id is not None and v.post_id in post_ids
        ]

    async def find_by_user_and_comments(
        self, user_id: UserId, comment_ids: Sequence[CommentId]
    ) -> list[Vote]:
        """Find a user's votes on multiple comments."""
        return [
            v
            for v in self._votes
            if v.user_id == user_id
            and v.comment_id is not None
            and v.comment_id in comment_ids
        ]
