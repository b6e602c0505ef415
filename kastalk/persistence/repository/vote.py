"""PostgreSQL implementation of Vote repository."""

from datetime import datetime
from typing import List, Optional, Sequence

from sqlalchemy import and_, delete, func, insert, select, update

from kastalk.domain.model import Vote
from kastalk.domain.repository import VoteRepository
from kastalk.domain.value import CommentId, PostId, UserId, VoteSign, VoteTarget
from kastalk.persistence.mappers import row_to_vote, vote_to_dict
from kastalk.persistence.repository.base import PostgresRepository
from kastalk.persistence.tables import votes_table


def _target_clause(target: VoteTarget):
    if target.post_id is not None:
        return votes_table.c.post_id == target.post_id
    return votes_table.c.comment_id == target.comment_id


class PostgresVoteRepository(PostgresRepository, VoteRepository):
    """PostgreSQL implementation of VoteRepository."""

    async def find_by_user_and_target(
        self,
        user_id: UserId,
        target: VoteTarget,
        for_update: bool = False,
    ) -> Optional[Vote]:
        """Find a user's vote on a specific item."""
        stmt = select(votes_table).where(
            and_(votes_table.c.user_id == user_id, _target_clause(target))
        )
        if for_update:
            stmt = stmt.with_for_update()

        result = await self._execute(stmt)
        row = result.fetchone()
        return row_to_vote(row._asdict()) if row else None

    async def create(self, vote: Vote) -> Vote:
        """Insert a vote inside a savepoint.

        Raises:
            IntegrityError: If the user already voted on the target
        """
        stmt = insert(votes_table).values(**vote_to_dict(vote))
        await self._execute_in_savepoint(stmt)
        return vote

    async def update_value(self, vote: Vote, value: VoteSign) -> Vote:
        """Change the sign of a vote in place."""
        now = datetime.now()
        stmt = (
            update(votes_table)
            .where(votes_table.c.id == vote.id)
            .values(value=value.value, updated_at=now)
        )
        await self._execute(stmt)
        await self.session.flush()
        return vote.model_copy(update={"value": value, "updated_at": now})

    async def delete(self, vote: Vote) -> None:
        """Delete a vote."""
        stmt = delete(votes_table).where(votes_table.c.id == vote.id)
        await self._execute(stmt)
        await self.session.flush()

    async def delete_by_posts(self, post_ids: Sequence[PostId]) -> int:
        """Delete all votes on the given posts."""
        if not post_ids:
            return 0

        stmt = delete(votes_table).where(votes_table.c.post_id.in_(post_ids))
        result = await self._execute(stmt)
        await self.session.flush()
        return result.rowcount  # type: ignore[attr-defined]

    async def delete_by_comments(self, comment_ids: Sequence[CommentId]) -> int:
        """Delete all votes on the given comments."""
        if not comment_ids:
            return 0

        stmt = delete(votes_table).where(votes_table.c.comment_id.in_(comment_ids))
        result = await self._execute(stmt)
        await self.session.flush()
        return result.rowcount  # type: ignore[attr-defined]

    async def sum_by_target(self, target: VoteTarget) -> int:
        """Sum vote values on a post or comment."""
        stmt = select(func.coalesce(func.sum(votes_table.c.value), 0)).where(
            _target_clause(target)
        )
        result = await self._execute(stmt)
        return int(result.scalar() or 0)

    async def sum_by_posts(self, post_ids: Sequence[PostId]) -> dict[PostId, int]:
        """Sum vote values per post (batch query)."""
        if not post_ids:
            return {}

        stmt = (
            select(votes_table.c.post_id, func.sum(votes_table.c.value).label("total"))
            .where(votes_table.c.post_id.in_(post_ids))
            .group_by(votes_table.c.post_id)
        )
        result = await self._execute(stmt)
        return {PostId(row.post_id): int(row.total) for row in result.fetchall()}

    async def sum_by_comments(
        self, comment_ids: Sequence[CommentId]
    ) -> dict[CommentId, int]:
        """Sum vote values per comment (batch query)."""
        if not comment_ids:
            return {}

        stmt = (
            select(
                votes_table.c.comment_id, func.sum(votes_table.c.value).label("total")
            )
            .where(votes_table.c.comment_id.in_(comment_ids))
            .group_by(votes_table.c.comment_id)
        )
        result = await self._execute(stmt)
        return {CommentId(row.comment_id): int(row.total) for row in result.fetchall()}

    async def find_by_user_and_posts(
        self, user_id: UserId, post_ids: Sequence[PostId]
    ) -> List[Vote]:
        """Find a user's votes on multiple posts (batch query)."""
        if not post_ids:
            return []

        stmt = select(votes_table).where(
            and_(votes_table.c.user_id == user_id, votes_table.c.post_id.in_(post_ids))
        )
        result = await self._execute(stmt)
        return [row_to_vote(row._asdict()) for row in result.fetchall()]

    async def find_by_user_and_comments(
        self, user_id: UserId, comment_ids: Sequence[CommentId]
    ) -> List[Vote]:
        """Find a user's votes on multiple comments (batch query)."""
        if not comment_ids:
            return []

        stmt = select(votes_table).where(
            and_(
                votes_table.c.user_id == user_id,
                votes_table.c.comment_id.in_(comment_ids),
            )
        )
        result = await self._execute(stmt)
        return [row_to_vote(row._asdict()) for row in result.fetchall()]
