"""Vote domain service (vote ledger)."""

from dataclasses import dataclass
from datetime import datetime
from uuid import uuid4

import logfire
from sqlalchemy.exc import IntegrityError

from kastalk.domain.error import ConflictError, InvalidInputError, NotFoundError
from kastalk.domain.model.vote import Vote
from kastalk.domain.repository import VoteRepository
from kastalk.domain.value import (
    CommentId,
    PostId,
    UserId,
    VoteId,
    VoteSign,
    VoteTarget,
)

from .base import Service
from .comment_service import CommentService
from .post_service import PostService


@dataclass(frozen=True)
class VoteResult:
    """Outcome of casting a vote: the new aggregate and the caller's state."""

    count: int
    user_sign: VoteSign | None


@dataclass(frozen=True)
class Aggregate:
    """Derived vote count for a target."""

    count: int


class VoteService(Service):
    """Domain service for vote operations.

    Voting is set membership per (user, target): repeating a vote removes
    it, voting the other way flips it. Counts are always summed from the
    vote rows.
    """

    def __init__(
        self,
        vote_repository: VoteRepository,
        post_service: PostService,
        comment_service: CommentService,
    ) -> None:
        """Initialize vote service.

        Args:
            vote_repository: Vote repository
            post_service: Post domain service
            comment_service: Comment domain service
        """
        self.vote_repository = vote_repository
        self.post_service = post_service
        self.comment_service = comment_service

    @staticmethod
    def make_target(
        post_id: PostId | None = None, comment_id: CommentId | None = None
    ) -> VoteTarget:
        """Build a vote target, rejecting both/neither.

        Raises:
            InvalidInputError: Unless exactly one ID is given
        """
        if (post_id is None) == (comment_id is None):
            raise InvalidInputError("Exactly one of post_id or comment_id must be set")
        return VoteTarget(post_id=post_id, comment_id=comment_id)

    @staticmethod
    def parse_sign(value: int | VoteSign) -> VoteSign:
        """Convert a raw sign to VoteSign.

        Raises:
            InvalidInputError: If the value is not +1 or -1
        """
        try:
            return VoteSign(value)
        except ValueError as e:
            raise InvalidInputError("Vote sign must be 1 or -1") from e

    async def _ensure_target_exists(self, target: VoteTarget) -> None:
        if target.post_id is not None:
            await self.post_service.get_post(target.post_id)
            return
        comment = await self.comment_service.get_comment_by_id(target.comment_id)  # type: ignore[arg-type]
        if not comment:
            raise NotFoundError("Comment", str(target.comment_id))

    async def cast_vote(
        self,
        user_id: UserId,
        target: VoteTarget,
        sign: VoteSign = VoteSign.UP,
    ) -> VoteResult:
        """Cast, toggle off or flip a user's vote on a post or comment.

        - no existing vote: insert it
        - existing vote with the same sign: delete it
        - existing vote with the opposite sign: update its sign in place

        The existing row is read with a lock, and a lost insert race is
        resolved by re-reading the winner and applying the same rules to
        it, so concurrent requests never produce a second row.

        Args:
            user_id: Voting user
            target: Voted post or comment
            sign: +1 or -1

        Returns:
            New aggregate for the target and the user's resulting vote

        Raises:
            NotFoundError: If the target does not exist
            ConflictError: If an insert race cannot be resolved
        """
        sign = self.parse_sign(sign)

        with logfire.span(
            "vote_service.cast_vote",
            user_id=str(user_id),
            target=str(target),
            sign=sign.value,
        ):
            await self._ensure_target_exists(target)

            existing = await self.vote_repository.find_by_user_and_target(
                user_id, target, for_update=True
            )

            if existing is None:
                now = datetime.now()
                vote = Vote(
                    id=VoteId(uuid4()),
                    user_id=user_id,
                    post_id=target.post_id,
                    comment_id=target.comment_id,
                    value=sign,
                    created_at=now,
                    updated_at=now,
                )
                try:
                    await self.vote_repository.create(vote)
                    user_sign: VoteSign | None = sign
                except IntegrityError:
                    logfire.info(
                        "Concurrent vote insert, re-reading",
                        user_id=str(user_id),
                        target=str(target),
                    )
                    existing = await self.vote_repository.find_by_user_and_target(
                        user_id, target, for_update=True
                    )
                    if existing is None:
                        logfire.error(
                            "Vote insert conflicted but no row found",
                            user_id=str(user_id),
                            target=str(target),
                        )
                        raise ConflictError(f"Vote on {target} conflicted")
                    user_sign = await self._apply_to_existing(existing, sign)
            else:
                user_sign = await self._apply_to_existing(existing, sign)

            count = await self.vote_repository.sum_by_target(target)
            logfire.info(
                "Vote cast",
                user_id=str(user_id),
                target=str(target),
                count=count,
                user_sign=user_sign.value if user_sign else None,
            )
            return VoteResult(count=count, user_sign=user_sign)

    async def _apply_to_existing(self, existing: Vote, sign: VoteSign) -> VoteSign | None:
        if existing.value == sign:
            await self.vote_repository.delete(existing)
            logfire.debug("Vote toggled off", vote_id=str(existing.id))
            return None
        await self.vote_repository.update_value(existing, sign)
        logfire.debug("Vote flipped", vote_id=str(existing.id), value=sign.value)
        return sign

    async def get_aggregate(self, target: VoteTarget) -> Aggregate:
        """Sum the votes on a target.

        Args:
            target: Post or comment

        Returns:
            Aggregate count, read straight from storage

        Raises:
            NotFoundError: If the target does not exist
        """
        with logfire.span("vote_service.get_aggregate", target=str(target)):
            await self._ensure_target_exists(target)
            count = await self.vote_repository.sum_by_target(target)
            return Aggregate(count=count)

    async def get_user_sign(
        self, user_id: UserId, target: VoteTarget
    ) -> VoteSign | None:
        """Get the sign of a user's vote on a target, None if not voted."""
        vote = await self.vote_repository.find_by_user_and_target(user_id, target)
        return vote.value if vote else None
