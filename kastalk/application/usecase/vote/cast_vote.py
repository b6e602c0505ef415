"""Cast vote use case."""

from uuid import UUID

import logfire
from pydantic import BaseModel

from kastalk.application.usecase.base import BaseUseCase
from kastalk.domain.service import UserService, VoteService
from kastalk.domain.value import CommentId, PostId, VotableType


class CastVoteRequest(BaseModel):
    """Cast vote request.

    Exactly one of post_id / comment_id must be set.
    """

    wallet_address: str
    post_id: UUID | None = None
    comment_id: UUID | None = None
    sign: int = 1


class CastVoteResponse(BaseModel):
    """Cast vote response."""

    target_type: VotableType
    target_id: str
    vote_count: int
    user_sign: int | None  # None when the vote was toggled off


class CastVoteUseCase(BaseUseCase[CastVoteRequest, CastVoteResponse]):
    """Use case for casting, toggling or flipping a vote."""

    def __init__(self, vote_service: VoteService, user_service: UserService) -> None:
        """Initialize cast vote use case.

        Args:
            vote_service: Vote domain service
            user_service: User domain service
        """
        self.vote_service = vote_service
        self.user_service = user_service

    async def execute(self, request: CastVoteRequest) -> CastVoteResponse:
        """Execute cast vote flow.

        Args:
            request: Cast vote request

        Returns:
            The target's new aggregate and the caller's resulting vote

        Raises:
            InvalidInputError: If the target or sign is malformed
            NotFoundError: If the target does not exist
            ConflictError: If a concurrent vote cannot be reconciled
        """
        target = self.vote_service.make_target(
            post_id=PostId(request.post_id) if request.post_id else None,
            comment_id=CommentId(request.comment_id) if request.comment_id else None,
        )
        sign = self.vote_service.parse_sign(request.sign)

        with logfire.span("cast_vote.execute", target=str(target), sign=sign.value):
            voter = await self.user_service.ensure_user(request.wallet_address)
            result = await self.vote_service.cast_vote(voter.id, target, sign)

            return CastVoteResponse(
                target_type=target.type,
                target_id=str(target.id),
                vote_count=result.count,
                user_sign=result.user_sign.value if result.user_sign else None,
            )
