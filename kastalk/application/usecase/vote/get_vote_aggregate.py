"""Get vote aggregate use case."""

from uuid import UUID

from pydantic import BaseModel

from kastalk.domain.service import UserService, VoteService
from kastalk.domain.value import CommentId, PostId, VotableType


class GetVoteAggregateRequest(BaseModel):
    """Get vote aggregate request."""

    post_id: UUID | None = None
    comment_id: UUID | None = None
    viewer_wallet_address: str | None = None


class VoteAggregateResponse(BaseModel):
    """Vote aggregate for a post or comment."""

    target_type: VotableType
    target_id: str
    vote_count: int
    user_sign: int | None


class GetVoteAggregateUseCase:
    """Use case for reading the vote count of a post or comment."""

    def __init__(self, vote_service: VoteService, user_service: UserService) -> None:
        self.vote_service = vote_service
        self.user_service = user_service

    async def execute(self, request: GetVoteAggregateRequest) -> VoteAggregateResponse:
        """Sum the votes on a target, with the viewer's own vote if known.

        Raises:
            InvalidInputError: Unless exactly one target ID is given
            NotFoundError: If the target does not exist
        """
        target = self.vote_service.make_target(
            post_id=PostId(request.post_id) if request.post_id else None,
            comment_id=CommentId(request.comment_id) if request.comment_id else None,
        )
        aggregate = await self.vote_service.get_aggregate(target)

        user_sign = None
        if request.viewer_wallet_address:
            viewer = await self.user_service.find_user(request.viewer_wallet_address)
            if viewer:
                user_sign = await self.vote_service.get_user_sign(viewer.id, target)

        return VoteAggregateResponse(
            target_type=target.type,
            target_id=str(target.id),
            vote_count=aggregate.count,
            user_sign=user_sign.value if user_sign else None,
        )
