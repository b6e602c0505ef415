"""Vote routes."""

from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter
from pydantic import BaseModel

from kastalk.application.usecase.vote import (
    CastVoteRequest,
    CastVoteResponse,
    CastVoteUseCase,
    GetVoteAggregateRequest,
    GetVoteAggregateUseCase,
    VoteAggregateResponse,
)
from kastalk.domain.error import DomainError
from kastalk.interface.api.identity import WalletAddressHeader, require_wallet_address
from kastalk.interface.error import to_http_exception

router = APIRouter(tags=["votes"], route_class=DishkaRoute)


class CastVoteAPIRequest(BaseModel):
    """API request for casting a vote.

    Voting again with the same sign removes the vote; the opposite sign
    flips it.
    """

    sign: int = 1


@router.post("/posts/{post_id}/vote", response_model=CastVoteResponse)
async def vote_on_post(
    post_id: UUID,
    request: CastVoteAPIRequest,
    cast_vote_use_case: FromDishka[CastVoteUseCase],
    wallet_address: WalletAddressHeader = None,
) -> CastVoteResponse:
    """Cast, toggle off or flip a vote on a post.

    Args:
        post_id: Post UUID
        request: Vote sign (+1 or -1)
        cast_vote_use_case: Cast vote use case from DI
        wallet_address: Caller's wallet address

    Returns:
        New vote count and the caller's resulting vote

    Raises:
        HTTPException: 401 if unidentified, 400 on a bad sign, 404 if missing
    """
    wallet_address = require_wallet_address(wallet_address)

    try:
        return await cast_vote_use_case.execute(
            CastVoteRequest(
                wallet_address=wallet_address, post_id=post_id, sign=request.sign
            )
        )
    except DomainError as e:
        raise to_http_exception(e) from e


@router.post("/comments/{comment_id}/vote", response_model=CastVoteResponse)
async def vote_on_comment(
    comment_id: UUID,
    request: CastVoteAPIRequest,
    cast_vote_use_case: FromDishka[CastVoteUseCase],
    wallet_address: WalletAddressHeader = None,
) -> CastVoteResponse:
    """Cast, toggle off or flip a vote on a comment.

    Raises:
        HTTPException: 401 if unidentified, 400 on a bad sign, 404 if missing
    """
    wallet_address = require_wallet_address(wallet_address)

    try:
        return await cast_vote_use_case.execute(
            CastVoteRequest(
                wallet_address=wallet_address, comment_id=comment_id, sign=request.sign
            )
        )
    except DomainError as e:
        raise to_http_exception(e) from e


@router.get("/posts/{post_id}/votes", response_model=VoteAggregateResponse)
async def get_post_votes(
    post_id: UUID,
    get_vote_aggregate_use_case: FromDishka[GetVoteAggregateUseCase],
    wallet_address: WalletAddressHeader = None,
) -> VoteAggregateResponse:
    """Get the vote count of a post."""
    try:
        return await get_vote_aggregate_use_case.execute(
            GetVoteAggregateRequest(
                post_id=post_id, viewer_wallet_address=wallet_address
            )
        )
    except DomainError as e:
        raise to_http_exception(e) from e


@router.get("/comments/{comment_id}/votes", response_model=VoteAggregateResponse)
async def get_comment_votes(
    comment_id: UUID,
    get_vote_aggregate_use_case: FromDishka[GetVoteAggregateUseCase],
    wallet_address: WalletAddressHeader = None,
) -> VoteAggregateResponse:
    """Get the vote count of a comment."""
    try:
        return await get_vote_aggregate_use_case.execute(
            GetVoteAggregateRequest(
                comment_id=comment_id, viewer_wallet_address=wallet_address
            )
        )
    except DomainError as e:
        raise to_http_exception(e) from e
