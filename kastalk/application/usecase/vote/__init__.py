"""Vote use cases."""

from .cast_vote import CastVoteRequest, CastVoteResponse, CastVoteUseCase
from .get_vote_aggregate import (
    GetVoteAggregateRequest,
    GetVoteAggregateUseCase,
    VoteAggregateResponse,
)

__all__ = [
    "CastVoteRequest",
    "CastVoteResponse",
    "CastVoteUseCase",
    "GetVoteAggregateRequest",
    "GetVoteAggregateUseCase",
    "VoteAggregateResponse",
]
