"""Ensure user use case (wallet connect)."""

from datetime import datetime

import logfire
from pydantic import BaseModel

from kastalk.application.usecase.base import BaseUseCase
from kastalk.domain.model import User
from kastalk.domain.service import UserService


class EnsureUserRequest(BaseModel):
    """Ensure user request."""

    wallet_address: str | None = None


class UserResponse(BaseModel):
    """User as seen by clients."""

    user_id: str
    wallet_address: str
    created_at: datetime

    @classmethod
    def from_user(cls, user: User) -> "UserResponse":
        return cls(
            user_id=str(user.id),
            wallet_address=user.wallet_address.root,
            created_at=user.created_at,
        )


class EnsureUserUseCase(BaseUseCase[EnsureUserRequest, UserResponse]):
    """Use case for resolving a wallet address to a user, creating it on first use."""

    def __init__(self, user_service: UserService) -> None:
        """Initialize ensure user use case.

        Args:
            user_service: User domain service
        """
        self.user_service = user_service

    async def execute(self, request: EnsureUserRequest) -> UserResponse:
        """Execute ensure user flow.

        Args:
            request: Ensure user request with the raw wallet address

        Returns:
            The existing or newly created user

        Raises:
            InvalidInputError: If the wallet address is missing or empty
            ConflictError: If a concurrent creation cannot be resolved
        """
        with logfire.span("ensure_user.execute"):
            user = await self.user_service.ensure_user(request.wallet_address)
            return UserResponse.from_user(user)
