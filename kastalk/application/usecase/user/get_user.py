"""Get user use case."""

from pydantic import BaseModel

from kastalk.domain.error import NotFoundError
from kastalk.domain.service import UserService

from .ensure_user import UserResponse


class GetUserRequest(BaseModel):
    """Get user request."""

    wallet_address: str


class GetUserUseCase:
    """Use case for looking up a user by wallet address."""

    def __init__(self, user_service: UserService) -> None:
        self.user_service = user_service

    async def execute(self, request: GetUserRequest) -> UserResponse:
        """Look up a user without creating one.

        Raises:
            NotFoundError: If no user has this wallet address
        """
        user = await self.user_service.find_user(request.wallet_address)
        if not user:
            raise NotFoundError("User", request.wallet_address.strip().lower())
        return UserResponse.from_user(user)
