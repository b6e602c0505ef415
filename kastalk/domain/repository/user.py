"""User repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from kastalk.domain.model.user import User
from kastalk.domain.value import UserId, WalletAddress


class UserRepository(ABC):
    """Repository for User aggregate.

    Defines the contract for user persistence operations.
    Implementations live in the persistence layer.
    """

    @abstractmethod
    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID.

        Args:
            user_id: The user's unique identifier

        Returns:
            The user if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_wallet_address(
        self, wallet_address: WalletAddress
    ) -> Optional[User]:
        """Find a user by their (normalized) wallet address.

        Args:
            wallet_address: The user's wallet address

        Returns:
            The user if found, None otherwise
        """
        pass

    @abstractmethod
    async def create(self, user: User) -> User:
        """Insert a new user.

        The insert must not poison the surrounding transaction when it
        loses a uniqueness race.

        Args:
            user: The user to create

        Returns:
            The created user

        Raises:
            IntegrityError: If the wallet address is already taken
        """
        pass
