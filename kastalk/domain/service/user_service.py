"""User domain service (identity resolver)."""

from datetime import datetime
from uuid import uuid4

import logfire
from pydantic import ValidationError
from sqlalchemy.exc import IntegrityError

from kastalk.domain.error import ConflictError, InvalidInputError, NotFoundError
from kastalk.domain.model import User
from kastalk.domain.repository import UserRepository
from kastalk.domain.value import UserId, WalletAddress

from .base import Service


class UserService(Service):
    """Domain service for user operations.

    Maps opaque wallet addresses to stable user identities.
    """

    def __init__(self, user_repository: UserRepository) -> None:
        """Initialize user service.

        Args:
            user_repository: User repository
        """
        self.user_repository = user_repository

    @staticmethod
    def parse_wallet_address(wallet_address: str | None) -> WalletAddress:
        """Validate and normalize a raw wallet address.

        Raises:
            InvalidInputError: If the address is missing or empty
        """
        if wallet_address is None:
            raise InvalidInputError("Wallet address is required")
        try:
            return WalletAddress(wallet_address)
        except ValidationError as e:
            raise InvalidInputError(
                e.errors()[0]["msg"] if e.errors() else "Invalid wallet address"
            ) from e

    async def ensure_user(self, wallet_address: str | None) -> User:
        """Get the user for a wallet address, creating it on first sight.

        Idempotent and race-safe: if a concurrent request inserts the same
        address between our lookup and our insert, the unique constraint
        fires and we return the row that request created.

        Args:
            wallet_address: Raw wallet address from the identity source

        Returns:
            Existing or newly created user

        Raises:
            InvalidInputError: If the address is missing or empty
            ConflictError: If the insert conflicted but no row can be found
        """
        address = self.parse_wallet_address(wallet_address)

        with logfire.span("user_service.ensure_user", wallet_address=address.root):
            existing = await self.user_repository.find_by_wallet_address(address)
            if existing:
                logfire.debug("User found", user_id=str(existing.id))
                return existing

            now = datetime.now()
            user = User(
                id=UserId(uuid4()),
                wallet_address=address,
                created_at=now,
                updated_at=now,
            )

            try:
                created = await self.user_repository.create(user)
            except IntegrityError:
                # Someone else just created it
                logfire.info("Concurrent user creation", wallet_address=address.root)
                winner = await self.user_repository.find_by_wallet_address(address)
                if winner is None:
                    logfire.error(
                        "User insert conflicted but no row found",
                        wallet_address=address.root,
                    )
                    raise ConflictError(
                        f"Could not create user for wallet {address.root}"
                    )
                return winner

            logfire.info(
                "User created",
                user_id=str(created.id),
                wallet_address=address.root,
            )
            return created

    async def find_user(self, wallet_address: str | None) -> User | None:
        """Look up a user by wallet address without creating one.

        Args:
            wallet_address: Raw wallet address

        Returns:
            User if found, None otherwise

        Raises:
            InvalidInputError: If the address is missing or empty
        """
        address = self.parse_wallet_address(wallet_address)
        with logfire.span("user_service.find_user", wallet_address=address.root):
            return await self.user_repository.find_by_wallet_address(address)

    async def get_by_id(self, user_id: UserId) -> User:
        """Get user by ID.

        Args:
            user_id: User ID

        Returns:
            User entity

        Raises:
            NotFoundError: If user not found
        """
        with logfire.span("user_service.get_by_id", user_id=str(user_id)):
            user = await self.user_repository.find_by_id(user_id)
            if not user:
                logfire.warn("User not found", user_id=str(user_id))
                raise NotFoundError("User", str(user_id))
            return user
