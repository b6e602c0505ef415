"""PostgreSQL implementation of User repository."""

from typing import Optional

from sqlalchemy import insert, select

from kastalk.domain.model import User
from kastalk.domain.repository import UserRepository
from kastalk.domain.value import UserId, WalletAddress
from kastalk.persistence.mappers import row_to_user, user_to_dict
from kastalk.persistence.repository.base import PostgresRepository
from kastalk.persistence.tables import users_table


class PostgresUserRepository(PostgresRepository, UserRepository):
    """PostgreSQL implementation of UserRepository."""

    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID.

        Args:
            user_id: User ID to look up

        Returns:
            User if found, None otherwise
        """
        stmt = select(users_table).where(users_table.c.id == user_id)
        result = await self._execute(stmt)
        row = result.fetchone()
        return row_to_user(row._asdict()) if row else None

    async def find_by_wallet_address(
        self, wallet_address: WalletAddress
    ) -> Optional[User]:
        """Find a user by wallet address.

        Args:
            wallet_address: Normalized wallet address

        Returns:
            User if found, None otherwise
        """
        stmt = select(users_table).where(
            users_table.c.wallet_address == wallet_address.root
        )
        result = await self._execute(stmt)
        row = result.fetchone()
        return row_to_user(row._asdict()) if row else None

    async def create(self, user: User) -> User:
        """Insert a user.

        Raises:
            IntegrityError: If the wallet address already exists
        """
        stmt = insert(users_table).values(**user_to_dict(user))
        await self._execute_in_savepoint(stmt)
        return user
