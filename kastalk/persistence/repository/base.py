"""Shared plumbing for PostgreSQL repositories."""

from typing import Any

from sqlalchemy.exc import InterfaceError, OperationalError
from sqlalchemy.exc import TimeoutError as PoolTimeoutError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql import Executable

from kastalk.domain.error import StorageUnavailableError


class PostgresRepository:
    """Base class for repositories backed by an AsyncSession.

    Connection-level failures are surfaced as StorageUnavailableError;
    everything else (including IntegrityError) propagates unchanged.
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def _execute(self, stmt: Executable) -> Any:
        try:
            return await self.session.execute(stmt)
        except (OperationalError, InterfaceError, PoolTimeoutError, ConnectionError) as e:
            raise StorageUnavailableError(str(e)) from e

    async def _execute_in_savepoint(self, stmt: Executable) -> Any:
        """Execute a statement inside a SAVEPOINT.

        A constraint violation rolls back only the savepoint, so the
        request transaction stays usable for the follow-up re-read.
        """
        async with self.session.begin_nested():
            return await self._execute(stmt)
