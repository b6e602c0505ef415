"""Base use case."""

from abc import ABC, abstractmethod
from typing import Generic, TypeVar

RequestT = TypeVar("RequestT")
ResponseT = TypeVar("ResponseT")


class BaseUseCase(ABC, Generic[RequestT, ResponseT]):
    """Base for use cases that change state on behalf of a wallet.

    Each one runs inside a single request scope, so everything it writes
    commits or rolls back together.
    """

    @abstractmethod
    async def execute(self, request: RequestT) -> ResponseT:
        pass
