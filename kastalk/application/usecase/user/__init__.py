"""User use cases."""

from .ensure_user import EnsureUserRequest, EnsureUserUseCase, UserResponse
from .get_user import GetUserRequest, GetUserUseCase

__all__ = [
    "EnsureUserRequest",
    "EnsureUserUseCase",
    "GetUserRequest",
    "GetUserUseCase",
    "UserResponse",
]
