"""Unit tests for EnsureUserUseCase and GetUserUseCase."""

import pytest

from kastalk.application.usecase.user import (
    EnsureUserRequest,
    EnsureUserUseCase,
    GetUserRequest,
    GetUserUseCase,
)
from kastalk.domain.error import InvalidInputError, NotFoundError
from kastalk.domain.service import UserService
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


class TestEnsureUserUseCase:
    """Tests for EnsureUserUseCase."""

    @pytest.mark.asyncio
    async def test_connect_returns_normalized_user(self, unit_env):
        """Connecting a wallet returns the user with the normalized address."""
        # Arrange
        user_service = await unit_env.get(UserService)
        use_case = EnsureUserUseCase(user_service=user_service)

        # Act
        response = await use_case.execute(EnsureUserRequest(wallet_address="0xABC"))

        # Assert
        assert response.wallet_address == "0xabc"
        assert response.user_id

    @pytest.mark.asyncio
    async def test_connect_twice_is_idempotent(self, unit_env):
        """The same wallet resolves to the same user ID."""
        use_case = await unit_env.get(EnsureUserUseCase)

        first = await use_case.execute(EnsureUserRequest(wallet_address="0xabc"))
        second = await use_case.execute(EnsureUserRequest(wallet_address="0xABC "))

        assert first.user_id == second.user_id

    @pytest.mark.asyncio
    async def test_missing_wallet_is_invalid(self, unit_env):
        """A request without a wallet address is rejected."""
        use_case = await unit_env.get(EnsureUserUseCase)

        with pytest.raises(InvalidInputError):
            await use_case.execute(EnsureUserRequest())


class TestGetUserUseCase:
    """Tests for GetUserUseCase."""

    @pytest.mark.asyncio
    async def test_get_known_user(self, unit_env):
        """Known wallets resolve to their user."""
        # Arrange
        ensure = await unit_env.get(EnsureUserUseCase)
        get_user = await unit_env.get(GetUserUseCase)
        created = await ensure.execute(EnsureUserRequest(wallet_address="0xabc"))

        # Act
        found = await get_user.execute(GetUserRequest(wallet_address="0xAbC"))

        # Assert
        assert found.user_id == created.user_id

    @pytest.mark.asyncio
    async def test_get_unknown_user_does_not_create(self, unit_env):
        """Looking up an unknown wallet is NotFound and creates nothing."""
        get_user = await unit_env.get(GetUserUseCase)
        user_service = await unit_env.get(UserService)

        with pytest.raises(NotFoundError):
            await get_user.execute(GetUserRequest(wallet_address="0xnobody"))

        assert await user_service.find_user("0xnobody") is None
