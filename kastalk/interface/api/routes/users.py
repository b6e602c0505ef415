"""User routes (wallet connect and user activity)."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Query
from pydantic import BaseModel

from kastalk.application.usecase.comment import (
    ListUserCommentsRequest,
    ListUserCommentsResponse,
    ListUserCommentsUseCase,
)
from kastalk.application.usecase.post import (
    ListPostsRequest,
    ListPostsResponse,
    ListPostsUseCase,
)
from kastalk.application.usecase.user import (
    EnsureUserRequest,
    EnsureUserUseCase,
    GetUserRequest,
    GetUserUseCase,
    UserResponse,
)
from kastalk.config import ThreadSettings
from kastalk.domain.error import DomainError
from kastalk.interface.api.identity import WalletAddressHeader
from kastalk.interface.error import to_http_exception

router = APIRouter(prefix="/users", tags=["users"], route_class=DishkaRoute)


class ConnectWalletAPIRequest(BaseModel):
    """API request for connecting a wallet."""

    wallet_address: str | None = None


@router.post("", response_model=UserResponse)
async def connect_wallet(
    request: ConnectWalletAPIRequest,
    ensure_user_use_case: FromDishka[EnsureUserUseCase],
) -> UserResponse:
    """Resolve a wallet address to a user, creating the user on first connect.

    Calling this repeatedly with the same address returns the same user.

    Args:
        request: Wallet address supplied by the identity source
        ensure_user_use_case: Ensure user use case from DI

    Returns:
        The user for this wallet

    Raises:
        HTTPException: 400 if the address is missing or empty
    """
    try:
        return await ensure_user_use_case.execute(
            EnsureUserRequest(wallet_address=request.wallet_address)
        )
    except DomainError as e:
        raise to_http_exception(e) from e


@router.get("/{wallet_address}", response_model=UserResponse)
async def get_user(
    wallet_address: str,
    get_user_use_case: FromDishka[GetUserUseCase],
) -> UserResponse:
    """Look up a user by wallet address.

    Raises:
        HTTPException: 404 if no user has connected this wallet
    """
    try:
        return await get_user_use_case.execute(
            GetUserRequest(wallet_address=wallet_address)
        )
    except DomainError as e:
        raise to_http_exception(e) from e


@router.get("/{wallet_address}/posts", response_model=ListPostsResponse)
async def get_user_posts(
    wallet_address: str,
    list_posts_use_case: FromDishka[ListPostsUseCase],
    thread_settings: FromDishka[ThreadSettings],
    viewer: WalletAddressHeader = None,
    limit: int | None = Query(default=None, ge=1, le=100),
    offset: int = Query(default=0, ge=0),
) -> ListPostsResponse:
    """List posts written by a user, newest first.

    Raises:
        HTTPException: 404 if no user has connected this wallet
    """
    try:
        return await list_posts_use_case.execute(
            ListPostsRequest(
                author_wallet_address=wallet_address,
                limit=limit or thread_settings.page_size,
                offset=offset,
                viewer_wallet_address=viewer,
            )
        )
    except DomainError as e:
        raise to_http_exception(e) from e


@router.get("/{wallet_address}/comments", response_model=ListUserCommentsResponse)
async def get_user_comments(
    wallet_address: str,
    list_user_comments_use_case: FromDishka[ListUserCommentsUseCase],
    thread_settings: FromDishka[ThreadSettings],
    limit: int | None = Query(default=None, ge=1, le=100),
    offset: int = Query(default=0, ge=0),
) -> ListUserCommentsResponse:
    """List comments written by a user, newest first.

    Raises:
        HTTPException: 404 if no user has connected this wallet
    """
    try:
        return await list_user_comments_use_case.execute(
            ListUserCommentsRequest(
                wallet_address=wallet_address,
                limit=limit or thread_settings.page_size,
                offset=offset,
            )
        )
    except DomainError as e:
        raise to_http_exception(e) from e
