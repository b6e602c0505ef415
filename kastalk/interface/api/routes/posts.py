"""Post routes."""

from uuid import UUID

import logfire
from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Query, status
from pydantic import BaseModel, Field

from kastalk.application.usecase.post import (
    CreatePostRequest,
    CreatePostUseCase,
    DeletePostRequest,
    DeletePostResponse,
    DeletePostUseCase,
    GetPostRequest,
    GetPostUseCase,
    ListPostsRequest,
    ListPostsResponse,
    ListPostsUseCase,
    PostItem,
)
from kastalk.config import ThreadSettings
from kastalk.domain.error import DomainError
from kastalk.domain.value import MediaKind
from kastalk.interface.api.identity import WalletAddressHeader, require_wallet_address
from kastalk.interface.error import to_http_exception

router = APIRouter(prefix="/posts", tags=["posts"], route_class=DishkaRoute)


class CreatePostAPIRequest(BaseModel):
    """API request for creating a post.

    ``media_url`` and ``media_kind`` come from the media store and must be
    given together.
    """

    title: str = Field(min_length=1, max_length=300)
    content: str = Field(min_length=1, max_length=10000)
    media_url: str | None = None
    media_kind: MediaKind | None = None


@router.post("", response_model=PostItem, status_code=status.HTTP_201_CREATED)
async def create_post(
    request: CreatePostAPIRequest,
    create_post_use_case: FromDishka[CreatePostUseCase],
    wallet_address: WalletAddressHeader = None,
) -> PostItem:
    """Create a new post.

    Requires the X-Wallet-Address header.

    Args:
        request: Post creation data
        create_post_use_case: Create post use case from DI
        wallet_address: Caller's wallet address

    Returns:
        Created post details

    Raises:
        HTTPException: If the caller is unidentified or validation fails
    """
    wallet_address = require_wallet_address(wallet_address)

    try:
        return await create_post_use_case.execute(
            CreatePostRequest(
                wallet_address=wallet_address,
                title=request.title,
                content=request.content,
                media_url=request.media_url,
                media_kind=request.media_kind,
            )
        )
    except DomainError as e:
        logfire.warn("Post creation domain error", error=str(e))
        raise to_http_exception(e) from e


@router.get("", response_model=ListPostsResponse)
async def list_posts(
    list_posts_use_case: FromDishka[ListPostsUseCase],
    thread_settings: FromDishka[ThreadSettings],
    author_id: UUID | None = None,
    limit: int | None = Query(default=None, ge=1, le=100),
    offset: int = Query(default=0, ge=0),
    wallet_address: WalletAddressHeader = None,
) -> ListPostsResponse:
    """List posts, newest first.

    Args:
        list_posts_use_case: List posts use case from DI
        thread_settings: Paging defaults
        author_id: Only posts by this user
        limit: Page size (defaults to the configured page size)
        offset: Number of posts to skip
        wallet_address: Optional caller, to include their votes

    Returns:
        Page of posts with vote and comment counts
    """
    try:
        return await list_posts_use_case.execute(
            ListPostsRequest(
                author_id=author_id,
                limit=limit or thread_settings.page_size,
                offset=offset,
                viewer_wallet_address=wallet_address,
            )
        )
    except DomainError as e:
        raise to_http_exception(e) from e


@router.get("/{post_id}", response_model=PostItem)
async def get_post(
    post_id: UUID,
    get_post_use_case: FromDishka[GetPostUseCase],
    wallet_address: WalletAddressHeader = None,
) -> PostItem:
    """Get a post with its aggregates.

    Raises:
        HTTPException: 404 if the post does not exist
    """
    try:
        return await get_post_use_case.execute(
            GetPostRequest(post_id=post_id, viewer_wallet_address=wallet_address)
        )
    except DomainError as e:
        raise to_http_exception(e) from e


@router.delete("/{post_id}", response_model=DeletePostResponse)
async def delete_post(
    post_id: UUID,
    delete_post_use_case: FromDishka[DeletePostUseCase],
    wallet_address: WalletAddressHeader = None,
) -> DeletePostResponse:
    """Delete one's own post together with its comments and votes.

    Raises:
        HTTPException: 401 if unidentified, 404 if missing, 403 if not the author
    """
    wallet_address = require_wallet_address(wallet_address)

    try:
        return await delete_post_use_case.execute(
            DeletePostRequest(post_id=post_id, wallet_address=wallet_address)
        )
    except DomainError as e:
        raise to_http_exception(e) from e
