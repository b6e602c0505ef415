"""Comment routes."""

from uuid import UUID

import logfire
from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, status
from pydantic import BaseModel, Field

from kastalk.application.usecase.comment import (
    CommentItem,
    CreateCommentRequest,
    CreateCommentUseCase,
    DeleteCommentRequest,
    DeleteCommentResponse,
    DeleteCommentUseCase,
    GetCommentsRequest,
    GetCommentsResponse,
    GetCommentsUseCase,
)
from kastalk.domain.error import DomainError
from kastalk.interface.api.identity import WalletAddressHeader, require_wallet_address
from kastalk.interface.error import to_http_exception

router = APIRouter(tags=["comments"], route_class=DishkaRoute)


class CreateCommentAPIRequest(BaseModel):
    """API request for creating a comment."""

    content: str = Field(min_length=1, max_length=10000)
    parent_id: UUID | None = None  # Parent comment ID for replies


@router.post(
    "/posts/{post_id}/comments",
    response_model=CommentItem,
    status_code=status.HTTP_201_CREATED,
)
async def create_comment(
    post_id: UUID,
    request: CreateCommentAPIRequest,
    create_comment_use_case: FromDishka[CreateCommentUseCase],
    wallet_address: WalletAddressHeader = None,
) -> CommentItem:
    """Create a comment on a post or reply to another comment.

    Requires the X-Wallet-Address header. Threads nest at most three
    levels; replying to a reply-to-a-reply is rejected with 422.

    Args:
        post_id: Post UUID
        request: Comment creation data
        create_comment_use_case: Create comment use case from DI
        wallet_address: Caller's wallet address

    Returns:
        Created comment

    Raises:
        HTTPException: If unidentified, the post/parent is missing,
            the parent is on another post, or the thread is too deep
    """
    wallet_address = require_wallet_address(wallet_address)

    try:
        return await create_comment_use_case.execute(
            CreateCommentRequest(
                post_id=post_id,
                wallet_address=wallet_address,
                content=request.content,
                parent_id=request.parent_id,
            )
        )
    except DomainError as e:
        logfire.warn(
            "Comment creation domain error", post_id=str(post_id), error=str(e)
        )
        raise to_http_exception(e) from e


@router.get("/posts/{post_id}/comments", response_model=GetCommentsResponse)
async def get_comments(
    post_id: UUID,
    get_comments_use_case: FromDishka[GetCommentsUseCase],
    wallet_address: WalletAddressHeader = None,
) -> GetCommentsResponse:
    """Get the comment thread of a post.

    Top-level comments come newest first, each carrying its replies
    (also newest first). When the caller is identified, each comment
    includes their vote.

    Raises:
        HTTPException: 404 if the post does not exist
    """
    try:
        return await get_comments_use_case.execute(
            GetCommentsRequest(post_id=post_id, viewer_wallet_address=wallet_address)
        )
    except DomainError as e:
        raise to_http_exception(e) from e


@router.delete("/comments/{comment_id}", response_model=DeleteCommentResponse)
async def delete_comment(
    comment_id: UUID,
    delete_comment_use_case: FromDishka[DeleteCommentUseCase],
    wallet_address: WalletAddressHeader = None,
) -> DeleteCommentResponse:
    """Delete one's own comment with all of its replies and their votes.

    Raises:
        HTTPException: 401 if unidentified, 404 if missing, 403 if not the author
    """
    wallet_address = require_wallet_address(wallet_address)

    try:
        return await delete_comment_use_case.execute(
            DeleteCommentRequest(comment_id=comment_id, wallet_address=wallet_address)
        )
    except DomainError as e:
        raise to_http_exception(e) from e
