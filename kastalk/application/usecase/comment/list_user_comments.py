"""List a user's comments use case."""

from datetime import datetime

from pydantic import BaseModel, Field

from kastalk.domain.error import NotFoundError
from kastalk.domain.service import CommentService, UserService


class UserCommentItem(BaseModel):
    """Comment in a user's activity feed (flat, no replies)."""

    comment_id: str
    post_id: str
    parent_id: str | None
    level: int
    content: str
    created_at: datetime


class ListUserCommentsRequest(BaseModel):
    """List user comments request."""

    wallet_address: str
    limit: int = Field(default=30, ge=1, le=100)
    offset: int = Field(default=0, ge=0)


class ListUserCommentsResponse(BaseModel):
    """List user comments response."""

    wallet_address: str
    comments: list[UserCommentItem]
    limit: int
    offset: int


class ListUserCommentsUseCase:
    """Use case for listing the comments a user has written, newest first."""

    def __init__(
        self, comment_service: CommentService, user_service: UserService
    ) -> None:
        self.comment_service = comment_service
        self.user_service = user_service

    async def execute(
        self, request: ListUserCommentsRequest
    ) -> ListUserCommentsResponse:
        """Execute list user comments flow.

        Raises:
            NotFoundError: If no user has this wallet address
        """
        user = await self.user_service.find_user(request.wallet_address)
        if not user:
            raise NotFoundError("User", request.wallet_address.strip().lower())

        comments = await self.comment_service.get_comments_by_author(
            author_id=user.id, limit=request.limit, offset=request.offset
        )

        return ListUserCommentsResponse(
            wallet_address=user.wallet_address.root,
            comments=[
                UserCommentItem(
                    comment_id=str(comment.id),
                    post_id=str(comment.post_id),
                    parent_id=str(comment.parent_id) if comment.parent_id else None,
                    level=comment.level,
                    content=comment.content,
                    created_at=comment.created_at,
                )
                for comment in comments
            ],
            limit=request.limit,
            offset=request.offset,
        )
