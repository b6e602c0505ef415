"""Get comments use case."""

from uuid import UUID

from pydantic import BaseModel

from kastalk.domain.service import CommentService, UserService
from kastalk.domain.value import PostId

from .view import CommentItem


class GetCommentsRequest(BaseModel):
    """Get comments request."""

    post_id: UUID
    viewer_wallet_address: str | None = None


class GetCommentsResponse(BaseModel):
    """Get comments response."""

    post_id: str
    comments: list[CommentItem]
    total: int  # All levels


class GetCommentsUseCase:
    """Use case for getting the comment thread of a post."""

    def __init__(
        self,
        comment_service: CommentService,
        user_service: UserService,
    ) -> None:
        """Initialize get comments use case.

        Args:
            comment_service: Comment domain service
            user_service: User domain service (viewer lookup)
        """
        self.comment_service = comment_service
        self.user_service = user_service

    async def execute(self, request: GetCommentsRequest) -> GetCommentsResponse:
        """Execute get comments flow.

        An unknown viewer wallet is treated like an anonymous viewer.

        Args:
            request: Get comments request with post ID and optional viewer

        Returns:
            Top-level comments newest first, each with nested replies

        Raises:
            NotFoundError: If the post does not exist
        """
        viewer = None
        if request.viewer_wallet_address:
            viewer = await self.user_service.find_user(request.viewer_wallet_address)

        roots = await self.comment_service.get_thread(
            PostId(request.post_id), for_user_id=viewer.id if viewer else None
        )
        items = [CommentItem.from_node(node) for node in roots]

        return GetCommentsResponse(
            post_id=str(request.post_id),
            comments=items,
            total=_count(items),
        )


def _count(items: list[CommentItem]) -> int:
    return sum(1 + _count(item.replies) for item in items)
