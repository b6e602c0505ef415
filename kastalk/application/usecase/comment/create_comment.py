"""Create comment use case."""

from uuid import UUID

import logfire
from pydantic import BaseModel

from kastalk.application.usecase.base import BaseUseCase
from kastalk.domain.service import CommentService, UserService
from kastalk.domain.value import CommentId, PostId

from .view import CommentItem


class CreateCommentRequest(BaseModel):
    """Create comment request."""

    post_id: UUID
    wallet_address: str
    content: str
    parent_id: UUID | None = None  # Parent comment ID for replies


class CreateCommentUseCase(BaseUseCase[CreateCommentRequest, CommentItem]):
    """Use case for creating a comment on a post or replying to another comment."""

    def __init__(
        self,
        comment_service: CommentService,
        user_service: UserService,
    ) -> None:
        """Initialize create comment use case.

        Args:
            comment_service: Comment domain service
            user_service: User domain service
        """
        self.comment_service = comment_service
        self.user_service = user_service

    async def execute(self, request: CreateCommentRequest) -> CommentItem:
        """Execute create comment flow.

        Steps:
        1. Resolve the caller's wallet to a user (created on first use)
        2. Create the comment (service validates post, parent and depth)

        Args:
            request: Create comment request

        Returns:
            The new comment with zeroed aggregates

        Raises:
            NotFoundError: If the post or parent comment does not exist
            InvalidInputError: If content is empty or the parent is on another post
            DepthLimitExceededError: If the reply would nest too deep
        """
        with logfire.span(
            "create_comment.execute",
            post_id=str(request.post_id),
            parent_id=str(request.parent_id) if request.parent_id else None,
        ):
            author = await self.user_service.ensure_user(request.wallet_address)
            node = await self.comment_service.create_comment(
                post_id=PostId(request.post_id),
                author_id=author.id,
                content=request.content,
                parent_id=CommentId(request.parent_id) if request.parent_id else None,
            )
            return CommentItem.from_node(node)
