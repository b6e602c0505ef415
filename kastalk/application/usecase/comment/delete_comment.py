"""Delete comment use case."""

from uuid import UUID

from pydantic import BaseModel

from kastalk.application.usecase.base import BaseUseCase
from kastalk.domain.error import NotAuthorizedError, NotFoundError
from kastalk.domain.service import CommentService, UserService
from kastalk.domain.value import CommentId


class DeleteCommentRequest(BaseModel):
    """Delete comment request."""

    comment_id: UUID
    wallet_address: str


class DeleteCommentResponse(BaseModel):
    """Delete comment response."""

    comment_id: str
    deleted_count: int  # The comment plus all of its replies


class DeleteCommentUseCase(
    BaseUseCase[DeleteCommentRequest, DeleteCommentResponse]
):
    """Use case for deleting one's own comment and its replies."""

    def __init__(
        self, comment_service: CommentService, user_service: UserService
    ) -> None:
        self.comment_service = comment_service
        self.user_service = user_service

    async def execute(self, request: DeleteCommentRequest) -> DeleteCommentResponse:
        """Execute delete comment flow.

        Raises:
            NotFoundError: If the comment does not exist
            NotAuthorizedError: If the caller is not the author
        """
        comment_id = CommentId(request.comment_id)
        requester = await self.user_service.find_user(request.wallet_address)
        if requester is None:
            if not await self.comment_service.get_comment_by_id(comment_id):
                raise NotFoundError("Comment", str(comment_id))
            raise NotAuthorizedError(
                "comment", str(comment_id), request.wallet_address.strip().lower()
            )

        deleted = await self.comment_service.delete_comment(comment_id, requester.id)
        return DeleteCommentResponse(comment_id=str(comment_id), deleted_count=deleted)
