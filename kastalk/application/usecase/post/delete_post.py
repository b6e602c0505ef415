"""Delete post use case."""

from uuid import UUID

from pydantic import BaseModel

from kastalk.application.usecase.base import BaseUseCase
from kastalk.domain.error import NotAuthorizedError
from kastalk.domain.service import PostService, UserService
from kastalk.domain.value import PostId


class DeletePostRequest(BaseModel):
    """Delete post request."""

    post_id: UUID
    wallet_address: str


class DeletePostResponse(BaseModel):
    """Delete post response."""

    post_id: str
    deleted: bool


class DeletePostUseCase(BaseUseCase[DeletePostRequest, DeletePostResponse]):
    """Use case for deleting one's own post with everything under it."""

    def __init__(self, post_service: PostService, user_service: UserService) -> None:
        self.post_service = post_service
        self.user_service = user_service

    async def execute(self, request: DeletePostRequest) -> DeletePostResponse:
        """Execute delete post flow.

        An unknown wallet cannot own anything, so it gets the same answer
        as any other non-author once the post is known to exist.

        Raises:
            NotFoundError: If the post does not exist
            NotAuthorizedError: If the caller is not the author
        """
        post_id = PostId(request.post_id)
        requester = await self.user_service.find_user(request.wallet_address)
        if requester is None:
            await self.post_service.get_post(post_id)
            raise NotAuthorizedError(
                "post", str(post_id), request.wallet_address.strip().lower()
            )

        await self.post_service.delete_post(post_id, requester.id)
        return DeletePostResponse(post_id=str(post_id), deleted=True)
