"""Get post use case."""

from uuid import UUID

from pydantic import BaseModel

from kastalk.domain.service import PostService, UserService
from kastalk.domain.value import PostId

from .view import PostItem


class GetPostRequest(BaseModel):
    """Get post request."""

    post_id: UUID
    viewer_wallet_address: str | None = None


class GetPostUseCase:
    """Use case for getting a single post with its aggregates."""

    def __init__(self, post_service: PostService, user_service: UserService) -> None:
        """Initialize get post use case.

        Args:
            post_service: Post domain service
            user_service: User domain service (viewer lookup)
        """
        self.post_service = post_service
        self.user_service = user_service

    async def execute(self, request: GetPostRequest) -> PostItem:
        """Execute get post flow.

        Args:
            request: Get post request

        Returns:
            Post with vote count, comment count and the viewer's vote

        Raises:
            NotFoundError: If the post does not exist
        """
        post = await self.post_service.get_post(PostId(request.post_id))

        viewer = None
        if request.viewer_wallet_address:
            viewer = await self.user_service.find_user(request.viewer_wallet_address)

        views = await self.post_service.build_views(
            [post], for_user_id=viewer.id if viewer else None
        )
        return PostItem.from_view(views[0])
