"""List posts use case."""

from uuid import UUID

import logfire
from pydantic import BaseModel, Field

from kastalk.domain.error import NotFoundError
from kastalk.domain.service import PostService, UserService
from kastalk.domain.value import UserId

from .view import PostItem


class ListPostsRequest(BaseModel):
    """List posts request.

    ``author_id`` and ``author_wallet_address`` are alternative filters.
    """

    author_id: UUID | None = None
    author_wallet_address: str | None = None
    limit: int = Field(default=30, ge=1, le=100)
    offset: int = Field(default=0, ge=0)
    viewer_wallet_address: str | None = None


class ListPostsResponse(BaseModel):
    """List posts response."""

    posts: list[PostItem]
    limit: int
    offset: int


class ListPostsUseCase:
    """Use case for listing posts newest first."""

    def __init__(self, post_service: PostService, user_service: UserService) -> None:
        """Initialize list posts use case.

        Args:
            post_service: Post domain service
            user_service: User domain service
        """
        self.post_service = post_service
        self.user_service = user_service

    async def execute(self, request: ListPostsRequest) -> ListPostsResponse:
        """Execute list posts flow.

        Args:
            request: List posts request with filters and pagination

        Returns:
            Page of posts with aggregates

        Raises:
            NotFoundError: If filtering by an unknown wallet address
        """
        with logfire.span(
            "list_posts.execute",
            author_id=str(request.author_id) if request.author_id else None,
            limit=request.limit,
            offset=request.offset,
        ):
            author_id = UserId(request.author_id) if request.author_id else None
            if request.author_wallet_address is not None:
                author = await self.user_service.find_user(
                    request.author_wallet_address
                )
                if not author:
                    raise NotFoundError(
                        "User", request.author_wallet_address.strip().lower()
                    )
                author_id = author.id

            posts = await self.post_service.list_posts(
                author_id=author_id, limit=request.limit, offset=request.offset
            )

            viewer = None
            if request.viewer_wallet_address and posts:
                viewer = await self.user_service.find_user(
                    request.viewer_wallet_address
                )

            views = await self.post_service.build_views(
                posts, for_user_id=viewer.id if viewer else None
            )

            return ListPostsResponse(
                posts=[PostItem.from_view(view) for view in views],
                limit=request.limit,
                offset=request.offset,
            )
