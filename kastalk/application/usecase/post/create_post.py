"""Create post use case."""

import logfire
from pydantic import BaseModel, ValidationError

from kastalk.application.usecase.base import BaseUseCase
from kastalk.domain.error import InvalidInputError
from kastalk.domain.service import PostService, PostView, UserService
from kastalk.domain.value import Media, MediaKind

from .view import PostItem


class CreatePostRequest(BaseModel):
    """Create post request."""

    wallet_address: str
    title: str
    content: str
    media_url: str | None = None
    media_kind: MediaKind | None = None


class CreatePostUseCase(BaseUseCase[CreatePostRequest, PostItem]):
    """Use case for creating a new post."""

    def __init__(self, post_service: PostService, user_service: UserService) -> None:
        """Initialize create post use case.

        Args:
            post_service: Post domain service
            user_service: User domain service
        """
        self.post_service = post_service
        self.user_service = user_service

    async def execute(self, request: CreatePostRequest) -> PostItem:
        """Execute create post flow.

        Steps:
        1. Resolve the caller's wallet to a user (created on first use)
        2. Pair the media reference, if any
        3. Create the post via PostService

        Args:
            request: Create post request

        Returns:
            Created post with zeroed aggregates

        Raises:
            InvalidInputError: If title/content is empty or media is half-specified
        """
        with logfire.span("create_post.execute", title=request.title):
            author = await self.user_service.ensure_user(request.wallet_address)

            media = None
            if (request.media_url is None) != (request.media_kind is None):
                raise InvalidInputError("media_url and media_kind must be given together")
            if request.media_url is not None and request.media_kind is not None:
                try:
                    media = Media(url=request.media_url, kind=request.media_kind)
                except ValidationError as e:
                    raise InvalidInputError(str(e)) from e

            post = await self.post_service.create_post(
                author=author,
                title=request.title,
                content=request.content,
                media=media,
            )
            return PostItem.from_view(PostView(post=post))
