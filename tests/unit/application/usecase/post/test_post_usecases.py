"""Unit tests for the post use cases."""

from uuid import UUID, uuid4

import pytest

from kastalk.application.usecase.post.create_post import (
    CreatePostRequest,
    CreatePostUseCase,
)
from kastalk.application.usecase.post.delete_post import (
    DeletePostRequest,
    DeletePostUseCase,
)
from kastalk.application.usecase.post.get_post import GetPostRequest, GetPostUseCase
from kastalk.application.usecase.post.list_posts import (
    ListPostsRequest,
    ListPostsUseCase,
)
from kastalk.domain.error import InvalidInputError, NotAuthorizedError, NotFoundError
from kastalk.domain.repository import PostRepository
from kastalk.domain.service import PostService, UserService, VoteService
from kastalk.domain.value import MediaKind, PostId, VoteTarget
from tests.factories import make_post
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


class TestCreatePostUseCase:
    """Tests for CreatePostUseCase."""

    @pytest.mark.asyncio
    async def test_create_post_creates_author_on_first_use(self, unit_env):
        """Posting from a new wallet registers it and returns zeroed counts."""
        # Arrange
        post_service = await unit_env.get(PostService)
        user_service = await unit_env.get(UserService)
        use_case = CreatePostUseCase(post_service=post_service, user_service=user_service)

        # Act
        item = await use_case.execute(
            CreatePostRequest(wallet_address="0xAlice", title="Hi", content="There")
        )

        # Assert
        assert item.author_wallet_address == "0xalice"
        assert (item.vote_count, item.comment_count, item.user_sign) == (0, 0, None)
        author = await user_service.find_user("0xalice")
        assert author is not None
        assert item.author_id == str(author.id)

    @pytest.mark.asyncio
    async def test_create_post_with_media(self, unit_env):
        """A paired media URL and kind are attached."""
        use_case = await unit_env.get(CreatePostUseCase)

        item = await use_case.execute(
            CreatePostRequest(
                wallet_address="0xalice",
                title="Clip",
                content="Watch",
                media_url="https://media.example/clip.mp4",
                media_kind=MediaKind.VIDEO,
            )
        )

        assert item.media_url == "https://media.example/clip.mp4"
        assert item.media_kind == MediaKind.VIDEO

    @pytest.mark.asyncio
    async def test_half_specified_media_is_invalid(self, unit_env):
        """A media URL without a kind is rejected."""
        use_case = await unit_env.get(CreatePostUseCase)

        with pytest.raises(InvalidInputError):
            await use_case.execute(
                CreatePostRequest(
                    wallet_address="0xalice",
                    title="Clip",
                    content="Watch",
                    media_url="https://media.example/clip.mp4",
                )
            )


class TestReadPostUseCases:
    """Tests for GetPostUseCase and ListPostsUseCase."""

    @pytest.mark.asyncio
    async def test_get_post_includes_viewer_sign(self, unit_env):
        """The viewer's own vote is reported alongside the total."""
        # Arrange
        create = await unit_env.get(CreatePostUseCase)
        get_post = await unit_env.get(GetPostUseCase)
        user_service = await unit_env.get(UserService)
        vote_service = await unit_env.get(VoteService)
        item = await create.execute(
            CreatePostRequest(wallet_address="0xalice", title="Hi", content="There")
        )
        bob = await user_service.ensure_user("0xbob")
        target = VoteTarget.post(PostId(UUID(item.post_id)))
        await vote_service.cast_vote(bob.id, target, -1)

        # Act
        as_bob = await get_post.execute(
            GetPostRequest(post_id=item.post_id, viewer_wallet_address="0xBOB")
        )
        anonymous = await get_post.execute(GetPostRequest(post_id=item.post_id))

        # Assert
        assert as_bob.vote_count == -1
        assert as_bob.user_sign == -1
        assert anonymous.user_sign is None

    @pytest.mark.asyncio
    async def test_get_post_with_unknown_viewer_creates_nobody(self, unit_env):
        """Reading never registers the viewer."""
        create = await unit_env.get(CreatePostUseCase)
        get_post = await unit_env.get(GetPostUseCase)
        user_service = await unit_env.get(UserService)
        item = await create.execute(
            CreatePostRequest(wallet_address="0xalice", title="Hi", content="There")
        )

        result = await get_post.execute(
            GetPostRequest(post_id=item.post_id, viewer_wallet_address="0xlurker")
        )

        assert result.user_sign is None
        assert await user_service.find_user("0xlurker") is None

    @pytest.mark.asyncio
    async def test_get_missing_post_raises(self, unit_env):
        """Unknown posts are NotFound."""
        get_post = await unit_env.get(GetPostUseCase)

        with pytest.raises(NotFoundError):
            await get_post.execute(GetPostRequest(post_id=uuid4()))

    @pytest.mark.asyncio
    async def test_list_by_author_wallet(self, unit_env):
        """Filtering by wallet address returns only that author's posts."""
        # Arrange
        user_service = await unit_env.get(UserService)
        post_repo = await unit_env.get(PostRepository)
        list_posts = await unit_env.get(ListPostsUseCase)
        alice = await user_service.ensure_user("0xalice")
        bob = await user_service.ensure_user("0xbob")
        await post_repo.save(make_post(alice, "a1", age_seconds=20))
        await post_repo.save(make_post(bob, "b1", age_seconds=10))
        await post_repo.save(make_post(alice, "a2", age_seconds=5))

        # Act
        response = await list_posts.execute(
            ListPostsRequest(author_wallet_address="0xALICE")
        )

        # Assert
        assert [p.title for p in response.posts] == ["a2", "a1"]
        assert (response.limit, response.offset) == (30, 0)

    @pytest.mark.asyncio
    async def test_list_by_unknown_author_wallet_raises(self, unit_env):
        """Filtering by an unknown wallet is NotFound."""
        list_posts = await unit_env.get(ListPostsUseCase)

        with pytest.raises(NotFoundError):
            await list_posts.execute(ListPostsRequest(author_wallet_address="0xnone"))


class TestDeletePostUseCase:
    """Tests for DeletePostUseCase."""

    @pytest.mark.asyncio
    async def test_author_deletes_post(self, unit_env):
        """The author can delete their post."""
        # Arrange
        create = await unit_env.get(CreatePostUseCase)
        post_service = await unit_env.get(PostService)
        user_service = await unit_env.get(UserService)
        use_case = DeletePostUseCase(post_service=post_service, user_service=user_service)
        item = await create.execute(
            CreatePostRequest(wallet_address="0xalice", title="Hi", content="There")
        )

        # Act
        response = await use_case.execute(
            DeletePostRequest(post_id=item.post_id, wallet_address="0xalice")
        )

        # Assert
        assert response.deleted is True
        assert await post_service.get_post_by_id(PostId(UUID(response.post_id))) is None

    @pytest.mark.asyncio
    async def test_unknown_wallet_is_not_authorized(self, unit_env):
        """A wallet that never connected cannot delete an existing post."""
        create = await unit_env.get(CreatePostUseCase)
        delete = await unit_env.get(DeletePostUseCase)
        item = await create.execute(
            CreatePostRequest(wallet_address="0xalice", title="Hi", content="There")
        )

        with pytest.raises(NotAuthorizedError):
            await delete.execute(
                DeletePostRequest(post_id=item.post_id, wallet_address="0xstranger")
            )

    @pytest.mark.asyncio
    async def test_unknown_wallet_on_missing_post_is_not_found(self, unit_env):
        """A missing post is NotFound regardless of who asks."""
        delete = await unit_env.get(DeletePostUseCase)

        with pytest.raises(NotFoundError):
            await delete.execute(
                DeletePostRequest(post_id=uuid4(), wallet_address="0xstranger")
            )
