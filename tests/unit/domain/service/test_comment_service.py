"""Unit tests for CommentService (thread engine)."""

from uuid import uuid4

import pytest
from sqlalchemy.exc import IntegrityError

from kastalk.domain.error import (
    ConflictError,
    DepthLimitExceededError,
    InvalidInputError,
    NotAuthorizedError,
    NotFoundError,
)
from kastalk.domain.repository import (
    CommentRepository,
    PostRepository,
    UserRepository,
    VoteRepository,
)
from kastalk.domain.service import (
    CommentService,
    PostService,
    UserService,
    VoteService,
)
from kastalk.domain.value import CommentId, PostId, VoteSign, VoteTarget
from kastalk.persistence.repository.inmemory import (
    InMemoryCommentRepository,
    InMemoryPostRepository,
    InMemoryUserRepository,
    InMemoryVoteRepository,
)
from tests.factories import make_comment, make_post, make_user
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


class RacingCommentRepository(InMemoryCommentRepository):
    """Comment repository whose inserts lose a race against a delete.

    `before_insert` runs just before the insert fails, standing in for
    the concurrent request that removed the post or parent.
    """

    def __init__(self, before_insert=None) -> None:
        super().__init__()
        self.before_insert = before_insert
        self.failed_inserts = 0

    async def save(self, comment):
        if comment.id in self._comments:
            return await super().save(comment)
        if self.before_insert is not None:
            await self.before_insert()
        self.failed_inserts += 1
        raise IntegrityError("Foreign key violation", None, Exception())


async def _racing_services(comment_repo: RacingCommentRepository):
    """Wire a CommentService by hand around a racing comment repository."""
    post_repo = InMemoryPostRepository()
    vote_repo = InMemoryVoteRepository()
    user_service = UserService(InMemoryUserRepository())
    post_service = PostService(post_repo, comment_repo, vote_repo)
    comment_service = CommentService(
        comment_repo, vote_repo, post_service, user_service
    )
    author = await user_service.ensure_user("0xalice")
    post = await post_repo.save(make_post(author))
    return comment_service, post_repo, author, post


async def _seed_post(env, wallet_address: str = "0xalice"):
    """Create an author through the service and store a post for them."""
    user_service = await env.get(UserService)
    post_repo = await env.get(PostRepository)
    author = await user_service.ensure_user(wallet_address)
    post = await post_repo.save(make_post(author))
    return author, post


class TestCreateComment:
    """Tests for CommentService.create_comment()."""

    @pytest.mark.asyncio
    async def test_top_level_comment_has_level_zero(self, unit_env):
        """A comment without a parent sits at level 0."""
        comment_service = await unit_env.get(CommentService)
        author, post = await _seed_post(unit_env)

        node = await comment_service.create_comment(post.id, author.id, "First!")

        assert node.comment.level == 0
        assert node.comment.parent_id is None
        assert node.comment.author_wallet_address == author.wallet_address
        assert node.vote_count == 0
        assert node.reply_count == 0
        assert node.replies == []

    @pytest.mark.asyncio
    async def test_reply_levels_follow_parent(self, unit_env):
        """Replies are one level below their parent, up to level 2."""
        comment_service = await unit_env.get(CommentService)
        author, post = await _seed_post(unit_env)

        top = await comment_service.create_comment(post.id, author.id, "top")
        reply = await comment_service.create_comment(
            post.id, author.id, "reply", parent_id=top.comment.id
        )
        nested = await comment_service.create_comment(
            post.id, author.id, "nested", parent_id=reply.comment.id
        )

        assert reply.comment.level == 1
        assert nested.comment.level == 2
        assert nested.comment.parent_id == reply.comment.id

    @pytest.mark.asyncio
    async def test_reply_below_deepest_level_is_rejected(self, unit_env):
        """Replying to a level-2 comment fails and stores nothing."""
        comment_service = await unit_env.get(CommentService)
        comment_repo = await unit_env.get(CommentRepository)
        author, post = await _seed_post(unit_env)

        top = await comment_service.create_comment(post.id, author.id, "top")
        reply = await comment_service.create_comment(
            post.id, author.id, "reply", parent_id=top.comment.id
        )
        nested = await comment_service.create_comment(
            post.id, author.id, "nested", parent_id=reply.comment.id
        )

        with pytest.raises(DepthLimitExceededError):
            await comment_service.create_comment(
                post.id, author.id, "too deep", parent_id=nested.comment.id
            )

        assert await comment_repo.count_by_post(post.id) == 3

    @pytest.mark.asyncio
    async def test_parent_on_other_post_is_invalid(self, unit_env):
        """A parent must belong to the same post."""
        comment_service = await unit_env.get(CommentService)
        post_repo = await unit_env.get(PostRepository)
        author, post = await _seed_post(unit_env)
        other_post = await post_repo.save(make_post(author, title="Other"))

        parent = await comment_service.create_comment(other_post.id, author.id, "x")

        with pytest.raises(InvalidInputError):
            await comment_service.create_comment(
                post.id, author.id, "reply", parent_id=parent.comment.id
            )

    @pytest.mark.asyncio
    async def test_missing_post_raises(self, unit_env):
        """Commenting on an unknown post is NotFound."""
        comment_service = await unit_env.get(CommentService)
        user_service = await unit_env.get(UserService)
        author = await user_service.ensure_user("0xalice")

        with pytest.raises(NotFoundError):
            await comment_service.create_comment(PostId(uuid4()), author.id, "hi")

    @pytest.mark.asyncio
    async def test_missing_parent_raises(self, unit_env):
        """Replying to an unknown comment is NotFound."""
        comment_service = await unit_env.get(CommentService)
        author, post = await _seed_post(unit_env)

        with pytest.raises(NotFoundError):
            await comment_service.create_comment(
                post.id, author.id, "reply", parent_id=CommentId(uuid4())
            )

    @pytest.mark.asyncio
    @pytest.mark.parametrize("content", ["", "   "])
    async def test_empty_content_is_invalid(self, unit_env, content):
        """Blank comments are rejected."""
        comment_service = await unit_env.get(CommentService)
        author, post = await _seed_post(unit_env)

        with pytest.raises(InvalidInputError):
            await comment_service.create_comment(post.id, author.id, content)


class TestCreateCommentRaces:
    """create_comment when a delete lands between its checks and the insert."""

    @pytest.mark.asyncio
    async def test_parent_deleted_during_reply_is_not_found(self):
        # Arrange
        comment_repo = RacingCommentRepository()
        comment_service, _, author, post = await _racing_services(comment_repo)
        parent = make_comment(post, author)
        comment_repo._comments[parent.id] = parent

        async def delete_parent():
            await comment_repo.delete_many([parent.id])

        comment_repo.before_insert = delete_parent

        # Act
        with pytest.raises(NotFoundError) as exc_info:
            await comment_service.create_comment(
                post.id, author.id, "reply", parent_id=parent.id
            )

        # Assert
        assert exc_info.value.resource == "Comment"
        assert comment_repo.failed_inserts == 1
        assert await comment_repo.count_by_post(post.id) == 0

    @pytest.mark.asyncio
    async def test_post_deleted_during_comment_is_not_found(self):
        # Arrange
        comment_repo = RacingCommentRepository()
        comment_service, post_repo, author, post = await _racing_services(
            comment_repo
        )

        async def delete_post():
            await post_repo.delete(post.id)

        comment_repo.before_insert = delete_post

        # Act
        with pytest.raises(NotFoundError) as exc_info:
            await comment_service.create_comment(post.id, author.id, "hello")

        # Assert
        assert exc_info.value.resource == "Post"

    @pytest.mark.asyncio
    async def test_unexplained_constraint_failure_is_conflict(self):
        """References still exist, so the failure is reported as a conflict."""
        comment_repo = RacingCommentRepository()
        comment_service, _, author, post = await _racing_services(comment_repo)

        with pytest.raises(ConflictError):
            await comment_service.create_comment(post.id, author.id, "hello")


class TestGetThread:
    """Tests for CommentService.get_thread()."""

    @pytest.mark.asyncio
    async def test_thread_is_nested_newest_first(self, unit_env):
        """Top-level comments and replies come back newest first."""
        comment_service = await unit_env.get(CommentService)
        comment_repo = await unit_env.get(CommentRepository)
        author, post = await _seed_post(unit_env)

        older = await comment_repo.save(make_comment(post, author, age_seconds=30))
        newer = await comment_repo.save(make_comment(post, author, age_seconds=20))
        first_reply = await comment_repo.save(
            make_comment(post, author, parent=older, age_seconds=10)
        )
        second_reply = await comment_repo.save(
            make_comment(post, author, parent=older, age_seconds=5)
        )
        leaf = await comment_repo.save(
            make_comment(post, author, parent=first_reply, age_seconds=1)
        )

        thread = await comment_service.get_thread(post.id)

        assert [n.comment.id for n in thread] == [newer.id, older.id]
        older_node = thread[1]
        assert older_node.reply_count == 2
        assert [n.comment.id for n in older_node.replies] == [
            second_reply.id,
            first_reply.id,
        ]
        assert [n.comment.id for n in older_node.replies[1].replies] == [leaf.id]
        assert thread[0].replies == []

    @pytest.mark.asyncio
    async def test_thread_carries_votes_and_viewer_sign(self, unit_env):
        """Each node has its vote total and the viewer's own sign."""
        comment_service = await unit_env.get(CommentService)
        vote_service = await unit_env.get(VoteService)
        user_service = await unit_env.get(UserService)
        author, post = await _seed_post(unit_env)
        bob = await user_service.ensure_user("0xbob")

        node = await comment_service.create_comment(post.id, author.id, "hello")
        target = VoteTarget.comment(node.comment.id)
        await vote_service.cast_vote(author.id, target, VoteSign.UP)
        await vote_service.cast_vote(bob.id, target, VoteSign.DOWN)

        as_bob = await comment_service.get_thread(post.id, for_user_id=bob.id)
        anonymous = await comment_service.get_thread(post.id)

        assert as_bob[0].vote_count == 0
        assert as_bob[0].user_sign == VoteSign.DOWN
        assert anonymous[0].user_sign is None

    @pytest.mark.asyncio
    async def test_empty_thread(self, unit_env):
        """A post without comments has an empty thread."""
        comment_service = await unit_env.get(CommentService)
        _, post = await _seed_post(unit_env)

        assert await comment_service.get_thread(post.id) == []

    @pytest.mark.asyncio
    async def test_thread_for_missing_post_raises(self, unit_env):
        """Unknown posts have no thread."""
        comment_service = await unit_env.get(CommentService)

        with pytest.raises(NotFoundError):
            await comment_service.get_thread(PostId(uuid4()))


class TestDeleteComment:
    """Tests for CommentService.delete_comment()."""

    @pytest.mark.asyncio
    async def test_delete_removes_subtree_and_votes(self, unit_env):
        """Deleting a comment removes its replies and all their votes."""
        comment_service = await unit_env.get(CommentService)
        comment_repo = await unit_env.get(CommentRepository)
        vote_service = await unit_env.get(VoteService)
        vote_repo = await unit_env.get(VoteRepository)
        author, post = await _seed_post(unit_env)

        top = await comment_service.create_comment(post.id, author.id, "top")
        reply = await comment_service.create_comment(
            post.id, author.id, "reply", parent_id=top.comment.id
        )
        nested = await comment_service.create_comment(
            post.id, author.id, "nested", parent_id=reply.comment.id
        )
        sibling = await comment_service.create_comment(post.id, author.id, "sibling")
        await vote_service.cast_vote(author.id, VoteTarget.comment(nested.comment.id))
        await vote_service.cast_vote(author.id, VoteTarget.comment(sibling.comment.id))

        deleted = await comment_service.delete_comment(top.comment.id, author.id)

        assert deleted == 3
        assert await comment_repo.find_by_id(reply.comment.id) is None
        assert await comment_repo.find_by_id(sibling.comment.id) is not None
        assert await vote_repo.sum_by_target(VoteTarget.comment(nested.comment.id)) == 0
        assert await vote_repo.sum_by_target(VoteTarget.comment(sibling.comment.id)) == 1

    @pytest.mark.asyncio
    async def test_delete_reply_keeps_parent(self, unit_env):
        """Deleting a reply leaves its ancestors alone."""
        comment_service = await unit_env.get(CommentService)
        comment_repo = await unit_env.get(CommentRepository)
        author, post = await _seed_post(unit_env)

        top = await comment_service.create_comment(post.id, author.id, "top")
        reply = await comment_service.create_comment(
            post.id, author.id, "reply", parent_id=top.comment.id
        )

        assert await comment_service.delete_comment(reply.comment.id, author.id) == 1
        assert await comment_repo.find_by_id(top.comment.id) is not None

    @pytest.mark.asyncio
    async def test_only_author_can_delete(self, unit_env):
        """Other users get NotAuthorized and nothing is removed."""
        comment_service = await unit_env.get(CommentService)
        comment_repo = await unit_env.get(CommentRepository)
        user_repo = await unit_env.get(UserRepository)
        author, post = await _seed_post(unit_env)
        mallory = await user_repo.create(make_user("0xmallory"))

        node = await comment_service.create_comment(post.id, author.id, "mine")

        with pytest.raises(NotAuthorizedError):
            await comment_service.delete_comment(node.comment.id, mallory.id)

        assert await comment_repo.find_by_id(node.comment.id) is not None

    @pytest.mark.asyncio
    async def test_delete_missing_comment_raises(self, unit_env):
        """Deleting an unknown comment is NotFound."""
        comment_service = await unit_env.get(CommentService)
        author, _ = await _seed_post(unit_env)

        with pytest.raises(NotFoundError):
            await comment_service.delete_comment(CommentId(uuid4()), author.id)
