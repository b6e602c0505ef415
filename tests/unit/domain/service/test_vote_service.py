"""Unit tests for VoteService (vote ledger)."""

from typing import Optional
from uuid import uuid4

import pytest
from sqlalchemy.exc import IntegrityError

from kastalk.domain.error import ConflictError, InvalidInputError, NotFoundError
from kastalk.domain.model import Vote
from kastalk.domain.repository import PostRepository, UserRepository
from kastalk.domain.service import CommentService, PostService, UserService, VoteService
from kastalk.domain.value import (
    CommentId,
    PostId,
    UserId,
    VoteId,
    VoteSign,
    VoteTarget,
)
from kastalk.persistence.repository.inmemory import (
    InMemoryCommentRepository,
    InMemoryPostRepository,
    InMemoryUserRepository,
    InMemoryVoteRepository,
)
from tests.factories import make_post, make_user
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


class RacingVoteRepository(InMemoryVoteRepository):
    """Vote repository where a concurrent vote lands after the first lookup."""

    def __init__(self, winner: Optional[Vote]) -> None:
        super().__init__()
        self.winner = winner
        self.lookups = 0

    async def find_by_user_and_target(
        self,
        user_id: UserId,
        target: VoteTarget,
        for_update: bool = False,
    ) -> Optional[Vote]:
        self.lookups += 1
        if self.lookups == 1:
            if self.winner is not None:
                self._votes.append(self.winner)
            return None
        return await super().find_by_user_and_target(user_id, target, for_update)

    async def create(self, vote: Vote) -> Vote:
        if self.winner is None:
            raise IntegrityError("Duplicate vote", None, Exception())
        return await super().create(vote)


def _vote_service_with(vote_repo: InMemoryVoteRepository, post):
    """Wire a VoteService by hand around a custom vote repository."""
    post_repo = InMemoryPostRepository()
    post_repo._posts[post.id] = post
    comment_repo = InMemoryCommentRepository()
    post_service = PostService(post_repo, comment_repo, vote_repo)
    comment_service = CommentService(
        comment_repo, vote_repo, post_service, UserService(InMemoryUserRepository())
    )
    return VoteService(vote_repo, post_service, comment_service)


async def _seed(env):
    user_repo = await env.get(UserRepository)
    post_repo = await env.get(PostRepository)
    alice = await user_repo.create(make_user("0xalice"))
    bob = await user_repo.create(make_user("0xbob"))
    post = await post_repo.save(make_post(alice))
    return alice, bob, post


class TestCastVote:
    """Tests for VoteService.cast_vote()."""

    @pytest.mark.asyncio
    async def test_first_upvote_counts_one(self, unit_env):
        """A new upvote adds one and is reported as the caller's sign."""
        vote_service = await unit_env.get(VoteService)
        alice, _, post = await _seed(unit_env)

        result = await vote_service.cast_vote(alice.id, VoteTarget.post(post.id))

        assert result.count == 1
        assert result.user_sign == VoteSign.UP

    @pytest.mark.asyncio
    async def test_same_sign_twice_toggles_off(self, unit_env):
        """Repeating a vote removes it."""
        vote_service = await unit_env.get(VoteService)
        alice, _, post = await _seed(unit_env)
        target = VoteTarget.post(post.id)

        await vote_service.cast_vote(alice.id, target, VoteSign.UP)
        result = await vote_service.cast_vote(alice.id, target, VoteSign.UP)

        assert result.count == 0
        assert result.user_sign is None
        assert await vote_service.get_user_sign(alice.id, target) is None

    @pytest.mark.asyncio
    async def test_opposite_sign_flips(self, unit_env):
        """Voting the other way moves the count by two."""
        vote_service = await unit_env.get(VoteService)
        alice, _, post = await _seed(unit_env)
        target = VoteTarget.post(post.id)

        await vote_service.cast_vote(alice.id, target, VoteSign.UP)
        result = await vote_service.cast_vote(alice.id, target, VoteSign.DOWN)

        assert result.count == -1
        assert result.user_sign == VoteSign.DOWN

    @pytest.mark.asyncio
    async def test_votes_from_several_users_sum(self, unit_env):
        """The aggregate is the sum of every user's sign."""
        vote_service = await unit_env.get(VoteService)
        alice, bob, post = await _seed(unit_env)
        target = VoteTarget.post(post.id)

        await vote_service.cast_vote(alice.id, target, VoteSign.UP)
        result = await vote_service.cast_vote(bob.id, target, VoteSign.UP)

        assert result.count == 2
        aggregate = await vote_service.get_aggregate(target)
        assert aggregate.count == 2

    @pytest.mark.asyncio
    async def test_vote_on_comment(self, unit_env):
        """Comments are votable targets too."""
        vote_service = await unit_env.get(VoteService)
        comment_service = await unit_env.get(CommentService)
        alice, bob, post = await _seed(unit_env)
        node = await comment_service.create_comment(post.id, alice.id, "nice")
        target = VoteTarget.comment(node.comment.id)

        result = await vote_service.cast_vote(bob.id, target, VoteSign.DOWN)

        assert result.count == -1
        assert await vote_service.get_user_sign(bob.id, target) == VoteSign.DOWN
        assert (await vote_service.get_aggregate(VoteTarget.post(post.id))).count == 0

    @pytest.mark.asyncio
    async def test_raw_int_sign_is_accepted(self, unit_env):
        """Plain -1 and 1 are parsed into VoteSign."""
        vote_service = await unit_env.get(VoteService)
        alice, _, post = await _seed(unit_env)

        result = await vote_service.cast_vote(alice.id, VoteTarget.post(post.id), -1)

        assert result.user_sign == VoteSign.DOWN

    @pytest.mark.asyncio
    @pytest.mark.parametrize("sign", [0, 2, -2])
    async def test_invalid_sign_is_rejected(self, unit_env, sign):
        """Only +1 and -1 are valid signs."""
        vote_service = await unit_env.get(VoteService)
        alice, _, post = await _seed(unit_env)

        with pytest.raises(InvalidInputError):
            await vote_service.cast_vote(alice.id, VoteTarget.post(post.id), sign)

    @pytest.mark.asyncio
    async def test_missing_post_raises(self, unit_env):
        """Voting on an unknown post is NotFound."""
        vote_service = await unit_env.get(VoteService)
        alice, _, _ = await _seed(unit_env)

        with pytest.raises(NotFoundError):
            await vote_service.cast_vote(alice.id, VoteTarget.post(PostId(uuid4())))

    @pytest.mark.asyncio
    async def test_missing_comment_raises(self, unit_env):
        """Voting on an unknown comment is NotFound."""
        vote_service = await unit_env.get(VoteService)
        alice, _, _ = await _seed(unit_env)

        with pytest.raises(NotFoundError):
            await vote_service.cast_vote(
                alice.id, VoteTarget.comment(CommentId(uuid4()))
            )

    @pytest.mark.asyncio
    async def test_lost_insert_race_applies_to_winner(self):
        """When a concurrent insert wins, our vote acts on that row."""
        alice = make_user("0xalice")
        post = make_post(alice)
        winner = Vote(
            id=VoteId(uuid4()),
            user_id=alice.id,
            post_id=post.id,
            value=VoteSign.UP,
            created_at=post.created_at,
            updated_at=post.created_at,
        )
        vote_repo = RacingVoteRepository(winner)
        vote_service = _vote_service_with(vote_repo, post)

        result = await vote_service.cast_vote(
            alice.id, VoteTarget.post(post.id), VoteSign.DOWN
        )

        assert result.user_sign == VoteSign.DOWN
        assert result.count == -1
        assert len(vote_repo._votes) == 1

    @pytest.mark.asyncio
    async def test_unresolvable_race_raises_conflict(self):
        """An insert conflict with no row to re-read is a ConflictError."""
        alice = make_user("0xalice")
        post = make_post(alice)
        vote_service = _vote_service_with(RacingVoteRepository(None), post)

        with pytest.raises(ConflictError):
            await vote_service.cast_vote(alice.id, VoteTarget.post(post.id))


class TestTargets:
    """Tests for target construction and aggregates."""

    def test_make_target_requires_exactly_one_id(self):
        """Both or neither IDs are invalid."""
        with pytest.raises(InvalidInputError):
            VoteService.make_target()
        with pytest.raises(InvalidInputError):
            VoteService.make_target(PostId(uuid4()), CommentId(uuid4()))

    def test_make_target_for_post(self):
        """A single post ID builds a post target."""
        post_id = PostId(uuid4())

        target = VoteService.make_target(post_id=post_id)

        assert target == VoteTarget.post(post_id)

    @pytest.mark.asyncio
    async def test_aggregate_of_unvoted_post_is_zero(self, unit_env):
        """No votes means a zero count."""
        vote_service = await unit_env.get(VoteService)
        _, _, post = await _seed(unit_env)

        aggregate = await vote_service.get_aggregate(VoteTarget.post(post.id))

        assert aggregate.count == 0

    @pytest.mark.asyncio
    async def test_aggregate_of_missing_target_raises(self, unit_env):
        """Aggregates require an existing target."""
        vote_service = await unit_env.get(VoteService)

        with pytest.raises(NotFoundError):
            await vote_service.get_aggregate(VoteTarget.comment(CommentId(uuid4())))
