"""Unit tests for domain value objects."""

from uuid import uuid4

import pytest
from pydantic import ValidationError

from kastalk.domain.value import (
    MAX_COMMENT_LEVEL,
    CommentId,
    Media,
    MediaKind,
    PostId,
    VotableType,
    VoteSign,
    VoteTarget,
    WalletAddress,
)


class TestWalletAddress:
    """Tests for WalletAddress normalization."""

    def test_normalizes_case_and_whitespace(self):
        assert WalletAddress("  0xAbCdEf\t").root == "0xabcdef"

    def test_equal_after_normalization(self):
        assert WalletAddress("0xABC") == WalletAddress("0xabc")

    @pytest.mark.parametrize("value", ["", "   ", "x" * 256])
    def test_rejects_empty_or_overlong(self, value):
        with pytest.raises(ValidationError):
            WalletAddress(value)


class TestVoteTarget:
    """Tests for VoteTarget."""

    def test_post_target(self):
        post_id = PostId(uuid4())

        target = VoteTarget.post(post_id)

        assert target.type == VotableType.POST
        assert target.id == post_id
        assert str(target) == f"post:{post_id}"

    def test_comment_target(self):
        comment_id = CommentId(uuid4())

        target = VoteTarget.comment(comment_id)

        assert target.type == VotableType.COMMENT
        assert target.id == comment_id

    def test_requires_exactly_one_id(self):
        with pytest.raises(ValidationError):
            VoteTarget()
        with pytest.raises(ValidationError):
            VoteTarget(post_id=PostId(uuid4()), comment_id=CommentId(uuid4()))


class TestVoteSign:
    """Tests for VoteSign."""

    def test_values_sum_as_ints(self):
        assert sum(s.value for s in [VoteSign.UP, VoteSign.UP, VoteSign.DOWN]) == 1

    def test_zero_is_not_a_sign(self):
        with pytest.raises(ValueError):
            VoteSign(0)


class TestMedia:
    """Tests for Media."""

    def test_media_kind_from_string(self):
        media = Media(url="https://media.example/a.png", kind="image")

        assert media.kind == MediaKind.IMAGE

    def test_blank_url_is_rejected(self):
        with pytest.raises(ValidationError):
            Media(url="  ", kind=MediaKind.VIDEO)


def test_thread_depth_is_three_levels():
    assert MAX_COMMENT_LEVEL == 2
