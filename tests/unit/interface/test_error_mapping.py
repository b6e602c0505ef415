"""Unit tests for domain error to HTTP translation."""

import pytest
from fastapi import HTTPException

from kastalk.domain.error import (
    ConflictError,
    DepthLimitExceededError,
    DomainError,
    InvalidInputError,
    NotAuthorizedError,
    NotFoundError,
    StorageUnavailableError,
)
from kastalk.interface.api.identity import require_wallet_address
from kastalk.interface.error import status_for, to_http_exception


class TestStatusMapping:
    """Each domain error kind has its own status code."""

    @pytest.mark.parametrize(
        "error,expected",
        [
            (InvalidInputError("bad"), 400),
            (NotFoundError("Post", "123"), 404),
            (NotAuthorizedError("post", "123", "0xbob"), 403),
            (DepthLimitExceededError("123", 2), 422),
            (ConflictError("race"), 409),
            (StorageUnavailableError("down"), 503),
            (DomainError("unknown"), 500),
        ],
    )
    def test_status_for(self, error, expected):
        assert status_for(error) == expected

    def test_client_errors_keep_message(self):
        """4xx responses carry the domain message."""
        exc = to_http_exception(NotFoundError("Comment", "abc"))

        assert exc.status_code == 404
        assert exc.detail == "Comment not found: abc"

    def test_server_errors_hide_message(self):
        """5xx responses do not leak internals."""
        unavailable = to_http_exception(StorageUnavailableError("host db:5432 refused"))
        unknown = to_http_exception(DomainError("stack details"))

        assert unavailable.detail == "Storage temporarily unavailable"
        assert unknown.detail == "Internal error"


class TestRequireWalletAddress:
    """Tests for the identity header guard."""

    @pytest.mark.parametrize("value", [None, "", "   "])
    def test_missing_header_is_unauthorized(self, value):
        with pytest.raises(HTTPException) as exc_info:
            require_wallet_address(value)

        assert exc_info.value.status_code == 401

    def test_header_is_passed_through(self):
        """Normalization is left to the domain."""
        assert require_wallet_address("0xABC") == "0xABC"
