"""Domain layer DI providers."""

from dishka import Scope, provide

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
from kastalk.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped to align with repository/session lifecycle.
    Each HTTP request gets fresh service instances sharing one transaction.
    """

    scope = Scope.REQUEST

    @provide
    def get_user_service(self, user_repository: UserRepository) -> UserService:
        """Provide user domain service (identity resolver)."""
        return UserService(user_repository=user_repository)

    @provide
    def get_post_service(
        self,
        post_repository: PostRepository,
        comment_repository: CommentRepository,
        vote_repository: VoteRepository,
    ) -> PostService:
        """Provide post domain service."""
        return PostService(
            post_repository=post_repository,
            comment_repository=comment_repository,
            vote_repository=vote_repository,
        )

    @provide
    def get_comment_service(
        self,
        comment_repository: CommentRepository,
        vote_repository: VoteRepository,
        post_service: PostService,
        user_service: UserService,
    ) -> CommentService:
        """Provide comment domain service (thread engine)."""
        return CommentService(
            comment_repository=comment_repository,
            vote_repository=vote_repository,
            post_service=post_service,
            user_service=user_service,
        )

    @provide
    def get_vote_service(
        self,
        vote_repository: VoteRepository,
        post_service: PostService,
        comment_service: CommentService,
    ) -> VoteService:
        """Provide vote domain service (vote ledger)."""
        return VoteService(
            vote_repository=vote_repository,
            post_service=post_service,
            comment_service=comment_service,
        )
