"""Post domain service."""

from dataclasses import dataclass
from datetime import datetime
from uuid import uuid4

import logfire
from pydantic import ValidationError

from kastalk.domain.error import InvalidInputError, NotAuthorizedError, NotFoundError
from kastalk.domain.model import Post, User
from kastalk.domain.repository import CommentRepository, PostRepository, VoteRepository
from kastalk.domain.value import Media, PostId, UserId, VoteSign

from .base import Service


@dataclass
class PostView:
    """Post with its derived counts.

    Counts are computed from the vote and comment rows on every read.
    """

    post: Post
    vote_count: int = 0
    comment_count: int = 0
    user_sign: VoteSign | None = None


class PostService(Service):
    """Domain service for post operations."""

    def __init__(
        self,
        post_repository: PostRepository,
        comment_repository: CommentRepository,
        vote_repository: VoteRepository,
    ) -> None:
        """Initialize post service.

        Args:
            post_repository: Post repository
            comment_repository: Comment repository (cascade and counts)
            vote_repository: Vote repository (cascade and aggregates)
        """
        self.post_repository = post_repository
        self.comment_repository = comment_repository
        self.vote_repository = vote_repository

    async def create_post(
        self,
        author: User,
        title: str,
        content: str,
        media: Media | None = None,
    ) -> Post:
        """Create a post.

        Args:
            author: Resolved author
            title: Post title
            content: Body text
            media: Optional media reference from the media store

        Returns:
            Created post

        Raises:
            InvalidInputError: If title or content is empty or too long
        """
        with logfire.span(
            "post_service.create_post",
            author_id=str(author.id),
            has_media=media is not None,
        ):
            if not title or not title.strip():
                raise InvalidInputError("Post title must not be empty")
            if not content or not content.strip():
                raise InvalidInputError("Post content must not be empty")

            now = datetime.now()
            try:
                post = Post(
                    id=PostId(uuid4()),
                    title=title.strip(),
                    content=content,
                    media=media,
                    author_id=author.id,
                    author_wallet_address=author.wallet_address,
                    created_at=now,
                    updated_at=now,
                )
            except ValidationError as e:
                raise InvalidInputError(str(e)) from e

            saved = await self.post_repository.save(post)
            logfire.info("Post created", post_id=str(saved.id), title=saved.title)
            return saved

    async def get_post_by_id(self, post_id: PostId) -> Post | None:
        """Get a post by ID.

        Args:
            post_id: Post ID

        Returns:
            Post if found, None otherwise
        """
        with logfire.span("post_service.get_post_by_id", post_id=str(post_id)):
            post = await self.post_repository.find_by_id(post_id)
            if not post:
                logfire.warn("Post not found", post_id=str(post_id))
            return post

    async def get_post(self, post_id: PostId) -> Post:
        """Get a post by ID.

        Raises:
            NotFoundError: If post not found
        """
        post = await self.get_post_by_id(post_id)
        if not post:
            raise NotFoundError("Post", str(post_id))
        return post

    async def list_posts(
        self,
        author_id: UserId | None = None,
        limit: int = 30,
        offset: int = 0,
    ) -> list[Post]:
        """List posts newest first, optionally filtered by author."""
        with logfire.span(
            "post_service.list_posts",
            author_id=str(author_id) if author_id else None,
            limit=limit,
            offset=offset,
        ):
            posts = await self.post_repository.find_all(
                author_id=author_id, limit=limit, offset=offset
            )
            logfire.info("Posts retrieved", count=len(posts))
            return posts

    async def build_views(
        self, posts: list[Post], for_user_id: UserId | None = None
    ) -> list[PostView]:
        """Attach vote/comment aggregates and the caller's vote to posts.

        Uses batch queries so the cost does not grow with the page size.

        Args:
            posts: Posts to annotate
            for_user_id: Viewer whose vote state should be included

        Returns:
            Views in the same order as ``posts``
        """
        if not posts:
            return []

        post_ids = [post.id for post in posts]
        vote_counts = await self.vote_repository.sum_by_posts(post_ids)
        comment_counts = await self.comment_repository.count_by_posts(post_ids)

        user_signs: dict[PostId, VoteSign] = {}
        if for_user_id is not None:
            votes = await self.vote_repository.find_by_user_and_posts(
                for_user_id, post_ids
            )
            user_signs = {vote.post_id: vote.value for vote in votes if vote.post_id}

        return [
            PostView(
                post=post,
                vote_count=vote_counts.get(post.id, 0),
                comment_count=comment_counts.get(post.id, 0),
                user_sign=user_signs.get(post.id),
            )
            for post in posts
        ]

    async def delete_post(self, post_id: PostId, requesting_user_id: UserId) -> None:
        """Delete a post with all of its comments and votes.

        Runs child-first inside the caller's transaction: votes on the
        post's comments, the comments, votes on the post, the post.

        Args:
            post_id: Post to delete
            requesting_user_id: User asking for the deletion

        Raises:
            NotFoundError: If the post does not exist
            NotAuthorizedError: If the requester is not the author
        """
        with logfire.span(
            "post_service.delete_post",
            post_id=str(post_id),
            requesting_user_id=str(requesting_user_id),
        ):
            post = await self.get_post(post_id)
            if post.author_id != requesting_user_id:
                logfire.warn(
                    "Unauthorized post deletion attempt",
                    post_id=str(post_id),
                    author_id=str(post.author_id),
                    requesting_user_id=str(requesting_user_id),
                )
                raise NotAuthorizedError("post", str(post_id), str(requesting_user_id))

            comment_ids = await self.comment_repository.find_ids_by_post(post_id)
            comment_votes = await self.vote_repository.delete_by_comments(comment_ids)
            comments = await self.comment_repository.delete_many(comment_ids)
            post_votes = await self.vote_repository.delete_by_posts([post_id])
            await self.post_repository.delete(post_id)

            logfire.info(
                "Post deleted",
                post_id=str(post_id),
                comments_deleted=comments,
                votes_deleted=comment_votes + post_votes,
            )
