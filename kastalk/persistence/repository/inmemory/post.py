"""In-memory post repository for testing."""

from typing import Optional

from kastalk.domain.model.post import Post
from kastalk.domain.repository.post import PostRepository
from kastalk.domain.value import PostId, UserId


class InMemoryPostRepository(PostRepository):
    """In-memory implementation of PostRepository for testing."""

    def __init__(self) -> None:
        self._posts: dict[PostId, Post] = {}

    async def find_by_id(self, post_id: PostId) -> Optional[Post]:
        """Find a post by ID."""
        return self._posts.get(post_id)

    async def find_all(
        self,
        author_id: Optional[UserId] = None,
        limit: int = 30,
        offset: int = 0,
    ) -> list[Post]:
        """Find posts with filtering and pagination."""
        posts = list(self._posts.values())

        if author_id is not None:
            posts = [p for p in posts if p.author_id == author_id]

        posts.sort(key=lambda p: (p.created_at, str(p.id)), reverse=True)

        return posts[offset : offset + limit]

    async def save(self, post: Post) -> Post:
        """Save or update a post."""
        self._posts[post.id] = post
        return post

    async def delete(self, post_id: PostId) -> None:
        """Delete a post."""
        self._posts.pop(post_id, None)
