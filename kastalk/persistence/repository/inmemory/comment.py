"""In-memory comment repository for testing."""

from typing import Optional, Sequence

from kastalk.domain.model.comment import Comment
from kastalk.domain.repository.comment import CommentRepository
from kastalk.domain.value import CommentId, PostId, UserId


def _newest_first(comments: list[Comment]) -> list[Comment]:
    return sorted(comments, key=lambda c: (c.created_at, str(c.id)), reverse=True)


class InMemoryCommentRepository(CommentRepository):
    """In-memory implementation of CommentRepository for testing."""

    def __init__(self) -> None:
        self._comments: dict[CommentId, Comment] = {}

    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID."""
        return self._comments.get(comment_id)

    async def find_by_post(self, post_id: PostId) -> list[Comment]:
        """Find all comments for a post, newest first."""
        return _newest_first(
            [c for c in self._comments.values() if c.post_id == post_id]
        )

    async def find_by_author(
        self,
        author_id: UserId,
        limit: int = 30,
        offset: int = 0,
    ) -> list[Comment]:
        """Find comments by a specific author."""
        comments = _newest_first(
            [c for c in self._comments.values() if c.author_id == author_id]
        )
        return comments[offset : offset + limit]

    async def find_subtree_ids(self, comment_id: CommentId) -> list[CommentId]:
        """Collect a comment and its descendants, deepest first."""
        root = self._comments.get(comment_id)
        if root is None:
            return []

        subtree = [root]
        frontier = [root.id]
        while frontier:
            children = [c for c in self._comments.values() if c.parent_id in frontier]
            subtree.extend(children)
            frontier = [c.id for c in children]

        subtree.sort(key=lambda c: c.level, reverse=True)
        return [c.id for c in subtree]

    async def find_ids_by_post(self, post_id: PostId) -> list[CommentId]:
        """Collect the IDs of every comment on a post, deepest first."""
        comments = [c for c in self._comments.values() if c.post_id == post_id]
        comments.sort(key=lambda c: c.level, reverse=True)
        return [c.id for c in comments]

    async def save(self, comment: Comment) -> Comment:
        """Save or update a comment."""
        self._comments[comment.id] = comment
        return comment

    async def delete_many(self, comment_ids: Sequence[CommentId]) -> int:
        """Delete comments, returning how many existed."""
        deleted = 0
        for comment_id in comment_ids:
            if self._comments.pop(comment_id, None) is not None:
                deleted += 1
        return deleted

    async def count_by_post(self, post_id: PostId) -> int:
        """Count comments for a post."""
        return sum(1 for c in self._comments.values() if c.post_id == post_id)

    async def count_by_posts(self, post_ids: Sequence[PostId]) -> dict[PostId, int]:
        """Count comments for several posts."""
        counts: dict[PostId, int] = {}
        for comment in self._comments.values():
            if comment.post_id in post_ids:
                counts[comment.post_id] = counts.get(comment.post_id, 0) + 1
        return counts
