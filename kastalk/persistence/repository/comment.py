"""PostgreSQL implementation of Comment repository."""

from typing import List, Optional, Sequence

from sqlalchemy import delete, desc, func, insert, select, update

from kastalk.domain.model import Comment
from kastalk.domain.repository import CommentRepository
from kastalk.domain.value import CommentId, PostId, UserId
from kastalk.persistence.mappers import comment_to_dict, row_to_comment
from kastalk.persistence.repository.base import PostgresRepository
from kastalk.persistence.tables import comments_table


class PostgresCommentRepository(PostgresRepository, CommentRepository):
    """PostgreSQL implementation of CommentRepository."""

    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID."""
        stmt = select(comments_table).where(comments_table.c.id == comment_id)
        result = await self._execute(stmt)
        row = result.fetchone()
        return row_to_comment(row._asdict()) if row else None

    async def find_by_post(self, post_id: PostId) -> List[Comment]:
        """Find all comments for a post, newest first."""
        stmt = (
            select(comments_table)
            .where(comments_table.c.post_id == post_id)
            .order_by(desc(comments_table.c.created_at), desc(comments_table.c.id))
        )
        result = await self._execute(stmt)
        return [row_to_comment(row._asdict()) for row in result.fetchall()]

    async def find_by_author(
        self,
        author_id: UserId,
        limit: int = 30,
        offset: int = 0,
    ) -> List[Comment]:
        """Find comments by a specific author."""
        stmt = (
            select(comments_table)
            .where(comments_table.c.author_id == author_id)
            .order_by(desc(comments_table.c.created_at), desc(comments_table.c.id))
            .limit(limit)
            .offset(offset)
        )
        result = await self._execute(stmt)
        return [row_to_comment(row._asdict()) for row in result.fetchall()]

    async def find_subtree_ids(self, comment_id: CommentId) -> List[CommentId]:
        """Walk the reply tree below a comment with a recursive CTE."""
        subtree = (
            select(comments_table.c.id, comments_table.c.level)
            .where(comments_table.c.id == comment_id)
            .cte(name="subtree", recursive=True)
        )
        replies = comments_table.alias("replies")
        subtree = subtree.union_all(
            select(replies.c.id, replies.c.level).where(
                replies.c.parent_id == subtree.c.id
            )
        )

        stmt = select(subtree.c.id).order_by(desc(subtree.c.level))
        result = await self._execute(stmt)
        return [CommentId(row.id) for row in result.fetchall()]

    async def find_ids_by_post(self, post_id: PostId) -> List[CommentId]:
        """Find the IDs of all comments on a post, deepest first."""
        stmt = (
            select(comments_table.c.id)
            .where(comments_table.c.post_id == post_id)
            .order_by(desc(comments_table.c.level))
        )
        result = await self._execute(stmt)
        return [CommentId(row.id) for row in result.fetchall()]

    async def save(self, comment: Comment) -> Comment:
        """Save a comment (create or update)."""
        comment_dict = comment_to_dict(comment)
        existing = await self.find_by_id(comment.id)

        if existing:
            stmt = (
                update(comments_table)
                .where(comments_table.c.id == comment.id)
                .values(**comment_dict)
            )
            await self._execute(stmt)
        else:
            # The post or parent may be deleted after the caller checked them
            stmt = insert(comments_table).values(**comment_dict)
            await self._execute_in_savepoint(stmt)

        await self.session.flush()
        return comment

    async def delete_many(self, comment_ids: Sequence[CommentId]) -> int:
        """Hard delete comments."""
        if not comment_ids:
            return 0

        stmt = delete(comments_table).where(comments_table.c.id.in_(comment_ids))
        result = await self._execute(stmt)
        await self.session.flush()
        return result.rowcount  # type: ignore[attr-defined]

    async def count_by_post(self, post_id: PostId) -> int:
        """Count comments for a post."""
        stmt = (
            select(func.count())
            .select_from(comments_table)
            .where(comments_table.c.post_id == post_id)
        )
        result = await self._execute(stmt)
        return result.scalar() or 0

    async def count_by_posts(self, post_ids: Sequence[PostId]) -> dict[PostId, int]:
        """Count comments for several posts in one grouped query."""
        if not post_ids:
            return {}

        stmt = (
            select(comments_table.c.post_id, func.count().label("total"))
            .where(comments_table.c.post_id.in_(post_ids))
            .group_by(comments_table.c.post_id)
        )
        result = await self._execute(stmt)
        return {PostId(row.post_id): row.total for row in result.fetchall()}
