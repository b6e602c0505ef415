"""PostgreSQL implementation of Post repository."""

from typing import List, Optional

import logfire
from sqlalchemy import delete, desc, insert, select, update

from kastalk.domain.model import Post
from kastalk.domain.repository import PostRepository
from kastalk.domain.value import PostId, UserId
from kastalk.persistence.mappers import post_to_dict, row_to_post
from kastalk.persistence.repository.base import PostgresRepository
from kastalk.persistence.tables import posts_table


class PostgresPostRepository(PostgresRepository, PostRepository):
    """PostgreSQL implementation of PostRepository."""

    async def find_by_id(self, post_id: PostId) -> Optional[Post]:
        """Find a post by ID."""
        stmt = select(posts_table).where(posts_table.c.id == post_id)
        result = await self._execute(stmt)
        row = result.fetchone()
        return row_to_post(row._asdict()) if row else None

    async def find_all(
        self,
        author_id: Optional[UserId] = None,
        limit: int = 30,
        offset: int = 0,
    ) -> List[Post]:
        """Find posts, newest first."""
        stmt = select(posts_table)
        if author_id is not None:
            stmt = stmt.where(posts_table.c.author_id == author_id)

        stmt = (
            stmt.order_by(desc(posts_table.c.created_at), desc(posts_table.c.id))
            .limit(limit)
            .offset(offset)
        )

        result = await self._execute(stmt)
        return [row_to_post(row._asdict()) for row in result.fetchall()]

    async def save(self, post: Post) -> Post:
        """Save a post (create or update)."""
        post_dict = post_to_dict(post)
        existing = await self.find_by_id(post.id)

        if existing:
            stmt = (
                update(posts_table)
                .where(posts_table.c.id == post.id)
                .values(**post_dict)
            )
        else:
            stmt = insert(posts_table).values(**post_dict)

        await self._execute(stmt)
        await self.session.flush()
        return post

    async def delete(self, post_id: PostId) -> None:
        """Delete a post row."""
        stmt = delete(posts_table).where(posts_table.c.id == post_id)
        result = await self._execute(stmt)
        await self.session.flush()
        if result.rowcount == 0:  # type: ignore[attr-defined]
            logfire.warn("Post already gone at delete", post_id=str(post_id))
