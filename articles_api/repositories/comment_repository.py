"""
Comment repository — data access for the ``comments`` table.

Every lookup and mutation filters on both ``article_id`` and ``id``: a
comment that exists under another article is absent here.  The parent
article's existence is not checked; that precondition belongs to the
handlers.
"""
from collections.abc import Sequence

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from articles_api.models import Comment
from articles_api.repositories.exceptions import DataAccessError


class CommentRepository:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def _find(self, article_id: int, comment_id: int) -> Comment | None:
        q = (
            select(Comment)
            .where(Comment.id == comment_id, Comment.article_id == article_id)
            .execution_options(populate_existing=True)
        )
        result = await self._session.execute(q)
        return result.scalar_one_or_none()

    async def list_by_article(self, article_id: int) -> Sequence[Comment]:
        q = select(Comment).where(Comment.article_id == article_id).order_by(Comment.id)
        try:
            result = await self._session.execute(q)
            return result.scalars().all()
        except SQLAlchemyError as exc:
            raise DataAccessError(f"failed to list comments of article {article_id}") from exc

    async def get(self, article_id: int, comment_id: int) -> Comment | None:
        """Return comment *comment_id* of article *article_id*, or None."""
        try:
            return await self._find(article_id, comment_id)
        except SQLAlchemyError as exc:
            raise DataAccessError(
                f"failed to load comment {comment_id} of article {article_id}"
            ) from exc

    async def create(self, article_id: int, body: str) -> Comment:
        comment = Comment(article_id=article_id, body=body)
        try:
            self._session.add(comment)
            await self._session.commit()
        except SQLAlchemyError as exc:
            await self._session.rollback()
            raise DataAccessError(f"failed to create comment on article {article_id}") from exc
        return comment

    async def update(self, article_id: int, comment_id: int, body: str) -> Comment:
        """Replace the body; ``article_id`` is never reassigned."""
        try:
            comment = await self._find(article_id, comment_id)
            if comment is None:
                raise DataAccessError(
                    f"comment {comment_id} of article {article_id} vanished before update"
                )
            comment.body = body
            await self._session.commit()
        except SQLAlchemyError as exc:
            await self._session.rollback()
            raise DataAccessError(
                f"failed to update comment {comment_id} of article {article_id}"
            ) from exc
        return comment

    async def delete(self, article_id: int, comment_id: int) -> None:
        try:
            comment = await self._find(article_id, comment_id)
            if comment is None:
                raise DataAccessError(
                    f"comment {comment_id} of article {article_id} vanished before delete"
                )
            await self._session.delete(comment)
            await self._session.commit()
        except SQLAlchemyError as exc:
            await self._session.rollback()
            raise DataAccessError(
                f"failed to delete comment {comment_id} of article {article_id}"
            ) from exc
