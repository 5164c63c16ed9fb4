"""
Article repository — data access for the ``articles`` table.

Design notes
------------
- Every read goes to the store (``populate_existing``) so a session that
  outlives one call never answers from its identity map.
- ``update`` and ``delete`` are read-modify-write.  The handler checks
  existence first; a row that disappears in between is a store fault
  here, not "not found".
"""
from collections.abc import Sequence

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from articles_api.models import Article
from articles_api.repositories.exceptions import DataAccessError


class ArticleRepository:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def _find(self, article_id: int) -> Article | None:
        q = (
            select(Article)
            .where(Article.id == article_id)
            .execution_options(populate_existing=True)
        )
        result = await self._session.execute(q)
        return result.scalar_one_or_none()

    async def list(self) -> Sequence[Article]:
        try:
            result = await self._session.execute(select(Article).order_by(Article.id))
            return result.scalars().all()
        except SQLAlchemyError as exc:
            raise DataAccessError("failed to list articles") from exc

    async def get(self, article_id: int) -> Article | None:
        """Return the article with *article_id*, or None when there is none."""
        try:
            return await self._find(article_id)
        except SQLAlchemyError as exc:
            raise DataAccessError(f"failed to load article {article_id}") from exc

    async def create(self, title: str, body: str) -> Article:
        """Insert a new article and return it with its store-assigned id."""
        article = Article(title=title, body=body)
        try:
            self._session.add(article)
            await self._session.commit()
        except SQLAlchemyError as exc:
            await self._session.rollback()
            raise DataAccessError("failed to create article") from exc
        return article

    async def update(self, article_id: int, title: str, body: str) -> Article:
        try:
            article = await self._find(article_id)
            if article is None:
                raise DataAccessError(f"article {article_id} vanished before update")
            article.title = title
            article.body = body
            await self._session.commit()
        except SQLAlchemyError as exc:
            await self._session.rollback()
            raise DataAccessError(f"failed to update article {article_id}") from exc
        return article

    async def delete(self, article_id: int) -> None:
        try:
            article = await self._find(article_id)
            if article is None:
                raise DataAccessError(f"article {article_id} vanished before delete")
            await self._session.delete(article)
            await self._session.commit()
        except SQLAlchemyError as exc:
            await self._session.rollback()
            raise DataAccessError(f"failed to delete article {article_id}") from exc
