from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from articles_api.database import get_db
from articles_api.repositories import ArticleRepository, CommentRepository


def get_article_repository(db: AsyncSession = Depends(get_db)) -> ArticleRepository:
    """
    Reusable FastAPI dependency that builds an ``ArticleRepository`` over
    the request's session.

    ``get_db`` is cached per request, so an article and a comment
    repository injected into the same handler share one session.
    """
    return ArticleRepository(db)


def get_comment_repository(db: AsyncSession = Depends(get_db)) -> CommentRepository:
    return CommentRepository(db)
