# Repositories package.
#
# One stateless class per table, each wrapping the request's AsyncSession:
#
#   ArticleRepository  — CRUD for Article
#   CommentRepository  — CRUD for Comment, always scoped by (article_id, id)
#
# Absent rows come back as None; every store fault is raised as
# DataAccessError.  Writes are committed before a method returns.
from articles_api.repositories.exceptions import DataAccessError
from articles_api.repositories.article_repository import ArticleRepository
from articles_api.repositories.comment_repository import CommentRepository

__all__ = ["ArticleRepository", "CommentRepository", "DataAccessError"]
