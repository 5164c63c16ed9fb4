"""
Comment handlers, nested under ``/articles/{article_id}/comments``.

Every operation checks the parent article before touching comments, so a
comment is unreachable once its article is gone even though the row
itself is left in the table.
"""
from fastapi import APIRouter, Depends

from articles_api.dependencies import get_article_repository, get_comment_repository
from articles_api.errors import AppError
from articles_api.repositories import ArticleRepository, CommentRepository, DataAccessError
from articles_api.schemas import CommentForm, CommentResponse, ErrorResponse, ResourceId

router = APIRouter(
    prefix="/articles/{article_id}/comments",
    tags=["comments"],
    responses={404: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)


async def _require_article(articles: ArticleRepository, article_id: int) -> None:
    if await articles.get(article_id) is None:
        raise AppError.not_found()


async def _require_comment(comments: CommentRepository, article_id: int, comment_id: int) -> None:
    if await comments.get(article_id, comment_id) is None:
        raise AppError.not_found()


@router.get("", response_model=list[CommentResponse])
async def list_comments(
    article_id: ResourceId,
    articles: ArticleRepository = Depends(get_article_repository),
    comments: CommentRepository = Depends(get_comment_repository),
):
    try:
        await _require_article(articles, article_id)
        return await comments.list_by_article(article_id)
    except DataAccessError as exc:
        raise AppError.internal_server_error(exc) from exc

@router.post("", status_code=201, response_model=CommentResponse)
async def create_comment(
    article_id: ResourceId,
    data: CommentForm,
    articles: ArticleRepository = Depends(get_article_repository),
    comments: CommentRepository = Depends(get_comment_repository),
):
    try:
        await _require_article(articles, article_id)
        return await comments.create(article_id, data.body)
    except DataAccessError as exc:
        raise AppError.internal_server_error(exc) from exc

@router.get("/{comment_id}", response_model=CommentResponse)
async def show_comment(
    article_id: ResourceId,
    comment_id: ResourceId,
    articles: ArticleRepository = Depends(get_article_repository),
    comments: CommentRepository = Depends(get_comment_repository),
):
    try:
        await _require_article(articles, article_id)
        comment = await comments.get(article_id, comment_id)
    except DataAccessError as exc:
        raise AppError.internal_server_error(exc) from exc
    if comment is None:
        raise AppError.not_found()
    return comment

@router.patch("/{comment_id}", status_code=204)
async def update_comment(
    article_id: ResourceId,
    comment_id: ResourceId,
    data: CommentForm,
    articles: ArticleRepository = Depends(get_article_repository),
    comments: CommentRepository = Depends(get_comment_repository),
):
    try:
        await _require_article(articles, article_id)
        await _require_comment(comments, article_id, comment_id)
        await comments.update(article_id, comment_id, data.body)
    except DataAccessError as exc:
        raise AppError.internal_server_error(exc) from exc

@router.delete("/{comment_id}", status_code=204)
async def delete_comment(
    article_id: ResourceId,
    comment_id: ResourceId,
    articles: ArticleRepository = Depends(get_article_repository),
    comments: CommentRepository = Depends(get_comment_repository),
):
    try:
        await _require_article(articles, article_id)
        await _require_comment(comments, article_id, comment_id)
        await comments.delete(article_id, comment_id)
    except DataAccessError as exc:
        raise AppError.internal_server_error(exc) from exc
