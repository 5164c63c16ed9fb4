from fastapi import APIRouter, Depends

from articles_api.dependencies import get_article_repository
from articles_api.errors import AppError
from articles_api.repositories import ArticleRepository, DataAccessError
from articles_api.schemas import ArticleForm, ArticleResponse, ErrorResponse, ResourceId

router = APIRouter(
    prefix="/articles",
    tags=["articles"],
    responses={500: {"model": ErrorResponse}},
)

@router.get("", response_model=list[ArticleResponse])
async def list_articles(articles: ArticleRepository = Depends(get_article_repository)):
    try:
        return await articles.list()
    except DataAccessError as exc:
        raise AppError.internal_server_error(exc) from exc

@router.post("", status_code=201, response_model=ArticleResponse)
async def create_article(
    data: ArticleForm,
    articles: ArticleRepository = Depends(get_article_repository),
):
    try:
        return await articles.create(data.title, data.body)
    except DataAccessError as exc:
        raise AppError.internal_server_error(exc) from exc

@router.get(
    "/{article_id}",
    response_model=ArticleResponse,
    responses={404: {"model": ErrorResponse}},
)
async def show_article(
    article_id: ResourceId,
    articles: ArticleRepository = Depends(get_article_repository),
):
    try:
        article = await articles.get(article_id)
    except DataAccessError as exc:
        raise AppError.internal_server_error(exc) from exc
    if article is None:
        raise AppError.not_found()
    return article

@router.patch("/{article_id}", status_code=204, responses={404: {"model": ErrorResponse}})
async def update_article(
    article_id: ResourceId,
    data: ArticleForm,
    articles: ArticleRepository = Depends(get_article_repository),
):
    try:
        if await articles.get(article_id) is None:
            raise AppError.not_found()
        await articles.update(article_id, data.title, data.body)
    except DataAccessError as exc:
        raise AppError.internal_server_error(exc) from exc

@router.delete("/{article_id}", status_code=204, responses={404: {"model": ErrorResponse}})
async def delete_article(
    article_id: ResourceId,
    articles: ArticleRepository = Depends(get_article_repository),
):
    try:
        if await articles.get(article_id) is None:
            raise AppError.not_found()
        await articles.delete(article_id)
    except DataAccessError as exc:
        raise AppError.internal_server_error(exc) from exc
