"""
Comment endpoint tests — covers the nested CRUD routes, the parent-article
precondition, and scoping of comments to their article.

A comment is addressable only through its (article_id, id) pair: naming an
existing comment under a different article must look exactly like naming
one that does not exist.
"""
import pytest
from httpx import AsyncClient

NOT_FOUND = {"code": "NOT_FOUND", "message": "Not Found"}


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

async def _create_article(client: AsyncClient, title: str = "Article") -> int:
    resp = await client.post("/articles", json={"title": title, "body": "Article body"})
    assert resp.status_code == 201
    return resp.json()["id"]


async def _create_comment(client: AsyncClient, article_id: int, body: str = "hi") -> dict:
    resp = await client.post(f"/articles/{article_id}/comments", json={"body": body})
    assert resp.status_code == 201
    return resp.json()


# ---------------------------------------------------------------------------
# Create + list + show
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_add_comment(async_client: AsyncClient):
    """Posting a comment returns 201 with exactly id and body."""
    article_id = await _create_article(async_client)

    comment = await _create_comment(async_client, article_id, "Great article!")
    assert set(comment) == {"id", "body"}
    assert comment["body"] == "Great article!"


@pytest.mark.asyncio
async def test_list_comments_only_from_own_article(async_client: AsyncClient):
    first = await _create_article(async_client, "first")
    second = await _create_article(async_client, "second")
    c1 = await _create_comment(async_client, first, "one")
    c2 = await _create_comment(async_client, first, "two")
    await _create_comment(async_client, second, "elsewhere")

    resp = await async_client.get(f"/articles/{first}/comments")
    assert resp.status_code == 200
    assert resp.json() == [c1, c2]


@pytest.mark.asyncio
async def test_list_comments_empty(async_client: AsyncClient):
    article_id = await _create_article(async_client)
    resp = await async_client.get(f"/articles/{article_id}/comments")
    assert resp.status_code == 200
    assert resp.json() == []


@pytest.mark.asyncio
async def test_show_comment(async_client: AsyncClient):
    article_id = await _create_article(async_client)
    comment = await _create_comment(async_client, article_id, "Exact content here")

    resp = await async_client.get(f"/articles/{article_id}/comments/{comment['id']}")
    assert resp.status_code == 200
    assert resp.json() == {"id": comment["id"], "body": "Exact content here"}


@pytest.mark.asyncio
async def test_show_nonexistent_comment(async_client: AsyncClient):
    article_id = await _create_article(async_client)
    resp = await async_client.get(f"/articles/{article_id}/comments/99999")
    assert resp.status_code == 404
    assert resp.json() == NOT_FOUND


# ---------------------------------------------------------------------------
# Parent article precondition
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
@pytest.mark.parametrize(
    "method, path, payload",
    [
        ("GET", "/articles/99999/comments", None),
        ("POST", "/articles/99999/comments", {"body": "Ghost comment"}),
        ("GET", "/articles/99999/comments/1", None),
        ("PATCH", "/articles/99999/comments/1", {"body": "edit"}),
        ("DELETE", "/articles/99999/comments/1", None),
    ],
)
async def test_comment_routes_require_article(
    async_client: AsyncClient, method: str, path: str, payload: dict | None
):
    resp = await async_client.request(method, path, json=payload)
    assert resp.status_code == 404
    assert resp.json() == NOT_FOUND


@pytest.mark.asyncio
async def test_comments_unreachable_after_article_deleted(async_client: AsyncClient):
    """Orphaned comment rows stay hidden behind the parent-existence check."""
    article_id = await _create_article(async_client)
    comment = await _create_comment(async_client, article_id)

    resp = await async_client.delete(f"/articles/{article_id}")
    assert resp.status_code == 204

    resp = await async_client.get(f"/articles/{article_id}/comments")
    assert resp.status_code == 404
    resp = await async_client.get(f"/articles/{article_id}/comments/{comment['id']}")
    assert resp.status_code == 404


# ---------------------------------------------------------------------------
# Scoping
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_comment_not_reachable_through_other_article(async_client: AsyncClient):
    owner = await _create_article(async_client, "owner")
    other = await _create_article(async_client, "other")
    comment = await _create_comment(async_client, owner, "mine")

    resp = await async_client.get(f"/articles/{other}/comments/{comment['id']}")
    assert resp.status_code == 404
    assert resp.json() == NOT_FOUND

    resp = await async_client.patch(
        f"/articles/{other}/comments/{comment['id']}", json={"body": "hijacked"}
    )
    assert resp.status_code == 404

    resp = await async_client.delete(f"/articles/{other}/comments/{comment['id']}")
    assert resp.status_code == 404

    # The comment is untouched under its own article.
    resp = await async_client.get(f"/articles/{owner}/comments/{comment['id']}")
    assert resp.status_code == 200
    assert resp.json()["body"] == "mine"


# ---------------------------------------------------------------------------
# Update + delete
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_update_comment(async_client: AsyncClient):
    article_id = await _create_article(async_client)
    comment = await _create_comment(async_client, article_id, "before")

    resp = await async_client.patch(
        f"/articles/{article_id}/comments/{comment['id']}", json={"body": "after"}
    )
    assert resp.status_code == 204
    assert resp.content == b""

    resp = await async_client.get(f"/articles/{article_id}/comments/{comment['id']}")
    assert resp.json() == {"id": comment["id"], "body": "after"}


@pytest.mark.asyncio
async def test_update_nonexistent_comment(async_client: AsyncClient):
    article_id = await _create_article(async_client)
    resp = await async_client.patch(
        f"/articles/{article_id}/comments/99999", json={"body": "x"}
    )
    assert resp.status_code == 404
    assert resp.json() == NOT_FOUND


@pytest.mark.asyncio
async def test_delete_comment(async_client: AsyncClient):
    article_id = await _create_article(async_client)
    comment = await _create_comment(async_client, article_id)

    resp = await async_client.delete(f"/articles/{article_id}/comments/{comment['id']}")
    assert resp.status_code == 204

    resp = await async_client.get(f"/articles/{article_id}/comments")
    assert resp.json() == []


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_comment_missing_body_field(async_client: AsyncClient):
    """Omitting 'body' is a 400, checked before the article lookup."""
    resp = await async_client.post("/articles/99999/comments", json={})
    assert resp.status_code == 400
    assert resp.json() == {"code": "BAD_REQUEST", "message": "Bad Request"}
