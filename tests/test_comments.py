"""
Comment endpoint tests.

Comments reference an article and a user, so the helpers below create both
through the API before each scenario.
"""
import pytest
from httpx import AsyncClient


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

async def _create_article_and_user(client: AsyncClient, make_article, make_user) -> tuple[int, int]:
    """Create an article and a user, returning (article_id, user_id)."""
    article_resp = await client.post("/api/articles", json=make_article())
    assert article_resp.status_code == 201
    user_resp = await client.post("/api/users", json=make_user())
    assert user_resp.status_code == 201
    return article_resp.json()["id"], user_resp.json()["id"]


async def _create_comment(client: AsyncClient, **fields) -> dict:
    resp = await client.post("/api/comments", json=fields)
    assert resp.status_code == 201
    return resp.json()


# ---------------------------------------------------------------------------
# GET /api/comments
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_list_comments_empty(async_client: AsyncClient):
    resp = await async_client.get("/api/comments")
    assert resp.status_code == 200
    assert resp.json() == []


@pytest.mark.asyncio
async def test_list_comments(async_client: AsyncClient, make_article, make_user, malicious_text):
    article_id, user_id = await _create_article_and_user(async_client, make_article, make_user)
    await _create_comment(async_client, text="Plain", article_id=article_id, user_id=user_id)
    await _create_comment(async_client, text=malicious_text, article_id=article_id, user_id=user_id)

    resp = await async_client.get("/api/comments")
    assert resp.status_code == 200
    comments = resp.json()
    assert len(comments) == 2
    assert comments[0]["text"] == "Plain"
    assert "<script>" not in comments[1]["text"]
    assert "&lt;script&gt;" in comments[1]["text"]


# ---------------------------------------------------------------------------
# POST /api/comments
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_create_comment(async_client: AsyncClient, make_article, make_user):
    article_id, user_id = await _create_article_and_user(async_client, make_article, make_user)

    resp = await async_client.post("/api/comments", json={
        "text": "Test new comment",
        "article_id": article_id,
        "user_id": user_id,
    })
    assert resp.status_code == 201
    comment = resp.json()
    assert comment["text"] == "Test new comment"
    assert comment["article_id"] == article_id
    assert comment["user_id"] == user_id
    assert comment["date_commented"] is not None
    assert resp.headers["location"] == f"/api/comments/{comment['id']}"


@pytest.mark.asyncio
async def test_create_comment_with_client_date(async_client: AsyncClient, make_article, make_user):
    article_id, user_id = await _create_article_and_user(async_client, make_article, make_user)

    comment = await _create_comment(
        async_client,
        text="Backdated",
        article_id=article_id,
        user_id=user_id,
        date_commented="2029-01-22T16:28:32",
    )
    assert comment["date_commented"].startswith("2029-01-22T16:28:32")


@pytest.mark.asyncio
@pytest.mark.parametrize("field", ["text", "article_id", "user_id"])
async def test_create_comment_missing_field(async_client: AsyncClient, field):
    comment = {"text": "Test new comment", "article_id": 3, "user_id": 2}
    del comment[field]

    resp = await async_client.post("/api/comments", json=comment)
    assert resp.status_code == 400
    assert resp.json() == {"error": {"message": f"Missing '{field}' in request body"}}


@pytest.mark.asyncio
async def test_create_comment_zero_reference_counts_as_missing(async_client: AsyncClient):
    resp = await async_client.post("/api/comments", json={"text": "x", "article_id": 0, "user_id": 1})
    assert resp.status_code == 400
    assert resp.json()["error"]["message"] == "Missing 'article_id' in request body"


# ---------------------------------------------------------------------------
# /api/comments/{id}
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_get_comment(async_client: AsyncClient, make_article, make_user, malicious_html):
    article_id, user_id = await _create_article_and_user(async_client, make_article, make_user)
    created = await _create_comment(async_client, text=malicious_html, article_id=article_id, user_id=user_id)

    resp = await async_client.get(f"/api/comments/{created['id']}")
    assert resp.status_code == 200
    comment = resp.json()
    assert comment == created
    assert "onerror" not in comment["text"]


@pytest.mark.asyncio
async def test_get_comment_not_found(async_client: AsyncClient):
    resp = await async_client.get("/api/comments/123456")
    assert resp.status_code == 404
    assert resp.json() == {"error": {"message": "Comment does not exist"}}


@pytest.mark.asyncio
@pytest.mark.parametrize("comment_id", ["99999999999999999999", "2147483648", "0", "-1"])
async def test_comment_id_out_of_range_is_404(async_client: AsyncClient, comment_id):
    for method in ("GET", "DELETE", "PATCH"):
        resp = await async_client.request(method, f"/api/comments/{comment_id}", json={"text": "x"})
        assert resp.status_code == 404
        assert resp.json() == {"error": {"message": "Comment does not exist"}}


@pytest.mark.asyncio
async def test_delete_comment(async_client: AsyncClient, make_article, make_user):
    article_id, user_id = await _create_article_and_user(async_client, make_article, make_user)
    created = await _create_comment(async_client, text="Bye", article_id=article_id, user_id=user_id)

    resp = await async_client.delete(f"/api/comments/{created['id']}")
    assert resp.status_code == 204

    listed = await async_client.get("/api/comments")
    assert listed.json() == []


@pytest.mark.asyncio
async def test_delete_comment_not_found(async_client: AsyncClient):
    resp = await async_client.delete("/api/comments/123456")
    assert resp.status_code == 404


@pytest.mark.asyncio
async def test_update_comment(async_client: AsyncClient, make_article, make_user):
    article_id, user_id = await _create_article_and_user(async_client, make_article, make_user)
    created = await _create_comment(async_client, text="Before", article_id=article_id, user_id=user_id)

    resp = await async_client.patch(f"/api/comments/{created['id']}", json={"text": "After"})
    assert resp.status_code == 204

    fetched = (await async_client.get(f"/api/comments/{created['id']}")).json()
    assert fetched == {**created, "text": "After"}


@pytest.mark.asyncio
async def test_update_comment_no_fields(async_client: AsyncClient, make_article, make_user):
    article_id, user_id = await _create_article_and_user(async_client, make_article, make_user)
    created = await _create_comment(async_client, text="Before", article_id=article_id, user_id=user_id)

    resp = await async_client.patch(f"/api/comments/{created['id']}", json={"article_id": 99})
    assert resp.status_code == 400
    assert resp.json() == {
        "error": {"message": "Request body must contain either text or date_commented"},
    }


@pytest.mark.asyncio
async def test_update_comment_not_found(async_client: AsyncClient):
    resp = await async_client.patch("/api/comments/123456", json={"text": "Ghost"})
    assert resp.status_code == 404
