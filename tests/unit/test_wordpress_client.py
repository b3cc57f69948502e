"""Unit tests for the WordPressClient."""

import asyncio
import base64
import json

import httpx
import pytest

from blogpress.domain.entities import (
    CmsCredentials,
    CmsErrorKind,
    CmsFailure,
    CmsOk,
    SeoMetadata,
)
from blogpress.infrastructure.cms import WordPressClient, strip_leading_title

CREDS = CmsCredentials("https://blog.example.com/", "editor", "abcd efgh ijkl")


# ── Helpers ──


def _client(handler, **kwargs) -> WordPressClient:
    http_client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return WordPressClient(http_client=http_client, **kwargs)


def _me_response(status_code: int = 200, payload: dict | None = None):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(status_code, json=payload or {"id": 7, "name": "Editor", "roles": ["editor"]})

    return handler


# ── verify_connection ──


@pytest.mark.asyncio
async def test_verify_connection_success_sends_basic_auth():
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"id": 7, "name": "Editor", "email": "e@x", "roles": ["editor"]})

    result = await _client(handler).verify_connection(CREDS)

    assert isinstance(result, CmsOk)
    assert result.value.id == 7
    assert result.value.name == "Editor"
    assert result.value.roles == ["editor"]

    request = seen[0]
    assert str(request.url) == "https://blog.example.com/wp-json/wp/v2/users/me"
    expected = base64.b64encode(b"editor:abcdefghijkl").decode()
    assert request.headers["Authorization"] == f"Basic {expected}"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "status_code,kind",
    [
        (401, CmsErrorKind.INVALID_CREDENTIALS),
        (403, CmsErrorKind.INSUFFICIENT_PERMISSIONS),
        (404, CmsErrorKind.SITE_NOT_FOUND),
        (500, CmsErrorKind.REMOTE_ERROR),
    ],
)
async def test_verify_connection_maps_status_codes(status_code, kind):
    result = await _client(_me_response(status_code, {"message": "nope"})).verify_connection(CREDS)

    assert isinstance(result, CmsFailure)
    assert result.kind is kind
    assert result.status_code == status_code
    assert result.hint


@pytest.mark.asyncio
async def test_remote_error_carries_remote_message():
    result = await _client(_me_response(500, {"message": "Database down"})).verify_connection(CREDS)
    assert result.message == "Connection failed: Database down"


@pytest.mark.asyncio
async def test_verify_connection_non_identity_body_is_remote_error():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, text="<html>not wordpress</html>")

    result = await _client(handler).verify_connection(CREDS)

    assert isinstance(result, CmsFailure)
    assert result.kind is CmsErrorKind.REMOTE_ERROR


@pytest.mark.asyncio
async def test_verify_connection_non_numeric_user_id_is_remote_error():
    result = await _client(_me_response(200, {"id": "abc", "name": "Editor"})).verify_connection(CREDS)

    assert isinstance(result, CmsFailure)
    assert result.kind is CmsErrorKind.REMOTE_ERROR


@pytest.mark.asyncio
async def test_connect_error_is_host_unreachable():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("Name or service not known", request=request)

    result = await _client(handler).verify_connection(CREDS)

    assert isinstance(result, CmsFailure)
    assert result.kind is CmsErrorKind.HOST_UNREACHABLE


@pytest.mark.asyncio
async def test_slow_site_times_out():
    async def handler(request: httpx.Request) -> httpx.Response:
        await asyncio.sleep(1)
        return httpx.Response(200, json={"id": 1})

    result = await _client(handler, timeout_seconds=0.05).verify_connection(CREDS)

    assert isinstance(result, CmsFailure)
    assert result.kind is CmsErrorKind.TIMEOUT


# ── create_post ──


@pytest.mark.asyncio
async def test_create_post_returns_remote_ref():
    bodies: list[dict] = []

    def handler(request: httpx.Request) -> httpx.Response:
        assert request.method == "POST"
        if request.url.path != "/wp-json/wp/v2/posts":
            return httpx.Response(200, json={"id": 99})
        bodies.append(json.loads(request.content))
        return httpx.Response(201, json={"id": 99, "link": "https://blog.example.com/my-post"})

    seo = SeoMetadata(meta_title="My Post", meta_description="Summary", slug="my-post")
    result = await _client(handler).create_post(
        CREDS, title="My Post", content_html="<h1>My Post</h1><p>Body</p>", seo=seo,
    )

    assert isinstance(result, CmsOk)
    assert result.value.remote_post_id == 99
    assert result.value.remote_edit_url == "https://blog.example.com/wp-admin/post.php?post=99&action=edit"
    assert bodies == [{
        "title": "My Post",
        "content": "<p>Body</p>",
        "status": "publish",
        "excerpt": "Summary",
        "slug": "my-post",
    }]


@pytest.mark.asyncio
async def test_create_post_uses_configured_status():
    bodies: list[dict] = []

    def handler(request: httpx.Request) -> httpx.Response:
        bodies.append(json.loads(request.content))
        return httpx.Response(201, json={"id": 1})

    await _client(handler, post_status="draft").create_post(
        CREDS, title="T", content_html="<p>x</p>", seo=SeoMetadata(),
    )

    assert bodies[0]["status"] == "draft"


@pytest.mark.asyncio
async def test_create_post_rejection_is_failure():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(403, json={"code": "rest_cannot_create"})

    result = await _client(handler).create_post(CREDS, title="T", content_html="", seo=SeoMetadata())

    assert isinstance(result, CmsFailure)
    assert result.kind is CmsErrorKind.INSUFFICIENT_PERMISSIONS


@pytest.mark.asyncio
async def test_keywords_are_attached_as_tags():
    calls: list[tuple[str, str]] = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append((request.method, request.url.path))
        path = request.url.path
        if path == "/wp-json/wp/v2/posts":
            return httpx.Response(201, json={"id": 5})
        if path == "/wp-json/wp/v2/tags" and request.method == "GET":
            if request.url.params["search"] == "python":
                return httpx.Response(200, json=[{"id": 11, "name": "Python"}])
            return httpx.Response(200, json=[])
        if path == "/wp-json/wp/v2/tags":
            return httpx.Response(201, json={"id": 12, "name": "asyncio"})
        if path == "/wp-json/wp/v2/posts/5" and "tags" in json.loads(request.content):
            assert json.loads(request.content) == {"tags": [11, 12]}
            return httpx.Response(200, json={"id": 5})
        return httpx.Response(404)

    seo = SeoMetadata(keywords=["python", "asyncio", "Python"])
    result = await _client(handler).create_post(CREDS, title="T", content_html="", seo=seo)

    assert isinstance(result, CmsOk)
    assert ("POST", "/wp-json/wp/v2/posts/5") in calls
    assert calls.count(("POST", "/wp-json/wp/v2/tags")) == 1


@pytest.mark.asyncio
async def test_tag_failure_does_not_fail_publication():
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path == "/wp-json/wp/v2/posts":
            return httpx.Response(201, json={"id": 5})
        return httpx.Response(500, json={"message": "tags broken"})

    result = await _client(handler).create_post(
        CREDS, title="T", content_html="", seo=SeoMetadata(), topic="news",
    )

    assert isinstance(result, CmsOk)
    assert result.value.remote_post_id == 5


@pytest.mark.asyncio
async def test_create_post_writes_yoast_meta():
    meta_bodies: list[dict] = []

    def handler(request: httpx.Request) -> httpx.Response:
        path = request.url.path
        if path == "/wp-json/wp/v2/posts":
            return httpx.Response(201, json={"id": 8})
        if path == "/wp-json/wp/v2/tags" and request.method == "GET":
            return httpx.Response(200, json=[{"id": 3, "name": "seo"}])
        body = json.loads(request.content)
        if path == "/wp-json/wp/v2/posts/8" and "meta" in body:
            meta_bodies.append(body["meta"])
        return httpx.Response(200, json={"id": 8})

    seo = SeoMetadata(meta_title="Title | Blog", meta_description="Short summary", keywords=["seo", "python"])
    result = await _client(handler).create_post(CREDS, title="Title", content_html="", seo=seo)

    assert isinstance(result, CmsOk)
    assert meta_bodies == [{
        "_yoast_wpseo_title": "Title | Blog",
        "_yoast_wpseo_metadesc": "Short summary",
        "_yoast_wpseo_focuskw": "seo",
    }]


@pytest.mark.asyncio
async def test_yoast_meta_rejection_does_not_fail_publication():
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path == "/wp-json/wp/v2/posts":
            return httpx.Response(201, json={"id": 8})
        return httpx.Response(400, json={"code": "rest_invalid_param"})

    seo = SeoMetadata(meta_title="Title", meta_description="Summary")
    result = await _client(handler).create_post(CREDS, title="Title", content_html="", seo=seo)

    assert isinstance(result, CmsOk)
    assert result.value.remote_post_id == 8


@pytest.mark.asyncio
async def test_malformed_tag_payloads_do_not_fail_publication():
    def handler(request: httpx.Request) -> httpx.Response:
        path = request.url.path
        if path == "/wp-json/wp/v2/posts":
            return httpx.Response(201, json={"id": 42})
        if path == "/wp-json/wp/v2/tags" and request.method == "GET":
            if request.url.params["search"] == "seo":
                return httpx.Response(200, json=[{"name": "seo"}])
            return httpx.Response(200, json={"unexpected": "object"})
        if path == "/wp-json/wp/v2/tags":
            return httpx.Response(201, json={"id": "not-a-number"})
        return httpx.Response(200, json={"id": 42})

    seo = SeoMetadata(keywords=["seo", "python"])
    result = await _client(handler).create_post(CREDS, title="T", content_html="", seo=seo)

    assert isinstance(result, CmsOk)
    assert result.value.remote_post_id == 42


@pytest.mark.asyncio
async def test_non_numeric_post_id_is_remote_error():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(201, json={"id": "abc"})

    result = await _client(handler).create_post(CREDS, title="T", content_html="", seo=SeoMetadata())

    assert isinstance(result, CmsFailure)
    assert result.kind is CmsErrorKind.REMOTE_ERROR


# ── strip_leading_title ──


def test_strip_leading_title_removes_h1_and_article_wrapper():
    html = '<article class="post"><h1 class="t">Title</h1><p>Body</p></article>'
    assert strip_leading_title(html, "Title") == "<p>Body</p>"


def test_strip_leading_title_keeps_later_headings():
    html = "<p>Intro</p><h1>Section</h1>"
    assert strip_leading_title(html, "Title") == html
