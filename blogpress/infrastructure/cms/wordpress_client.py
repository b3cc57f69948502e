"""WordPress REST API client: implements the CmsClient interface.

Talks to ``{site}/wp-json/wp/v2`` with HTTP Basic authentication using an
application password. Every outcome is returned as ``CmsOk`` or
``CmsFailure``; no httpx exception leaves this module.
"""

import asyncio
import logging
import re
from typing import Any

import httpx

from blogpress.application.interfaces.cms_client import CmsClient
from blogpress.domain.entities import (
    CmsCredentials,
    CmsErrorKind,
    CmsFailure,
    CmsIdentity,
    CmsOk,
    RemoteRef,
    SeoMetadata,
)

logger = logging.getLogger(__name__)

_STATUS_FAILURES: dict[int, tuple[CmsErrorKind, str]] = {
    401: (
        CmsErrorKind.INVALID_CREDENTIALS,
        "Authentication failed: Invalid username or application password.",
    ),
    403: (
        CmsErrorKind.INSUFFICIENT_PERMISSIONS,
        "Access forbidden: Your user account doesn't have sufficient permissions to create posts.",
    ),
    404: (
        CmsErrorKind.SITE_NOT_FOUND,
        "WordPress site not found or REST API is disabled. Please check your site URL.",
    ),
}

_UNREACHABLE_MESSAGE = (
    "Site not found: Please check your WordPress URL (make sure it includes https://)."
)
_TIMEOUT_MESSAGE = "Connection timeout: The WordPress site took too long to respond."


class WordPressClient(CmsClient):
    """Infrastructure adapter: connects to a WordPress site's REST API.

    A single instance is safe to share: credentials are passed per call. An
    ``httpx.AsyncClient`` may be injected (tests use ``MockTransport``);
    otherwise a short-lived client is opened per request.
    """

    def __init__(
        self,
        timeout_seconds: float = 10.0,
        post_status: str = "publish",
        user_agent: str = "BlogPublisher/1.0",
        http_client: httpx.AsyncClient | None = None,
    ):
        self._timeout = timeout_seconds
        self._post_status = post_status
        self._user_agent = user_agent
        self._http_client = http_client

    # ── Public operations ────────────────────────────────────────────

    async def verify_connection(
        self, credentials: CmsCredentials
    ) -> CmsOk[CmsIdentity] | CmsFailure:
        """GET /users/me: succeeds only on HTTP 200 with an identity payload."""
        response = await self._request("GET", credentials, "/users/me")
        if isinstance(response, CmsFailure):
            return response
        if response.status_code != 200:
            return self._failure_from_response(response)

        data = _json_or_none(response)
        user_id = _int_id(data.get("id")) if isinstance(data, dict) else None
        if user_id is None:
            return CmsFailure(
                CmsErrorKind.REMOTE_ERROR,
                "Unable to authenticate with WordPress",
                status_code=response.status_code,
            )

        identity = CmsIdentity(
            id=user_id,
            name=str(data.get("name") or data.get("slug") or ""),
            email=data.get("email"),
            roles=list(data.get("roles") or []),
        )
        logger.info("WordPress connection verified for %s as %s", _site(credentials), identity.name)
        return CmsOk(identity)

    async def create_post(
        self,
        credentials: CmsCredentials,
        *,
        title: str,
        content_html: str,
        seo: SeoMetadata,
        topic: str | None = None,
    ) -> CmsOk[RemoteRef] | CmsFailure:
        """POST /posts, then attach tags and Yoast SEO meta (both best effort)."""
        post_title = title.strip() or seo.meta_title
        payload: dict[str, Any] = {
            "title": post_title,
            "content": strip_leading_title(content_html, post_title),
            "status": self._post_status,
        }
        if seo.meta_description:
            payload["excerpt"] = seo.meta_description
        if seo.slug:
            payload["slug"] = seo.slug

        response = await self._request("POST", credentials, "/posts", json=payload)
        if isinstance(response, CmsFailure):
            return response
        if not response.is_success:
            return self._failure_from_response(response)

        data = _json_or_none(response)
        post_id = _int_id(data.get("id")) if isinstance(data, dict) else None
        if post_id is None:
            return CmsFailure(
                CmsErrorKind.REMOTE_ERROR,
                "WordPress did not return the created post id",
                status_code=response.status_code,
            )

        remote_ref = RemoteRef(
            remote_post_id=post_id,
            remote_edit_url=f"{_site(credentials)}/wp-admin/post.php?post={post_id}&action=edit",
        )
        logger.info("Created WordPress post %d on %s", post_id, _site(credentials))

        keywords = seo.keywords or ([topic] if topic else [])
        try:
            await self._attach_tags(credentials, post_id, keywords)
        except Exception:
            logger.warning("Post %d created but tagging failed", post_id, exc_info=True)
        try:
            await self._attach_seo_meta(credentials, post_id, seo, keywords)
        except Exception:
            logger.warning("Post %d created but SEO meta update failed", post_id, exc_info=True)
        return CmsOk(remote_ref)

    # ── Follow-ups (never fail the publication) ──────────────────────

    async def _attach_tags(self, credentials: CmsCredentials, post_id: int, names: list[str]) -> None:
        tag_ids: list[int] = []
        seen: set[str] = set()
        for raw in names:
            name = raw.strip()
            if not name or name.lower() in seen:
                continue
            seen.add(name.lower())
            tag_id = await self._get_or_create_tag(credentials, name)
            if tag_id is not None:
                tag_ids.append(tag_id)

        if not tag_ids:
            return
        response = await self._request(
            "POST", credentials, f"/posts/{post_id}", json={"tags": tag_ids}
        )
        if isinstance(response, CmsFailure) or not response.is_success:
            logger.warning("Created post %d but could not attach tags %s", post_id, tag_ids)

    async def _get_or_create_tag(self, credentials: CmsCredentials, name: str) -> int | None:
        response = await self._request(
            "GET", credentials, "/tags", params={"search": name, "per_page": 5}
        )
        if not isinstance(response, CmsFailure) and response.is_success:
            matches = _json_or_none(response)
            for tag in matches if isinstance(matches, list) else []:
                if not isinstance(tag, dict):
                    continue
                tag_id = _int_id(tag.get("id"))
                if tag_id is not None and str(tag.get("name", "")).lower() == name.lower():
                    return tag_id

        response = await self._request("POST", credentials, "/tags", json={"name": name})
        if isinstance(response, CmsFailure) or not response.is_success:
            logger.warning("Could not handle tag %r", name)
            return None
        data = _json_or_none(response)
        return _int_id(data.get("id")) if isinstance(data, dict) else None

    async def _attach_seo_meta(
        self, credentials: CmsCredentials, post_id: int, seo: SeoMetadata, keywords: list[str]
    ) -> None:
        """Write the Yoast SEO title, description and focus keyword as post meta.

        Sites without Yoast (or without the meta keys registered for REST)
        ignore or reject these; either way the post is already published.
        """
        focus = next((k.strip() for k in keywords if k.strip()), "")
        meta = {
            "_yoast_wpseo_title": seo.meta_title,
            "_yoast_wpseo_metadesc": seo.meta_description,
            "_yoast_wpseo_focuskw": focus,
        }
        meta = {key: value for key, value in meta.items() if value}
        if not meta:
            return
        response = await self._request("POST", credentials, f"/posts/{post_id}", json={"meta": meta})
        if isinstance(response, CmsFailure) or not response.is_success:
            logger.warning("Created post %d but could not write SEO meta", post_id)

    # ── Transport ────────────────────────────────────────────────────

    def _get_client(self) -> httpx.AsyncClient:
        """Return the injected client or create a new one."""
        if self._http_client is not None:
            return self._http_client
        return httpx.AsyncClient(timeout=self._timeout)

    def _headers(self) -> dict[str, str]:
        return {
            "Content-Type": "application/json",
            "User-Agent": self._user_agent,
        }

    async def _request(
        self,
        method: str,
        credentials: CmsCredentials,
        path: str,
        *,
        json: dict | None = None,
        params: dict | None = None,
    ) -> httpx.Response | CmsFailure:
        """Send one request bounded by the timeout; transport errors become failures."""
        url = f"{_site(credentials)}/wp-json/wp/v2{path}"
        auth = httpx.BasicAuth(credentials.username.strip(), _normalize_password(credentials.application_password))

        client = self._get_client()
        should_close = self._http_client is None
        try:
            return await asyncio.wait_for(
                client.request(
                    method, url,
                    auth=auth, json=json, params=params,
                    headers=self._headers(), timeout=self._timeout,
                ),
                timeout=self._timeout,
            )
        except (asyncio.TimeoutError, httpx.TimeoutException):
            logger.warning("%s %s timed out after %.1fs", method, url, self._timeout)
            return CmsFailure(CmsErrorKind.TIMEOUT, _TIMEOUT_MESSAGE)
        except (httpx.InvalidURL, httpx.UnsupportedProtocol, httpx.ConnectError) as exc:
            logger.warning("%s %s unreachable: %s", method, url, exc)
            return CmsFailure(CmsErrorKind.HOST_UNREACHABLE, _UNREACHABLE_MESSAGE)
        except httpx.HTTPError as exc:
            logger.warning("%s %s failed: %s", method, url, exc)
            return CmsFailure(CmsErrorKind.REMOTE_ERROR, f"Connection error: {exc}")
        finally:
            if should_close:
                await client.aclose()

    @staticmethod
    def _failure_from_response(response: httpx.Response) -> CmsFailure:
        known = _STATUS_FAILURES.get(response.status_code)
        if known is not None:
            kind, message = known
            return CmsFailure(kind, message, status_code=response.status_code)

        data = _json_or_none(response)
        remote_message = data.get("message") if isinstance(data, dict) else None
        detail = remote_message or response.reason_phrase or f"HTTP {response.status_code}"
        return CmsFailure(
            CmsErrorKind.REMOTE_ERROR,
            f"Connection failed: {detail}",
            status_code=response.status_code,
        )


# ── Helpers ──────────────────────────────────────────────────────────


def _site(credentials: CmsCredentials) -> str:
    return credentials.cms_url.strip().rstrip("/")


def _normalize_password(password: str) -> str:
    """WordPress shows application passwords in groups separated by spaces."""
    return re.sub(r"\s+", "", password)


def _json_or_none(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return None


def strip_leading_title(html: str, title: str) -> str:
    """Remove a leading <h1> (and <article> wrapper) so the theme does not show two titles."""
    if not html:
        return html

    cleaned = re.sub(r"<article[^>]*>", "", html, count=1, flags=re.IGNORECASE)
    cleaned = re.sub(r"</article>", "", cleaned, count=1, flags=re.IGNORECASE)
    if title:
        cleaned = re.sub(
            rf"^\s*<header[^>]*>\s*<h1[^>]*>\s*{re.escape(title)}\s*</h1>\s*</header>",
            "", cleaned, count=1, flags=re.IGNORECASE,
        )
    cleaned = re.sub(
        r"^\s*<h1[^>]*>.*?</h1>", "", cleaned, count=1, flags=re.IGNORECASE | re.DOTALL,
    )
    return cleaned.strip()


def _int_id(value: Any) -> int | None:
    """WordPress ids are integers; anything else is treated as missing."""
    if isinstance(value, bool):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None
