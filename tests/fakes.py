"""In-memory fakes for the application ports, shared by the unit tests."""

import asyncio
import copy
import uuid
from datetime import datetime, timedelta, timezone

from blogpress.application.interfaces import (
    ArticleRepository,
    CmsClient,
    CmsCredentialStore,
)
from blogpress.domain.entities import (
    Article,
    ArticleStatus,
    CmsCredentials,
    CmsErrorKind,
    CmsFailure,
    CmsIdentity,
    CmsOk,
    RemoteRef,
    SeoMetadata,
)


class FakeArticleRepository(ArticleRepository):
    """In-memory fake repository with the same conditional-update semantics."""

    def __init__(self):
        self._articles: dict[str, Article] = {}
        self._claims: dict[str, tuple[str, datetime]] = {}

    def _match(self, article_id: str, owner_id: str) -> Article | None:
        article = self._articles.get(article_id)
        if article is None or article.owner_id != owner_id:
            return None
        return article

    async def get(self, article_id: str, owner_id: str) -> Article | None:
        article = self._match(article_id, owner_id)
        return copy.deepcopy(article) if article else None

    async def list_by_owner(self, owner_id: str) -> list[Article]:
        return [copy.deepcopy(a) for a in self._articles.values() if a.owner_id == owner_id]

    async def create(self, article: Article) -> Article:
        article.id = article.id or str(uuid.uuid4())
        self._articles[article.id] = copy.deepcopy(article)
        return article

    async def list_due(self, now: datetime, limit: int = 100) -> list[Article]:
        due = [copy.deepcopy(a) for a in self._articles.values() if a.is_due(now)]
        return due[:limit]

    def _live_claim(self, article_id: str, now: datetime, ttl_seconds: int) -> bool:
        held = self._claims.get(article_id)
        return held is not None and held[1] >= now - timedelta(seconds=ttl_seconds)

    async def schedule(self, article_id, owner_id, scheduled_at, expected, now, ttl_seconds):
        article = self._match(article_id, owner_id)
        if article is None or article.status not in expected or self._live_claim(article_id, now, ttl_seconds):
            return None
        self._claims.pop(article_id, None)
        article.status = ArticleStatus.SCHEDULED
        article.scheduled_at = scheduled_at
        return copy.deepcopy(article)

    async def unschedule(self, article_id, owner_id, now, ttl_seconds):
        article = self._match(article_id, owner_id)
        if (
            article is None
            or article.status is not ArticleStatus.SCHEDULED
            or self._live_claim(article_id, now, ttl_seconds)
        ):
            return None
        self._claims.pop(article_id, None)
        article.status = ArticleStatus.DRAFT
        article.scheduled_at = None
        return copy.deepcopy(article)

    async def claim_for_publication(
        self, article_id, owner_id, claim, expected, now, ttl_seconds, due_before=None
    ):
        article = self._match(article_id, owner_id)
        if article is None or article.status not in expected:
            return False
        if due_before is not None and not article.is_due(due_before):
            return False
        if self._live_claim(article_id, now, ttl_seconds):
            return False
        self._claims[article_id] = (claim, now)
        return True

    async def release_claim(self, article_id, owner_id, claim):
        held = self._claims.get(article_id)
        if held is not None and held[0] == claim:
            del self._claims[article_id]

    async def complete_publication(self, article_id, owner_id, claim, remote_ref, published_at):
        article = self._match(article_id, owner_id)
        held = self._claims.get(article_id)
        if article is None or held is None or held[0] != claim or article.is_published:
            return None
        article.status = ArticleStatus.PUBLISHED
        article.published_at = published_at
        article.remote_ref = remote_ref
        article.scheduled_at = None
        del self._claims[article_id]
        return copy.deepcopy(article)

    def is_claimed(self, article_id: str) -> bool:
        return article_id in self._claims


class FakeCredentialStore(CmsCredentialStore):
    def __init__(self, stored: dict[str, CmsCredentials] | None = None):
        self._stored = dict(stored or {})

    async def get_for_owner(self, owner_id: str) -> CmsCredentials | None:
        return self._stored.get(owner_id)

    async def save_for_owner(self, owner_id: str, credentials: CmsCredentials) -> CmsCredentials:
        self._stored[owner_id] = credentials
        return credentials


class FakeCmsClient(CmsClient):
    """Records calls; results are configurable per test."""

    def __init__(
        self,
        verify_result: CmsOk | CmsFailure | None = None,
        create_result: CmsOk | CmsFailure | None = None,
        create_delay: float = 0.0,
    ):
        self.verify_result = verify_result or CmsOk(CmsIdentity(id=1, name="admin"))
        self.create_result = create_result or CmsOk(
            RemoteRef(42, "https://site/wp-admin/post.php?post=42&action=edit")
        )
        self.create_delay = create_delay
        self.verify_calls: list[CmsCredentials] = []
        self.create_calls: list[dict] = []

    @property
    def call_count(self) -> int:
        return len(self.verify_calls) + len(self.create_calls)

    async def verify_connection(self, credentials: CmsCredentials):
        self.verify_calls.append(credentials)
        await asyncio.sleep(0)
        return self.verify_result

    async def create_post(self, credentials, *, title, content_html, seo: SeoMetadata, topic=None):
        self.create_calls.append({"title": title, "content_html": content_html, "seo": seo})
        await asyncio.sleep(self.create_delay)
        return self.create_result


def failure(kind: CmsErrorKind, message: str = "failed", status_code: int | None = None) -> CmsFailure:
    return CmsFailure(kind, message, status_code=status_code)


def utc(*args) -> datetime:
    return datetime(*args, tzinfo=timezone.utc)
