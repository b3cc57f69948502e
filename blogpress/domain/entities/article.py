"""Domain entities: pure Python business objects, no framework dependencies."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum


class ArticleStatus(str, Enum):
    """Lifecycle states of an article. ``PUBLISHED`` is terminal."""

    DRAFT = "draft"
    SCHEDULED = "scheduled"
    PUBLISHED = "published"


@dataclass
class SeoMetadata:
    """SEO block passed through to the CMS untouched by the orchestrator."""

    meta_title: str = ""
    meta_description: str = ""
    slug: str = ""
    keywords: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class RemoteRef:
    """Identifies a post created on the remote CMS."""

    remote_post_id: int
    remote_edit_url: str


@dataclass
class Article:
    """Core domain entity representing a generated blog article.

    Status fields (``status``, ``scheduled_at``, ``published_at``,
    ``remote_ref``) are written by the repository's conditional updates,
    never assigned directly by services.
    """

    owner_id: str
    title: str
    id: str | None = None
    topic: str | None = None
    slug: str | None = None
    status: ArticleStatus = ArticleStatus.DRAFT
    scheduled_at: datetime | None = None
    published_at: datetime | None = None
    remote_ref: RemoteRef | None = None
    content_html: str = ""
    word_count: int = 0
    seo: SeoMetadata = field(default_factory=SeoMetadata)
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def is_published(self) -> bool:
        return self.status is ArticleStatus.PUBLISHED

    def is_due(self, now: datetime) -> bool:
        """True when the article is scheduled for ``now`` or earlier."""
        return (
            self.status is ArticleStatus.SCHEDULED
            and self.scheduled_at is not None
            and self.scheduled_at <= now
        )

    def check_invariants(self) -> bool:
        """Return True when the status fields are mutually consistent."""
        if self.status is ArticleStatus.PUBLISHED:
            return self.published_at is not None and self.remote_ref is not None
        if self.status is ArticleStatus.SCHEDULED:
            return (
                self.scheduled_at is not None
                and self.remote_ref is None
                and self.published_at is None
            )
        return (
            self.scheduled_at is None
            and self.remote_ref is None
            and self.published_at is None
        )


def ensure_utc(value: datetime) -> datetime:
    """Interpret naive datetimes as UTC and normalise aware ones to UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)
