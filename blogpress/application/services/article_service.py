"""Application service (use case) for Article operations."""

from blogpress.application.interfaces import ArticleRepository
from blogpress.application.schemas import ArticleCreate
from blogpress.domain.entities import Article, ArticleStatus, SeoMetadata, ensure_utc
from blogpress.domain.exceptions import EntityNotFoundError, ValidationError

_ALLOWED_STATUSES = {s.value for s in ArticleStatus}


class ArticleService:
    """Owner-scoped article CRUD. Depends on the repository port (DI).

    Status changes after creation belong to PublicationService.
    """

    def __init__(self, repository: ArticleRepository):
        self._repository = repository

    async def get_article(self, owner_id: str, article_id: str) -> Article:
        article = await self._repository.get(article_id, owner_id)
        if article is None:
            raise EntityNotFoundError("Article", article_id)
        return article

    async def list_articles(self, owner_id: str) -> list[Article]:
        return await self._repository.list_by_owner(owner_id)

    async def create_article(self, owner_id: str, data: ArticleCreate) -> Article:
        title = data.title.strip()
        if not title:
            raise ValidationError("Title is required", hint="Provide a non-empty title.")

        status = self._parse_status(data.status)
        scheduled_at = ensure_utc(data.scheduled_at) if data.scheduled_at else None
        if status is ArticleStatus.SCHEDULED and scheduled_at is None:
            raise ValidationError(
                "A scheduled article needs scheduled_at",
                hint="Send scheduled_at, or create a draft and publish it with publish_at.",
            )
        if status is not ArticleStatus.SCHEDULED and scheduled_at is not None:
            raise ValidationError(
                "scheduled_at is only allowed with status 'scheduled'",
            )

        seo = (
            SeoMetadata(**data.seo.model_dump())
            if data.seo is not None
            else SeoMetadata(meta_title=title, slug=data.slug or "")
        )
        article = Article(
            owner_id=owner_id,
            title=title,
            topic=data.topic,
            slug=data.slug,
            status=status,
            scheduled_at=scheduled_at,
            content_html=data.content_html,
            word_count=data.word_count,
            seo=seo,
        )
        return await self._repository.create(article)

    @staticmethod
    def _parse_status(raw: str | None) -> ArticleStatus:
        if raw is None:
            return ArticleStatus.DRAFT
        if raw not in _ALLOWED_STATUSES:
            raise ValidationError(
                f"Invalid status '{raw}'",
                hint=f"Use one of: {', '.join(sorted(_ALLOWED_STATUSES))}.",
            )
        status = ArticleStatus(raw)
        if status is ArticleStatus.PUBLISHED:
            # a published article must carry a remote reference
            raise ValidationError(
                "Articles cannot be created as 'published'",
                hint="Create a draft, then publish it.",
            )
        return status
