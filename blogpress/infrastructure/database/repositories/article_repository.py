"""Concrete article repository backed by SQLAlchemy.

Unlike request-scoped repositories, this one owns its transactions: each
method opens a session, commits, and closes it, so a status change is
visible to concurrent requests immediately and no row lock is held while
the caller waits on the CMS.
"""

import logging
import uuid
from datetime import datetime, timedelta, timezone

from sqlalchemy import or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from blogpress.application.interfaces import ArticleRepository
from blogpress.domain.entities import Article, ArticleStatus, RemoteRef, SeoMetadata, ensure_utc
from blogpress.infrastructure.database.models import ArticleModel

logger = logging.getLogger(__name__)


class SQLAlchemyArticleRepository(ArticleRepository):
    """Implements the ArticleRepository port with conditional UPDATE statements."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self._session_factory = session_factory

    # ── Reads ────────────────────────────────────────────────────────

    async def get(self, article_id: str, owner_id: str) -> Article | None:
        async with self._session_factory() as session:
            model = await self._get_model(session, article_id, owner_id)
            return self._to_entity(model) if model else None

    async def list_by_owner(self, owner_id: str) -> list[Article]:
        stmt = (
            select(ArticleModel)
            .where(ArticleModel.owner_id == owner_id)
            .order_by(ArticleModel.created_at.asc())
        )
        async with self._session_factory() as session:
            result = await session.execute(stmt)
            return [self._to_entity(row) for row in result.scalars().all()]

    async def list_due(self, now: datetime, limit: int = 100) -> list[Article]:
        stmt = (
            select(ArticleModel)
            .where(
                ArticleModel.status == ArticleStatus.SCHEDULED.value,
                ArticleModel.scheduled_at <= now,
            )
            .order_by(ArticleModel.scheduled_at.asc())
            .limit(limit)
        )
        async with self._session_factory() as session:
            result = await session.execute(stmt)
            return [self._to_entity(row) for row in result.scalars().all()]

    # ── Writes ───────────────────────────────────────────────────────

    async def create(self, article: Article) -> Article:
        if not article.id:
            article.id = str(uuid.uuid4())

        model = self._to_model(article)
        async with self._session_factory() as session:
            async with session.begin():
                session.add(model)
            return self._to_entity(model)

    async def schedule(
        self,
        article_id: str,
        owner_id: str,
        scheduled_at: datetime,
        expected: tuple[ArticleStatus, ...],
        now: datetime,
        ttl_seconds: int,
    ) -> Article | None:
        return await self._conditional_update(
            article_id,
            owner_id,
            [
                ArticleModel.status.in_([s.value for s in expected]),
                _no_live_claim(now, ttl_seconds),
            ],
            status=ArticleStatus.SCHEDULED.value,
            scheduled_at=scheduled_at,
            publish_claim=None,
            publish_claimed_at=None,
        )

    async def unschedule(
        self, article_id: str, owner_id: str, now: datetime, ttl_seconds: int
    ) -> Article | None:
        return await self._conditional_update(
            article_id,
            owner_id,
            [
                ArticleModel.status == ArticleStatus.SCHEDULED.value,
                _no_live_claim(now, ttl_seconds),
            ],
            status=ArticleStatus.DRAFT.value,
            scheduled_at=None,
            publish_claim=None,
            publish_claimed_at=None,
        )

    async def claim_for_publication(
        self,
        article_id: str,
        owner_id: str,
        claim: str,
        expected: tuple[ArticleStatus, ...],
        now: datetime,
        ttl_seconds: int,
        due_before: datetime | None = None,
    ) -> bool:
        conditions = [
            ArticleModel.status.in_([s.value for s in expected]),
            _no_live_claim(now, ttl_seconds),
        ]
        if due_before is not None:
            conditions += [
                ArticleModel.status == ArticleStatus.SCHEDULED.value,
                ArticleModel.scheduled_at <= due_before,
            ]
        updated = await self._conditional_update(
            article_id,
            owner_id,
            conditions,
            publish_claim=claim,
            publish_claimed_at=now,
        )
        return updated is not None

    async def release_claim(self, article_id: str, owner_id: str, claim: str) -> None:
        await self._conditional_update(
            article_id,
            owner_id,
            [ArticleModel.publish_claim == claim],
            publish_claim=None,
            publish_claimed_at=None,
        )

    async def complete_publication(
        self,
        article_id: str,
        owner_id: str,
        claim: str,
        remote_ref: RemoteRef,
        published_at: datetime,
    ) -> Article | None:
        return await self._conditional_update(
            article_id,
            owner_id,
            [
                ArticleModel.publish_claim == claim,
                ArticleModel.status != ArticleStatus.PUBLISHED.value,
            ],
            status=ArticleStatus.PUBLISHED.value,
            published_at=published_at,
            scheduled_at=None,
            remote_post_id=remote_ref.remote_post_id,
            remote_edit_url=remote_ref.remote_edit_url,
            publish_claim=None,
            publish_claimed_at=None,
        )

    # ── Internals ────────────────────────────────────────────────────

    async def _conditional_update(
        self, article_id: str, owner_id: str, conditions: list, **values
    ) -> Article | None:
        """UPDATE … WHERE id/owner/conditions; returns the new row or None when nothing matched."""
        values["updated_at"] = datetime.now(timezone.utc)
        stmt = (
            update(ArticleModel)
            .where(
                ArticleModel.id == article_id,
                ArticleModel.owner_id == owner_id,
                *conditions,
            )
            .values(**values)
            .execution_options(synchronize_session=False)
        )
        async with self._session_factory() as session:
            async with session.begin():
                result = await session.execute(stmt)
                if result.rowcount != 1:
                    return None
                model = await self._get_model(session, article_id, owner_id)
                return self._to_entity(model) if model else None

    @staticmethod
    async def _get_model(session: AsyncSession, article_id: str, owner_id: str) -> ArticleModel | None:
        result = await session.execute(
            select(ArticleModel).where(
                ArticleModel.id == article_id,
                ArticleModel.owner_id == owner_id,
            )
        )
        return result.scalar_one_or_none()

    # ── Mapping ──────────────────────────────────────────────────────

    @staticmethod
    def _to_entity(model: ArticleModel) -> Article:
        """Map ORM model → domain entity."""
        remote_ref = None
        if model.remote_post_id is not None:
            remote_ref = RemoteRef(
                remote_post_id=model.remote_post_id,
                remote_edit_url=model.remote_edit_url or "",
            )
        seo = model.seo or {}
        article = Article(
            id=model.id,
            owner_id=model.owner_id,
            title=model.title,
            topic=model.topic,
            slug=model.slug,
            status=ArticleStatus(model.status),
            scheduled_at=ensure_utc(model.scheduled_at) if model.scheduled_at else None,
            published_at=ensure_utc(model.published_at) if model.published_at else None,
            remote_ref=remote_ref,
            content_html=model.content_html,
            word_count=model.word_count,
            seo=SeoMetadata(
                meta_title=seo.get("meta_title", ""),
                meta_description=seo.get("meta_description", ""),
                slug=seo.get("slug", ""),
                keywords=list(seo.get("keywords", [])),
            ),
            created_at=ensure_utc(model.created_at),
            updated_at=ensure_utc(model.updated_at),
        )
        if not article.check_invariants():
            logger.warning("Article %s has inconsistent status fields (status=%s)", model.id, model.status)
        return article

    @staticmethod
    def _to_model(entity: Article) -> ArticleModel:
        """Map domain entity → ORM model (for creation)."""
        return ArticleModel(
            id=entity.id,
            owner_id=entity.owner_id,
            title=entity.title,
            topic=entity.topic,
            slug=entity.slug,
            status=entity.status.value,
            scheduled_at=entity.scheduled_at,
            published_at=entity.published_at,
            remote_post_id=entity.remote_ref.remote_post_id if entity.remote_ref else None,
            remote_edit_url=entity.remote_ref.remote_edit_url if entity.remote_ref else None,
            content_html=entity.content_html,
            word_count=entity.word_count,
            seo={
                "meta_title": entity.seo.meta_title,
                "meta_description": entity.seo.meta_description,
                "slug": entity.seo.slug,
                "keywords": list(entity.seo.keywords),
            },
            created_at=entity.created_at,
            updated_at=entity.updated_at,
        )


def _no_live_claim(now: datetime, ttl_seconds: int):
    """No lease is held, or the one held is older than the TTL."""
    stale_before = now - timedelta(seconds=ttl_seconds)
    return or_(
        ArticleModel.publish_claim.is_(None),
        ArticleModel.publish_claimed_at < stale_before,
    )
