"""Publication service: owns the article lifecycle and talks to the CMS.

Flow for an immediate publish:

    load (owner-scoped) → reject if published → resolve credentials →
    verify connection → take publication lease → create remote post →
    mark published (status, published_at, remote_ref in one update)

Scheduling only records ``scheduled_at``; a separate trigger
(ScheduledPublicationRunner) calls ``publish_scheduled`` once the time is
due, which takes the lease only while the article is still scheduled and due.
"""

import logging
import uuid
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime, timezone

from blogpress.application.interfaces import ArticleRepository, CmsClient
from blogpress.application.services.credential_resolver import CredentialResolver
from blogpress.domain.entities import (
    Article,
    ArticleStatus,
    CmsCredentials,
    CmsFailure,
    CmsIdentity,
    RemoteRef,
    ensure_utc,
)
from blogpress.domain.exceptions import CmsError, EntityNotFoundError, InvalidTransitionError
from blogpress.infrastructure.logging.colored_logger import PublicationStage, StageLogger

logger = logging.getLogger(__name__)
slog = StageLogger("PublicationService")

_PUBLISHABLE = (ArticleStatus.DRAFT, ArticleStatus.SCHEDULED)


@dataclass
class PublicationOutcome:
    """What a publish call did: either scheduled, or published with a remote ref."""

    article: Article
    remote_ref: RemoteRef | None = None

    @property
    def scheduled(self) -> bool:
        return self.article.status is ArticleStatus.SCHEDULED


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class PublicationService:
    """The only component allowed to change an article's publication status."""

    def __init__(
        self,
        repository: ArticleRepository,
        resolver: CredentialResolver,
        cms_client: CmsClient,
        claim_ttl_seconds: int = 300,
        clock: Callable[[], datetime] = _utcnow,
    ):
        self._repository = repository
        self._resolver = resolver
        self._cms = cms_client
        self._claim_ttl = claim_ttl_seconds
        self._clock = clock

    # ── Publish / schedule ───────────────────────────────────────────

    async def publish(
        self,
        article_id: str,
        owner_id: str,
        schedule_at: datetime | None = None,
    ) -> PublicationOutcome:
        """Publish now, or record a schedule when ``schedule_at`` is given.

        Raises:
            EntityNotFoundError: no such article for this owner.
            InvalidTransitionError: already published, or another publish won.
            NotConfiguredError: credentials incomplete after fallback.
            CmsError: the CMS rejected verification or post creation.
        """
        article = await self._load(article_id, owner_id)
        requested = ArticleStatus.SCHEDULED if schedule_at is not None else ArticleStatus.PUBLISHED
        if article.is_published:
            raise InvalidTransitionError(article_id, article.status.value, requested.value)

        if schedule_at is not None:
            return await self._schedule(article, ensure_utc(schedule_at))

        return await self._publish_now(article)

    async def publish_scheduled(self, article_id: str, owner_id: str) -> PublicationOutcome:
        """Publish a scheduled article, but only if it is still due.

        An unschedule or reschedule that lands while this call talks to the
        CMS makes the lease condition fail, and nothing is posted.

        Raises:
            InvalidTransitionError: not scheduled, or no longer due.
            (plus everything ``publish`` raises)
        """
        now = self._clock()
        article = await self._load(article_id, owner_id)
        if not article.is_due(now):
            raise InvalidTransitionError(
                article_id, article.status.value, ArticleStatus.PUBLISHED.value,
                reason="article is no longer due",
            )
        return await self._publish_now(article, due_before=now)

    async def _publish_now(
        self, article: Article, due_before: datetime | None = None
    ) -> PublicationOutcome:
        owner_id = article.owner_id
        slog.separator(f"Publishing {article.id}")
        with slog.timed_step(PublicationStage.RESOLVE, "Resolving CMS credentials", owner=owner_id):
            credentials = await self._resolver.resolve(owner_id)

        await self._verify(credentials)
        published, remote_ref = await self._create_remote_post(article, credentials, due_before)
        return PublicationOutcome(article=published, remote_ref=remote_ref)

    async def unschedule(self, article_id: str, owner_id: str) -> Article:
        """Return a scheduled article to draft."""
        article = await self._load(article_id, owner_id)
        if article.status is not ArticleStatus.SCHEDULED:
            raise InvalidTransitionError(article_id, article.status.value, ArticleStatus.DRAFT.value)

        updated = await self._repository.unschedule(
            article_id, owner_id, now=self._clock(), ttl_seconds=self._claim_ttl,
        )
        if updated is None:
            current = await self._load(article_id, owner_id)
            raise InvalidTransitionError(article_id, current.status.value, ArticleStatus.DRAFT.value)
        slog.step_complete(PublicationStage.SCHEDULE, f"Unscheduled {article_id}")
        return updated

    # ── Steps ────────────────────────────────────────────────────────

    async def _load(self, article_id: str, owner_id: str) -> Article:
        article = await self._repository.get(article_id, owner_id)
        if article is None:
            raise EntityNotFoundError("Article", article_id)
        return article

    async def _schedule(self, article: Article, scheduled_at: datetime) -> PublicationOutcome:
        if scheduled_at <= self._clock():
            # accepted as-is; the due-publication runner picks it up on its next pass
            logger.warning(
                "Article %s scheduled in the past (%s); it is due immediately",
                article.id, scheduled_at.isoformat(),
            )

        updated = await self._repository.schedule(
            article.id, article.owner_id, scheduled_at,
            expected=_PUBLISHABLE, now=self._clock(), ttl_seconds=self._claim_ttl,
        )
        if updated is None:
            current = await self._load(article.id, article.owner_id)
            raise InvalidTransitionError(article.id, current.status.value, ArticleStatus.SCHEDULED.value)

        slog.step_complete(
            PublicationStage.SCHEDULE, f"Scheduled {article.id}", at=scheduled_at.isoformat(),
        )
        return PublicationOutcome(article=updated)

    async def _verify(self, credentials: CmsCredentials) -> CmsIdentity:
        slog.step_start(PublicationStage.VERIFY, "Verifying CMS connection", url=credentials.cms_url)
        result = await self._cms.verify_connection(credentials)
        if isinstance(result, CmsFailure):
            slog.step_error(PublicationStage.VERIFY, result.message, kind=result.kind.value)
            raise CmsError(result.kind.value, result.message, result.hint, result.status_code)

        slog.step_complete(PublicationStage.VERIFY, f"Authenticated as {result.value.name}")
        return result.value

    async def _create_remote_post(
        self, article: Article, credentials: CmsCredentials, due_before: datetime | None = None
    ) -> tuple[Article, RemoteRef]:
        claim = uuid.uuid4().hex
        claimed = await self._repository.claim_for_publication(
            article.id, article.owner_id, claim,
            expected=_PUBLISHABLE, now=self._clock(), ttl_seconds=self._claim_ttl,
            due_before=due_before,
        )
        if not claimed:
            current = await self._load(article.id, article.owner_id)
            if due_before is not None and not current.is_due(due_before):
                reason = "article is no longer due"
            else:
                reason = "another publication attempt is in progress"
            slog.step_error(PublicationStage.CREATE, reason.capitalize(), status=current.status.value)
            raise InvalidTransitionError(
                article.id, current.status.value, ArticleStatus.PUBLISHED.value, reason=reason,
            )

        slog.step_start(PublicationStage.CREATE, f"Creating remote post for '{article.title}'")
        try:
            result = await self._cms.create_post(
                credentials,
                title=article.title,
                content_html=article.content_html,
                seo=article.seo,
                topic=article.topic,
            )
        except BaseException:
            await self._repository.release_claim(article.id, article.owner_id, claim)
            raise

        if isinstance(result, CmsFailure):
            await self._repository.release_claim(article.id, article.owner_id, claim)
            slog.step_error(PublicationStage.CREATE, result.message, kind=result.kind.value)
            raise CmsError(result.kind.value, result.message, result.hint, result.status_code)

        remote_ref = result.value
        slog.step_complete(
            PublicationStage.CREATE, "Remote post created", post_id=remote_ref.remote_post_id,
        )

        updated = await self._repository.complete_publication(
            article.id, article.owner_id, claim, remote_ref, published_at=self._clock(),
        )
        if updated is None:
            # lease expired and was taken over while the CMS call was in flight
            logger.error(
                "Article %s lost its publication lease; remote post %s was created but not recorded",
                article.id, remote_ref.remote_post_id,
            )
            current = await self._load(article.id, article.owner_id)
            raise InvalidTransitionError(
                article.id, current.status.value, ArticleStatus.PUBLISHED.value,
                reason="publication lease expired",
            )

        slog.step_complete(PublicationStage.PERSIST, f"Article {article.id} published")
        return updated, remote_ref
