"""Due-publication runner: the periodic trigger for scheduled articles.

Nothing inside the publication core fires on a timer. A cron job (or any
external scheduler) calls ``publish_due`` which walks the scheduled
articles whose time has come and publishes each one that is still due when
its lease is taken. Failures stay ``scheduled`` and are retried on the next
pass; articles unscheduled or rescheduled mid-pass are reported as skipped.
"""

import logging
from datetime import datetime, timezone

from blogpress.application.interfaces import ArticleRepository
from blogpress.application.schemas import DuePublicationReport, DuePublicationResult
from blogpress.application.services.publication_service import PublicationService
from blogpress.domain.exceptions import (
    CmsError,
    EntityNotFoundError,
    InvalidTransitionError,
    NotConfiguredError,
)
from blogpress.infrastructure.logging.colored_logger import PublicationStage, StageLogger

logger = logging.getLogger(__name__)
slog = StageLogger("ScheduledPublicationRunner")


class ScheduledPublicationRunner:
    def __init__(self, repository: ArticleRepository, publication_service: PublicationService):
        self._repository = repository
        self._publication = publication_service

    async def publish_due(self, now: datetime | None = None, limit: int = 100) -> DuePublicationReport:
        now = now or datetime.now(timezone.utc)
        due = await self._repository.list_due(now, limit=limit)
        slog.step_start(PublicationStage.RUNNER, f"{len(due)} scheduled article(s) due", now=now.isoformat())

        results: list[DuePublicationResult] = []
        for article in due:
            results.append(await self._publish_one(article.id, article.owner_id))

        report = DuePublicationReport(
            processed=len(results),
            published=sum(1 for r in results if r.status == "published"),
            skipped=sum(1 for r in results if r.status == "skipped"),
            failed=sum(1 for r in results if r.status == "failed"),
            results=results,
        )
        slog.step_complete(
            PublicationStage.RUNNER, "Due publication pass finished",
            published=report.published, skipped=report.skipped, failed=report.failed,
        )
        return report

    async def _publish_one(self, article_id: str, owner_id: str) -> DuePublicationResult:
        try:
            await self._publication.publish_scheduled(article_id, owner_id)
        except (NotConfiguredError, EntityNotFoundError, InvalidTransitionError) as exc:
            return DuePublicationResult(
                article_id=article_id, owner_id=owner_id,
                status="skipped", reason=exc.message, kind=exc.kind,
            )
        except CmsError as exc:
            logger.warning("Scheduled publish of %s failed: %s", article_id, exc.message)
            return DuePublicationResult(
                article_id=article_id, owner_id=owner_id,
                status="failed", reason=exc.message, kind=exc.kind,
            )
        return DuePublicationResult(article_id=article_id, owner_id=owner_id, status="published")
