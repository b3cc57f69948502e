"""Cron endpoint: publishes scheduled articles whose time has come."""

import hmac

from fastapi import APIRouter, Depends, Header

from blogpress.application.schemas import DuePublicationReport
from blogpress.application.services import ScheduledPublicationRunner
from blogpress.config import Settings, get_settings
from blogpress.domain.exceptions import AuthenticationError
from blogpress.infrastructure.auth.static_token_verifier import token_from_header
from blogpress.infrastructure.dependencies import get_scheduled_publication_runner
from blogpress.presentation.api.errors import http_error

router = APIRouter(prefix="/cron", tags=["Cron"])


def verify_cron_secret(
    authorization: str | None = Header(default=None),
    settings: Settings = Depends(get_settings),
) -> None:
    secret = settings.cron_secret
    token = token_from_header(authorization)
    if not secret or token is None or not hmac.compare_digest(secret.encode(), token.encode()):
        raise http_error(AuthenticationError("Unauthorized", hint="Send the CRON_SECRET as a bearer token."))


@router.post(
    "/publish-due",
    response_model=DuePublicationReport,
    dependencies=[Depends(verify_cron_secret)],
)
async def publish_due(
    runner: ScheduledPublicationRunner = Depends(get_scheduled_publication_runner),
) -> DuePublicationReport:
    """Publish every scheduled article that is due, across all owners."""
    return await runner.publish_due()
