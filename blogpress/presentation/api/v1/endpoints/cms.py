"""CMS endpoints: standalone connection test and per-owner WordPress settings."""

import logging

from fastapi import APIRouter, Depends, status

from blogpress.application.interfaces import CmsClient
from blogpress.application.schemas import (
    CmsCredentialsResponse,
    CmsCredentialsSchema,
    CmsCredentialsUpdate,
    CmsIdentityResponse,
    ConnectionTestResponse,
)
from blogpress.domain.entities import CmsCredentials, CmsFailure
from blogpress.domain.exceptions import ValidationError
from blogpress.infrastructure.database.repositories import SQLAlchemyCmsCredentialStore
from blogpress.infrastructure.dependencies import (
    get_cms_client,
    get_credential_store,
    get_current_owner,
)
from blogpress.presentation.api.errors import http_error

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/cms", tags=["CMS"])


@router.post("/test-connection", response_model=ConnectionTestResponse)
async def test_connection(
    data: CmsCredentialsSchema,
    cms_client: CmsClient = Depends(get_cms_client),
) -> ConnectionTestResponse:
    """Verify a set of WordPress credentials without storing them."""
    credentials = CmsCredentials(**data.model_dump())
    missing = credentials.missing_fields()
    if missing:
        raise http_error(ValidationError(
            "Missing WordPress credentials",
            hint=f"Provide {', '.join(missing)}.",
        ))

    result = await cms_client.verify_connection(credentials)
    if isinstance(result, CmsFailure):
        return ConnectionTestResponse(
            success=False,
            message=result.message,
            kind=result.kind.value,
            hint=result.hint,
        )
    return ConnectionTestResponse(
        success=True,
        message=f"Connection successful! Authenticated as: {result.value.name}",
        user=CmsIdentityResponse.model_validate(result.value, from_attributes=True),
    )


@router.get("/credentials", response_model=CmsCredentialsResponse)
async def get_credentials(
    owner_id: str = Depends(get_current_owner),
    store: SQLAlchemyCmsCredentialStore = Depends(get_credential_store),
) -> CmsCredentialsResponse:
    """Return the caller's stored WordPress settings (password masked)."""
    stored = await store.get_for_owner(owner_id) or CmsCredentials()
    return _masked(stored)


@router.put("/credentials", response_model=CmsCredentialsResponse, status_code=status.HTTP_200_OK)
async def put_credentials(
    data: CmsCredentialsUpdate,
    owner_id: str = Depends(get_current_owner),
    store: SQLAlchemyCmsCredentialStore = Depends(get_credential_store),
) -> CmsCredentialsResponse:
    """Replace the caller's WordPress settings. Blank fields use server defaults."""
    saved = await store.save_for_owner(owner_id, CmsCredentials(**data.model_dump()))
    logger.info("Updated CMS settings for owner %s", owner_id)
    return _masked(saved)


def _masked(credentials: CmsCredentials) -> CmsCredentialsResponse:
    return CmsCredentialsResponse(
        cms_url=credentials.cms_url,
        username=credentials.username,
        has_application_password=bool(credentials.application_password.strip()),
    )
