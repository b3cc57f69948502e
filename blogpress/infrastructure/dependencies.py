"""FastAPI dependency injection: wires infrastructure to application layer."""

from collections.abc import AsyncGenerator
from functools import lru_cache

from fastapi import Depends, Header
from sqlalchemy.ext.asyncio import AsyncSession

from blogpress.config import get_settings
from blogpress.application.interfaces import CmsClient, TokenVerifier
from blogpress.application.services import (
    ArticleService,
    CredentialResolver,
    PublicationService,
    ScheduledPublicationRunner,
)
from blogpress.domain.entities import CmsCredentials
from blogpress.domain.exceptions import AuthenticationError
from blogpress.infrastructure.auth.static_token_verifier import (
    StaticTokenVerifier,
    token_from_header,
)
from blogpress.infrastructure.cms import WordPressClient
from blogpress.infrastructure.database.session import async_session_factory, get_db_session
from blogpress.infrastructure.database.repositories import (
    SQLAlchemyArticleRepository,
    SQLAlchemyCmsCredentialStore,
)


@lru_cache
def get_cms_client() -> CmsClient:
    """One shared WordPress client; credentials travel with each call."""
    settings = get_settings()
    return WordPressClient(
        timeout_seconds=settings.cms_timeout_seconds,
        post_status=settings.cms_post_status,
        user_agent=settings.cms_user_agent,
    )


@lru_cache
def get_token_verifier() -> TokenVerifier:
    return StaticTokenVerifier(get_settings().auth_tokens)


def get_default_credentials() -> CmsCredentials:
    """Process-wide WordPress credentials from settings (read-only)."""
    settings = get_settings()
    return CmsCredentials(
        cms_url=settings.wordpress_url,
        username=settings.wordpress_username,
        application_password=settings.wordpress_application_password,
    )


def get_article_repository() -> SQLAlchemyArticleRepository:
    return SQLAlchemyArticleRepository(async_session_factory)


async def get_current_owner(
    authorization: str | None = Header(default=None),
    verifier: TokenVerifier = Depends(get_token_verifier),
) -> str:
    """Resolve the bearer token to an owner id or fail with AuthenticationError."""
    token = token_from_header(authorization)
    if token is None:
        raise AuthenticationError("Authentication required")
    owner_id = await verifier.verify(token)
    if owner_id is None:
        raise AuthenticationError("Invalid authentication token")
    return owner_id


async def get_credential_store(
    session: AsyncSession = Depends(get_db_session),
) -> AsyncGenerator[SQLAlchemyCmsCredentialStore, None]:
    yield SQLAlchemyCmsCredentialStore(session)


async def get_article_service(
    repository: SQLAlchemyArticleRepository = Depends(get_article_repository),
) -> AsyncGenerator[ArticleService, None]:
    """Provides an ArticleService instance with its repository wired up."""
    yield ArticleService(repository)


async def get_publication_service(
    repository: SQLAlchemyArticleRepository = Depends(get_article_repository),
    store: SQLAlchemyCmsCredentialStore = Depends(get_credential_store),
    cms_client: CmsClient = Depends(get_cms_client),
    defaults: CmsCredentials = Depends(get_default_credentials),
) -> AsyncGenerator[PublicationService, None]:
    """Provides a PublicationService wired to the store, resolver and WordPress client."""
    settings = get_settings()
    resolver = CredentialResolver(store, defaults)
    yield PublicationService(
        repository=repository,
        resolver=resolver,
        cms_client=cms_client,
        claim_ttl_seconds=settings.publish_claim_ttl_seconds,
    )


async def get_scheduled_publication_runner(
    repository: SQLAlchemyArticleRepository = Depends(get_article_repository),
    publication_service: PublicationService = Depends(get_publication_service),
) -> AsyncGenerator[ScheduledPublicationRunner, None]:
    yield ScheduledPublicationRunner(repository, publication_service)
