"""Article endpoints: owner-scoped CRUD plus publish / schedule."""

from fastapi import APIRouter, Depends, status

from blogpress.application.schemas import (
    ArticleCreate,
    ArticleListResponse,
    ArticleResponse,
    PublishRequest,
    PublishResponse,
    RemoteRefResponse,
)
from blogpress.application.services import ArticleService, PublicationService
from blogpress.domain.exceptions import PublicationError
from blogpress.infrastructure.dependencies import (
    get_article_service,
    get_current_owner,
    get_publication_service,
)
from blogpress.presentation.api.errors import http_error

router = APIRouter(prefix="/articles", tags=["Articles"])


@router.get("", response_model=ArticleListResponse)
async def list_articles(
    owner_id: str = Depends(get_current_owner),
    service: ArticleService = Depends(get_article_service),
) -> ArticleListResponse:
    """Retrieve every article owned by the caller."""
    articles = await service.list_articles(owner_id)
    return ArticleListResponse(
        articles=[ArticleResponse.model_validate(a, from_attributes=True) for a in articles]
    )


@router.post("", response_model=ArticleResponse, status_code=status.HTTP_201_CREATED)
async def create_article(
    data: ArticleCreate,
    owner_id: str = Depends(get_current_owner),
    service: ArticleService = Depends(get_article_service),
) -> ArticleResponse:
    """Create a new article (draft unless another valid status is given)."""
    try:
        article = await service.create_article(owner_id, data)
    except PublicationError as e:
        raise http_error(e)
    return ArticleResponse.model_validate(article, from_attributes=True)


@router.get("/{article_id}", response_model=ArticleResponse)
async def get_article(
    article_id: str,
    owner_id: str = Depends(get_current_owner),
    service: ArticleService = Depends(get_article_service),
) -> ArticleResponse:
    try:
        article = await service.get_article(owner_id, article_id)
    except PublicationError as e:
        raise http_error(e)
    return ArticleResponse.model_validate(article, from_attributes=True)


@router.post("/{article_id}/publish", response_model=PublishResponse)
async def publish_article(
    article_id: str,
    data: PublishRequest | None = None,
    owner_id: str = Depends(get_current_owner),
    service: PublicationService = Depends(get_publication_service),
) -> PublishResponse:
    """Publish to WordPress now, or schedule when ``publish_at`` is given."""
    publish_at = data.publish_at if data is not None else None
    try:
        outcome = await service.publish(article_id, owner_id, schedule_at=publish_at)
    except PublicationError as e:
        raise http_error(e)

    remote = (
        RemoteRefResponse.model_validate(outcome.remote_ref, from_attributes=True)
        if outcome.remote_ref is not None
        else None
    )
    return PublishResponse(
        article=ArticleResponse.model_validate(outcome.article, from_attributes=True),
        remote=remote,
    )


@router.delete("/{article_id}/schedule", response_model=ArticleResponse)
async def unschedule_article(
    article_id: str,
    owner_id: str = Depends(get_current_owner),
    service: PublicationService = Depends(get_publication_service),
) -> ArticleResponse:
    """Cancel a scheduled publication; the article goes back to draft."""
    try:
        article = await service.unschedule(article_id, owner_id)
    except PublicationError as e:
        raise http_error(e)
    return ArticleResponse.model_validate(article, from_attributes=True)
