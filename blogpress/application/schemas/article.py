"""Pydantic DTOs (Data Transfer Objects) for the Article feature."""

from datetime import datetime

from pydantic import BaseModel, Field

from blogpress.domain.entities import ArticleStatus


class SeoMetadataSchema(BaseModel):
    """SEO metadata as submitted by the generator and passed to the CMS."""

    meta_title: str = ""
    meta_description: str = ""
    slug: str = ""
    keywords: list[str] = Field(default_factory=list)

    model_config = {"from_attributes": True}


class ArticleCreate(BaseModel):
    """Schema for creating a new article."""

    title: str = Field(..., min_length=1, max_length=500, examples=["Hello"])
    topic: str | None = Field(None, max_length=500)
    slug: str | None = Field(None, max_length=255)
    status: str | None = Field(None, examples=["draft"])
    scheduled_at: datetime | None = None
    content_html: str = ""
    word_count: int = Field(0, ge=0)
    seo: SeoMetadataSchema | None = None


class RemoteRefResponse(BaseModel):
    remote_post_id: int
    remote_edit_url: str

    model_config = {"from_attributes": True}


class ArticleResponse(BaseModel):
    """Schema returned to the client."""

    id: str
    owner_id: str
    title: str
    topic: str | None
    slug: str | None
    status: ArticleStatus
    scheduled_at: datetime | None
    published_at: datetime | None
    remote_ref: RemoteRefResponse | None
    content_html: str
    word_count: int
    seo: SeoMetadataSchema
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class ArticleListResponse(BaseModel):
    articles: list[ArticleResponse]


class PublishRequest(BaseModel):
    """Body of the publish endpoint: omit ``publish_at`` to publish now."""

    publish_at: datetime | None = Field(None, examples=["2026-11-01T09:00:00Z"])


class PublishResponse(BaseModel):
    article: ArticleResponse
    remote: RemoteRefResponse | None = None
