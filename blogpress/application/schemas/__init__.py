from .article import (
    ArticleCreate,
    ArticleListResponse,
    ArticleResponse,
    PublishRequest,
    PublishResponse,
    RemoteRefResponse,
    SeoMetadataSchema,
)
from .cms import (
    CmsCredentialsResponse,
    CmsCredentialsSchema,
    CmsCredentialsUpdate,
    CmsIdentityResponse,
    ConnectionTestResponse,
)
from .publication import DuePublicationReport, DuePublicationResult

__all__ = [
    "ArticleCreate",
    "ArticleListResponse",
    "ArticleResponse",
    "PublishRequest",
    "PublishResponse",
    "RemoteRefResponse",
    "SeoMetadataSchema",
    "CmsCredentialsResponse",
    "CmsCredentialsSchema",
    "CmsCredentialsUpdate",
    "CmsIdentityResponse",
    "ConnectionTestResponse",
    "DuePublicationReport",
    "DuePublicationResult",
]
