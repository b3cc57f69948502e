from .article import Article, ArticleStatus, RemoteRef, SeoMetadata, ensure_utc
from .cms import (
    CMS_ERROR_HINTS,
    CmsCredentials,
    CmsErrorKind,
    CmsFailure,
    CmsIdentity,
    CmsOk,
)

__all__ = [
    "Article",
    "ArticleStatus",
    "RemoteRef",
    "SeoMetadata",
    "ensure_utc",
    "CMS_ERROR_HINTS",
    "CmsCredentials",
    "CmsErrorKind",
    "CmsFailure",
    "CmsIdentity",
    "CmsOk",
]
