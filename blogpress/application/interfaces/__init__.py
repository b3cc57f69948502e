from .article_repository import ArticleRepository
from .cms_client import CmsClient
from .credential_store import CmsCredentialStore
from .token_verifier import TokenVerifier

__all__ = [
    "ArticleRepository",
    "CmsClient",
    "CmsCredentialStore",
    "TokenVerifier",
]
