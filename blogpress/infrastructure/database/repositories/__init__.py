from .article_repository import SQLAlchemyArticleRepository
from .credential_store import SQLAlchemyCmsCredentialStore

__all__ = [
    "SQLAlchemyArticleRepository",
    "SQLAlchemyCmsCredentialStore",
]
