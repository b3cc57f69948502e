from .article_service import ArticleService
from .credential_resolver import CredentialResolver, merge_credentials
from .publication_service import PublicationOutcome, PublicationService
from .scheduled_publication_runner import ScheduledPublicationRunner

__all__ = [
    "ArticleService",
    "CredentialResolver",
    "merge_credentials",
    "PublicationOutcome",
    "PublicationService",
    "ScheduledPublicationRunner",
]
