from .article import ArticleModel
from .cms_credentials import CmsCredentialsModel

__all__ = [
    "ArticleModel",
    "CmsCredentialsModel",
]
