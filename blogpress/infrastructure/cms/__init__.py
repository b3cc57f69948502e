"""CMS infrastructure package."""

from .wordpress_client import WordPressClient, strip_leading_title

__all__ = ["WordPressClient", "strip_leading_title"]
