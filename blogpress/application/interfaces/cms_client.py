"""Abstract CMS client interface: port for remote blogging platforms."""

from abc import ABC, abstractmethod

from blogpress.domain.entities import (
    CmsCredentials,
    CmsFailure,
    CmsIdentity,
    CmsOk,
    RemoteRef,
    SeoMetadata,
)


class CmsClient(ABC):
    """Port: what the publication service needs from a CMS.

    Implementations must never raise: transport and HTTP failures are
    returned as ``CmsFailure`` values.
    """

    @abstractmethod
    async def verify_connection(
        self, credentials: CmsCredentials
    ) -> CmsOk[CmsIdentity] | CmsFailure:
        """Read the currently authenticated user to prove the credentials work."""
        ...

    @abstractmethod
    async def create_post(
        self,
        credentials: CmsCredentials,
        *,
        title: str,
        content_html: str,
        seo: SeoMetadata,
        topic: str | None = None,
    ) -> CmsOk[RemoteRef] | CmsFailure:
        """Create a post on the CMS and return its remote reference.

        Args:
            credentials: A complete, already verified credential set.
            title: Post title; falls back to ``seo.meta_title`` when blank.
            content_html: Rendered article body.
            seo: Excerpt, slug and keyword tags for the post.
            topic: Article topic, used as the focus keyword fallback.
        """
        ...
