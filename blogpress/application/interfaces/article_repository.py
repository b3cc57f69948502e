"""Abstract repository interfaces (ports): define the contract, not the implementation."""

from abc import ABC, abstractmethod
from datetime import datetime

from blogpress.domain.entities import Article, ArticleStatus, RemoteRef


class ArticleRepository(ABC):
    """Port for owner-scoped article persistence.

    Every status-changing method is a conditional update: it applies only
    when the stored article still has one of ``expected`` statuses and
    returns ``None`` when the condition no longer holds (lost race, wrong
    owner, missing row). Implementations must commit each call on its own so
    no lock outlives the call.
    """

    @abstractmethod
    async def get(self, article_id: str, owner_id: str) -> Article | None:
        """Retrieve an article owned by ``owner_id``."""
        ...

    @abstractmethod
    async def list_by_owner(self, owner_id: str) -> list[Article]:
        """All articles of one owner, oldest first."""
        ...

    @abstractmethod
    async def create(self, article: Article) -> Article:
        """Persist a new article and return it with its generated ID."""
        ...

    @abstractmethod
    async def list_due(self, now: datetime, limit: int = 100) -> list[Article]:
        """Scheduled articles of every owner whose ``scheduled_at`` <= ``now``."""
        ...

    @abstractmethod
    async def schedule(
        self,
        article_id: str,
        owner_id: str,
        scheduled_at: datetime,
        expected: tuple[ArticleStatus, ...],
        now: datetime,
        ttl_seconds: int,
    ) -> Article | None:
        """Set ``status=scheduled`` and ``scheduled_at`` unless a live publication lease exists.

        A lease older than ``ttl_seconds`` is considered abandoned and is dropped.
        """
        ...

    @abstractmethod
    async def unschedule(
        self, article_id: str, owner_id: str, now: datetime, ttl_seconds: int
    ) -> Article | None:
        """Return a scheduled article to draft, clearing ``scheduled_at``; same lease rule as ``schedule``."""
        ...

    @abstractmethod
    async def claim_for_publication(
        self,
        article_id: str,
        owner_id: str,
        claim: str,
        expected: tuple[ArticleStatus, ...],
        now: datetime,
        ttl_seconds: int,
        due_before: datetime | None = None,
    ) -> bool:
        """Take the publication lease. False when another live lease exists or status moved.

        With ``due_before`` the article must also still be scheduled at or
        before that time, checked in the same conditional update.
        """
        ...

    @abstractmethod
    async def release_claim(self, article_id: str, owner_id: str, claim: str) -> None:
        """Drop the lease ``claim`` if it is still held."""
        ...

    @abstractmethod
    async def complete_publication(
        self,
        article_id: str,
        owner_id: str,
        claim: str,
        remote_ref: RemoteRef,
        published_at: datetime,
    ) -> Article | None:
        """Atomically mark the article published and release the lease ``claim``."""
        ...
