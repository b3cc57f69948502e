"""Port for per-owner CMS credential storage (the settings collaborator)."""

from abc import ABC, abstractmethod

from blogpress.domain.entities import CmsCredentials


class CmsCredentialStore(ABC):
    """Reads and writes the CMS credentials an owner saved in Settings."""

    @abstractmethod
    async def get_for_owner(self, owner_id: str) -> CmsCredentials | None:
        """Return the owner's stored credentials (possibly partial) or None."""
        ...

    @abstractmethod
    async def save_for_owner(self, owner_id: str, credentials: CmsCredentials) -> CmsCredentials:
        """Replace the owner's stored credentials."""
        ...
