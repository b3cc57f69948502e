"""Resolves the CMS credentials to use for one owner."""

import logging

from blogpress.application.interfaces import CmsCredentialStore
from blogpress.domain.entities import CmsCredentials
from blogpress.domain.exceptions import NotConfiguredError

logger = logging.getLogger(__name__)


class CredentialResolver:
    """Merges an owner's stored credentials over the process-wide defaults.

    The merge is per field: a blank owner field falls back to the default
    value of that field only.
    """

    def __init__(self, store: CmsCredentialStore, defaults: CmsCredentials):
        self._store = store
        self._defaults = defaults

    async def resolve(self, owner_id: str) -> CmsCredentials:
        """Return complete credentials or raise NotConfiguredError."""
        stored = await self._store.get_for_owner(owner_id) or CmsCredentials()
        resolved = merge_credentials(stored, self._defaults)

        missing = resolved.missing_fields()
        if missing:
            logger.info("CMS credentials incomplete for owner %s: missing %s", owner_id, missing)
            raise NotConfiguredError(missing)
        return resolved


def merge_credentials(primary: CmsCredentials, fallback: CmsCredentials) -> CmsCredentials:
    """Field-by-field union; blank values in ``primary`` take ``fallback``."""

    def pick(name: str) -> str:
        value = getattr(primary, name).strip()
        return value or getattr(fallback, name).strip()

    return CmsCredentials(
        cms_url=pick("cms_url"),
        username=pick("username"),
        application_password=pick("application_password"),
    )
