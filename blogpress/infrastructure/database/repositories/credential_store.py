"""Concrete per-owner CMS credential store backed by SQLAlchemy."""

from sqlalchemy.ext.asyncio import AsyncSession

from blogpress.application.interfaces import CmsCredentialStore
from blogpress.domain.entities import CmsCredentials
from blogpress.infrastructure.database.models import CmsCredentialsModel


class SQLAlchemyCmsCredentialStore(CmsCredentialStore):
    """Implements the CmsCredentialStore port using SQLAlchemy async sessions."""

    def __init__(self, session: AsyncSession):
        self._session = session

    async def get_for_owner(self, owner_id: str) -> CmsCredentials | None:
        model = await self._session.get(CmsCredentialsModel, owner_id)
        return self._to_entity(model) if model else None

    async def save_for_owner(self, owner_id: str, credentials: CmsCredentials) -> CmsCredentials:
        model = await self._session.get(CmsCredentialsModel, owner_id)
        if model is None:
            model = CmsCredentialsModel(owner_id=owner_id)
            self._session.add(model)
        model.cms_url = credentials.cms_url.strip().rstrip("/")
        model.username = credentials.username.strip()
        model.application_password = credentials.application_password.strip()
        await self._session.flush()
        return self._to_entity(model)

    @staticmethod
    def _to_entity(model: CmsCredentialsModel) -> CmsCredentials:
        return CmsCredentials(
            cms_url=model.cms_url,
            username=model.username,
            application_password=model.application_password,
        )
