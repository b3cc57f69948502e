"""SQLAlchemy ORM model for per-owner CMS credentials."""

from datetime import datetime, timezone

from sqlalchemy import DateTime, String
from sqlalchemy.orm import Mapped, mapped_column

from blogpress.infrastructure.database.base import Base


class CmsCredentialsModel(Base):
    """ORM model: maps to the 'cms_credentials' table, one row per owner."""

    __tablename__ = "cms_credentials"

    owner_id: Mapped[str] = mapped_column(String(128), primary_key=True)
    cms_url: Mapped[str] = mapped_column(String(500), nullable=False, default="")
    username: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    application_password: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<CmsCredentialsModel(owner_id={self.owner_id}, cms_url='{self.cms_url}')>"
