"""Pydantic DTOs for CMS connection testing and per-owner CMS settings."""

from pydantic import BaseModel, Field


class CmsCredentialsSchema(BaseModel):
    """Credentials supplied for a standalone connection test."""

    cms_url: str = Field("", examples=["https://blog.example.com"])
    username: str = ""
    application_password: str = ""


class CmsIdentityResponse(BaseModel):
    id: int
    name: str
    email: str | None = None
    roles: list[str] = Field(default_factory=list)

    model_config = {"from_attributes": True}


class ConnectionTestResponse(BaseModel):
    success: bool
    message: str
    user: CmsIdentityResponse | None = None
    kind: str | None = None
    hint: str | None = None


class CmsCredentialsUpdate(BaseModel):
    """Owner settings: blank fields fall back to the server defaults."""

    cms_url: str = Field("", max_length=500)
    username: str = Field("", max_length=255)
    application_password: str = Field("", max_length=255)


class CmsCredentialsResponse(BaseModel):
    """Stored owner settings; the password is never echoed back."""

    cms_url: str
    username: str
    has_application_password: bool
