"""Pydantic DTOs for the due-publication runner report."""

from typing import Literal

from pydantic import BaseModel


class DuePublicationResult(BaseModel):
    article_id: str
    owner_id: str
    status: Literal["published", "skipped", "failed"]
    reason: str | None = None
    kind: str | None = None


class DuePublicationReport(BaseModel):
    processed: int
    published: int
    skipped: int
    failed: int
    results: list[DuePublicationResult]
