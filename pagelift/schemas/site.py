"""Site, page and lead schemas."""

from __future__ import annotations

import uuid
from datetime import datetime

from pydantic import BaseModel, Field


class SiteCreate(BaseModel):
    name: str
    subdomain: str
    owner_email: str | None = None


class SiteSettingsUpdate(BaseModel):
    title: str | None = None
    description: str | None = None
    theme: str | None = None
    success_message: str | None = None

    model_config = {"extra": "allow"}


class PageSave(BaseModel):
    title: str | None = None
    content: dict = Field(default_factory=lambda: {"sections": []})


class PublishToggle(BaseModel):
    published: bool


class PageResponse(BaseModel):
    id: uuid.UUID
    slug: str
    title: str | None = None
    content_json: dict | None = None
    published: bool
    published_at: datetime | None = None

    model_config = {"from_attributes": True}


class SiteResponse(BaseModel):
    id: uuid.UUID
    name: str
    subdomain: str
    owner_email: str | None = None
    settings_json: dict | None = None
    pages: list[PageResponse] = Field(default_factory=list)

    model_config = {"from_attributes": True}


class LeadResponse(BaseModel):
    id: uuid.UUID
    email: str
    name: str | None = None
    data_json: dict | None = None
    created_at: datetime

    model_config = {"from_attributes": True}


class LeadPage(BaseModel):
    items: list[LeadResponse]
    total: int
