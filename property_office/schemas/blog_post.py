"""Blog post schemas."""

from datetime import datetime
from typing import ClassVar

from pydantic import Field

from property_office.schemas.common import ApiModel, PatchModel


class BlogPost(ApiModel):
    id: str
    title: str
    content: str
    excerpt: str | None = None
    category: str | None = None
    published: bool = False
    created_at: datetime


class BlogPostCreate(ApiModel):
    title: str = Field(..., min_length=1, max_length=255)
    content: str = Field(..., min_length=1)
    excerpt: str | None = Field(None, max_length=1000)
    category: str | None = Field(None, max_length=100)
    published: bool = False


class BlogPostUpdate(PatchModel):
    NON_NULLABLE: ClassVar[frozenset[str]] = frozenset({"title", "content", "published"})

    title: str | None = Field(None, min_length=1, max_length=255)
    content: str | None = Field(None, min_length=1)
    excerpt: str | None = Field(None, max_length=1000)
    category: str | None = Field(None, max_length=100)
    published: bool | None = None
