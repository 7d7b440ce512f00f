"""Generated post model - blog posts written by the content pipeline."""

from datetime import UTC, datetime
from enum import StrEnum
from typing import Any
from uuid import UUID, uuid4

from sqlalchemy import JSON, Column, DateTime, Text
from sqlmodel import Field, SQLModel


class PostStatus(StrEnum):
    DRAFT = "draft"
    PUBLISHED = "published"


class GeneratedPost(SQLModel, table=True):
    """Blog post assembled from an LLM response and its source articles."""

    __tablename__ = "generated_posts"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    # Post content
    title: str = Field(max_length=500)
    slug: str = Field(max_length=500, index=True)
    meta_description: str = Field(default="", max_length=1000)
    content: str = Field(default="", sa_type=Text)
    category: str = Field(max_length=50, index=True)
    tags: list[str] = Field(default=[], sa_column=Column(JSON, default=[]))
    reading_time: str = Field(default="5 min read", max_length=50)

    # Provenance
    trending_topic: str = Field(default="", max_length=200)
    source_articles: list[dict[str, Any]] = Field(default=[], sa_column=Column(JSON, default=[]))

    # Quality and publishing
    seo_score: int = Field(default=0, ge=0, le=100)
    status: str = Field(default=PostStatus.PUBLISHED, max_length=20, index=True)
    published: datetime = Field(
        default_factory=lambda: datetime.now(UTC),
        sa_type=DateTime(timezone=True),
        index=True,
    )
