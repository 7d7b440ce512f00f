"""Generated post schemas for API request/response validation."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from app.schemas.article import SourceArticleRef


class PostResponse(BaseModel):
    """Schema for generated post responses."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    title: str
    slug: str
    meta_description: str
    content: str
    category: str
    tags: list[str] = Field(default_factory=list)
    reading_time: str
    trending_topic: str
    source_articles: list[SourceArticleRef] = Field(default_factory=list)
    seo_score: int = Field(..., ge=0, le=100)
    status: str
    published: datetime


class PostListResponse(BaseModel):
    """Schema for paginated post list response."""

    posts: list[PostResponse]
    total: int
    limit: int
    offset: int
