"""Article schemas for trend analysis and API responses."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class ArticleSummary(BaseModel):
    """Read-only view of a scraped article used for trends and prompting."""

    model_config = ConfigDict(from_attributes=True)

    guid: str
    title: str
    link: str = ""
    description: str = ""
    source: str = ""
    category: str
    published: datetime | None = None
    trending_score: int = Field(default=0, ge=0)


class SourceArticleRef(BaseModel):
    """Source article reference stored alongside a generated post."""

    title: str
    url: str
    source: str


class WeeklyTrend(BaseModel):
    """Per-category rollup produced by the weekly analysis task."""

    category: str
    article_count: int
    top_topic: str | None = None
    top_titles: list[str] = Field(default_factory=list)
