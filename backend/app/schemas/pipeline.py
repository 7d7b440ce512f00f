"""Pipeline run schemas."""

from datetime import datetime

from pydantic import BaseModel, Field

from app.schemas.article import ArticleSummary


class StageResult(BaseModel):
    """Outcome of one pipeline stage inside a run."""

    stage: str
    ok: bool
    count: int = 0
    error: str | None = None


class RunSummary(BaseModel):
    """Result of an on-demand scrape + generate run."""

    started_at: datetime
    finished_at: datetime
    articles_stored: int = 0
    posts_created: int = 0
    stages: list[StageResult] = Field(default_factory=list)


class ScrapeResponse(BaseModel):
    articles_stored: int


class TrendsResponse(BaseModel):
    window_hours: int
    categories: dict[str, list[ArticleSummary]]


class JobInfo(BaseModel):
    """A registered scheduler job."""

    name: str
    schedule: str
    next_run: datetime | None = None
    running: bool = False


class ScheduleResponse(BaseModel):
    running: bool
    jobs: list[JobInfo]
