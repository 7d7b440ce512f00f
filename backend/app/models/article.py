"""Scraped article model - raw feed entries used for trend detection."""

from datetime import UTC, datetime

from sqlalchemy import DateTime, Text
from sqlmodel import Field, SQLModel


class ScrapedArticle(SQLModel, table=True):
    """
    Article pulled from a category feed.

    `guid` is the dedup key (feed guid, else link). Rows are written once;
    a later scrape of the same guid is ignored.
    """

    __tablename__ = "scraped_articles"

    guid: str = Field(primary_key=True, max_length=2048)

    # Article content
    title: str = Field(max_length=500)
    link: str = Field(default="", max_length=2048)
    description: str = Field(default="", sa_type=Text)
    full_content: str | None = Field(default=None, sa_type=Text)

    # Metadata
    category: str = Field(max_length=50, index=True)
    source: str = Field(default="", max_length=200)
    author: str | None = Field(default=None, max_length=200)
    image_url: str | None = Field(default=None, max_length=2048)
    published: datetime = Field(
        default_factory=lambda: datetime.now(UTC),
        sa_type=DateTime(timezone=True),
        index=True,
    )

    # Ranking
    trending_score: int = Field(default=0, ge=0, index=True)

    # Scraping info
    scraped_at: datetime = Field(
        default_factory=lambda: datetime.now(UTC),
        sa_type=DateTime(timezone=True),
    )
