"""Trend analyzer - groups recent high-scoring articles by category."""

from collections import Counter
from collections.abc import Iterable
from datetime import UTC, datetime, timedelta

import structlog
from sqlalchemy.exc import SQLAlchemyError

from app.db.repositories import ArticleRepository
from app.schemas.article import ArticleSummary, WeeklyTrend

logger = structlog.get_logger(__name__)

MIN_TOPIC_WORD_LENGTH = 5


def pick_trending_topic(titles: Iterable[str]) -> str | None:
    """
    Most frequent title word longer than four characters.

    Ties go to the word seen first. Returns None when no word qualifies.
    """
    counts: Counter[str] = Counter()
    for title in titles:
        for word in title.lower().split():
            if len(word) >= MIN_TOPIC_WORD_LENGTH:
                counts[word] += 1

    if not counts:
        return None
    # Counter.most_common keeps insertion order among equal counts.
    return counts.most_common(1)[0][0]


class TrendAnalyzer:
    """Reads recent scraped articles and surfaces per-category candidates."""

    def __init__(self, articles: ArticleRepository, limit: int = 50) -> None:
        self.articles = articles
        self.limit = limit

    async def latest_trends(self, window_hours: int = 24) -> dict[str, list[ArticleSummary]]:
        """
        Top articles of the last `window_hours`, grouped by category.

        Each group keeps the global trending_score ordering. Returns an empty
        mapping when storage cannot be queried.
        """
        since = datetime.now(UTC) - timedelta(hours=window_hours)
        try:
            rows = await self.articles.list_recent(since, limit=self.limit)
        except (SQLAlchemyError, OSError) as e:
            logger.error("Error getting trends", window_hours=window_hours, error=str(e))
            return {}

        trends: dict[str, list[ArticleSummary]] = {}
        for row in rows:
            summary = ArticleSummary.model_validate(row)
            trends.setdefault(summary.category, []).append(summary)

        logger.info(
            "Trending topics analyzed",
            window_hours=window_hours,
            articles=len(rows),
            categories=len(trends),
        )
        return trends

    async def weekly_report(self, window_hours: int = 24 * 7) -> dict[str, WeeklyTrend]:
        """Per-category article count, dominant topic and top titles."""
        trends = await self.latest_trends(window_hours=window_hours)
        report = {}
        for category, articles in trends.items():
            titles = [article.title for article in articles]
            report[category] = WeeklyTrend(
                category=category,
                article_count=len(articles),
                top_topic=pick_trending_topic(titles),
                top_titles=titles[:3],
            )
        return report
