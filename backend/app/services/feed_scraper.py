"""Feed scraper - pulls category feeds, scores entries and stores them."""

import random
from calendar import timegm
from collections.abc import Mapping, Sequence
from datetime import UTC, datetime
from typing import Any

import feedparser
import httpx
import structlog
from bs4 import BeautifulSoup
from sqlalchemy.exc import SQLAlchemyError
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from app.config import Settings
from app.db.repositories import ArticleRepository
from app.models import ScrapedArticle

logger = structlog.get_logger(__name__)

# Tried in order; the first region with enough text wins.
CONTENT_SELECTORS = [
    "article",
    ".post-content",
    ".entry-content",
    ".article-body",
    ".content",
    "main",
    ".story-body",
]

NOISE_SELECTORS = "script, style, nav, header, footer, .advertisement, .ads"


def calculate_trending_score(
    title: str,
    description: str,
    keywords: Sequence[str],
    rng: random.Random | None = None,
) -> int:
    """10 points per trending keyword found, plus a 0-5 tie-breaking jitter."""
    text = f"{title} {description}".lower()
    matches = sum(1 for keyword in keywords if keyword.lower() in text)
    jitter = (rng or random).randint(0, 5)
    return matches * 10 + jitter


def dedupe_by_guid(articles: Sequence[ScrapedArticle]) -> list[ScrapedArticle]:
    """Drop repeated guids, keeping the first occurrence."""
    seen: set[str] = set()
    unique: list[ScrapedArticle] = []
    for article in articles:
        if article.guid in seen:
            continue
        seen.add(article.guid)
        unique.append(article)
    return unique


def extract_main_text(html: str, min_chars: int = 200, max_chars: int = 5000) -> str | None:
    """Best-effort article body from a page, or None when nothing qualifies."""
    soup = BeautifulSoup(html, "lxml")

    for element in soup.select(NOISE_SELECTORS):
        element.decompose()

    for selector in CONTENT_SELECTORS:
        matches = soup.select(selector)
        if not matches:
            continue
        text = " ".join(el.get_text(" ", strip=True) for el in matches).strip()
        if len(text) > min_chars:
            return text[:max_chars]

    return None


def _strip_html(value: str) -> str:
    if not value:
        return ""
    if "<" not in value:
        return value.strip()
    return BeautifulSoup(value, "lxml").get_text(" ", strip=True)


def _entry_published(entry: Mapping[str, Any]) -> datetime:
    parsed = entry.get("published_parsed") or entry.get("updated_parsed")
    if parsed:
        return datetime.fromtimestamp(timegm(parsed), tz=UTC)
    return datetime.now(UTC)


def _entry_image(entry: Mapping[str, Any]) -> str | None:
    for key in ("media_content", "media_thumbnail"):
        for media in entry.get(key) or []:
            if media.get("url"):
                return media["url"]
    for enclosure in entry.get("enclosures") or []:
        if enclosure.get("type", "").startswith("image/") and enclosure.get("href"):
            return enclosure["href"]
    return None


class FeedScraper:
    """
    Scrapes every configured (category, feed) pair into `scraped_articles`.

    Feeds, entries and article pages are processed one at a time in
    configuration order. A broken feed or page is logged and skipped.
    """

    def __init__(
        self,
        articles: ArticleRepository,
        settings: Settings,
        http_client: httpx.AsyncClient | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self.articles = articles
        self.settings = settings
        self.feeds: dict[str, list[str]] = settings.feeds
        self.keywords: list[str] = settings.trending_keywords
        self.rng = rng or random.Random()
        self.http = http_client or httpx.AsyncClient(
            timeout=settings.feed_timeout_seconds,
            follow_redirects=True,
            headers={"User-Agent": settings.user_agent},
        )

    async def scrape_all(self) -> int:
        """Scrape all feeds and return the number of newly stored articles."""
        logger.info("Starting RSS feed scraping", categories=len(self.feeds))
        collected: list[ScrapedArticle] = []

        for category, feed_urls in self.feeds.items():
            logger.info("Scraping category feeds", category=category, feeds=len(feed_urls))
            for feed_url in feed_urls:
                try:
                    collected.extend(await self.scrape_feed(category, feed_url))
                except Exception as e:
                    logger.error("Error parsing feed", category=category, feed_url=feed_url, error=str(e))

        unique = dedupe_by_guid(collected)
        try:
            stored = await self.articles.upsert_many(unique)
        except (SQLAlchemyError, OSError) as e:
            logger.error("Failed to save articles", count=len(unique), error=str(e))
            return 0

        logger.info("Scraping completed", scraped=len(collected), unique=len(unique), stored=stored)
        return stored

    async def scrape_feed(self, category: str, feed_url: str) -> list[ScrapedArticle]:
        """Build article records for the newest entries of one feed."""
        body = await self._fetch_feed(feed_url)
        feed = feedparser.parse(body)

        if feed.bozo and not feed.entries:
            logger.warning("Feed error", feed_url=feed_url, error=str(feed.get("bozo_exception")))
            return []

        source = feed.feed.get("title", "")
        articles = []
        for entry in feed.entries[: self.settings.articles_per_feed]:
            article = self._entry_to_article(entry, category=category, source=source)
            if article is None:
                continue
            if article.link:
                article.full_content = await self.fetch_full_article(article.link)
            articles.append(article)

        return articles

    async def fetch_full_article(self, url: str) -> str | None:
        """Full text of the linked page, or None on any failure."""
        try:
            response = await self.http.get(url, timeout=self.settings.article_timeout_seconds)
            response.raise_for_status()
        except Exception as e:
            # Includes links httpx rejects before sending (bad host, malformed IPv6).
            logger.warning("Failed to scrape full content", url=url, error=f"{type(e).__name__}: {e}")
            return None

        try:
            return extract_main_text(
                response.text,
                min_chars=self.settings.full_text_min_chars,
                max_chars=self.settings.full_text_max_chars,
            )
        except Exception as e:
            logger.warning("Failed to extract full content", url=url, error=str(e))
            return None

    @retry(
        retry=retry_if_exception_type(httpx.TransportError),
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=1, max=8),
        reraise=True,
    )
    async def _fetch_feed(self, url: str) -> bytes:
        response = await self.http.get(url)
        response.raise_for_status()
        return response.content

    def _entry_to_article(
        self,
        entry: feedparser.FeedParserDict,
        *,
        category: str,
        source: str,
    ) -> ScrapedArticle | None:
        link = entry.get("link", "")
        title = (entry.get("title") or "").strip()
        guid = entry.get("id") or link
        if not guid or not title:
            return None

        description = _strip_html(entry.get("summary", ""))

        return ScrapedArticle(
            guid=guid,
            title=title,
            link=link,
            description=description,
            category=category,
            source=source,
            author=entry.get("author"),
            image_url=_entry_image(entry),
            published=_entry_published(entry),
            trending_score=calculate_trending_score(title, description, self.keywords, self.rng),
        )

    async def close(self) -> None:
        """Close the HTTP client."""
        await self.http.aclose()
