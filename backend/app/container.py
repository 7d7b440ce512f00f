"""Composition root - builds the long-lived pipeline services once per process."""

from collections.abc import Mapping
from dataclasses import dataclass

import httpx

from app.agents import LLMProvider, build_providers
from app.config import Settings
from app.db.postgres import Database
from app.db.repositories import ArticleRepository, CredentialRepository, PostRepository
from app.services.content_generator import ContentGenerator
from app.services.feed_scraper import FeedScraper
from app.services.key_cache import KeyCache
from app.services.provider_gateway import ProviderGateway
from app.services.scheduler import ContentScheduler
from app.services.trend_analyzer import TrendAnalyzer


@dataclass
class Services:
    """Handles to every pipeline component, passed explicitly to callers."""

    settings: Settings
    credentials: CredentialRepository
    articles: ArticleRepository
    posts: PostRepository
    key_cache: KeyCache
    gateway: ProviderGateway
    scraper: FeedScraper
    trends: TrendAnalyzer
    generator: ContentGenerator
    scheduler: ContentScheduler
    database: Database | None = None

    async def close(self) -> None:
        await self.scheduler.stop()
        await self.scraper.close()
        if self.database is not None:
            await self.database.dispose()


def build_services(
    settings: Settings,
    *,
    database: Database | None = None,
    credentials: CredentialRepository | None = None,
    articles: ArticleRepository | None = None,
    posts: PostRepository | None = None,
    providers: Mapping[str, LLMProvider] | None = None,
    http_client: httpx.AsyncClient | None = None,
) -> Services:
    """
    Wire the pipeline together.

    Repositories default to ones backed by `database` (created from settings
    when omitted); tests pass in fakes instead.
    """
    if credentials is None or articles is None or posts is None:
        database = database or Database.from_settings(settings)
        credentials = credentials or CredentialRepository(database.session_factory)
        articles = articles or ArticleRepository(database.session_factory)
        posts = posts or PostRepository(database.session_factory)

    key_cache = KeyCache(credentials, ttl_seconds=settings.key_cache_ttl_seconds)
    gateway = ProviderGateway(
        key_cache,
        providers if providers is not None else build_providers(settings),
        default_provider=settings.default_provider,
        max_tokens=settings.max_tokens,
        temperature=settings.temperature,
    )
    scraper = FeedScraper(articles, settings, http_client=http_client)
    trends = TrendAnalyzer(articles, limit=settings.trends_limit)
    generator = ContentGenerator(gateway, trends, posts, settings)
    scheduler = ContentScheduler(scraper, generator, trends, settings)

    return Services(
        settings=settings,
        credentials=credentials,
        articles=articles,
        posts=posts,
        key_cache=key_cache,
        gateway=gateway,
        scraper=scraper,
        trends=trends,
        generator=generator,
        scheduler=scheduler,
        database=database,
    )
