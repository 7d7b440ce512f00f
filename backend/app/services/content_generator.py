"""Content generator - turns trending article clusters into published posts."""

from collections.abc import Sequence
from datetime import UTC, datetime

import structlog

from app.config import Settings
from app.db.repositories import PostRepository
from app.models import GeneratedPost, PostStatus
from app.schemas.article import ArticleSummary, SourceArticleRef
from app.services.post_parser import calculate_seo_score, parse_generated_content, slugify
from app.services.provider_gateway import DEMO_PROVIDER, ProviderGateway
from app.services.trend_analyzer import TrendAnalyzer, pick_trending_topic

logger = structlog.get_logger(__name__)

DEFAULT_READING_TIME = "5 min read"


class ContentGenerator:
    """
    Writes one post per category with enough trending signal.

    A category needs `min_category_articles` trending articles, and at least
    `min_topic_articles` of them must mention the category's trending topic.
    """

    PROMPT_TEMPLATE = """Based on these recent {category} articles about "{topic}", write a comprehensive, engaging blog post that:

1. Has a compelling, SEO-friendly title
2. Includes a meta description (150-160 characters)
3. Uses a conversational, human tone
4. Provides unique insights and analysis
5. Is 1200-1500 words long
6. Includes relevant keywords naturally
7. Has clear sections with H2/H3 headings
8. Ends with a thought-provoking conclusion

Source Articles:
{articles}

Format your response as:
TITLE: [Your SEO-optimized title]
META_DESCRIPTION: [Your meta description]
TAGS: [5-7 relevant tags separated by commas]
READING_TIME: [estimated reading time]
CONTENT: [Your full blog post content with proper headings and structure]

Focus on what this means for readers, why it matters, and what trends to watch. Make it engaging and informative while maintaining credibility."""

    ARTICLE_TEMPLATE = "Title: {title}\nSource: {source}\nSummary: {summary}\n---"

    def __init__(
        self,
        gateway: ProviderGateway,
        trends: TrendAnalyzer,
        posts: PostRepository,
        settings: Settings,
    ) -> None:
        self.gateway = gateway
        self.trends = trends
        self.posts = posts
        self.settings = settings

    async def generate_daily_content(self) -> list[GeneratedPost]:
        """Generate and store posts for every eligible category."""
        logger.info("Starting daily content generation")
        trends_by_category = await self.trends.latest_trends(self.settings.trends_window_hours)
        generated: list[GeneratedPost] = []

        for category, articles in trends_by_category.items():
            if len(articles) < self.settings.min_category_articles:
                logger.debug("Not enough trending articles", category=category, articles=len(articles))
                continue

            topic = pick_trending_topic(article.title for article in articles)
            if topic is None:
                logger.info("No trending topic found", category=category)
                continue

            relevant = [a for a in articles if topic in a.title.lower()][: self.settings.max_source_articles]
            if len(relevant) < self.settings.min_topic_articles:
                logger.info(
                    "Insufficient articles for topic",
                    category=category,
                    topic=topic,
                    articles=len(relevant),
                )
                continue

            try:
                post = await self.generate_blog_post(relevant, category, topic)
            except Exception as e:
                logger.error("Error generating content", category=category, topic=topic, error=str(e))
                continue
            generated.append(post)

        logger.info("Daily content generation finished", posts=len(generated))
        return generated

    async def generate_blog_post(
        self,
        articles: Sequence[ArticleSummary],
        category: str,
        topic: str,
        provider: str | None = None,
    ) -> GeneratedPost:
        """Prompt a provider for one post, parse it and persist it."""
        logger.info("Generating blog post", category=category, topic=topic)
        prompt = self.build_prompt(articles, category, topic)
        provider = provider or await self.choose_provider()

        text = await self.gateway.generate(prompt, provider=provider, max_tokens=self.settings.max_tokens)

        post = self.build_post(text, articles, category, topic)
        saved = await self.posts.insert(post)
        logger.info("Blog post saved", title=saved.title, provider=provider, seo_score=saved.seo_score)
        return saved

    async def choose_provider(self) -> str:
        """First configured real provider, else whatever is available (demo)."""
        available = await self.gateway.list_available()
        for name in available:
            if name != DEMO_PROVIDER:
                return name
        return available[0] if available else DEMO_PROVIDER

    def build_prompt(self, articles: Sequence[ArticleSummary], category: str, topic: str) -> str:
        articles_text = "\n".join(
            self.ARTICLE_TEMPLATE.format(title=a.title, source=a.source, summary=a.description)
            for a in articles
        )
        return self.PROMPT_TEMPLATE.format(category=category, topic=topic, articles=articles_text)

    def build_post(
        self,
        text: str,
        articles: Sequence[ArticleSummary],
        category: str,
        topic: str,
    ) -> GeneratedPost:
        """Assemble a post record from a raw response, filling missing fields."""
        parsed = parse_generated_content(text)

        title = parsed.title or f"The Latest in {category}: {topic}"
        meta_description = parsed.meta_description or (
            f"Discover the latest trends and insights in {category}. "
            "Expert analysis and what it means for the future."
        )

        # Scored on what the model actually returned, not on the defaults.
        seo_score = calculate_seo_score(
            parsed.title or "",
            parsed.content,
            parsed.meta_description or "",
        )

        return GeneratedPost(
            title=title,
            slug=slugify(title),
            meta_description=meta_description,
            content=parsed.content,
            category=category,
            tags=parsed.tags,
            reading_time=parsed.reading_time or DEFAULT_READING_TIME,
            trending_topic=topic,
            source_articles=[
                SourceArticleRef(title=a.title, url=a.link, source=a.source).model_dump()
                for a in articles
            ],
            seo_score=seo_score,
            status=PostStatus.PUBLISHED,
            published=datetime.now(UTC),
        )
