"""Repositories - the narrow query contract each pipeline table is accessed through."""

from collections.abc import Sequence
from datetime import datetime
from uuid import UUID

from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.exc import CompileError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from sqlmodel import col, select

from app.models import Credential, GeneratedPost, PostStatus, ScrapedArticle

_UPSERT_BUILDERS = {
    "postgresql": pg_insert,
    "sqlite": sqlite_insert,
}


class CredentialRepository:
    """Provider credentials (`credentials` table)."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self.session_factory = session_factory

    async def list_active(self) -> list[Credential]:
        """Active credentials, oldest first."""
        async with self.session_factory() as session:
            result = await session.execute(
                select(Credential)
                .where(Credential.active == True)  # noqa: E712
                .order_by(col(Credential.created_at).asc())
            )
            return list(result.scalars().all())

    async def list_all(self) -> list[Credential]:
        async with self.session_factory() as session:
            result = await session.execute(
                select(Credential).order_by(col(Credential.created_at).asc())
            )
            return list(result.scalars().all())

    async def create(self, provider: str, secret: str, active: bool = True) -> Credential:
        credential = Credential(provider=provider, secret=secret, active=active)
        async with self.session_factory() as session:
            session.add(credential)
            await session.commit()
            await session.refresh(credential)
        return credential

    async def set_active(self, credential_id: UUID, active: bool) -> Credential | None:
        """Soft activate/deactivate. Returns None when the row does not exist."""
        async with self.session_factory() as session:
            credential = await session.get(Credential, credential_id)
            if credential is None:
                return None
            credential.active = active
            session.add(credential)
            await session.commit()
            await session.refresh(credential)
            return credential

    async def delete(self, credential_id: UUID) -> bool:
        async with self.session_factory() as session:
            credential = await session.get(Credential, credential_id)
            if credential is None:
                return False
            await session.delete(credential)
            await session.commit()
            return True


class ArticleRepository:
    """Scraped feed articles (`scraped_articles` table, conflict key guid)."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self.session_factory = session_factory

    async def upsert_many(self, articles: Sequence[ScrapedArticle]) -> int:
        """
        Insert articles, ignoring guids that are already stored.

        Returns the number of rows actually inserted.
        """
        if not articles:
            return 0

        rows = [article.model_dump() for article in articles]

        async with self.session_factory() as session:
            dialect = session.get_bind().dialect.name
            build_insert = _UPSERT_BUILDERS.get(dialect)
            if build_insert is None:
                raise CompileError(f"Upsert is not supported for dialect {dialect!r}")

            stmt = (
                build_insert(ScrapedArticle)
                .values(rows)
                .on_conflict_do_nothing(index_elements=["guid"])
                .returning(col(ScrapedArticle.guid))
            )
            result = await session.execute(stmt)
            inserted = result.scalars().all()
            await session.commit()

        return len(inserted)

    async def list_recent(self, since: datetime, limit: int = 50) -> list[ScrapedArticle]:
        """Articles published since `since`, most trending first."""
        async with self.session_factory() as session:
            result = await session.execute(
                select(ScrapedArticle)
                .where(ScrapedArticle.published >= since)
                .order_by(col(ScrapedArticle.trending_score).desc())
                .limit(limit)
            )
            return list(result.scalars().all())


class PostRepository:
    """Generated blog posts (`generated_posts` table)."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self.session_factory = session_factory

    async def insert(self, post: GeneratedPost) -> GeneratedPost:
        async with self.session_factory() as session:
            session.add(post)
            await session.commit()
            await session.refresh(post)
        return post

    async def list_published(
        self,
        limit: int = 20,
        offset: int = 0,
        category: str | None = None,
    ) -> list[GeneratedPost]:
        query = select(GeneratedPost).where(GeneratedPost.status == PostStatus.PUBLISHED)
        if category:
            query = query.where(GeneratedPost.category == category)
        query = query.order_by(col(GeneratedPost.published).desc()).offset(offset).limit(limit)

        async with self.session_factory() as session:
            result = await session.execute(query)
            return list(result.scalars().all())

    async def get_by_slug(self, slug: str) -> GeneratedPost | None:
        """Newest published post with this slug (slugs are not unique)."""
        async with self.session_factory() as session:
            result = await session.execute(
                select(GeneratedPost)
                .where(GeneratedPost.slug == slug, GeneratedPost.status == PostStatus.PUBLISHED)
                .order_by(col(GeneratedPost.published).desc())
                .limit(1)
            )
            return result.scalars().first()
