"""Repository tests against a throwaway SQLite database."""

from datetime import UTC, datetime, timedelta

import pytest
import pytest_asyncio
from sqlalchemy.exc import SQLAlchemyError

from app.db import ArticleRepository, CredentialRepository, Database, PostRepository
from app.db import repositories
from app.models import PostStatus
from fakes import make_article, make_post


@pytest_asyncio.fixture
async def database(tmp_path):
    db = Database(f"sqlite+aiosqlite:///{tmp_path / 'pipeline.db'}")
    await db.init_db()
    yield db
    await db.dispose()


class TestArticleRepository:
    @pytest.mark.asyncio
    async def test_upsert_ignores_existing_guids(self, database) -> None:
        repo = ArticleRepository(database.session_factory)

        first = await repo.upsert_many([make_article("a", "Original title"), make_article("b", "Other")])
        second = await repo.upsert_many([make_article("a", "Changed title"), make_article("c", "New")])

        assert first == 2
        assert second == 1

        rows = await repo.list_recent(datetime.now(UTC) - timedelta(hours=24))
        titles = {row.guid: row.title for row in rows}
        assert titles == {"a": "Original title", "b": "Other", "c": "New"}

    @pytest.mark.asyncio
    async def test_upsert_empty(self, database) -> None:
        assert await ArticleRepository(database.session_factory).upsert_many([]) == 0

    @pytest.mark.asyncio
    async def test_unsupported_dialect_raises_storage_error(self, database, monkeypatch) -> None:
        monkeypatch.delitem(repositories._UPSERT_BUILDERS, "sqlite")
        repo = ArticleRepository(database.session_factory)

        with pytest.raises(SQLAlchemyError, match="not supported"):
            await repo.upsert_many([make_article("a", "Title")])

    @pytest.mark.asyncio
    async def test_list_recent_orders_and_filters(self, database) -> None:
        repo = ArticleRepository(database.session_factory)
        await repo.upsert_many(
            [
                make_article("low", "Low", score=5),
                make_article("high", "High", score=40),
                make_article("old", "Old", score=90, hours_ago=48),
                make_article("mid", "Mid", score=20),
            ]
        )

        rows = await repo.list_recent(datetime.now(UTC) - timedelta(hours=24), limit=2)

        assert [row.guid for row in rows] == ["high", "mid"]


class TestCredentialRepository:
    @pytest.mark.asyncio
    async def test_lifecycle(self, database) -> None:
        repo = CredentialRepository(database.session_factory)

        openai = await repo.create("openai", "sk-1")
        claude = await repo.create("claude", "sk-ant")

        assert [c.provider for c in await repo.list_active()] == ["openai", "claude"]

        updated = await repo.set_active(claude.id, False)
        assert updated is not None and updated.active is False
        assert [c.provider for c in await repo.list_active()] == ["openai"]
        assert len(await repo.list_all()) == 2

        assert await repo.delete(openai.id) is True
        assert await repo.delete(openai.id) is False
        assert await repo.set_active(openai.id, True) is None


class TestPostRepository:
    @pytest.mark.asyncio
    async def test_published_listing(self, database) -> None:
        repo = PostRepository(database.session_factory)
        await repo.insert(make_post("older", hours_ago=5))
        await repo.insert(make_post("newer", hours_ago=1))
        await repo.insert(make_post("draft", status=PostStatus.DRAFT))
        await repo.insert(make_post("sci", category="science"))

        assert [p.slug for p in await repo.list_published(category="ai")] == ["newer", "older"]
        assert [p.slug for p in await repo.list_published(limit=1, offset=1)] == ["newer"]

    @pytest.mark.asyncio
    async def test_get_by_slug_returns_newest_published(self, database) -> None:
        repo = PostRepository(database.session_factory)
        await repo.insert(make_post("same-slug", hours_ago=3))
        newest = await repo.insert(make_post("same-slug", hours_ago=1))
        await repo.insert(make_post("hidden", status=PostStatus.DRAFT))

        found = await repo.get_by_slug("same-slug")

        assert found is not None and found.id == newest.id
        assert found.tags == ["one", "two"]
        assert await repo.get_by_slug("hidden") is None
        assert await repo.get_by_slug("missing") is None
