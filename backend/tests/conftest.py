"""Shared pytest fixtures."""

import pytest

from app.config import Settings
from fakes import FakeArticleRepository, FakeCredentialRepository, FakePostRepository


@pytest.fixture
def settings() -> Settings:
    """Settings for tests: no env file, tiny feed config, fast scheduler polling."""
    return Settings(
        _env_file=None,
        environment="test",
        database_url="sqlite+aiosqlite:///:memory:",
        feeds={
            "technology": ["https://feeds.example.com/tech.xml"],
            "science": ["https://feeds.example.com/science.xml"],
        },
        scheduler_poll_seconds=0.01,
        scheduler_enabled=False,
    )


@pytest.fixture
def credential_repo() -> FakeCredentialRepository:
    return FakeCredentialRepository()


@pytest.fixture
def article_repo() -> FakeArticleRepository:
    return FakeArticleRepository()


@pytest.fixture
def post_repo() -> FakePostRepository:
    return FakePostRepository()
