"""Tests for the TTL-bounded provider credential cache."""

import pytest

from app.errors import KeysUnavailableError
from app.models import Credential
from app.services.key_cache import KeyCache
from fakes import FakeCredentialRepository


class FakeClock:
    def __init__(self) -> None:
        self.now = 1000.0

    def __call__(self) -> float:
        return self.now


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def repo() -> FakeCredentialRepository:
    return FakeCredentialRepository(
        [
            Credential(provider="openai", secret="sk-old"),
            Credential(provider="claude", secret="sk-ant"),
            Credential(provider="openai", secret="sk-new"),
            Credential(provider="gemini", secret="g-key", active=False),
        ]
    )


class TestKeyCache:
    @pytest.mark.asyncio
    async def test_reads_storage_once_within_ttl(self, repo, clock) -> None:
        cache = KeyCache(repo, ttl_seconds=300, clock=clock)

        first = await cache.get_keys()
        clock.now += 299
        second = await cache.get_keys()

        assert first == second
        assert repo.list_calls == 1

    @pytest.mark.asyncio
    async def test_refetches_after_expiry(self, repo, clock) -> None:
        cache = KeyCache(repo, ttl_seconds=300, clock=clock)
        await cache.get_keys()

        repo.rows.append(Credential(provider="gemini", secret="g-fresh"))
        clock.now += 300
        keys = await cache.get_keys()

        assert repo.list_calls == 2
        assert keys["gemini"] == "g-fresh"

    @pytest.mark.asyncio
    async def test_newest_active_credential_wins(self, repo, clock) -> None:
        keys = await KeyCache(repo, clock=clock).get_keys()

        assert keys == {"openai": "sk-new", "claude": "sk-ant"}

    @pytest.mark.asyncio
    async def test_invalidate_forces_refetch(self, repo, clock) -> None:
        cache = KeyCache(repo, ttl_seconds=300, clock=clock)
        await cache.get_keys()

        cache.invalidate()
        assert not cache.is_fresh
        await cache.get_keys()

        assert repo.list_calls == 2

    @pytest.mark.asyncio
    async def test_storage_failure_raises_without_serving_stale_keys(self, repo, clock) -> None:
        cache = KeyCache(repo, ttl_seconds=300, clock=clock)
        await cache.get_keys()

        clock.now += 301
        repo.fail = True
        with pytest.raises(KeysUnavailableError):
            await cache.get_keys()
        assert not cache.is_fresh

        repo.fail = False
        keys = await cache.get_keys()
        assert keys["openai"] == "sk-new"

    @pytest.mark.asyncio
    async def test_get_key_missing_provider(self, repo, clock) -> None:
        cache = KeyCache(repo, clock=clock)

        assert await cache.get_key("claude") == "sk-ant"
        assert await cache.get_key("gemini") is None

    @pytest.mark.asyncio
    async def test_returned_mapping_is_a_copy(self, repo, clock) -> None:
        cache = KeyCache(repo, clock=clock)

        keys = await cache.get_keys()
        keys["openai"] = "tampered"

        assert (await cache.get_keys())["openai"] == "sk-new"
