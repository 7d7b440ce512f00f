"""Provider gateway - one generate() call over interchangeable LLM backends."""

from collections.abc import Mapping

import structlog

from app.agents.base import LLMProvider
from app.errors import (
    KeysUnavailableError,
    ProviderError,
    ProviderRequestError,
    ProvidersExhaustedError,
    ProviderUnavailableError,
)
from app.services.key_cache import KeyCache

logger = structlog.get_logger(__name__)

DEMO_PROVIDER = "demo"

DEFAULT_SYSTEM_PROMPT = (
    "You are an expert tech blogger and content creator. Write engaging, "
    "SEO-optimized blog posts that feel human and conversational."
)


class ProviderGateway:
    """
    Routes prompts to a named provider with a single fallback.

    If a non-default provider fails for any reason, the default provider is
    tried exactly once. A failure of the default provider is never retried,
    so a call costs at most two provider round-trips.
    """

    def __init__(
        self,
        key_cache: KeyCache,
        providers: Mapping[str, LLMProvider],
        *,
        default_provider: str = "openai",
        max_tokens: int = 3000,
        temperature: float = 0.7,
        system_prompt: str = DEFAULT_SYSTEM_PROMPT,
    ) -> None:
        self.key_cache = key_cache
        self.providers = dict(providers)
        self.default_provider = default_provider
        self.max_tokens = max_tokens
        self.temperature = temperature
        self.system_prompt = system_prompt

    async def generate(
        self,
        prompt: str,
        *,
        provider: str | None = None,
        max_tokens: int | None = None,
        system_prompt: str | None = None,
    ) -> str:
        """Generate text with `provider`, falling back to the default provider once."""
        requested = provider or self.default_provider
        tokens = max_tokens or self.max_tokens
        system = system_prompt or self.system_prompt

        try:
            return await self._invoke(requested, system, prompt, tokens)
        except ProviderError as e:
            if requested == self.default_provider:
                raise
            logger.warning(
                "Provider failed, falling back",
                provider=requested,
                fallback=self.default_provider,
                error=str(e),
            )

        try:
            return await self._invoke(self.default_provider, system, prompt, tokens)
        except ProviderError as e:
            logger.error("Fallback provider failed", provider=self.default_provider, error=str(e))
            raise ProvidersExhaustedError([requested, self.default_provider]) from e

    async def list_available(self) -> list[str]:
        """Providers with a non-empty credential, or ["demo"] when there are none."""
        try:
            keys = await self.key_cache.get_keys()
        except KeysUnavailableError as e:
            logger.warning("Key cache unavailable, using demo provider", error=str(e))
            return [DEMO_PROVIDER]

        available = [name for name, secret in keys.items() if secret]
        return available or [DEMO_PROVIDER]

    async def _invoke(self, name: str, system_prompt: str, prompt: str, max_tokens: int) -> str:
        backend = self.providers.get(name)
        if backend is None:
            raise ProviderUnavailableError(name, "unknown provider")

        api_key = None
        if backend.requires_key:
            try:
                api_key = await self.key_cache.get_key(name)
            except KeysUnavailableError as e:
                raise ProviderUnavailableError(name, str(e)) from e
            if not api_key:
                raise ProviderUnavailableError(name, "API key not configured")

        logger.info("Calling provider", provider=name, max_tokens=max_tokens)
        try:
            text = await backend.complete(
                system_prompt,
                prompt,
                api_key=api_key,
                max_tokens=max_tokens,
                temperature=self.temperature,
            )
        except ProviderError:
            raise
        except Exception as e:
            raise ProviderRequestError(name, f"{type(e).__name__}: {e}") from e

        return text
