"""Agents package - LLM provider backends (OpenAI, Claude, Gemini, demo)."""

from app.agents.base import LLMProvider
from app.agents.claude_provider import ClaudeProvider
from app.agents.demo_provider import DemoProvider
from app.agents.gemini_provider import GeminiProvider
from app.agents.openai_provider import OpenAIProvider
from app.config import Settings


def build_providers(settings: Settings) -> dict[str, LLMProvider]:
    """Provider registry keyed by provider name."""
    providers: list[LLMProvider] = [
        OpenAIProvider(model=settings.openai_model),
        ClaudeProvider(model=settings.claude_model),
        GeminiProvider(model=settings.gemini_model),
        DemoProvider(),
    ]
    return {provider.name: provider for provider in providers}


__all__ = [
    "LLMProvider",
    "OpenAIProvider",
    "ClaudeProvider",
    "GeminiProvider",
    "DemoProvider",
    "build_providers",
]
