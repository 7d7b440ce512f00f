"""Provider interface shared by every LLM backend."""

from abc import ABC, abstractmethod
from typing import ClassVar


class LLMProvider(ABC):
    """
    One LLM backend behind the normalized text-in/text-out contract.

    Implementations translate (system prompt, user prompt) into their SDK's
    request shape and return a single text blob. SDK exceptions propagate;
    the gateway classifies them.
    """

    name: ClassVar[str]
    requires_key: ClassVar[bool] = True

    @abstractmethod
    async def complete(
        self,
        system_prompt: str,
        user_prompt: str,
        *,
        api_key: str | None,
        max_tokens: int,
        temperature: float = 0.7,
    ) -> str:
        """Run one completion and return the response text."""
