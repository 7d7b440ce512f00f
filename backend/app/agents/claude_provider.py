"""Anthropic Claude messages provider."""

import anthropic

from app.agents.base import LLMProvider
from app.errors import ProviderResponseError


class ClaudeProvider(LLMProvider):
    """Calls the Anthropic messages API; text blocks are joined into one blob."""

    name = "claude"

    def __init__(self, model: str = "claude-sonnet-4-20250514") -> None:
        self.model = model

    async def complete(
        self,
        system_prompt: str,
        user_prompt: str,
        *,
        api_key: str | None,
        max_tokens: int,
        temperature: float = 0.7,
    ) -> str:
        client = anthropic.AsyncAnthropic(api_key=api_key)
        try:
            response = await client.messages.create(
                model=self.model,
                max_tokens=max_tokens,
                temperature=temperature,
                system=system_prompt,
                messages=[{"role": "user", "content": user_prompt}],
            )
        finally:
            await client.close()

        text = "".join(block.text for block in response.content if getattr(block, "type", "") == "text")
        if not text.strip():
            raise ProviderResponseError(self.name, "no text blocks in response")
        return text
