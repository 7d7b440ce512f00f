"""OpenAI chat completions provider."""

import openai

from app.agents.base import LLMProvider
from app.errors import ProviderResponseError


class OpenAIProvider(LLMProvider):
    """Calls the OpenAI chat completions API with a system + user message."""

    name = "openai"

    def __init__(self, model: str = "gpt-4o") -> None:
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
        client = openai.AsyncOpenAI(api_key=api_key)
        try:
            response = await client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": user_prompt},
                ],
                max_tokens=max_tokens,
                temperature=temperature,
            )
        finally:
            await client.close()

        if not response.choices or not response.choices[0].message.content:
            raise ProviderResponseError(self.name, "empty completion")
        return response.choices[0].message.content
