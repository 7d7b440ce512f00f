"""Google Gemini provider.

Uses the async surface of the google-genai client.
"""

from google import genai
from google.genai import types

from app.agents.base import LLMProvider
from app.errors import ProviderResponseError


class GeminiProvider(LLMProvider):
    """Calls Gemini generate_content with the system prompt as system instruction."""

    name = "gemini"

    def __init__(self, model: str = "gemini-2.0-flash") -> None:
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
        client = genai.Client(api_key=api_key)
        response = await client.aio.models.generate_content(
            model=self.model,
            contents=user_prompt,
            config=types.GenerateContentConfig(
                system_instruction=system_prompt,
                temperature=temperature,
                max_output_tokens=max_tokens,
            ),
        )

        text = response.text or ""
        if not text.strip():
            raise ProviderResponseError(self.name, "empty response")
        return text
