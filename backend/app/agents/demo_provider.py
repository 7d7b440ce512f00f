"""Placeholder provider used when no real credential is configured."""

from app.agents.base import LLMProvider

PROMPT_PREVIEW_CHARS = 200

DEMO_TEMPLATE = """# Demo AI Content

This is a demonstration of how AI-generated content would appear. With a real provider configured, this text is replaced by a post written from the prompt below.

**Prompt**: {prompt}...

## Key Features

- SEO-optimized content structure
- Engaging headlines and subheadings
- Professional writing tone
- Relevant keywords integration

## Next Steps

1. Add an OpenAI, Claude or Gemini API key to the credentials table
2. Run the pipeline again to generate real posts
3. Review the schedule and SEO scores of published posts

*This demo content was generated to show the expected format and structure.*"""


class DemoProvider(LLMProvider):
    """Returns canned explanatory markdown; never fails and needs no key."""

    name = "demo"
    requires_key = False

    async def complete(
        self,
        system_prompt: str,
        user_prompt: str,
        *,
        api_key: str | None,
        max_tokens: int,
        temperature: float = 0.7,
    ) -> str:
        return DEMO_TEMPLATE.format(prompt=user_prompt.strip()[:PROMPT_PREVIEW_CHARS])
