"""Parsing and scoring helpers for LLM-written posts."""

import re
from dataclasses import dataclass, field

FIELD_PREFIXES = {
    "TITLE:": "title",
    "META_DESCRIPTION:": "meta_description",
    "TAGS:": "tags",
    "READING_TIME:": "reading_time",
}
CONTENT_PREFIX = "CONTENT:"

_SENTENCE_SPLIT_RE = re.compile(r"[.!?]+")


@dataclass
class ParsedPost:
    """Fields found in a response. Missing fields stay None."""

    title: str | None = None
    meta_description: str | None = None
    tags: list[str] = field(default_factory=list)
    reading_time: str | None = None
    content: str = ""


def parse_generated_content(text: str) -> ParsedPost:
    """
    Read the labeled fields out of a response.

    Everything after the CONTENT: marker (including the rest of its own
    line) is the body. Without the marker the whole response is the body.
    """
    parsed = ParsedPost()
    lines = text.splitlines()
    content_lines: list[str] | None = None

    for index, raw_line in enumerate(lines):
        line = raw_line.strip()
        if line.startswith(CONTENT_PREFIX):
            first = line[len(CONTENT_PREFIX):].strip()
            content_lines = ([first] if first else []) + lines[index + 1:]
            break

        for prefix, attr in FIELD_PREFIXES.items():
            if line.startswith(prefix):
                value = line[len(prefix):].strip()
                if attr == "tags":
                    parsed.tags = [tag.strip() for tag in value.split(",") if tag.strip()]
                else:
                    setattr(parsed, attr, value or None)
                break

    body = "\n".join(content_lines) if content_lines is not None else text
    parsed.content = body.strip()
    return parsed


def slugify(text: str) -> str:
    """URL slug: lowercase words joined by single hyphens."""
    slug = text.lower()
    # ASCII word characters only: accented letters are dropped, not kept.
    slug = re.sub(r"[^\w\s-]", "", slug, flags=re.ASCII)
    slug = re.sub(r"\s+", "-", slug)
    slug = re.sub(r"-+", "-", slug)
    return slug.strip("-")


def calculate_seo_score(title: str, content: str, meta_description: str) -> int:
    """Additive on-page SEO rubric, clamped to 0-100."""
    score = 0

    # Title length
    if 30 <= len(title) <= 60:
        score += 20

    # Meta description length
    if 120 <= len(meta_description) <= 160:
        score += 15

    # Content length
    if len(content) >= 1000:
        score += 20

    # Heading structure
    if "##" in content or "<h2" in content.lower():
        score += 15

    # Word count
    word_count = len(content.split())
    if word_count >= 300:
        score += 15

    # Readability: average words per sentence
    sentences = [s for s in _SENTENCE_SPLIT_RE.split(content) if s.strip()]
    if sentences:
        avg_sentence_length = word_count / len(sentences)
        if 15 <= avg_sentence_length <= 25:
            score += 15

    return max(0, min(score, 100))
