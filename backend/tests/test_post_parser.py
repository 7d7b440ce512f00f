"""Tests for response parsing, slugs and SEO scoring."""

import pytest

from app.services.post_parser import calculate_seo_score, parse_generated_content, slugify

GOOD_TITLE = "How Robotics Is Changing Modern Factory Work"  # 44 chars
GOOD_META = (
    "Factories are adopting robots faster than ever. Here is what automation "
    "means for workers, managers and the future of industrial manufacturing jobs."
)


def long_content(sentences: int = 18, words_per_sentence: int = 17) -> str:
    sentence = " ".join(["lorem"] * words_per_sentence) + "."
    return "## Overview\n" + " ".join([sentence] * sentences)


class TestSlugify:
    def test_strips_punctuation(self) -> None:
        assert slugify("AI & the Future of Work!") == "ai-the-future-of-work"

    def test_drops_non_ascii_letters(self) -> None:
        assert slugify("Café Culture in Zürich") == "caf-culture-in-zrich"

    def test_collapses_whitespace_and_hyphens(self) -> None:
        assert slugify("  Hello   --  World  ") == "hello-world"

    @pytest.mark.parametrize(
        "text",
        ["AI & the Future of Work!", "Rust 2.0: what's new?", "--Already-a-slug--", "Ünïcode Títle"],
    )
    def test_idempotent(self, text: str) -> None:
        once = slugify(text)
        assert slugify(once) == once


class TestSeoScore:
    def test_empty_post_scores_zero(self) -> None:
        assert calculate_seo_score("", "", "") == 0

    def test_well_formed_post_scores_full_marks(self) -> None:
        content = long_content()

        assert 120 <= len(GOOD_META) <= 160
        assert len(content) >= 1000
        assert calculate_seo_score(GOOD_TITLE, content, GOOD_META) == 100

    def test_title_only(self) -> None:
        assert calculate_seo_score(GOOD_TITLE, "", "") == 20

    def test_html_heading_counts(self) -> None:
        assert calculate_seo_score("", "<H2>Intro</H2>", "") == 15

    def test_long_sentences_lose_readability_points(self) -> None:
        content = long_content(sentences=10, words_per_sentence=40)

        assert calculate_seo_score(GOOD_TITLE, content, GOOD_META) == 85

    def test_score_is_bounded(self) -> None:
        for title, content, meta in [
            ("x" * 45, long_content(), "y" * 130),
            ("short", "Tiny. Post!", "meta"),
        ]:
            assert 0 <= calculate_seo_score(title, content, meta) <= 100


class TestParseGeneratedContent:
    def test_reads_all_fields(self) -> None:
        text = (
            "TITLE: Robots on the Line\n"
            "META_DESCRIPTION: What automation means for factory jobs.\n"
            "TAGS: robotics, automation , , manufacturing\n"
            "READING_TIME: 7 min read\n"
            "CONTENT: ## Intro\n"
            "Robots are here.\n"
            "\n"
            "## Outlook\n"
            "More are coming.\n"
        )

        parsed = parse_generated_content(text)

        assert parsed.title == "Robots on the Line"
        assert parsed.meta_description == "What automation means for factory jobs."
        assert parsed.tags == ["robotics", "automation", "manufacturing"]
        assert parsed.reading_time == "7 min read"
        assert parsed.content == "## Intro\nRobots are here.\n\n## Outlook\nMore are coming."

    def test_missing_fields_stay_empty(self) -> None:
        parsed = parse_generated_content("CONTENT:\nJust a body.")

        assert parsed.title is None
        assert parsed.meta_description is None
        assert parsed.reading_time is None
        assert parsed.tags == []
        assert parsed.content == "Just a body."

    def test_without_content_marker_whole_text_is_body(self) -> None:
        text = "TITLE: A Title\nSome free-form answer."

        parsed = parse_generated_content(text)

        assert parsed.title == "A Title"
        assert parsed.content == text

    def test_labels_inside_body_are_not_fields(self) -> None:
        parsed = parse_generated_content("TITLE: Real\nCONTENT: Body\nTITLE: Not a field")

        assert parsed.title == "Real"
        assert parsed.content == "Body\nTITLE: Not a field"
