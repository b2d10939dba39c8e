"""
Tests for rule-based content quality assessment.
"""

import pytest
from gleancore.config import QualityConfig
from gleancore.protocols import ExtractedContent
from gleancore.quality import QualityAssessor, QualityLevel
from gleancore.quality.assessor import has_structure

NEUTRAL_WORDS = "lorem ipsum dolor sit amet consectetur adipiscing elit sed do eiusmod tempor"


def make_content(text: str, title: str = "A title", reading_time: int = 1) -> ExtractedContent:
    return ExtractedContent(
        title=title,
        description="",
        main_text=text,
        word_count=len(text.split()),
        reading_time=reading_time,
    )


def words(count: int, base: str = NEUTRAL_WORDS) -> str:
    pool = base.split()
    return " ".join(pool[i % len(pool)] for i in range(count))


class TestQualityAssessor:
    """Rule order mirrors the assessment cascade."""

    def test_excluded_url(self, quality_config):
        assessment = QualityAssessor(quality_config).assess(make_content(words(300)), "https://example.com/privacy")
        assert assessment.level is QualityLevel.EXCLUDED
        assert assessment.is_visible is False

    def test_too_few_words(self, quality_config):
        assessment = QualityAssessor(quality_config).assess(make_content(words(10)))
        assert assessment.level is QualityLevel.LOW
        assert "Too few words" in assessment.reason

    def test_reading_time_threshold(self):
        config = QualityConfig(min_reading_time=2)
        assessment = QualityAssessor(config).assess(make_content(words(120), reading_time=1))
        assert "reading time" in assessment.reason

    def test_content_length(self):
        config = QualityConfig(min_word_count=5)
        assessment = QualityAssessor(config).assess(make_content(words(10)))
        assert "Content too short" in assessment.reason

    def test_link_density(self, quality_config):
        text = " ".join(["https://example.com/page", "see"] * 60)
        assessment = QualityAssessor(quality_config).assess(make_content(text))
        assert assessment.level is QualityLevel.LOW
        assert "link density" in assessment.reason

    def test_empty_content_patterns(self, quality_config):
        text = words(120) + " follow us"
        assessment = QualityAssessor(quality_config).assess(make_content(text))
        assert assessment.reason == "Contains empty content patterns"

    def test_low_quality_indicators(self, quality_config):
        text = words(120) + " advertisement"
        assessment = QualityAssessor(quality_config).assess(make_content(text))
        assert assessment.reason == "Contains low-quality indicators without meaningful content"

    def test_lacks_structure(self, quality_config):
        assessment = QualityAssessor(quality_config).assess(make_content(words(120)))
        assert assessment.reason == "Lacks content structure and meaningful content"

    def test_high_with_meaningful_patterns(self, quality_config):
        text = words(120) + " the author explains the outcome"
        assessment = QualityAssessor(quality_config).assess(make_content(text))
        assert assessment.level is QualityLevel.HIGH
        assert assessment.is_visible is True

    def test_high_with_quality_indicators(self, quality_config):
        text = "# Heading " + words(150)
        assessment = QualityAssessor(quality_config).assess(make_content(text, title="Interview with a gardener"))
        assert assessment.reason == "High-quality content with good indicators"

    def test_medium_with_structure(self, quality_config):
        text = "- " + words(120)
        assessment = QualityAssessor(quality_config).assess(make_content(text))
        assert assessment.level is QualityLevel.MEDIUM

    def test_medium_meaningful_but_short(self, quality_config):
        text = words(60) + " she explains"
        assessment = QualityAssessor(quality_config).assess(make_content(text))
        assert assessment.level is QualityLevel.MEDIUM

    def test_custom_term_lists(self):
        config = QualityConfig(excluded_url_patterns=["/tag/"])
        assessment = QualityAssessor(config).assess(make_content(words(300)), "https://example.com/tag/python")
        assert assessment.level is QualityLevel.EXCLUDED

    def test_to_dict(self, quality_config):
        data = QualityAssessor(quality_config).assess(make_content(words(10))).to_dict()
        assert data["level"] == "low"
        assert data["is_visible"] is False


class TestStructureSignals:
    @pytest.mark.parametrize(
        "text,expected",
        [
            ("## Results and more", True),
            ("**Bold** lead", True),
            ("Steps: - first - second", True),
            ("1. one 2. two", True),
            ("plain prose with no markers at all", False),
            ("para one\n\npara two\n\npara three", False),
        ],
    )
    def test_has_structure(self, text, expected):
        assert has_structure(text) is expected
