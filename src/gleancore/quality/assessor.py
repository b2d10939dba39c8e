"""
Rule-based content quality assessment.

Classifies an extraction result as high, medium, low or excluded using
length thresholds, link density, and configurable multilingual term lists.
Rules are evaluated in order and the first one that fires decides.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Optional

import structlog

from ..config.config import QualityConfig
from ..protocols import ExtractedContent

logger = structlog.get_logger(__name__)


class QualityLevel(Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"
    EXCLUDED = "excluded"


@dataclass(frozen=True)
class QualityAssessment:
    level: QualityLevel
    reason: str

    @property
    def is_visible(self) -> bool:
        return self.level in (QualityLevel.HIGH, QualityLevel.MEDIUM)

    def to_dict(self) -> dict:
        return {"level": self.level.value, "reason": self.reason, "is_visible": self.is_visible}


def _contains_any(haystacks: Iterable[str], terms: Iterable[str]) -> bool:
    haystacks = list(haystacks)
    return any(term in haystack for term in terms for haystack in haystacks)


def link_density(text: str) -> float:
    """Share of whitespace-separated tokens that look like URLs."""
    tokens = text.split()
    if not tokens:
        return 0.0
    links = [token for token in tokens if "http" in token or token.startswith("www.")]
    return len(links) / len(tokens)


def has_structure(text: str) -> bool:
    """
    Markdown-like headings or list markers.

    Main text arrives with whitespace collapsed, so paragraph breaks are not
    a usable signal here.
    """
    has_headings = "#" in text or "**" in text
    has_lists = "- " in text or "* " in text or "1. " in text
    return has_headings or has_lists


class QualityAssessor:
    """
    Assess extracted content against a ``QualityConfig``.

    The configuration is injected; nothing is read from process-wide state.
    """

    def __init__(self, config: Optional[QualityConfig] = None) -> None:
        self.config = config or QualityConfig()

    def assess(self, content: ExtractedContent, url: str = "") -> QualityAssessment:
        assessment = self._assess(content, url)
        logger.debug("quality_assessed", url=url, level=assessment.level.value, reason=assessment.reason)
        return assessment

    def _assess(self, content: ExtractedContent, url: str) -> QualityAssessment:
        config = self.config
        url_lower = (url or "").lower()
        title = content.title.lower()
        text = content.main_text
        text_lower = text.lower()

        if any(pattern in url_lower for pattern in config.excluded_url_patterns):
            return QualityAssessment(QualityLevel.EXCLUDED, "Technical/structural URL pattern excluded")

        if content.word_count < config.min_word_count:
            return QualityAssessment(
                QualityLevel.LOW, f"Too few words ({content.word_count} < {config.min_word_count})"
            )
        if content.reading_time < config.min_reading_time:
            return QualityAssessment(
                QualityLevel.LOW,
                f"Too short reading time ({content.reading_time} < {config.min_reading_time} min)",
            )
        if len(text) < config.min_content_length:
            return QualityAssessment(
                QualityLevel.LOW, f"Content too short ({len(text)} < {config.min_content_length} chars)"
            )

        density = link_density(text)
        if density > config.max_link_density:
            return QualityAssessment(
                QualityLevel.LOW,
                f"High link density ({int(density * 100)}% > {int(config.max_link_density * 100)}%)",
            )

        meaningful = _contains_any([text_lower], config.meaningful_content_patterns)
        empty = _contains_any([text_lower], config.empty_content_patterns)
        indicators = _contains_any([title, text_lower], config.quality_indicators)
        low_indicators = _contains_any([title, text_lower], config.low_quality_indicators)
        structured = has_structure(text)

        if empty and not meaningful:
            return QualityAssessment(QualityLevel.LOW, "Contains empty content patterns")
        if low_indicators and not indicators and not meaningful:
            return QualityAssessment(QualityLevel.LOW, "Contains low-quality indicators without meaningful content")
        if not structured and not meaningful:
            return QualityAssessment(QualityLevel.LOW, "Lacks content structure and meaningful content")

        if meaningful and content.word_count > int(config.min_word_count * 1.5):
            return QualityAssessment(QualityLevel.HIGH, "High-quality content with meaningful patterns")
        if indicators and content.word_count > config.min_word_count * 2:
            return QualityAssessment(QualityLevel.HIGH, "High-quality content with good indicators")
        if meaningful or structured:
            return QualityAssessment(QualityLevel.MEDIUM, "Standard quality content with some structure")
        return QualityAssessment(QualityLevel.MEDIUM, "Standard quality content")
