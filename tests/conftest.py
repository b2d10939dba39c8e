"""
Test configuration for GleanCore.

Provides sample pages and preconfigured extractors shared across the
unit and cross-component suites.
"""

# Standard library imports
import logging
from typing import Iterator

# Third-party imports
import pytest
import structlog

# Local imports
from gleancore.config import ExtractionSettings, QualityConfig
from gleancore.extractor import ContentExtractor

BASE_URL = "https://example.com/news/"

# ============================================================================
# Sample Pages
# ============================================================================

ARTICLE_PAGE = """<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta property="og:title" content="Rivers &amp; Lakes Report">
    <meta property="og:description" content="How inland waters changed this decade">
    <meta property="og:image" content="/img/hero.jpg">
    <meta name="keywords" content="water, Climate, rivers, climate">
    <meta property="article:section" content="Environment">
    <meta property="article:published_time" content="2023-12-01T10:00:00Z">
    <title>Rivers and Lakes | Example News</title>
    <script type="application/ld+json">
    {"@context": "https://schema.org", "@type": "NewsArticle",
     "headline": "Rivers and Lakes", "author": {"@type": "Person", "name": "Jane Doe"}}
    </script>
    <style>.nav { color: red; }</style>
</head>
<body>
    <nav><a href="/">Home</a> <a href="/world">World</a></nav>
    <article>
        <h1>Rivers and Lakes Report</h1>
        <p class="byline">By Jane Doe</p>
        <p>The survey of inland waters covered more than four hundred rivers and lakes over ten years.</p>
        <p>Researchers found that <b>water levels</b> shifted in most regions, with the largest changes in the north.</p>
        <img src="/img/river.jpg" alt="A river at dawn" title="Morning on the river" width="800" height="600">
        <img srcset="/img/lake-400.jpg 400w, /img/lake-800.jpg 800w, /img/lake-2000.jpg 2000w" alt="Lake">
        <iframe src="https://www.youtube.com/embed/abc123" title="Survey footage"></iframe>
        <audio src="/audio/interview.mp3" title="Interview"></audio>
        <p>Read the <a href="/news/full-report" title="Full report">full report</a> or the
           <a href="https://other.org/data">raw data</a>.</p>
        <script>var tracking = "should not appear";</script>
    </article>
    <footer>Copyright Example News</footer>
</body>
</html>
"""

MINIMAL_PAGE = "<html><body><p>Hi</p></body></html>"

# ============================================================================
# Core Test Fixtures
# ============================================================================


@pytest.fixture(autouse=True)
def reset_logging() -> Iterator[None]:
    """Keep structlog and root logger configuration from leaking between tests."""
    root_logger = logging.getLogger()
    handlers, level = list(root_logger.handlers), root_logger.level
    yield
    for handler in root_logger.handlers:
        if handler not in handlers:
            handler.close()
    root_logger.handlers = handlers
    root_logger.setLevel(level)
    structlog.reset_defaults()


@pytest.fixture
def base_url() -> str:
    return BASE_URL


@pytest.fixture
def article_page() -> str:
    return ARTICLE_PAGE


@pytest.fixture
def extraction_settings() -> ExtractionSettings:
    return ExtractionSettings()


@pytest.fixture
def quality_config() -> QualityConfig:
    return QualityConfig()


@pytest.fixture
def extractor(extraction_settings: ExtractionSettings) -> ContentExtractor:
    return ContentExtractor(extraction_settings)
