"""
GleanCore - heuristic article extraction from raw HTML.
"""

from __future__ import annotations

__version__ = "0.1.0"

from .extractor import ContentExtractor, extract_content
from .config import Config, ExtractionSettings
from .protocols import (
    ContentMetadata,
    ExtractedAudio,
    ExtractedContent,
    ExtractedImage,
    ExtractedLink,
    ExtractedVideo,
    VideoPlatform,
)

__all__ = [
    "__version__",
    "Config",
    "ContentExtractor",
    "ContentMetadata",
    "ExtractedAudio",
    "ExtractedContent",
    "ExtractedImage",
    "ExtractedLink",
    "ExtractedVideo",
    "ExtractionSettings",
    "VideoPlatform",
    "extract_content",
]
