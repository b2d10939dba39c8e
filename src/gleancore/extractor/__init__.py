"""
Heuristic HTML content extraction.

Leaf scanners and reducers work on raw HTML strings; ``ContentExtractor``
sequences them into one ``ExtractedContent`` per call.
"""

from .attributes import get_attribute
from .content_extractor import ContentExtractor, extract_content
from .content_processors import AudioProcessor, ImageProcessor, LinkProcessor, TextProcessor, VideoProcessor
from .document import HTMLDocument, HTMLElement
from .isolator import isolate_article
from .language_detector import LanguageDetector
from .srcset import SrcsetCandidate, parse_srcset, select_srcset_candidate
from .text import reduce_to_text
from .urls import is_external_url, resolve_url

__all__ = [
    "AudioProcessor",
    "ContentExtractor",
    "HTMLDocument",
    "HTMLElement",
    "ImageProcessor",
    "LanguageDetector",
    "LinkProcessor",
    "SrcsetCandidate",
    "TextProcessor",
    "VideoProcessor",
    "extract_content",
    "get_attribute",
    "is_external_url",
    "isolate_article",
    "parse_srcset",
    "reduce_to_text",
    "resolve_url",
    "select_srcset_candidate",
]
