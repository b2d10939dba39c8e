"""
Author Extractor - Multi-Strategy Author Identification

Resolves a best-guess author name from JSON-LD, meta tags, and a byline
heuristic, in that order. Every candidate has to pass a plausibility filter
that rejects handles, URLs, sentences and organization names.
"""

from __future__ import annotations

import html as html_lib
import logging
import re
from typing import Callable, Iterable, List, Optional, Sequence

from ..config.config import DEFAULT_AUTHOR_BLOCKLIST
from ..extractor.document import HTMLDocument
from ..extractor.text import reduce_to_lines
from .structured_data_parser import StructuredDataParser

logger = logging.getLogger(__name__)

AuthorStrategy = Callable[[str], List[str]]

_ALLOWED_CHARS_RE = re.compile(r"^[^\W\d_]+(?:[\s'\-’][^\W\d_]*)*$")
_NAME_WORD = r"[A-ZÀ-ÖØ-Þ][\w'’\-]+"
_BYLINE_RE = re.compile(r"\b(?:[Bb]y|[Vv]on)[ \t]+(" + _NAME_WORD + r"(?:[ \t]+" + _NAME_WORD + r"){1,2})\b")

META_AUTHOR_KEYS: Sequence[str] = ("article:author", "author", "twitter:creator")
SELECTOR_AUTHOR_SOURCES: Sequence[str] = (".author", ".byline", ".post-author", "[rel=author]")


class AuthorExtractor:
    """
    Ordered author cascade.

    Strategies are plain functions from full-page HTML to candidate names;
    the first candidate that passes ``is_plausible_author`` wins.
    """

    def __init__(
        self,
        blocklist: Optional[Iterable[str]] = None,
        byline_scan_chars: int = 10_000,
    ) -> None:
        terms = DEFAULT_AUTHOR_BLOCKLIST if blocklist is None else blocklist
        self.blocklist = [term.lower() for term in terms if term]
        self.byline_scan_chars = byline_scan_chars
        self.strategies: List[AuthorStrategy] = [
            self.from_structured_data,
            self.from_meta_tags,
            self.from_byline,
        ]

    def extract_author(self, html: str) -> Optional[str]:
        """Return the first plausible author from the cascade, or None."""
        if not html:
            return None

        for strategy in self.strategies:
            for candidate in strategy(html):
                name = self.normalize(candidate)
                if self.is_plausible_author(name):
                    logger.debug(f"Author found via {strategy.__name__}: {name}")
                    return name
                logger.debug(f"Rejected implausible author candidate: {candidate!r}")
        return None

    @staticmethod
    def normalize(candidate: str) -> str:
        return re.sub(r"\s+", " ", html_lib.unescape(candidate or "")).strip()

    def is_plausible_author(self, name: Optional[str]) -> bool:
        """
        Shape and content checks for a person's name.

        Accepts 2-60 characters and 1-4 words made of letters, whitespace,
        hyphens and apostrophes, with no ``@``, no ``http``, and no
        organization-like blocklist token.
        """
        if not name:
            return False
        if not 2 <= len(name) <= 60:
            return False
        lowered = name.lower()
        if "@" in name or "http" in lowered:
            return False
        if not 1 <= len(name.split()) <= 4:
            return False
        if not _ALLOWED_CHARS_RE.match(name):
            return False
        return not any(term in lowered for term in self.blocklist)

    # --- Strategies ---

    @staticmethod
    def from_structured_data(html: str) -> List[str]:
        return StructuredDataParser(html).author_names()

    @staticmethod
    def from_meta_tags(html: str) -> List[str]:
        document = HTMLDocument(html)
        candidates: List[str] = []
        for key in META_AUTHOR_KEYS:
            content = document.meta_content(key)
            if not content:
                continue
            if key == "twitter:creator":
                content = content.lstrip("@")
            candidates.append(content)
        return candidates

    def from_byline(self, html: str) -> List[str]:
        """Capitalized two- or three-word names after "by" or "von" near the top of the page."""
        text = reduce_to_lines(html[: self.byline_scan_chars])
        return [match.group(1) for match in _BYLINE_RE.finditer(text)]


def extract_selector_author(documents: Sequence[HTMLDocument]) -> Optional[str]:
    """
    Author from meta ``author`` or byline-like elements, searched in each
    document in turn. Used only when the cascade above finds nothing.
    """
    for document in documents:
        content = document.meta_content("author")
        if content:
            return AuthorExtractor.normalize(content)
        for selector in SELECTOR_AUTHOR_SOURCES:
            element = document.query_selector(selector)
            if element is None:
                continue
            text = element.text
            if text:
                return text
    return None
