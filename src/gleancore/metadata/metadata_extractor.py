"""
Metadata Extractor - Page-Level Field Cascades

Each field is resolved by an ordered list of sources, first non-empty
match wins. Sources are tried against the isolated article region first
and then against the full page, because isolation usually drops <head>.
"""

from __future__ import annotations

import html as html_lib
import logging
from typing import List, Optional, Sequence, Tuple

from ..extractor.document import HTMLDocument
from ..extractor.text import collapse_whitespace
from .structured_data_parser import StructuredDataParser

logger = logging.getLogger(__name__)

# (kind, key): "meta" keys go through meta_content, "selector" keys through query_selector
FieldSource = Tuple[str, str]

TITLE_SOURCES: Sequence[FieldSource] = (
    ("meta", "og:title"),
    ("meta", "twitter:title"),
    ("selector", "title"),
    ("selector", "h1"),
    ("selector", ".article-title"),
    ("selector", ".post-title"),
    ("selector", ".entry-title"),
)

DESCRIPTION_SOURCES: Sequence[FieldSource] = (
    ("meta", "og:description"),
    ("meta", "twitter:description"),
    ("meta", "description"),
    ("selector", ".article-description"),
    ("selector", ".post-excerpt"),
    ("selector", ".entry-summary"),
)

CATEGORY_SELECTORS: Sequence[str] = (".category", ".post-category", ".entry-category")
TAG_SELECTORS: Sequence[str] = ("a[rel~='tag']", ".tags a", ".post-tags a", ".tag")


def _clean(value: Optional[str]) -> str:
    return collapse_whitespace(html_lib.unescape(value or ""))


def dedupe_terms(values: Sequence[str]) -> List[str]:
    """Trim, drop empties, and de-duplicate case-insensitively in first-seen order."""
    seen: set[str] = set()
    unique: List[str] = []
    for value in values:
        term = _clean(value)
        if term and term.lower() not in seen:
            seen.add(term.lower())
            unique.append(term)
    return unique


class MetadataExtractor:
    """Title, description, category, tags and language cascades."""

    def __init__(self, default_title: str = "Untitled Article") -> None:
        self.default_title = default_title

    @staticmethod
    def document_chain(isolated: HTMLDocument, page: Optional[HTMLDocument]) -> List[HTMLDocument]:
        if page is None or page is isolated or page.html == isolated.html:
            return [isolated]
        return [isolated, page]

    @staticmethod
    def _first_match(documents: Sequence[HTMLDocument], sources: Sequence[FieldSource]) -> Optional[str]:
        for kind, key in sources:
            for document in documents:
                if kind == "meta":
                    value = _clean(document.meta_content(key))
                else:
                    element = document.query_selector(key)
                    value = element.text if element is not None else ""
                if value:
                    return value
        return None

    def extract_title(self, documents: Sequence[HTMLDocument]) -> str:
        title = self._first_match(documents, TITLE_SOURCES)
        if not title:
            logger.debug(f"No title source matched, using {self.default_title!r}")
            return self.default_title
        return title

    def extract_description(self, documents: Sequence[HTMLDocument]) -> str:
        return self._first_match(documents, DESCRIPTION_SOURCES) or ""

    def extract_category(
        self,
        documents: Sequence[HTMLDocument],
        structured_data: Optional[StructuredDataParser] = None,
    ) -> Optional[str]:
        section = self._first_match(documents, (("meta", "article:section"),))
        if section:
            return section
        if structured_data is not None and structured_data.article_section:
            return _clean(structured_data.article_section)
        return self._first_match(documents, [("selector", selector) for selector in CATEGORY_SELECTORS])

    def extract_tags(
        self,
        documents: Sequence[HTMLDocument],
        structured_data: Optional[StructuredDataParser] = None,
    ) -> List[str]:
        raw: List[str] = []
        for document in documents:
            keywords = document.meta_content("keywords")
            if keywords:
                raw.extend(keywords.split(","))
        for document in documents:
            raw.extend(document.meta_contents("article:tag"))
        if structured_data is not None:
            raw.extend(structured_data.keywords)
        for document in documents:
            for element in document.query_selector_all(", ".join(TAG_SELECTORS)):
                raw.append(element.text)
        return dedupe_terms(raw)

    def extract_language(self, documents: Sequence[HTMLDocument]) -> Optional[str]:
        """Declared ``lang`` on <html>, else a content-language meta tag."""
        for document in documents:
            root = document.query_selector("html")
            if root is not None:
                lang = (root.get_attribute("lang") or "").strip()
                if lang:
                    return lang
        for document in documents:
            content = document.meta_content("content-language")
            if content:
                return content.strip()
        return None
