"""
Structured Data Parser - Schema.org JSON-LD

Finds ``application/ld+json`` script blocks in raw HTML, decodes them
tolerantly, and answers field lookups against the first article-typed
object. Blocks that fail to decode still get a regex pass for the author
name, since hand-written JSON-LD with trailing commas is common.
"""

from __future__ import annotations

import html as html_lib
import json
import logging
import re
from typing import Any, Dict, Iterator, List, Optional

logger = logging.getLogger(__name__)

ARTICLE_TYPES = frozenset({"Article", "NewsArticle", "BlogPosting"})

_JSON_LD_RE = re.compile(
    r"""<script\b[^>]*\btype\s*=\s*["']?application/ld\+json["']?[^>]*>(.*?)</script\s*>""",
    re.IGNORECASE | re.DOTALL,
)
_ARTICLE_TYPE_RE = re.compile(r""""@type"\s*:\s*(?:\[[^\]]*)?"(?:Article|NewsArticle|BlogPosting)\"""")
_AUTHOR_NAME_RES = (
    re.compile(r""""author"\s*:\s*\{[^{}]*?"name"\s*:\s*"([^"]+)\"""", re.DOTALL),
    re.compile(r""""author"\s*:\s*\[\s*\{[^{}]*?"name"\s*:\s*"([^"]+)\"""", re.DOTALL),
)


def _iter_objects(data: Any) -> Iterator[Dict[str, Any]]:
    """Walk top-level arrays and ``@graph`` containers, yielding every object."""
    if isinstance(data, list):
        for item in data:
            yield from _iter_objects(item)
    elif isinstance(data, dict):
        yield data
        graph = data.get("@graph")
        if graph is not None:
            yield from _iter_objects(graph)


def _type_names(obj: Dict[str, Any]) -> List[str]:
    value = obj.get("@type")
    if isinstance(value, str):
        return [value]
    if isinstance(value, list):
        return [item for item in value if isinstance(item, str)]
    return []


def is_article_object(obj: Dict[str, Any]) -> bool:
    return any(name in ARTICLE_TYPES for name in _type_names(obj))


def _clean(value: Any) -> Optional[str]:
    if not isinstance(value, str):
        return None
    value = html_lib.unescape(value).strip()
    return value or None


def _name_of(value: Any) -> Optional[str]:
    if isinstance(value, dict):
        return _clean(value.get("name"))
    return _clean(value)


class StructuredDataParser:
    """Field lookups over the JSON-LD blocks of one page."""

    def __init__(self, html: str) -> None:
        self.raw_blocks: List[str] = [match.group(1).strip() for match in _JSON_LD_RE.finditer(html or "")]
        self.objects: List[Dict[str, Any]] = []
        self.invalid_blocks: List[str] = []

        for block in self.raw_blocks:
            if not block:
                continue
            try:
                data = json.loads(block)
            except json.JSONDecodeError as e:
                logger.debug(f"Skipping invalid JSON-LD block: {e}")
                self.invalid_blocks.append(block)
                continue
            self.objects.extend(_iter_objects(data))

    @property
    def article(self) -> Optional[Dict[str, Any]]:
        """First object typed Article, NewsArticle or BlogPosting."""
        for obj in self.objects:
            if is_article_object(obj):
                return obj
        return None

    def _article_field(self, key: str) -> Any:
        article = self.article
        return article.get(key) if article is not None else None

    def author_names(self) -> List[str]:
        """
        Author names of the article object, in declaration order.

        Handles ``{"name": ...}``, arrays of such objects, and plain strings.
        Undecodable blocks that declare an article type are searched with
        a regex for the same two shapes.
        """
        names: List[str] = []
        author = self._article_field("author")
        candidates = author if isinstance(author, list) else [author]
        for candidate in candidates:
            name = _name_of(candidate)
            if name:
                names.append(name)

        for block in self.invalid_blocks:
            if not _ARTICLE_TYPE_RE.search(block):
                continue
            for pattern in _AUTHOR_NAME_RES:
                match = pattern.search(block)
                if match:
                    name = _clean(match.group(1))
                    if name and name not in names:
                        names.append(name)
        return names

    @property
    def date_published(self) -> Optional[str]:
        return _clean(self._article_field("datePublished"))

    @property
    def article_section(self) -> Optional[str]:
        section = self._article_field("articleSection")
        if isinstance(section, list):
            section = next((item for item in section if _clean(item)), None)
        return _clean(section)

    @property
    def keywords(self) -> List[str]:
        """Keywords as a list, splitting comma-joined strings."""
        value = self._article_field("keywords")
        if isinstance(value, str):
            items: List[Any] = value.split(",")
        elif isinstance(value, list):
            items = value
        else:
            return []
        return [keyword for keyword in (_clean(item) for item in items) if keyword]
