"""
Date Extractor - Publication Date Detection

Tries structured data, meta tags, ``<time>`` elements and date-classed
elements in that order and returns the first value that parses to a
plausible publication timestamp.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from typing import List, Optional, Sequence

from dateutil import parser as dateutil_parser

from ..extractor.document import HTMLDocument
from .structured_data_parser import StructuredDataParser

logger = logging.getLogger(__name__)

META_DATE_KEYS: Sequence[str] = (
    "article:published_time",
    "og:published_time",
    "date",
    "pubdate",
    "publish_date",
    "DC.date.issued",
)
DATE_CLASS_SELECTORS: Sequence[str] = (".published", ".post-date")

EARLIEST_PLAUSIBLE = datetime(1990, 1, 1, tzinfo=timezone.utc)
FUTURE_TOLERANCE = timedelta(days=1)


def parse_date(value: Optional[str], now: Optional[datetime] = None) -> Optional[datetime]:
    """
    Parse a date string into an aware datetime.

    Naive results are taken as UTC. Dates before 1990 or more than a day
    in the future are treated as noise and rejected.
    """
    if not value or not value.strip():
        return None
    try:
        parsed = dateutil_parser.parse(value.strip())
    except (ValueError, OverflowError) as e:
        logger.debug(f"Unparseable date {value!r}: {e}")
        return None

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)

    reference = now or datetime.now(timezone.utc)
    if parsed < EARLIEST_PLAUSIBLE or parsed > reference + FUTURE_TOLERANCE:
        logger.debug(f"Rejected implausible date {parsed.isoformat()}")
        return None
    return parsed


class DateExtractor:
    """Ordered publication date cascade over one or more documents."""

    def extract_publish_date(
        self,
        documents: Sequence[HTMLDocument],
        structured_data: Optional[StructuredDataParser] = None,
    ) -> Optional[datetime]:
        for candidate in self._candidates(documents, structured_data):
            parsed = parse_date(candidate)
            if parsed is not None:
                return parsed
        return None

    def _candidates(
        self,
        documents: Sequence[HTMLDocument],
        structured_data: Optional[StructuredDataParser],
    ) -> List[str]:
        candidates: List[str] = []
        if structured_data is not None and structured_data.date_published:
            candidates.append(structured_data.date_published)

        for document in documents:
            for key in META_DATE_KEYS:
                content = document.meta_content(key)
                if content:
                    candidates.append(content)

        for document in documents:
            for element in document.elements("time"):
                datetime_attr = element.get_attribute("datetime")
                if datetime_attr:
                    candidates.append(datetime_attr)

        for document in documents:
            for selector in DATE_CLASS_SELECTORS:
                element = document.query_selector(selector)
                if element is not None:
                    candidates.append(element.get_attribute("datetime") or element.text)

        return candidates
