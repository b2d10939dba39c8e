"""
Article region isolation.

Narrows a full page down to the span most likely to hold the article body,
so navigation and footer boilerplate stay out of the text and media scans.
"""

from __future__ import annotations

import re
from typing import Iterable, Optional

import structlog

from ..config.config import DEFAULT_CONTAINER_HINTS
from .document import find_matching_close, mask_raw_text

logger = structlog.get_logger(__name__)

_ARTICLE_START_RE = re.compile(r"<article(?=[\s/>])[^>]*>", re.IGNORECASE)
_MAIN_START_RE = re.compile(r"<main(?=[\s/>])[^>]*>", re.IGNORECASE)

DEFAULT_ISOLATION_WINDOW = 200_000


def _enclosed_region(html: str, masked: str, start_re: re.Pattern[str], name: str) -> Optional[str]:
    match = start_re.search(masked)
    if not match:
        return None
    close = find_matching_close(masked, name, match.end())
    if close is None:
        return None
    region = html[match.end() : close[0]]
    return region if region.strip() else None


def _hinted_window(html: str, masked: str, hints: Iterable[str], window: int) -> Optional[str]:
    lowered = masked.lower()
    for hint in hints:
        position = lowered.find(hint.lower())
        if position == -1:
            continue

        start = lowered.rfind("<div", 0, position)
        if start == -1:
            start = max(lowered.rfind("<", 0, position), 0)
        logger.debug("isolation_hint_matched", hint=hint, offset=start)
        return html[start : start + window]
    return None


def isolate_article(
    html: str,
    container_hints: Optional[Iterable[str]] = None,
    window: int = DEFAULT_ISOLATION_WINDOW,
) -> str:
    """
    Return the most likely article sub-region of ``html``.

    Cascade, first match wins:
      1. inner span of the first <article> element
      2. inner span of the first <main> element
      3. a window of up to ``window`` characters starting at the <div>
         preceding the first container-class hint found
      4. the unchanged input
    """
    if not html:
        return html or ""

    masked = mask_raw_text(html)

    region = _enclosed_region(html, masked, _ARTICLE_START_RE, "article")
    if region is not None:
        logger.debug("isolation_stage", stage="article", length=len(region))
        return region

    region = _enclosed_region(html, masked, _MAIN_START_RE, "main")
    if region is not None:
        logger.debug("isolation_stage", stage="main", length=len(region))
        return region

    hints = DEFAULT_CONTAINER_HINTS if container_hints is None else container_hints
    region = _hinted_window(html, masked, hints, window)
    if region is not None:
        return region

    logger.debug("isolation_stage", stage="full_page", length=len(html))
    return html
