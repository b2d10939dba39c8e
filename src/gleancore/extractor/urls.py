"""
URL normalization against a page base URL.
"""

from __future__ import annotations

import logging
from urllib.parse import urljoin, urlparse

logger = logging.getLogger(__name__)


def resolve_url(candidate: str, base_url: str) -> str:
    """
    Turn ``candidate`` into an absolute URL relative to ``base_url``.

    Absolute http(s) URLs and data URIs are returned as-is (trimmed),
    protocol-relative URLs take the base scheme (``https`` when the base has
    none), and everything else goes through standard relative resolution.
    Resolution failures fall back to the trimmed candidate; this never raises.
    """
    value = (candidate or "").strip()
    if not value:
        return value

    lowered = value.lower()
    if lowered.startswith(("http://", "https://")):
        return value
    if lowered.startswith("data:"):
        return candidate.strip()

    try:
        if value.startswith("//"):
            scheme = urlparse(base_url or "").scheme or "https"
            return f"{scheme}:{value}"

        resolved = urljoin(base_url or "", value)
    except ValueError as e:
        logger.debug("URL resolution failed for %r against %r: %s", value, base_url, e)
        return value

    return resolved or value


def is_external_url(url: str, base_url: str) -> bool:
    """
    External iff ``url`` does not start with ``base_url``.

    This is a plain prefix test, not a host comparison: a scheme or
    ``www.`` mismatch with the base counts as external.
    """
    return not url.startswith(base_url)


def is_data_uri(value: str) -> bool:
    return value.strip().lower().startswith("data:")
