"""
Responsive image (``srcset``) parsing and candidate selection.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import List, Optional

from .urls import resolve_url

# Entries are separated by commas followed by whitespace, or by a comma that
# ends a descriptor; commas inside URLs (e.g. image CDNs) are left intact.
_ENTRY_SPLIT_RE = re.compile(r",\s+|(?<=\d[wx]),")
_WIDTH_RE = re.compile(r"^(\d+)w$", re.IGNORECASE)
_DENSITY_RE = re.compile(r"^(\d+(?:\.\d+)?|\.\d+)x$", re.IGNORECASE)


@dataclass(frozen=True)
class SrcsetCandidate:
    """One ``url [descriptor]`` entry of a srcset."""

    url: str
    width: Optional[int] = None
    density: Optional[float] = None


def parse_srcset(srcset: str, base_url: str) -> List[SrcsetCandidate]:
    """Parse a srcset string into resolved candidates, in document order."""
    candidates: List[SrcsetCandidate] = []
    if not srcset:
        return candidates

    for entry in _ENTRY_SPLIT_RE.split(srcset.strip()):
        parts = entry.strip().split()
        if not parts:
            continue

        url = parts[0].rstrip(",")
        if not url:
            continue

        width: Optional[int] = None
        density: Optional[float] = None
        for descriptor in parts[1:]:
            descriptor = descriptor.rstrip(",")
            width_match = _WIDTH_RE.match(descriptor)
            if width_match:
                width = int(width_match.group(1))
                continue
            density_match = _DENSITY_RE.match(descriptor)
            if density_match:
                density = float(density_match.group(1))

        candidates.append(SrcsetCandidate(resolve_url(url, base_url), width, density))

    return candidates


def select_srcset_candidate(candidates: List[SrcsetCandidate], max_width: int = 1600) -> Optional[SrcsetCandidate]:
    """
    Pick the candidate to download.

    Largest width not above ``max_width``; if every width exceeds it, the
    largest anyway. Without any width descriptors, the highest density wins
    (unspecified density counts as 1.0).
    """
    if not candidates:
        return None

    with_width = [c for c in candidates if c.width is not None]
    if with_width:
        within = [c for c in with_width if c.width is not None and c.width <= max_width]
        pool = within or with_width
        return max(pool, key=lambda c: c.width or 0)

    return max(candidates, key=lambda c: c.density if c.density is not None else 1.0)
