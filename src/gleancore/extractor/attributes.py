"""
Attribute lookup on raw tag fragments.

Tags are never parsed into a tree; a value is pulled straight out of the
tag text with one pattern per quoting style, tried in a fixed order.
"""

from __future__ import annotations

import re
from functools import lru_cache
from typing import Dict, Optional, Pattern, Tuple

# The attribute name must not be the tail of a longer name (``src`` vs ``data-src``).
_NAME_BOUNDARY = r"(?<![\w:.-])"

_TAG_NAME_RE = re.compile(r"<\s*([a-zA-Z][\w:-]*)")
_ALL_ATTRIBUTES_RE = re.compile(
    r"""([^\s"'<>/=]+)(?:\s*=\s*(?:"([^"]*)"|'([^']*)'|([^\s"'=<>`]+)))?""",
)


@lru_cache(maxsize=256)
def _attribute_patterns(name: str) -> Tuple[Pattern[str], Pattern[str], Pattern[str]]:
    """Compile the double-quoted, single-quoted and unquoted patterns for ``name``."""
    prefix = _NAME_BOUNDARY + re.escape(name) + r"\s*=\s*"
    return (
        re.compile(prefix + r'"([^"]*)"', re.IGNORECASE),
        re.compile(prefix + r"'([^']*)'", re.IGNORECASE),
        re.compile(prefix + r"""([^\s"'>][^\s>]*)""", re.IGNORECASE),
    )


def get_attribute(name: str, tag: str) -> Optional[str]:
    """
    Return the value of attribute ``name`` in a raw tag string.

    Double-quoted, single-quoted and unquoted values are tried in that order;
    the first non-empty capture wins. Returns None when the attribute is
    missing or every capture is empty.
    """
    if not name or not tag:
        return None

    for pattern in _attribute_patterns(name):
        match = pattern.search(tag)
        if match and match.group(1):
            return match.group(1)
    return None


def get_tag_name(tag: str) -> Optional[str]:
    """Lower-cased element name of a raw start tag."""
    match = _TAG_NAME_RE.match(tag)
    return match.group(1).lower() if match else None


def get_attributes(tag: str) -> Dict[str, str]:
    """All attributes of a start tag, lower-cased names, first occurrence wins."""
    end = tag.find(">")
    body = tag[: end if end != -1 else len(tag)]
    name_match = _TAG_NAME_RE.match(body)
    if name_match:
        body = body[name_match.end() :]

    attributes: Dict[str, str] = {}
    for match in _ALL_ATTRIBUTES_RE.finditer(body):
        attr_name = match.group(1).lower()
        if attr_name in attributes:
            continue
        value = next((g for g in match.group(2, 3, 4) if g is not None), "")
        attributes[attr_name] = value
    return attributes
