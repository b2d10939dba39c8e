"""
Lightweight queryable view over raw HTML.

There is no tree: an element is a start-tag match plus the span up to its
matching close tag, found by counting nested tags of the same name, or up
to an implied end for elements whose close tag is often omitted. Queries
support the small selector subset the extraction cascades need:

    tag  .class  #id  tag.class  [attr]  [attr='v']  [attr*='v']
    [attr^='v']  [attr$='v']  [attr~='v']  "A B" (descendant)  "A, B" (union)
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from functools import lru_cache
from typing import Dict, Iterator, List, Optional, Pattern, Tuple

from .attributes import get_attribute, get_attributes
from .text import reduce_to_text

VOID_ELEMENTS = frozenset(
    {"area", "base", "br", "col", "embed", "hr", "img", "input", "link", "meta", "param", "source", "track", "wbr"}
)
# Elements whose close tag is routinely omitted; a sibling start tag ends them.
IMPLIED_END_ELEMENTS = frozenset({"p", "li", "a", "td", "th", "tr", "option", "dt", "dd"})
INLINE_ELEMENTS = frozenset(
    {"a", "abbr", "b", "cite", "code", "em", "font", "i", "label", "mark", "q", "s", "small", "span",
     "strong", "sub", "sup", "time", "u"}
)

_RAW_TEXT_RE = re.compile(
    r"<!--.*?-->|(<(script|style|textarea)\b[^>]*>)(.*?)(</\2\s*>)",
    re.IGNORECASE | re.DOTALL,
)
_ANY_START_TAG_RE = re.compile(r"<([a-zA-Z][\w:-]*)(?=[\s/>])[^>]*>")
_ANY_TAG_RE = re.compile(r"<(/?)([a-zA-Z][\w:-]*)(?=[\s/>])[^>]*>")

_SIMPLE_SELECTOR_RE = re.compile(r"^(?P<tag>[a-zA-Z][\w-]*|\*)?(?P<rest>(?:[.#][\w-]+|\[[^\]]+\])*)$")
_SELECTOR_PART_RE = re.compile(r"\.([\w-]+)|#([\w-]+)|\[([^\]]+)\]")
_ATTR_SELECTOR_RE = re.compile(r"""^\s*([\w:-]+)\s*(?:([*^$~]?=)\s*(?:"([^"]*)"|'([^']*)'|([^\s\]]+)))?\s*$""")


def mask_raw_text(html: str) -> str:
    """
    Blank out comments and script/style bodies, keeping every offset.

    Tag scanning runs on the masked copy so markup inside scripts or
    comments is never mistaken for elements; slicing uses the original.
    """

    def _blank(match: re.Match[str]) -> str:
        if match.group(1) is None:
            return " " * len(match.group(0))
        return match.group(1) + " " * len(match.group(3)) + match.group(4)

    return _RAW_TEXT_RE.sub(_blank, html)


@lru_cache(maxsize=128)
def _tag_pattern(name: str) -> Pattern[str]:
    return re.compile(r"<(/?)" + re.escape(name) + r"(?=[\s/>])[^>]*>", re.IGNORECASE)


@lru_cache(maxsize=128)
def _start_tag_pattern(name: str) -> Pattern[str]:
    return re.compile(r"<" + re.escape(name) + r"(?=[\s/>])[^>]*>", re.IGNORECASE)


def find_matching_close(masked: str, name: str, content_start: int, limit: Optional[int] = None) -> Optional[Tuple[int, int]]:
    """
    Locate the close tag balancing a start tag whose content begins at ``content_start``.

    Returns the (start, end) offsets of the close tag, or None when the
    element is never closed.
    """
    depth = 1
    end = len(masked) if limit is None else limit
    for match in _tag_pattern(name).finditer(masked, content_start, end):
        if match.group(1):
            depth -= 1
            if depth == 0:
                return match.start(), match.end()
        elif not match.group(0).endswith("/>"):
            depth += 1
    return None


def find_implied_close(masked: str, name: str, content_start: int, limit: Optional[int] = None) -> Optional[Tuple[int, int]]:
    """
    Locate the end of an element whose close tag may be omitted.

    The element ends at its own close tag, at the next start tag of the same
    name outside any open block child, or at the close tag of whatever
    encloses it. An implied end is returned as an empty (start, start) span.
    """
    end = len(masked) if limit is None else limit
    open_tags: List[str] = []
    for match in _ANY_TAG_RE.finditer(masked, content_start, end):
        closing, tag = match.group(1), match.group(2).lower()
        if not closing:
            if tag == name and all(t in INLINE_ELEMENTS or t in IMPLIED_END_ELEMENTS for t in open_tags):
                return match.start(), match.start()
            if tag not in VOID_ELEMENTS and not match.group(0).endswith("/>"):
                open_tags.append(tag)
            continue

        if tag in open_tags:
            index = len(open_tags) - 1 - open_tags[::-1].index(tag)
            del open_tags[index:]
        elif tag == name:
            return match.start(), match.end()
        else:
            return match.start(), match.start()
    return None


@dataclass(frozen=True)
class AttributeCondition:
    name: str
    operator: Optional[str] = None
    value: str = ""

    def matches(self, attributes: Dict[str, str]) -> bool:
        if self.name not in attributes:
            return False
        if self.operator is None:
            return True

        actual = attributes[self.name]
        expected = self.value
        if self.operator == "=":
            return actual.lower() == expected.lower()
        if self.operator == "*=":
            return expected.lower() in actual.lower()
        if self.operator == "^=":
            return actual.lower().startswith(expected.lower())
        if self.operator == "$=":
            return actual.lower().endswith(expected.lower())
        if self.operator == "~=":
            return expected.lower() in actual.lower().split()
        return False


@dataclass(frozen=True)
class SimpleSelector:
    tag: Optional[str] = None
    classes: Tuple[str, ...] = ()
    element_id: Optional[str] = None
    conditions: Tuple[AttributeCondition, ...] = ()

    def matches(self, element: HTMLElement) -> bool:
        if self.tag and element.name != self.tag:
            return False
        if not (self.classes or self.element_id or self.conditions):
            return True

        start_tag = element.start_tag
        if any(cls not in start_tag for cls in self.classes):
            return False
        attributes = element.attributes
        if self.classes:
            class_names = attributes.get("class", "").split()
            if not all(cls in class_names for cls in self.classes):
                return False
        if self.element_id and attributes.get("id") != self.element_id:
            return False
        return all(condition.matches(attributes) for condition in self.conditions)


@lru_cache(maxsize=256)
def parse_selector(selector: str) -> Tuple[Tuple[SimpleSelector, ...], ...]:
    """
    Parse a selector group into descendant chains.

    Unsupported syntax yields an empty chain, which matches nothing.
    """
    groups: List[Tuple[SimpleSelector, ...]] = []
    for group in selector.split(","):
        chain: List[SimpleSelector] = []
        for compound in group.split():
            match = _SIMPLE_SELECTOR_RE.match(compound)
            if not match:
                chain = []
                break

            tag = match.group("tag")
            classes: List[str] = []
            element_id: Optional[str] = None
            conditions: List[AttributeCondition] = []
            for part in _SELECTOR_PART_RE.finditer(match.group("rest") or ""):
                if part.group(1):
                    classes.append(part.group(1))
                elif part.group(2):
                    element_id = part.group(2)
                else:
                    attr = _ATTR_SELECTOR_RE.match(part.group(3))
                    if not attr:
                        continue
                    value = next((g for g in attr.group(3, 4, 5) if g is not None), "")
                    conditions.append(AttributeCondition(attr.group(1).lower(), attr.group(2), value))

            chain.append(
                SimpleSelector(
                    tag=tag.lower() if tag and tag != "*" else None,
                    classes=tuple(classes),
                    element_id=element_id,
                    conditions=tuple(conditions),
                )
            )
        if chain:
            groups.append(tuple(chain))
    return tuple(groups)


class HTMLElement:
    """
    A start tag and the span it encloses within the source document.

    The close tag is located on first access to ``content_end``, ``end`` or
    anything derived from them; selector matching needs only the start tag.
    """

    def __init__(self, source: str, masked: str, name: str, start: int, content_start: int, limit: int) -> None:
        self.source = source
        self.name = name
        self.start = start
        self.content_start = content_start
        self._masked = masked
        self._limit = limit
        self._span: Optional[Tuple[int, int]] = None
        self._attributes: Optional[Dict[str, str]] = None
        if name in VOID_ELEMENTS or masked[start:content_start].endswith("/>"):
            self._span = (content_start, content_start)

    def __repr__(self) -> str:
        return f"HTMLElement(name={self.name!r}, start={self.start})"

    def _resolve_span(self) -> Tuple[int, int]:
        if self._span is None:
            finder = find_implied_close if self.name in IMPLIED_END_ELEMENTS else find_matching_close
            close = finder(self._masked, self.name, self.content_start, self._limit)
            self._span = close if close is not None else (self._limit, self._limit)
        return self._span

    @property
    def content_end(self) -> int:
        return self._resolve_span()[0]

    @property
    def end(self) -> int:
        return self._resolve_span()[1]

    @property
    def start_tag(self) -> str:
        return self.source[self.start : self.content_start]

    @property
    def inner_html(self) -> str:
        return self.source[self.content_start : self.content_end]

    @property
    def outer_html(self) -> str:
        return self.source[self.start : self.end]

    @property
    def attributes(self) -> Dict[str, str]:
        if self._attributes is None:
            self._attributes = get_attributes(self.start_tag)
        return self._attributes

    def get_attribute(self, name: str) -> Optional[str]:
        return get_attribute(name, self.start_tag)

    @property
    def text(self) -> str:
        return reduce_to_text(self.inner_html)

    @property
    def value(self) -> str:
        """Content attribute for meta tags, text for everything else."""
        if self.name == "meta":
            return (self.get_attribute("content") or "").strip()
        return self.text


class HTMLDocument:
    """Queryable wrapper around one HTML string."""

    def __init__(self, html: str) -> None:
        self.html = html or ""
        self._masked = mask_raw_text(self.html)

    def _element_at(self, match: re.Match[str], name: str, limit: int) -> HTMLElement:
        return HTMLElement(self.html, self._masked, name, match.start(), match.end(), limit)

    def elements(self, name: Optional[str] = None, start: int = 0, end: Optional[int] = None) -> Iterator[HTMLElement]:
        """Elements in document order, optionally restricted to a tag name and span."""
        limit = len(self.html) if end is None else end
        if name:
            name = name.lower()
            for match in _start_tag_pattern(name).finditer(self._masked, start, limit):
                yield self._element_at(match, name, limit)
        else:
            for match in _ANY_START_TAG_RE.finditer(self._masked, start, limit):
                yield self._element_at(match, match.group(1).lower(), limit)

    def _match_chain(
        self, chain: Tuple[SimpleSelector, ...], start: int, end: Optional[int]
    ) -> Iterator[HTMLElement]:
        head, rest = chain[0], chain[1:]
        for element in self.elements(head.tag, start, end):
            if not head.matches(element):
                continue
            if not rest:
                yield element
            else:
                yield from self._match_chain(rest, element.content_start, element.content_end)

    def query_selector_all(self, selector: str) -> List[HTMLElement]:
        found: Dict[int, HTMLElement] = {}
        for chain in parse_selector(selector):
            for element in self._match_chain(chain, 0, None):
                found.setdefault(element.start, element)
        return [found[position] for position in sorted(found)]

    def query_selector(self, selector: str) -> Optional[HTMLElement]:
        best: Optional[HTMLElement] = None
        for chain in parse_selector(selector):
            element = next(self._match_chain(chain, 0, None), None)
            if element is not None and (best is None or element.start < best.start):
                best = element
        return best

    def meta_content(self, key: str) -> Optional[str]:
        """
        Non-empty ``content`` of the first meta tag keyed by ``key``.

        The key is matched case-insensitively against ``property``,
        ``name``, ``itemprop`` and ``http-equiv``.
        """
        wanted = key.lower()
        for element in self.elements("meta"):
            attributes = element.attributes
            for attr in ("property", "name", "itemprop", "http-equiv"):
                if attributes.get(attr, "").strip().lower() == wanted:
                    content = attributes.get("content", "").strip()
                    if content:
                        return content
        return None

    def meta_contents(self, key: str) -> List[str]:
        """Every non-empty ``content`` for meta tags keyed by ``key``."""
        wanted = key.lower()
        values: List[str] = []
        for element in self.elements("meta"):
            attributes = element.attributes
            if any(attributes.get(attr, "").strip().lower() == wanted for attr in ("property", "name")):
                content = attributes.get("content", "").strip()
                if content:
                    values.append(content)
        return values

    @property
    def masked(self) -> str:
        return self._masked
