"""
Markup-to-plain-text reduction.

The steps run in a fixed order: script and style bodies have to go before
tags are stripped, otherwise their contents leak into the text.
"""

from __future__ import annotations

import html
import re

_SCRIPT_RE = re.compile(r"<script\b[^>]*>.*?</script\s*>", re.IGNORECASE | re.DOTALL)
_STYLE_RE = re.compile(r"<style\b[^>]*>.*?</style\s*>", re.IGNORECASE | re.DOTALL)
_COMMENT_RE = re.compile(r"<!--.*?-->", re.DOTALL)
_BLOCK_TAG_RE = re.compile(
    r"</?(?:html|head|body|title|p|div|br|hr|li|ul|ol|h[1-6]|tr|td|th|table|section|article|main|header|footer|aside|nav|blockquote|pre|figure|figcaption|dd|dt|dl)\b[^>]*>",
    re.IGNORECASE,
)
_TAG_RE = re.compile(r"<[^>]*>")

# CSS that escaped its <style> element
_CSS_AT_BLOCK_RE = re.compile(
    r"@(?:-[a-z]+-)?(?:media|keyframes|font-face|supports)\b[^{]*\{(?:[^{}]*\{[^{}]*\})*[^{}]*\}",
    re.IGNORECASE,
)
_CSS_COMMENT_RE = re.compile(r"/\*.*?\*/", re.DOTALL)
_CSS_RULE_BODY_RE = re.compile(r"\{[^{}]*\}")
_CSS_SELECTOR_TOKEN_RE = re.compile(r"(?:(?<=\s)|^)[.#][A-Za-z_-][\w-]*(?=[\s,{>]|$)")

_WHITESPACE_RE = re.compile(r"\s+")


def collapse_whitespace(text: str) -> str:
    return _WHITESPACE_RE.sub(" ", text).strip()


def strip_css_leakage(text: str) -> str:
    """Remove at-rule blocks, CSS comments, rule bodies and bare selector tokens."""
    text = _CSS_AT_BLOCK_RE.sub(" ", text)
    text = _CSS_COMMENT_RE.sub(" ", text)
    text = _CSS_RULE_BODY_RE.sub(" ", text)
    return _CSS_SELECTOR_TOKEN_RE.sub(" ", text)


def _strip_markup(fragment: str, block_separator: str) -> str:
    text = _SCRIPT_RE.sub(" ", fragment)
    text = _STYLE_RE.sub(" ", text)
    text = _COMMENT_RE.sub(" ", text)
    text = _BLOCK_TAG_RE.sub(block_separator, text)
    text = _TAG_RE.sub("", text)
    text = strip_css_leakage(text)
    return html.unescape(text)


def reduce_to_text(fragment: str) -> str:
    """
    Reduce an HTML fragment to normalized plain text.

    Args:
        fragment: Markup of any size or well-formedness

    Returns:
        Readable text with whitespace runs collapsed to single spaces
    """
    if not fragment:
        return ""
    return collapse_whitespace(_strip_markup(fragment, " "))


def reduce_to_lines(fragment: str) -> str:
    """
    Like ``reduce_to_text`` but block boundaries become newlines.

    Line breaks in the source are treated as plain spaces, whitespace is
    collapsed within each line, and blank lines are dropped, so text from
    neighbouring paragraphs never runs together on one line.
    """
    if not fragment:
        return ""
    flattened = _WHITESPACE_RE.sub(" ", fragment)
    lines = (collapse_whitespace(line) for line in _strip_markup(flattened, "\n").splitlines())
    return "\n".join(line for line in lines if line)


def inline_text(fragment: str) -> str:
    """Text of a short inline fragment such as anchor content or a heading."""
    return collapse_whitespace(html.unescape(_TAG_RE.sub(" ", _COMMENT_RE.sub(" ", fragment or ""))))
