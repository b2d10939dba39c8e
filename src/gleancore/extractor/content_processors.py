"""
Tag scanners and main-text selection.

Each processor walks raw HTML (usually the isolated article region) with
regex tag matching, pulls attributes out of the start tags, and resolves
URLs against the page base URL. None of them raise on malformed input.
"""

from __future__ import annotations

import html as html_lib
import re
from typing import Iterable, List, Optional, Sequence, Tuple, TypeVar
from urllib.parse import urlparse

import structlog

from ..protocols import ExtractedAudio, ExtractedImage, ExtractedLink, ExtractedVideo, VideoPlatform
from .document import HTMLDocument, HTMLElement
from .srcset import parse_srcset, select_srcset_candidate
from .text import inline_text, reduce_to_text
from .urls import is_data_uri, is_external_url, resolve_url

logger = structlog.get_logger(__name__)

_T = TypeVar("_T", ExtractedImage, ExtractedAudio)

_DIMENSION_RE = re.compile(r"^\s*(\d+)")


def _attr_text(element: HTMLElement, name: str) -> str:
    return html_lib.unescape(element.get_attribute(name) or "").strip()


def _attr_url(element: HTMLElement, name: str) -> Optional[str]:
    """Attribute value as a URL candidate; entity-decoded unless it is a data URI."""
    value = (element.get_attribute(name) or "").strip()
    if not value:
        return None
    return value if is_data_uri(value) else html_lib.unescape(value)


def _parse_dimension(value: Optional[str]) -> Optional[int]:
    if not value:
        return None
    match = _DIMENSION_RE.match(value)
    return int(match.group(1)) if match else None


def dedupe_by_url(items: Iterable[_T]) -> List[_T]:
    """Keep the first item for each URL, preserving order."""
    seen: set[str] = set()
    unique: List[_T] = []
    for item in items:
        if item.url in seen:
            continue
        seen.add(item.url)
        unique.append(item)
    return unique


class ImageProcessor:
    """Collect <img> tags and page-level meta images."""

    SOURCE_ATTRIBUTES: Tuple[str, ...] = ("src", "data-src", "data-original", "data-lazy-src")

    def __init__(self, max_width: int = 1600, max_meta_images: int = 3) -> None:
        self.max_width = max_width
        self.max_meta_images = max_meta_images

    def extract_images(self, html: str, base_url: str, page_html: Optional[str] = None) -> List[ExtractedImage]:
        """
        Extract images from ``html`` and meta images from ``page_html``.

        Args:
            html: Markup to scan for <img> tags, typically the article region
            base_url: Page URL for resolving relative sources
            page_html: Full page used for og:image, twitter:image and
                image_src lookups; defaults to ``html``

        Returns:
            Images with unique URLs in first-seen order
        """
        images: List[ExtractedImage] = []

        for element in HTMLDocument(html).elements("img"):
            image = self._process_image(element, base_url)
            if image is not None:
                images.append(image)

        seen = {image.url for image in images}
        for url in self._meta_image_urls(HTMLDocument(page_html if page_html is not None else html), base_url):
            if url in seen:
                continue
            seen.add(url)
            images.append(ExtractedImage(url=url, is_main_image=True))

        return dedupe_by_url(images)

    def _process_image(self, element: HTMLElement, base_url: str) -> Optional[ExtractedImage]:
        chosen_width: Optional[int] = None
        url: Optional[str] = None

        srcset = element.get_attribute("srcset")
        if srcset:
            candidate = select_srcset_candidate(parse_srcset(html_lib.unescape(srcset), base_url), self.max_width)
            if candidate is not None:
                url = candidate.url
                chosen_width = candidate.width

        if not url:
            for attribute in self.SOURCE_ATTRIBUTES:
                url = _attr_url(element, attribute)
                if url:
                    break

        if not url:
            return None
        if not is_data_uri(url):
            url = resolve_url(url, base_url)
        if not url:
            return None

        width = _parse_dimension(element.get_attribute("width"))
        return ExtractedImage(
            url=url,
            alt=_attr_text(element, "alt"),
            caption=_attr_text(element, "title"),
            width=width if width is not None else chosen_width,
            height=_parse_dimension(element.get_attribute("height")),
            is_main_image=False,
        )

    def _meta_image_urls(self, document: HTMLDocument, base_url: str) -> List[str]:
        candidates: List[Optional[str]] = [
            document.meta_content("og:image"),
            document.meta_content("twitter:image"),
        ]
        image_src = document.query_selector("link[rel~='image_src']")
        candidates.append(image_src.get_attribute("href") if image_src else None)

        urls: List[str] = []
        for candidate in candidates[: self.max_meta_images]:
            if candidate:
                value = candidate.strip()
                urls.append(value if is_data_uri(value) else resolve_url(html_lib.unescape(value), base_url))
        return [url for url in urls if url]


class VideoProcessor:
    """Collect YouTube/Vimeo embeds, other known hosts, and native <video> elements."""

    YOUTUBE_TOKENS: Tuple[str, ...] = ("youtube.com", "youtu.be", "youtube-nocookie.com")
    VIMEO_TOKENS: Tuple[str, ...] = ("vimeo.com",)
    OTHER_HOSTS: Tuple[Tuple[str, str], ...] = (
        ("dailymotion.com", "dailymotion"),
        ("dai.ly", "dailymotion"),
        ("player.twitch.tv", "twitch"),
        ("wistia", "wistia"),
        ("embed.ted.com", "ted"),
    )
    YOUTUBE_ID_PATTERNS: Tuple[re.Pattern[str], ...] = (
        re.compile(r"youtube\.com/watch\?(?:[^#]*&)?v=([^&#]+)", re.IGNORECASE),
        re.compile(r"youtu\.be/([^?&#/]+)", re.IGNORECASE),
        re.compile(r"youtube(?:-nocookie)?\.com/embed/([^?&#/]+)", re.IGNORECASE),
    )
    YOUTUBE_THUMBNAIL = "https://img.youtube.com/vi/{video_id}/maxresdefault.jpg"

    def extract_videos(self, html: str, base_url: str) -> List[ExtractedVideo]:
        """Extract videos; duplicates are kept."""
        document = HTMLDocument(html)
        iframes: List[Tuple[HTMLElement, str]] = []
        for element in document.elements("iframe"):
            src = _attr_url(element, "src") or _attr_url(element, "data-src")
            if src:
                iframes.append((element, src))

        videos: List[ExtractedVideo] = []
        for element, src in iframes:
            if self._has_token(src, self.YOUTUBE_TOKENS):
                videos.append(self._youtube_video(element, src, base_url))
        for element, src in iframes:
            if self._has_token(src, self.VIMEO_TOKENS):
                videos.append(
                    ExtractedVideo(
                        url=resolve_url(src, base_url),
                        title=_attr_text(element, "title") or "Vimeo Video",
                        platform=VideoPlatform.vimeo(),
                    )
                )
        for element, src in iframes:
            label = self._other_platform(src)
            if label:
                videos.append(
                    ExtractedVideo(
                        url=resolve_url(src, base_url),
                        title=_attr_text(element, "title") or f"{label.title()} Video",
                        platform=VideoPlatform.other(label),
                    )
                )

        for element in document.elements("video"):
            video = self._native_video(document, element, base_url)
            if video is not None:
                videos.append(video)

        return videos

    @staticmethod
    def _has_token(src: str, tokens: Sequence[str]) -> bool:
        lowered = src.lower()
        return any(token in lowered for token in tokens)

    def _other_platform(self, src: str) -> Optional[str]:
        if self._has_token(src, self.YOUTUBE_TOKENS) or self._has_token(src, self.VIMEO_TOKENS):
            return None
        lowered = src.lower()
        for token, label in self.OTHER_HOSTS:
            if token in lowered:
                return label
        return None

    @classmethod
    def youtube_video_id(cls, src: str) -> Optional[str]:
        """Video ID from watch, short-link, or embed URL shapes."""
        for pattern in cls.YOUTUBE_ID_PATTERNS:
            match = pattern.search(src)
            if match:
                return match.group(1)
        return None

    def _youtube_video(self, element: HTMLElement, src: str, base_url: str) -> ExtractedVideo:
        video_id = self.youtube_video_id(src)
        return ExtractedVideo(
            url=resolve_url(src, base_url),
            title=_attr_text(element, "title") or "YouTube Video",
            platform=VideoPlatform.youtube(),
            thumbnail=self.YOUTUBE_THUMBNAIL.format(video_id=video_id) if video_id else None,
        )

    def _native_video(self, document: HTMLDocument, element: HTMLElement, base_url: str) -> Optional[ExtractedVideo]:
        src = _attr_url(element, "src")
        if not src:
            for source in document.elements("source", element.content_start, element.content_end):
                src = _attr_url(source, "src")
                if src:
                    break
        if not src:
            return None

        poster = _attr_url(element, "poster")
        return ExtractedVideo(
            url=resolve_url(src, base_url),
            title=_attr_text(element, "title"),
            platform=VideoPlatform.direct(),
            thumbnail=resolve_url(poster, base_url) if poster else None,
            duration=_attr_text(element, "duration") or None,
        )


class AudioProcessor:
    """Collect <audio> sources, linked audio files, and meta audio."""

    AUDIO_EXTENSIONS: Tuple[str, ...] = (".mp3", ".wav", ".m4a", ".aac", ".ogg", ".oga", ".opus")
    META_KEYS: Tuple[str, ...] = ("og:audio", "twitter:player:stream")

    def __init__(self, default_title: str = "Audio") -> None:
        self.default_title = default_title

    def extract_audios(self, html: str, base_url: str, page_html: Optional[str] = None) -> List[ExtractedAudio]:
        document = HTMLDocument(html)
        audios: List[ExtractedAudio] = []

        for element in document.elements("audio"):
            title = _attr_text(element, "title") or self.default_title
            duration = _attr_text(element, "duration") or _attr_text(element, "data-duration") or None
            sources = [_attr_url(element, "src")]
            sources.extend(
                _attr_url(source, "src")
                for source in document.elements("source", element.content_start, element.content_end)
            )
            for src in sources:
                if src:
                    audios.append(ExtractedAudio(url=resolve_url(src, base_url), title=title, duration=duration))

        for element in document.elements("a"):
            href = _attr_url(element, "href")
            if not href or not self.is_audio_url(href):
                continue
            audios.append(
                ExtractedAudio(
                    url=resolve_url(href, base_url),
                    title=inline_text(element.inner_html) or self.default_title,
                )
            )

        meta_document = HTMLDocument(page_html) if page_html is not None else document
        for key in self.META_KEYS:
            content = meta_document.meta_content(key)
            if content:
                audios.append(ExtractedAudio(url=resolve_url(html_lib.unescape(content), base_url), title=self.default_title))

        return dedupe_by_url(audio for audio in audios if audio.url)

    @classmethod
    def is_audio_url(cls, href: str) -> bool:
        try:
            path = urlparse(href).path
        except ValueError:
            path = href
        return path.lower().endswith(cls.AUDIO_EXTENSIONS)


class LinkProcessor:
    """Collect every anchor with a non-empty href."""

    def extract_links(self, html: str, base_url: str) -> List[ExtractedLink]:
        links: List[ExtractedLink] = []
        for element in HTMLDocument(html).elements("a"):
            href = _attr_url(element, "href")
            if not href:
                continue
            url = resolve_url(href, base_url)
            links.append(
                ExtractedLink(
                    url=url,
                    title=inline_text(element.inner_html),
                    description=_attr_text(element, "title"),
                    is_external=is_external_url(url, base_url),
                )
            )
        return links


class TextProcessor:
    """Pick the main content container and reduce it to text."""

    CONTENT_SELECTORS: Tuple[str, ...] = (
        "article",
        ".article-content",
        ".post-content",
        ".entry-content",
        ".content",
        "main",
        ".main-content",
    )

    def extract_main_text(self, document: HTMLDocument) -> str:
        """
        First non-empty container from the selector cascade, else <body>,
        else the whole document.
        """
        for selector in self.CONTENT_SELECTORS:
            element = document.query_selector(selector)
            if element is None:
                continue
            text = reduce_to_text(element.inner_html)
            if text:
                logger.debug("main_text_container", selector=selector, length=len(text))
                return text

        body = document.query_selector("body")
        if body is not None:
            return reduce_to_text(body.inner_html)
        return reduce_to_text(document.html)
