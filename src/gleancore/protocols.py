"""
Core dataclasses and protocols for GleanCore.

This module defines the in-memory contract produced by one extraction call.
Every structure is created fresh per call and frozen afterwards; storage and
presentation layers consume it read-only.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional, Protocol, Tuple, runtime_checkable

# ============================================================================
# Enums
# ============================================================================


class PlatformKind(Enum):
    """Known video hosting platforms."""

    YOUTUBE = "youtube"
    VIMEO = "vimeo"
    DIRECT = "direct"
    OTHER = "other"


@dataclass(frozen=True)
class VideoPlatform:
    """Closed platform variant; ``OTHER`` carries a free-form label."""

    kind: PlatformKind
    label: str = ""

    @classmethod
    def youtube(cls) -> VideoPlatform:
        return cls(PlatformKind.YOUTUBE)

    @classmethod
    def vimeo(cls) -> VideoPlatform:
        return cls(PlatformKind.VIMEO)

    @classmethod
    def direct(cls) -> VideoPlatform:
        return cls(PlatformKind.DIRECT)

    @classmethod
    def other(cls, label: str) -> VideoPlatform:
        return cls(PlatformKind.OTHER, label)

    @property
    def name(self) -> str:
        """Display name, the label for ``OTHER`` platforms."""
        if self.kind is PlatformKind.OTHER:
            return self.label or PlatformKind.OTHER.value
        return self.kind.value


# ============================================================================
# Extraction Results
# ============================================================================


@dataclass(frozen=True)
class ExtractedImage:
    """An image found in the article region or in page-level meta tags."""

    url: str
    alt: str = ""
    caption: str = ""
    width: Optional[int] = None
    height: Optional[int] = None
    is_main_image: bool = False

    def __post_init__(self) -> None:
        if not self.url:
            raise ValueError("Image URL cannot be empty")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "url": self.url,
            "alt": self.alt,
            "caption": self.caption,
            "width": self.width,
            "height": self.height,
            "is_main_image": self.is_main_image,
        }


@dataclass(frozen=True)
class ExtractedVideo:
    """An embedded or native video."""

    url: str
    title: str
    platform: VideoPlatform
    thumbnail: Optional[str] = None
    duration: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "url": self.url,
            "title": self.title,
            "thumbnail": self.thumbnail,
            "duration": self.duration,
            "platform": self.platform.name,
        }


@dataclass(frozen=True)
class ExtractedAudio:
    """An audio source from an <audio> block, a linked file or a meta tag."""

    url: str
    title: str
    duration: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {"url": self.url, "title": self.title, "duration": self.duration}


@dataclass(frozen=True)
class ExtractedLink:
    """An outbound or internal anchor."""

    url: str
    title: str = ""
    description: str = ""
    is_external: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "url": self.url,
            "title": self.title,
            "description": self.description,
            "is_external": self.is_external,
        }


@dataclass(frozen=True)
class ContentMetadata:
    """Article-level metadata with derived reading metrics folded in."""

    author: Optional[str] = None
    publish_date: Optional[datetime] = None
    category: Optional[str] = None
    tags: Tuple[str, ...] = ()
    language: Optional[str] = None
    word_count: int = 0
    reading_time: int = 1

    def __post_init__(self) -> None:
        if self.word_count < 0:
            raise ValueError("Word count cannot be negative")
        if self.reading_time < 1:
            raise ValueError("Reading time must be at least one minute")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "author": self.author,
            "publish_date": self.publish_date.isoformat() if self.publish_date else None,
            "category": self.category,
            "tags": list(self.tags),
            "language": self.language,
            "word_count": self.word_count,
            "reading_time": self.reading_time,
        }


@dataclass(frozen=True)
class ExtractedContent:
    """Root result of one extraction call."""

    title: str
    description: str
    main_text: str
    images: Tuple[ExtractedImage, ...] = ()
    videos: Tuple[ExtractedVideo, ...] = ()
    audios: Tuple[ExtractedAudio, ...] = ()
    links: Tuple[ExtractedLink, ...] = ()
    metadata: ContentMetadata = field(default_factory=ContentMetadata)
    reading_time: int = 1
    word_count: int = 0

    def __post_init__(self) -> None:
        if self.word_count < 0:
            raise ValueError("Word count cannot be negative")
        if self.reading_time < 1:
            raise ValueError("Reading time must be at least one minute")

    @property
    def main_image(self) -> Optional[ExtractedImage]:
        """First meta-sourced image, if any."""
        for image in self.images:
            if image.is_main_image:
                return image
        return None

    def to_dict(self) -> Dict[str, Any]:
        """JSON-compatible representation for downstream serialization."""
        return {
            "title": self.title,
            "description": self.description,
            "main_text": self.main_text,
            "images": [image.to_dict() for image in self.images],
            "videos": [video.to_dict() for video in self.videos],
            "audios": [audio.to_dict() for audio in self.audios],
            "links": [link.to_dict() for link in self.links],
            "metadata": self.metadata.to_dict(),
            "reading_time": self.reading_time,
            "word_count": self.word_count,
        }


# ============================================================================
# Protocols
# ============================================================================


@runtime_checkable
class ContentExtractorProtocol(Protocol):
    """Contract for HTML-to-ExtractedContent engines."""

    async def extract_content(self, html: str, base_url: str) -> ExtractedContent:
        """
        Extract structured article content from raw HTML.

        Args:
            html: Decoded page source, complete or partial
            base_url: Absolute URL the page was fetched from

        Returns:
            ExtractedContent built fresh for this call
        """
        ...

