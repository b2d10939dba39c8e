"""
Content Extractor - Orchestration of the Extraction Cascade

Sequences isolation, main-text selection with fallback retries, the tag
scanners, metadata cascades, language detection and the author cascade
into one frozen ``ExtractedContent``. Each stage degrades to its default
on failure; no input makes the call raise.
"""

from __future__ import annotations

import time
import uuid
from typing import Callable, List, Optional, TypeVar

import structlog
from structlog.contextvars import bound_contextvars

from ..config.config import ExtractionSettings
from ..metadata.author_extractor import AuthorExtractor, extract_selector_author
from ..metadata.date_extractor import DateExtractor
from ..metadata.metadata_extractor import MetadataExtractor
from ..metadata.structured_data_parser import StructuredDataParser
from ..observability import histogram, increment
from ..protocols import ContentMetadata, ExtractedContent
from .content_processors import AudioProcessor, ImageProcessor, LinkProcessor, TextProcessor, VideoProcessor
from .document import HTMLDocument
from .isolator import isolate_article
from .language_detector import LanguageDetector
from .text import reduce_to_text

logger = structlog.get_logger(__name__)

_R = TypeVar("_R")


class ContentExtractor:
    """
    Heuristic HTML-to-article extractor.

    Stateless between calls: every ``extract_content`` builds its own
    documents and results, so one instance can serve concurrent callers.
    """

    def __init__(self, settings: Optional[ExtractionSettings] = None) -> None:
        self.settings = settings or ExtractionSettings()

        self.text_processor = TextProcessor()
        self.image_processor = ImageProcessor(
            max_width=self.settings.srcset_max_width,
            max_meta_images=self.settings.max_meta_images,
        )
        self.video_processor = VideoProcessor()
        self.audio_processor = AudioProcessor(default_title=self.settings.default_audio_title)
        self.link_processor = LinkProcessor()
        self.metadata_extractor = MetadataExtractor(default_title=self.settings.default_title)
        self.date_extractor = DateExtractor()
        self.author_extractor = AuthorExtractor(
            blocklist=self.settings.author_blocklist,
            byline_scan_chars=self.settings.byline_scan_chars,
        )
        self.language_detector = LanguageDetector()

    async def __aenter__(self) -> "ContentExtractor":
        return self

    async def __aexit__(
        self,
        exc_type: Optional[type],
        exc_val: Optional[Exception],
        exc_tb: Optional[object],
    ) -> None:
        return None

    async def extract_content(self, html: str, base_url: str) -> ExtractedContent:
        """
        Extract structured article content from raw HTML.

        Args:
            html: Decoded page source, complete or partial
            base_url: Absolute URL the page was fetched from

        Returns:
            ExtractedContent built fresh for this call
        """
        html = html or ""
        base_url = (base_url or "").strip()
        start_time = time.perf_counter()

        with bound_contextvars(extraction_id=uuid.uuid4().hex[:12]):
            logger.info("extraction_started", html_length=len(html), base_url=base_url)

            content = self._extract(html, base_url)

            duration = time.perf_counter() - start_time
            outcome = "success" if content.main_text else "empty"
            increment("extractions", labels={"outcome": outcome})
            histogram("extraction_duration_seconds", duration)
            for kind, items in (
                ("images", content.images),
                ("videos", content.videos),
                ("audios", content.audios),
                ("links", content.links),
            ):
                histogram("extracted_items", len(items), labels={"kind": kind})

            logger.info(
                "extraction_completed",
                outcome=outcome,
                title=content.title,
                word_count=content.word_count,
                reading_time=content.reading_time,
                images=len(content.images),
                videos=len(content.videos),
                audios=len(content.audios),
                links=len(content.links),
                duration_ms=round(duration * 1000, 2),
            )
        return content

    async def extract(self, html: str, base_url: str) -> ExtractedContent:
        """Alias of ``extract_content``."""
        return await self.extract_content(html, base_url)

    @staticmethod
    def _run_stage(stage: str, func: Callable[[], _R], default: _R) -> _R:
        try:
            return func()
        except Exception:
            logger.warning("extraction_stage_failed", stage=stage, exc_info=True)
            return default

    def _extract(self, html: str, base_url: str) -> ExtractedContent:
        settings = self.settings

        # 1-2. isolate and wrap
        isolated = self._run_stage(
            "isolation",
            lambda: isolate_article(html, settings.container_hints, settings.isolation_window),
            html,
        )
        isolated_document = HTMLDocument(isolated)
        page_document = isolated_document if isolated == html else HTMLDocument(html)
        documents = MetadataExtractor.document_chain(isolated_document, page_document)
        logger.debug("article_isolated", isolated_length=len(isolated), page_length=len(html))

        # 3. title and description
        title = self._run_stage(
            "title", lambda: self.metadata_extractor.extract_title(documents), settings.default_title
        )
        description = self._run_stage(
            "description", lambda: self.metadata_extractor.extract_description(documents), ""
        )

        # 4-5. main text with fallback retries
        main_text = self._main_text(html, isolated_document, page_document)

        # 6. scanners
        images = self._run_stage(
            "images", lambda: self.image_processor.extract_images(isolated, base_url, page_html=html), []
        )
        videos = self._run_stage("videos", lambda: self.video_processor.extract_videos(isolated, base_url), [])
        audios = self._run_stage(
            "audios", lambda: self.audio_processor.extract_audios(isolated, base_url, page_html=html), []
        )
        links = self._run_stage("links", lambda: self.link_processor.extract_links(isolated, base_url), [])
        logger.debug(
            "media_extracted", images=len(images), videos=len(videos), audios=len(audios), links=len(links)
        )

        # 7. metadata and language
        structured_data = self._run_stage("structured_data", lambda: StructuredDataParser(html), None)
        selector_author = self._run_stage("selector_author", lambda: extract_selector_author(documents), None)
        publish_date = self._run_stage(
            "publish_date", lambda: self.date_extractor.extract_publish_date(documents, structured_data), None
        )
        category = self._run_stage(
            "category", lambda: self.metadata_extractor.extract_category(documents, structured_data), None
        )
        tags: List[str] = self._run_stage(
            "tags", lambda: self.metadata_extractor.extract_tags(documents, structured_data), []
        )
        language = self._run_stage("language", lambda: self.metadata_extractor.extract_language(documents), None)
        if not language and main_text and settings.detect_language:
            language = self._run_stage(
                "language_detection", lambda: self.language_detector.detect_language(main_text), None
            )

        # 8. derived metrics
        word_count = len(main_text.split())
        reading_time = max(1, word_count // settings.words_per_minute)

        # 9. smart author over the full page, preferred over the selector match
        author = self._run_stage("author", lambda: self.author_extractor.extract_author(html), None)
        if not author:
            author = selector_author

        # 10. assemble
        metadata = ContentMetadata(
            author=author,
            publish_date=publish_date,
            category=category,
            tags=tuple(tags),
            language=language,
            word_count=word_count,
            reading_time=reading_time,
        )
        return ExtractedContent(
            title=title,
            description=description,
            main_text=main_text,
            images=tuple(images),
            videos=tuple(videos),
            audios=tuple(audios),
            links=tuple(links),
            metadata=metadata,
            reading_time=reading_time,
            word_count=word_count,
        )

    def _main_text(self, html: str, isolated_document: HTMLDocument, page_document: HTMLDocument) -> str:
        settings = self.settings
        main_text = self._run_stage(
            "main_text", lambda: self.text_processor.extract_main_text(isolated_document), ""
        )

        if len(main_text) < settings.min_main_text_length:
            full_page_text = self._run_stage(
                "main_text_full_page", lambda: self.text_processor.extract_main_text(page_document), ""
            )
            if len(full_page_text) > len(main_text):
                logger.debug("text_fallback", stage="full_page", before=len(main_text), after=len(full_page_text))
                increment("text_fallbacks", labels={"stage": "full_page"})
                main_text = full_page_text

        if len(main_text) < settings.min_fallback_text_length:
            raw_text = self._run_stage("raw_text", lambda: reduce_to_text(html), "")
            logger.debug("text_fallback", stage="raw_text", before=len(main_text), after=len(raw_text))
            increment("text_fallbacks", labels={"stage": "raw_text"})
            main_text = raw_text

        return main_text


async def extract_content(
    html: str,
    base_url: str,
    settings: Optional[ExtractionSettings] = None,
) -> ExtractedContent:
    """Run one extraction with a fresh ``ContentExtractor``."""
    return await ContentExtractor(settings).extract_content(html, base_url)
