"""
Property-based tests for the extraction engine.

Arbitrary and hostile inputs must never make extraction raise, and the
result invariants have to hold for every input.
"""

import asyncio

import pytest
from gleancore.extractor import ContentExtractor, reduce_to_text, resolve_url
from gleancore.extractor.content_processors import AudioProcessor, ImageProcessor
from hypothesis import HealthCheck, given, settings
from hypothesis import strategies as st

BASE_URL = "https://example.com/news/"

_fragments = st.sampled_from(
    [
        "<p>",
        "</p>",
        "<div class='content'>",
        "</div>",
        "<article>",
        "</article>",
        "<script>",
        "</script>",
        "<!--",
        "-->",
        "<img src='/a.jpg'>",
        "<img src=\"/a.jpg\" srcset=\"/a-1.jpg 1x, /a-2.jpg 2x\">",
        "<audio src='/a.mp3'>",
        "<a href='/x'>x</a>",
        "<iframe src='https://www.youtube.com/embed/abc'>",
        "<meta property='og:image' content='/a.jpg'>",
        "&amp;",
        "<",
        ">",
        "\"",
        " ",
        "word",
    ]
)
html_soup = st.lists(st.one_of(_fragments, st.text(max_size=20)), max_size=40).map("".join)


@pytest.mark.unit
class TestExtractionProperties:
    """Result invariants over arbitrary markup."""

    @given(html=html_soup)
    @settings(max_examples=60, deadline=2000, suppress_health_check=[HealthCheck.too_slow])
    def test_never_raises_and_metrics_hold(self, html):
        content = asyncio.run(ContentExtractor().extract_content(html, BASE_URL))

        assert content.word_count >= 0
        assert content.reading_time >= 1
        assert content.word_count == len(content.main_text.split())
        assert content.metadata.word_count == content.word_count
        assert content.metadata.reading_time == content.reading_time
        assert content.title

    @given(words=st.integers(min_value=0, max_value=1200))
    @settings(max_examples=25, deadline=2000)
    def test_reading_time_floor(self, words):
        html = "<article><p>" + " ".join(["word"] * words) + "</p></article>"
        content = ContentExtractor()._extract(html, BASE_URL)
        assert content.reading_time == max(1, content.word_count // 200)


@pytest.mark.unit
class TestScannerProperties:
    """Deduplication and URL shape over arbitrary markup."""

    @given(html=html_soup)
    @settings(max_examples=60, deadline=2000)
    def test_image_urls_unique(self, html):
        images = ImageProcessor().extract_images(html, BASE_URL)
        urls = [image.url for image in images]
        assert len(urls) == len(set(urls))
        assert all(url for url in urls)

    @given(html=html_soup)
    @settings(max_examples=60, deadline=2000)
    def test_audio_urls_unique(self, html):
        audios = AudioProcessor().extract_audios(html, BASE_URL)
        urls = [audio.url for audio in audios]
        assert len(urls) == len(set(urls))

    @given(fragment=st.text(max_size=300))
    @settings(max_examples=100, deadline=1000)
    def test_reduce_to_text_total(self, fragment):
        text = reduce_to_text(fragment)
        assert text == text.strip()
        assert "  " not in text


@pytest.mark.unit
class TestUrlProperties:
    @given(path=st.text(alphabet="abcdefghijklmnopqrstuvwxyzäöüé0123456789", max_size=30))
    @settings(max_examples=50, deadline=1000)
    def test_absolute_urls_are_fixed_points(self, path):
        url = f"https://cdn.example.org/{path}"
        assert resolve_url(url, BASE_URL) == url
        assert resolve_url(resolve_url(url, BASE_URL), BASE_URL) == url

    @given(payload=st.text(alphabet="abcdefghijklmnopqrstuvwxyz0123456789+/=", max_size=40))
    @settings(max_examples=50, deadline=1000)
    def test_data_uris_unchanged(self, payload):
        uri = f"data:image/png;base64,{payload}"
        assert resolve_url(uri, BASE_URL) == uri

    @given(
        path=st.text(alphabet="abcdefghijklmnopqrstuvwxyz/-", min_size=1, max_size=30).filter(
            lambda p: not p.startswith("//")
        )
    )
    @settings(max_examples=50, deadline=1000)
    def test_relative_urls_become_absolute(self, path):
        resolved = resolve_url(path, BASE_URL)
        assert resolved.startswith("https://example.com/")
        assert resolve_url(resolved, BASE_URL) == resolved
