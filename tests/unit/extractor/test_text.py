"""
Unit tests for the plain-text reducer.
"""

from gleancore.extractor.text import collapse_whitespace, inline_text, reduce_to_lines, reduce_to_text, strip_css_leakage


class TestReduceToText:
    """Ordering of removal steps and CSS leakage cleanup."""

    def test_script_removed_and_tags_stripped(self):
        assert reduce_to_text("<script>var x=1;</script><p>Hello <b>World</b></p>") == "Hello World"

    def test_style_and_comments_removed(self):
        html = "<style>p { color: red }</style><!-- hidden <p>note</p> --><p>Visible</p>"
        assert reduce_to_text(html) == "Visible"

    def test_multiline_script_with_markup(self):
        html = "<div>Before</div><script type='text/javascript'>\nif (a < b) { document.write('<p>x</p>'); }\n</script><div>After</div>"
        assert reduce_to_text(html) == "Before After"

    def test_block_tags_separate_words(self):
        assert reduce_to_text("<p>One</p><p>Two</p><li>Three</li>") == "One Two Three"

    def test_inline_tags_do_not_split_words(self):
        assert reduce_to_text("<p>bold<b>er</b></p>") == "bolder"

    def test_entities_decoded(self):
        assert reduce_to_text("<p>Fish &amp; Chips &mdash; &#8220;fresh&#8221;</p>") == "Fish & Chips — “fresh”"

    def test_css_leakage_removed(self):
        html = "<div>.hero { margin: 0 } @media (max-width: 600px) { .hero { display: none } } Real text</div>"
        assert reduce_to_text(html) == "Real text"

    def test_whitespace_collapsed(self):
        assert reduce_to_text("<p>  a \n\n\t b  </p>") == "a b"

    def test_empty(self):
        assert reduce_to_text("") == ""
        assert reduce_to_text("<div></div>") == ""


class TestReduceToLines:
    """Block boundaries survive as line breaks."""

    def test_blocks_become_lines(self):
        html = "<header><p>By  Jane Doe</p></header>\n<article><p>Today the <b>council</b> met.</p></article>"
        assert reduce_to_lines(html) == "By Jane Doe\nToday the council met."

    def test_source_newlines_are_spaces(self):
        assert reduce_to_lines("<p>one\n  two</p><script>x</script><p>three</p>") == "one two\nthree"

    def test_empty(self):
        assert reduce_to_lines("") == ""
        assert reduce_to_lines("<div></div>") == ""


class TestHelpers:
    def test_strip_css_leakage_keeps_prose(self):
        assert collapse_whitespace(strip_css_leakage("Price is 5.00 today")) == "Price is 5.00 today"

    def test_strip_css_selector_tokens(self):
        assert collapse_whitespace(strip_css_leakage("text .sidebar #main more")) == "text more"

    def test_inline_text(self):
        assert inline_text("  Read <em>the</em>\n report &amp; more ") == "Read the report & more"
        assert inline_text("") == ""
