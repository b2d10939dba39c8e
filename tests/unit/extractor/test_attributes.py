"""
Unit tests for raw-tag attribute lookup.
"""

import pytest
from gleancore.extractor.attributes import get_attribute, get_attributes, get_tag_name


class TestGetAttribute:
    """Quoting styles, ordering and name boundaries."""

    @pytest.mark.parametrize(
        "tag",
        [
            '<img src="a.jpg">',
            "<img src='a.jpg'>",
            "<img src=a.jpg>",
            '<img SRC = "a.jpg">',
        ],
    )
    def test_quoting_styles(self, tag):
        assert get_attribute("src", tag) == "a.jpg"

    def test_missing_attribute(self):
        assert get_attribute("alt", '<img src="a.jpg">') is None

    def test_empty_value_is_absent(self):
        assert get_attribute("alt", '<img alt="" src="a.jpg">') is None

    def test_does_not_match_longer_attribute_name(self):
        tag = '<img data-src="lazy.jpg">'
        assert get_attribute("src", tag) is None
        assert get_attribute("data-src", tag) == "lazy.jpg"

    def test_prefers_double_quoted_value(self):
        tag = "<a title='single' title=\"double\">"
        assert get_attribute("title", tag) == "double"

    def test_single_quoted_value_may_contain_double_quotes(self):
        assert get_attribute("alt", """<img alt='He said "hi"'>""") == 'He said "hi"'

    def test_unquoted_value_stops_at_tag_end(self):
        assert get_attribute("width", "<img width=640>") == "640"

    def test_empty_inputs(self):
        assert get_attribute("", "<img src=a>") is None
        assert get_attribute("src", "") is None


class TestTagHelpers:
    def test_tag_name_is_lowercased(self):
        assert get_tag_name('<IMG src="a.jpg">') == "img"
        assert get_tag_name("not a tag") is None

    def test_get_attributes_first_occurrence_wins(self):
        attributes = get_attributes('<meta Name="author" content="Jane" name="other" async>')
        assert attributes == {"name": "author", "content": "Jane", "async": ""}
