"""
Unit tests for the lightweight HTML document view.
"""

from gleancore.extractor.document import (
    HTMLDocument,
    find_implied_close,
    find_matching_close,
    mask_raw_text,
    parse_selector,
)

PAGE = """
<html lang="de">
<head>
  <meta property="og:title" content="Headline">
  <meta name="Description" content="  Summary  ">
  <meta property="article:tag" content="one"><meta property="article:tag" content="two">
  <script>document.write("<div class='content'>fake</div>");</script>
</head>
<body>
  <div class="outer content">
    <div class="inner">Nested <span>text</span></div>
    <p id="lead" data-role="intro">Lead paragraph</p>
  </div>
  <ul class="tags"><li><a rel="tag" href="/t/a">A</a></li><li><a rel="tag nofollow" href="/t/b">B</a></li></ul>
  <img src="a.jpg"><br/>
</body>
</html>
"""


class TestMasking:
    def test_offsets_preserved(self):
        masked = mask_raw_text(PAGE)
        assert len(masked) == len(PAGE)
        assert "fake" not in masked
        assert masked.count("<script>") == 1

    def test_comments_blanked(self):
        masked = mask_raw_text("a<!-- <div> -->b")
        assert masked == "a" + " " * len("<!-- <div> -->") + "b"


class TestMatchingClose:
    def test_nested_same_name(self):
        html = "<div><div>x</div></div>tail"
        close = find_matching_close(html, "div", len("<div>"))
        assert html[close[0] : close[1]] == "</div>"
        assert close[1] == html.index("tail")

    def test_unclosed(self):
        assert find_matching_close("<div>open", "div", 5) is None


class TestSelectors:
    def test_parse_group_and_descendant(self):
        groups = parse_selector(".tags a, #lead")
        assert len(groups) == 2
        assert len(groups[0]) == 2
        assert groups[1][0].element_id == "lead"

    def test_unsupported_selector_matches_nothing(self):
        assert parse_selector("div > p") == ()
        assert HTMLDocument(PAGE).query_selector("div > p") is None


class TestHTMLDocument:
    """Queries over elements found by tag scanning."""

    def test_script_contents_are_not_elements(self):
        document = HTMLDocument(PAGE)
        contents = document.query_selector_all(".content")
        assert len(contents) == 1
        assert contents[0].get_attribute("class") == "outer content"

    def test_nested_inner_html(self):
        element = HTMLDocument(PAGE).query_selector("div.content")
        assert "Lead paragraph" in element.inner_html
        assert element.text == "Nested text Lead paragraph"

    def test_id_and_attribute_selectors(self):
        document = HTMLDocument(PAGE)
        assert document.query_selector("#lead").text == "Lead paragraph"
        assert document.query_selector("[data-role='intro']").name == "p"
        assert document.query_selector("p[data-role^=int]") is not None
        assert document.query_selector("[data-role$='x']") is None

    def test_word_list_attribute_match(self):
        anchors = HTMLDocument(PAGE).query_selector_all("a[rel~='tag']")
        assert [a.text for a in anchors] == ["A", "B"]

    def test_descendant_selector(self):
        anchors = HTMLDocument(PAGE).query_selector_all(".tags a")
        assert [a.get_attribute("href") for a in anchors] == ["/t/a", "/t/b"]

    def test_void_elements_have_no_content(self):
        image = HTMLDocument(PAGE).query_selector("img")
        assert image.inner_html == ""
        assert image.outer_html == '<img src="a.jpg">'

    def test_meta_lookup(self):
        document = HTMLDocument(PAGE)
        assert document.meta_content("og:title") == "Headline"
        assert document.meta_content("description") == "Summary"
        assert document.meta_content("missing") is None
        assert document.meta_contents("article:tag") == ["one", "two"]

    def test_meta_value(self):
        meta = HTMLDocument(PAGE).query_selector("meta[property='og:title']")
        assert meta.value == "Headline"

    def test_elements_in_span(self):
        document = HTMLDocument(PAGE)
        outer = document.query_selector("div.content")
        names = [element.name for element in document.elements(start=outer.content_start, end=outer.content_end)]
        assert names == ["div", "span", "p"]

    def test_unclosed_element_runs_to_end(self):
        element = HTMLDocument("<div class='x'>open text").query_selector(".x")
        assert element.text == "open text"

    def test_empty_document(self):
        document = HTMLDocument("")
        assert document.query_selector("p") is None
        assert list(document.elements()) == []


class TestImpliedClose:
    """Elements whose close tag is commonly omitted."""

    def test_paragraph_ends_at_next_sibling(self):
        html = "<div><p>one<p>two</div>tail"
        paragraphs = HTMLDocument(html).query_selector_all("p")
        assert [p.text for p in paragraphs] == ["one", "two"]

    def test_paragraph_ends_at_enclosing_close(self):
        document = HTMLDocument("<div><p>inside <b>bold</b></div><p>after</p>")
        first = document.query_selector("p")
        assert first.inner_html == "inside <b>bold</b>"

    def test_unclosed_anchors(self):
        html = "<div><a href='/1'>first <a href='/2'>second</div>"
        anchors = HTMLDocument(html).query_selector_all("a")
        assert [(a.get_attribute("href"), a.text) for a in anchors] == [("/1", "first"), ("/2", "second")]

    def test_nested_list_items_stay_nested(self):
        html = "<ul><li>outer<ul><li>inner</li></ul></li><li>next</li></ul>"
        items = HTMLDocument(html).query_selector_all("li")
        assert items[0].text == "outer inner"
        assert [item.text for item in items[1:]] == ["inner", "next"]

    def test_closed_paragraph_uses_close_tag(self):
        html = "<p>one <span>two</span></p>rest"
        close = find_implied_close(html, "p", len("<p>"))
        assert html[close[0] : close[1]] == "</p>"

    def test_span_resolved_lazily(self):
        document = HTMLDocument("<section>" + "<div>" * 50 + "text")
        element = document.query_selector("section")
        assert element._span is None
        assert element.text == "text"
        assert element._span == (len(document.html), len(document.html))
