"""Unit tests for toc.renderer module."""

from bs4 import BeautifulSoup

from mintydocs.toc.renderer import HtmlRenderer


class TestInlineLinks:
    """Test cases for HtmlRenderer.render_inline_link()."""

    def test_link_to_existing_page(self, renderer):
        html = renderer.render_inline_link("Widget/1.9/Guide", "About")
        assert html == '<a href="/wiki/Widget/1.9/Guide">About</a>'

    def test_missing_page_gets_new_class(self, renderer):
        link = BeautifulSoup(
            renderer.render_inline_link("Widget/1.9/Guide/Faq", "Faq"), "html.parser"
        ).a
        assert link["class"] == ["new"]

    def test_spaces_and_query(self):
        renderer = HtmlRenderer(base_url="/docs/")
        link = BeautifulSoup(
            renderer.render_inline_link("Main Page", "Home", {"action": "formedit"}),
            "html.parser",
        ).a
        assert link["href"] == "/docs/Main_Page?action=formedit"
        assert link.get("class") is None

    def test_label_is_escaped(self):
        html = HtmlRenderer().render_inline_link("Widget", "<b>Widget</b>")
        assert "&lt;b&gt;" in html


class TestTextAndStripping:
    """Test cases for render_text and strip_block_tags."""

    def test_render_text_escapes(self):
        assert HtmlRenderer().render_text("Tips & tricks") == "Tips &amp; tricks"

    def test_strip_block_tags(self):
        assert HtmlRenderer().strip_block_tags("<div>*Install</div>") == "*Install"


class TestParseBlockList:
    """Test cases for HtmlRenderer.parse_block_list()."""

    def test_nested_list(self):
        html = HtmlRenderer().parse_block_list("*One\n**Two\n*Three")
        soup = BeautifulSoup(html, "html.parser")

        top_items = soup.ul.find_all("li", recursive=False)
        assert [item.contents[0] for item in top_items] == ["One", "Three"]
        assert top_items[0].ul.li.get_text() == "Two"

    def test_skipped_level_gets_empty_item(self):
        html = HtmlRenderer().parse_block_list("***Deep")
        soup = BeautifulSoup(html, "html.parser")

        assert soup.select_one("ul > li > ul > li > ul > li").get_text() == "Deep"


class TestToMarkdown:
    """Test cases for HtmlRenderer.to_markdown()."""

    def test_links_and_bullets(self):
        markdown = HtmlRenderer.to_markdown(
            '<ul><li><a href="/wiki/Widget">About</a></li></ul>'
        )
        assert "[About](/wiki/Widget)" in markdown
        assert markdown.startswith("*")
