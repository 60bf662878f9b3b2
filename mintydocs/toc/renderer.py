"""Markup renderer used by the TOC engine.

The TOC engine only needs three things from a renderer: stripping embedded
tags from TOC markup, rendering links and labels, and turning asterisk
bullet lines into a nested list. HtmlRenderer implements them with
BeautifulSoup and can convert its output to markdown with markdownify.
"""

import logging
from abc import ABC, abstractmethod
from typing import Dict, List, Optional
from urllib.parse import quote, urlencode

from bs4 import BeautifulSoup
from markdownify import markdownify

from ..page_store.store import PageStore

logger = logging.getLogger(__name__)


class Renderer(ABC):
    """Interface of the markup renderer."""

    @abstractmethod
    def strip_block_tags(self, text: str) -> str:
        """Remove embedded markup tags, keeping their text."""

    @abstractmethod
    def parse_block_list(self, markup: str) -> str:
        """Render lines starting with asterisks as a nested list."""

    @abstractmethod
    def render_inline_link(
        self,
        identity: str,
        label: str,
        query_params: Optional[Dict[str, str]] = None
    ) -> str:
        """Render a link to a page."""

    @abstractmethod
    def render_text(self, text: str) -> str:
        """Render a literal label."""


class HtmlRenderer(Renderer):
    """Renders TOC markup to HTML.

    Args:
        store: Optional page store; when given, links to pages that do not
            exist get the CSS class "new"
        base_url: Prefix of page URLs

    Example:
        >>> renderer = HtmlRenderer()
        >>> renderer.render_inline_link("Widget/1.0/Guide", "About")
        '<a href="/wiki/Widget/1.0/Guide">About</a>'
    """

    def __init__(self, store: Optional[PageStore] = None, base_url: str = "/wiki/"):
        self.store = store
        self.base_url = base_url

    def strip_block_tags(self, text: str) -> str:
        return BeautifulSoup(text, "html.parser").get_text()

    def page_url(self, identity: str, query_params: Optional[Dict[str, str]] = None) -> str:
        url = self.base_url + quote(identity.replace(" ", "_"), safe="/:")
        if query_params:
            url += "?" + urlencode(query_params)
        return url

    def render_inline_link(
        self,
        identity: str,
        label: str,
        query_params: Optional[Dict[str, str]] = None
    ) -> str:
        soup = BeautifulSoup("", "html.parser")
        link = soup.new_tag("a", href=self.page_url(identity, query_params))
        link.string = label
        if self.store is not None and not self.store.exists(identity):
            link["class"] = "new"
        return str(link)

    def render_text(self, text: str) -> str:
        soup = BeautifulSoup("", "html.parser")
        span = soup.new_tag("span")
        span.string = text
        return span.decode_contents()

    def parse_block_list(self, markup: str) -> str:
        """Render asterisk bullet lines as nested <ul>/<li> HTML.

        A line deeper than the one before it opens a nested list inside
        the previous item; skipped levels get empty items.
        """
        soup = BeautifulSoup("", "html.parser")
        root = soup.new_tag("ul")
        soup.append(root)
        lists: List = [root]

        for line in markup.splitlines():
            stripped = line.strip()
            if not stripped.startswith("*"):
                continue
            content = stripped.lstrip("*")
            depth = len(stripped) - len(content)

            while len(lists) > depth:
                lists.pop()
            while len(lists) < depth:
                parent_list = lists[-1]
                items = parent_list.find_all("li", recursive=False)
                if items:
                    parent_item = items[-1]
                else:
                    parent_item = soup.new_tag("li")
                    parent_list.append(parent_item)
                nested = soup.new_tag("ul")
                parent_item.append(nested)
                lists.append(nested)

            item = soup.new_tag("li")
            fragment = BeautifulSoup(content.strip(), "html.parser")
            for child in list(fragment.contents):
                item.append(child.extract())
            lists[-1].append(item)

        return str(root)

    @staticmethod
    def to_markdown(html: str) -> str:
        """Convert rendered HTML to markdown for terminal display."""
        return markdownify(html, bullets="*-+").strip()
