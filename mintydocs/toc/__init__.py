"""Tables of contents: microsyntax parser, TOC engine and renderers."""

from .engine import ABOUT_LABEL, TocEngine, suppress_empty_headers
from .models import TableOfContents, TocEntry, TocLine, TocNodeKind, TocTreeNode, build_tree
from .parser import normalize_name, parse_line, parse_toc_markup
from .renderer import HtmlRenderer, Renderer

__all__ = [
    "ABOUT_LABEL",
    "HtmlRenderer",
    "Renderer",
    "TableOfContents",
    "TocEngine",
    "TocEntry",
    "TocLine",
    "TocNodeKind",
    "TocTreeNode",
    "build_tree",
    "normalize_name",
    "parse_line",
    "parse_toc_markup",
    "suppress_empty_headers",
]
