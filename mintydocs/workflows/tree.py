"""Page trees walked by bulk workflows.

A Product's tree holds its Versions, a Version's tree its Manuals, and a
Manual's tree the entries of its table of contents, nested the way the TOC
nests them. Text and unmatched TOC entries become label nodes; borrowed
topics are leaves whose nested entries move up to the borrowed topic's level.
"""

import logging
from typing import List

from ..hierarchy.inheritance import InheritanceResolver
from ..hierarchy.model import HierarchyModel
from ..hierarchy.models import ManualPage, Page, ProductPage, VersionPage
from ..toc.engine import TocEngine
from ..toc.models import TocNodeKind, TocTreeNode
from .models import NodeKind, PageTreeNode

logger = logging.getLogger(__name__)


class PageTreeBuilder:
    """Builds the page tree under a hierarchy page.

    Args:
        model: Hierarchy model over the page store
        resolver: Inheritance resolver (for inherited manual lists)
        toc_engine: TOC engine (for Manual contents)
    """

    def __init__(self, model: HierarchyModel, resolver: InheritanceResolver, toc_engine: TocEngine):
        self.model = model
        self.resolver = resolver
        self.toc_engine = toc_engine

    def _page_node(self, page: Page) -> PageTreeNode:
        return PageTreeNode(
            kind=NodeKind.PAGE,
            label=self.model.display_name(page),
            identity=page.identity,
            page=page,
        )

    def make_tree(self, page: Page) -> PageTreeNode:
        """Return the tree of pages under (and including) a page."""
        node = self._page_node(page)
        if isinstance(page, ProductPage):
            node.children = [self.make_tree(version) for version in self.model.versions(page)]
        elif isinstance(page, VersionPage):
            listing = self.resolver.manuals(page)
            node.children = [self.make_tree(manual) for manual in listing.manuals]
        elif isinstance(page, ManualPage):
            node.children = self._manual_children(page)
        return node

    def _manual_children(self, manual: ManualPage) -> List[PageTreeNode]:
        toc = self.toc_engine.build(manual)
        if toc is None:
            logger.debug(f"{manual.identity} has no table of contents, using its topics")
            topics = sorted(self.model.topics(manual), key=lambda topic: topic.identity)
            return [self._page_node(topic) for topic in topics]

        children: List[PageTreeNode] = []
        for toc_node in toc.tree():
            children.extend(self._toc_nodes(toc_node))
        return children

    def _toc_nodes(self, toc_node: TocTreeNode) -> List[PageTreeNode]:
        entry = toc_node.entry
        nested: List[PageTreeNode] = []
        for child in toc_node.children:
            nested.extend(self._toc_nodes(child))

        if entry.kind == TocNodeKind.BORROWED:
            borrowed = PageTreeNode(
                kind=NodeKind.BORROWED,
                label=entry.label,
                identity=entry.identity,
                page=entry.topic,
            )
            return [borrowed] + nested

        if entry.kind in (TocNodeKind.TOPIC, TocNodeKind.STANDALONE):
            node = self._page_node(entry.topic)
            node.label = entry.label
        else:
            node = PageTreeNode(kind=NodeKind.LABEL, label=entry.label)
        node.children = nested
        return [node]
