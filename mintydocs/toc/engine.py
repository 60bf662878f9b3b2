"""TOC engine: builds a Manual's table of contents.

The TOC source is the Manual's (possibly inherited) TopicsList. Each line is
classified, topic names are matched against the Manual's child Topics, text
headers with nothing nested under them are dropped, and the result is
rendered with an "About" entry for the Manual itself in front.
"""

import logging
from typing import Dict, List, Optional, Tuple

from ..hierarchy.inheritance import InheritanceResolver
from ..hierarchy.model import HierarchyModel
from ..hierarchy.models import ManualPage, PageProperty, RenderContext, TopicPage
from .models import TableOfContents, TocEntry, TocLine, TocNodeKind
from .parser import (
    BORROWED_MARKER,
    STANDALONE_MARKER,
    TEXT_MARKER,
    normalize_name,
    parse_toc_markup,
)
from .renderer import Renderer

logger = logging.getLogger(__name__)

ABOUT_LABEL = "About"


class TocEngine:
    """Builds tables of contents and topic navigation.

    Args:
        model: Hierarchy model over the page store
        resolver: Inheritance resolver for inherited Manual parameters
        renderer: Markup renderer

    Example:
        >>> engine = TocEngine(model, resolver, HtmlRenderer(store))
        >>> toc = engine.build(model.load("Widget/1.0/Guide"))
        >>> [entry.label for entry in toc.topic_entries()]
        ['Installing', 'Configuring']
    """

    def __init__(self, model: HierarchyModel, resolver: InheritanceResolver, renderer: Renderer):
        self.model = model
        self.resolver = resolver
        self.renderer = renderer

    def has_pagination(self, manual: ManualPage) -> bool:
        """True if the Manual's topics show previous/next links."""
        return bool(self.resolver.resolve_inherited_param(manual, PageProperty.PAGINATION))

    def toc_source(self, manual: ManualPage) -> Optional[str]:
        """Return the raw TOC markup of a Manual, or None if it has none.

        A TopicsList starting with an asterisk is the markup itself;
        otherwise it names a page (in the Manual's namespace) holding it.
        """
        topics_list = self.resolver.resolve_inherited_param(manual, PageProperty.TOPICS_LIST)
        if topics_list is None:
            return None
        if topics_list.startswith("*"):
            return topics_list

        prefix = self.model.namespace_prefix(manual.identity)
        source_identity = topics_list if topics_list.startswith(prefix) else prefix + topics_list
        body = self.model.store.get_body(source_identity)
        if body is None:
            logger.warning(
                f"Topics list page {source_identity} of {manual.identity} does not exist"
            )
            return None
        return body

    def build(self, manual: ManualPage) -> Optional[TableOfContents]:
        """Build a Manual's table of contents.

        Returns:
            TableOfContents, or None if the Manual has no topics list
        """
        source = self.toc_source(manual)
        if source is None:
            logger.debug(f"{manual.identity} has no topics list")
            return None

        lines = parse_toc_markup(self.renderer.strip_block_tags(source))
        form_params = self._form_params(manual)
        suppress_unmatched = self.model.has_draft_shadow(manual.identity)

        pool: Dict[str, TopicPage] = {}
        for topic in self.model.topics(manual):
            pool.setdefault(normalize_name(self.model.actual_name(topic)), topic)

        toc = TableOfContents(manual=manual)
        entries: List[TocEntry] = []
        for line in lines:
            entry = self._classify(manual, line, pool, form_params, suppress_unmatched)
            if entry is not None:
                entries.append(entry)

        toc.entries = suppress_empty_headers(entries)
        toc.unmatched_topics = sorted(pool.values(), key=lambda topic: topic.identity)
        if toc.unmatched_topics:
            names = ", ".join(self.model.actual_name(topic) for topic in toc.unmatched_topics)
            message = (
                f"The following topics are defined for {manual.identity} but are not "
                f"included in the list of topics: {names}"
            )
            logger.warning(message)
            toc.warnings.append(message)

        markup_lines = ["*" + self.renderer.render_inline_link(manual.identity, ABOUT_LABEL)]
        markup_lines.extend("*" * entry.depth + entry.rendered for entry in toc.entries)
        toc.rendered = self.renderer.parse_block_list("\n".join(markup_lines))
        return toc

    def _form_params(self, manual: ManualPage) -> Optional[Dict[str, str]]:
        default_form = self.resolver.resolve_inherited_param(
            manual, PageProperty.TOPIC_DEFAULT_FORM
        )
        alternate_forms = self.resolver.resolve_inherited_param(
            manual, PageProperty.TOPIC_ALTERNATE_FORMS
        )
        if default_form is None and alternate_forms is None:
            return None
        params = {"action": "formedit"}
        if default_form is not None:
            params["form"] = default_form
        if alternate_forms is not None:
            params["alt_form"] = alternate_forms
        return params

    def _classify(
        self,
        manual: ManualPage,
        line: TocLine,
        pool: Dict[str, TopicPage],
        form_params: Optional[Dict[str, str]],
        suppress_unmatched: bool,
    ) -> Optional[TocEntry]:
        if line.marker == TEXT_MARKER:
            return TocEntry(
                depth=line.depth,
                kind=TocNodeKind.TEXT,
                label=line.text,
                rendered=self.renderer.render_text(line.text),
            )

        if line.marker in (STANDALONE_MARKER, BORROWED_MARKER):
            return self._referenced_topic(manual, line)

        name = normalize_name(line.text)
        topic = pool.pop(name, None)
        if topic is not None:
            label = self.toc_label(topic)
            return TocEntry(
                depth=line.depth,
                kind=TocNodeKind.TOPIC,
                label=label,
                rendered=self.renderer.render_inline_link(topic.identity, label),
                identity=topic.identity,
                topic=topic,
            )

        if suppress_unmatched:
            logger.debug(f"Suppressing unmatched topic '{name}' of {manual.identity}")
            return None
        identity = f"{manual.identity}/{name}"
        return TocEntry(
            depth=line.depth,
            kind=TocNodeKind.UNMATCHED_LINK,
            label=name,
            rendered=self.renderer.render_inline_link(identity, name, form_params),
            identity=identity,
        )

    def _referenced_topic(self, manual: ManualPage, line: TocLine) -> TocEntry:
        name = normalize_name(line.text)
        prefix = self.model.namespace_prefix(manual.identity)
        identity = name if name.startswith(prefix) else prefix + name
        topic = self.model.load_as(identity, TopicPage)
        if topic is None:
            return TocEntry(
                depth=line.depth,
                kind=TocNodeKind.TEXT,
                label=name,
                rendered=self.renderer.render_text(name),
            )

        borrowed = line.marker == BORROWED_MARKER
        label = self.toc_label(topic)
        return TocEntry(
            depth=line.depth,
            kind=TocNodeKind.BORROWED if borrowed else TocNodeKind.STANDALONE,
            label=label,
            rendered=self.renderer.render_inline_link(
                topic.identity, label, self.context_query(manual, borrowed)
            ),
            identity=topic.identity,
            topic=topic,
        )

    def toc_label(self, topic: TopicPage) -> str:
        """Return the label of a Topic in tables of contents."""
        return topic.toc_name or self.model.display_name(topic)

    def context_query(self, manual: ManualPage, borrowed: bool = False) -> Dict[str, str]:
        """Return the query values linking a topic into a Manual's context."""
        located = self.model.product_and_version(manual)
        if located is None:
            return {}
        product, version = located
        if borrowed:
            return {
                "contextProduct": self.model.live_identity(product.identity),
                "contextVersion": self.model.actual_name(version),
                "contextManual": self.model.actual_name(manual),
            }
        return {
            "product": self.model.actual_name(product),
            "version": self.model.actual_name(version),
            "manual": self.model.actual_name(manual),
        }

    def previous_and_next(
        self,
        toc: TableOfContents,
        topic: TopicPage
    ) -> Tuple[Optional[TopicPage], Optional[TopicPage]]:
        """Return the Topics before and after a Topic in a TOC.

        Only entries for the Manual's own Topics count as neighbours.
        """
        name = self.model.actual_name(topic)
        topic_entries = toc.topic_entries()
        for index, entry in enumerate(topic_entries):
            if self.model.actual_name(entry.topic) != name:
                continue
            previous_topic = topic_entries[index - 1].topic if index > 0 else None
            next_topic = (
                topic_entries[index + 1].topic if index + 1 < len(topic_entries) else None
            )
            return previous_topic, next_topic
        return None, None

    def navigation(
        self,
        topic: TopicPage,
        context: Optional[RenderContext] = None,
        require_pagination: bool = True,
    ) -> Tuple[Optional[TopicPage], Optional[TopicPage]]:
        """Return previous/next Topics for a Topic viewed within a Manual.

        Args:
            topic: Topic being viewed
            context: Manual the Topic is viewed within (defaults to its own)
            require_pagination: Return (None, None) unless the Manual has
                pagination enabled

        Returns:
            Tuple of (previous topic, next topic)
        """
        manual = self.model.context_manual(topic, context)
        if manual is None:
            return None, None
        if require_pagination and not self.has_pagination(manual):
            return None, None
        toc = self.build(manual)
        if toc is None:
            return None, None
        return self.previous_and_next(toc, topic)


def suppress_empty_headers(entries: List[TocEntry]) -> List[TocEntry]:
    """Drop text entries with nothing nested under them.

    A text entry is dropped when the next entry is at the same depth or
    shallower, or when it is the last entry. Entries are marked first and
    removed afterwards, so a removal never exposes another header.
    """
    removed = set()
    for index, entry in enumerate(entries):
        if entry.kind != TocNodeKind.TEXT:
            continue
        if index == len(entries) - 1 or entries[index + 1].depth <= entry.depth:
            removed.add(index)
    return [entry for index, entry in enumerate(entries) if index not in removed]
