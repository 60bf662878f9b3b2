"""Data models for tables of contents."""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from ..hierarchy.models import ManualPage, TopicPage


class TocNodeKind(Enum):
    """Kinds of TOC entries."""
    TOPIC = "topic"
    STANDALONE = "standalone"
    BORROWED = "borrowed"
    TEXT = "text"
    UNMATCHED_LINK = "unmatched_link"


@dataclass
class TocLine:
    """One parsed line of TOC markup.

    Attributes:
        depth: Number of leading asterisks (at least 1)
        marker: '-', '!' or '+', or None for a topic name
        text: Line text after the asterisks and marker, trimmed
    """
    depth: int
    marker: Optional[str]
    text: str


@dataclass
class TocEntry:
    """A classified TOC entry.

    Attributes:
        depth: Nesting depth (at least 1)
        kind: Entry kind
        label: Text shown for the entry
        rendered: Rendered fragment for the entry
        identity: Identity of the referenced page (None for text entries)
        topic: Referenced Topic page, for Topic, Standalone and Borrowed entries
    """
    depth: int
    kind: TocNodeKind
    label: str
    rendered: str = ""
    identity: Optional[str] = None
    topic: Optional[TopicPage] = None


@dataclass
class TocTreeNode:
    """An entry with the entries nested under it."""
    entry: TocEntry
    children: List['TocTreeNode'] = field(default_factory=list)


@dataclass
class TableOfContents:
    """A Manual's table of contents.

    Attributes:
        manual: Manual the TOC belongs to
        entries: Surviving entries in order
        rendered: Rendered TOC, with the leading "About" entry
        unmatched_topics: Child Topics no TOC line refers to
        warnings: Authoring warnings raised while building the TOC
    """
    manual: ManualPage
    entries: List[TocEntry] = field(default_factory=list)
    rendered: str = ""
    unmatched_topics: List[TopicPage] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    def topic_entries(self) -> List[TocEntry]:
        """Return entries referring to the Manual's own Topics, in order."""
        return [entry for entry in self.entries if entry.kind == TocNodeKind.TOPIC]

    def tree(self) -> List[TocTreeNode]:
        """Return the entries as a tree."""
        return build_tree(self.entries)


def build_tree(entries: List[TocEntry]) -> List[TocTreeNode]:
    """Nest flat (depth, entry) records into a tree.

    An entry's parent is the most recent earlier entry one level shallower.
    When a level was skipped, the nearest shallower entry is used; an entry
    with no shallower predecessor is a root.
    """
    roots: List[TocTreeNode] = []
    stack: List[TocTreeNode] = []
    for entry in entries:
        node = TocTreeNode(entry)
        while stack and stack[-1].entry.depth >= entry.depth:
            stack.pop()
        if stack:
            stack[-1].children.append(node)
        else:
            roots.append(node)
        stack.append(node)
    return roots
