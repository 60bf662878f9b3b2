"""Data models for bulk workflows."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional

from ..hierarchy.models import Page


class NodeKind(Enum):
    """Kinds of nodes in a workflow page tree."""
    PAGE = "page"
    LABEL = "label"
    BORROWED = "borrowed"


class PlanStatus(Enum):
    """Outcome of planning one line of a workflow."""
    NEW = "new"
    CHANGED = "changed"
    NO_CHANGE = "no_change"
    ALREADY_EXISTS = "already_exists"
    BLOCKED = "blocked"
    BORROWED = "borrowed"
    LABEL = "label"
    DELETE = "delete"


class TaskAction(Enum):
    """Mutation a task applies to its target page."""
    SAVE = "save"
    DELETE = "delete"


@dataclass
class PageTreeNode:
    """A node of the page tree a workflow walks.

    Attributes:
        kind: Page, plain label or borrowed page
        label: Text shown for the node
        identity: Page identity (None for labels)
        page: Hierarchy page, if the identity is one
        children: Nodes nested under this one
    """
    kind: NodeKind
    label: str
    identity: Optional[str] = None
    page: Optional[Page] = None
    children: List['PageTreeNode'] = field(default_factory=list)


@dataclass
class MutationTask:
    """An atomic page mutation for the task queue.

    Attributes:
        action: Save or delete
        target_identity: Page to write or delete
        source_body: Text to save (empty for deletions)
        actor: Name of the user who requested the change
        summary: Edit summary
        parent_identity: Page that must exist when the task runs
        properties: Properties to store with the page
        source_identity: Page the content was taken from
    """
    action: TaskAction
    target_identity: str
    source_body: str = ""
    actor: str = ""
    summary: str = ""
    parent_identity: Optional[str] = None
    properties: Dict[str, str] = field(default_factory=dict)
    source_identity: Optional[str] = None


@dataclass
class PlanLine:
    """One planned line of a workflow.

    Attributes:
        label: Text shown for the line
        depth: Nesting depth in the page tree (0 for the root)
        status: Planning outcome
        source_identity: Source page (None for labels)
        target_identity: Target page (None for labels and borrowed pages)
    """
    label: str
    depth: int
    status: PlanStatus
    source_identity: Optional[str] = None
    target_identity: Optional[str] = None

    @property
    def requires_task(self) -> bool:
        return self.status in (PlanStatus.NEW, PlanStatus.CHANGED, PlanStatus.DELETE)


@dataclass
class WorkflowPlan:
    """Result of planning a workflow for one source page.

    Attributes:
        action: Workflow name (publish, create-draft, copy, delete)
        source_identity: Page the workflow was requested for
        single_page: Whether the page was handled on its own
        lines: Planned lines in tree order
        tasks: Tasks to queue, parents before children
    """
    action: str
    source_identity: str
    single_page: bool = False
    lines: List[PlanLine] = field(default_factory=list)
    tasks: List[MutationTask] = field(default_factory=list)

    def count(self, status: PlanStatus) -> int:
        return sum(1 for line in self.lines if line.status == status)
