"""Bulk workflows: publish, create-draft, copy and delete.

Every workflow validates its source page, checks the actor's permission,
walks the page tree under the source and plans one line per node. Lines
that need a change produce a MutationTask; tasks are ordered parents first
and each names the parent page that must exist when it runs. Planning only
reads the page store, so planning the same request twice gives the same
result, and re-planning after the tasks ran finds nothing left to do.
"""

import logging
from typing import Dict, List, Optional

from ..hierarchy.inheritance import InheritanceResolver
from ..hierarchy.model import HierarchyModel
from ..hierarchy.models import ManualPage, Page, PageProperty, PageType
from ..permissions.identity import Actor
from ..permissions.resolver import PermissionResolver
from ..toc.engine import TocEngine
from .errors import (
    NothingToDoError,
    SourcePageMissingError,
    WorkflowPermissionError,
    WorkflowValidationError,
    WrongNamespaceError,
    WrongPageTypeError,
)
from .models import (
    MutationTask,
    NodeKind,
    PageTreeNode,
    PlanLine,
    PlanStatus,
    TaskAction,
    WorkflowPlan,
)
from .task_queue import TaskQueue
from .tree import PageTreeBuilder

logger = logging.getLogger(__name__)


class BulkWorkflow:
    """Base class of the save workflows (publish, create-draft, copy).

    Subclasses define where a source page is written to (target_identity),
    which source pages are accepted (validate_source) and whether existing
    target pages may be overwritten.

    Args:
        model: Hierarchy model over the page store
        resolver: Inheritance resolver
        toc_engine: TOC engine used to walk Manuals
        permissions: Permission resolver
    """

    action = "publish"
    summary = "Publish from draft"
    overwrite_allowed = True

    def __init__(
        self,
        model: HierarchyModel,
        resolver: InheritanceResolver,
        toc_engine: TocEngine,
        permissions: PermissionResolver,
    ):
        self.model = model
        self.resolver = resolver
        self.toc_engine = toc_engine
        self.permissions = permissions
        self.tree_builder = PageTreeBuilder(model, resolver, toc_engine)

    @property
    def store(self):
        return self.model.store

    def target_identity(self, identity: str) -> str:
        """Return the identity a source page is written to."""
        raise NotImplementedError

    def validate_source(self, identity: str, page: Optional[Page]) -> None:
        """Raise a WorkflowValidationError if the page cannot be a source."""

    def check_permission(self, identity: str, page: Optional[Page], actor: Actor) -> None:
        """Raise WorkflowPermissionError unless the actor may run the workflow."""
        if page is None:
            self._require_global_admin(identity, actor)
        elif not self.permissions.can_administer(page, actor):
            raise WorkflowPermissionError(identity, actor.name, self.action)

    def _require_global_admin(self, identity: str, actor: Actor) -> None:
        if not self.permissions.identity_provider.actor_has_global_right(
            actor, self.permissions.rights.administer
        ):
            raise WorkflowPermissionError(identity, actor.name, self.action)

    def _load_source(self, identity: str, actor: Actor) -> Optional[Page]:
        if not self.store.exists(identity):
            raise SourcePageMissingError(identity)
        page = self.model.load(identity)
        self.validate_source(identity, page)
        self.check_permission(identity, page, actor)
        return page

    def plan(self, identity: str, actor: Optional[Actor] = None) -> WorkflowPlan:
        """Plan the workflow for a source page.

        Topics and pages outside the hierarchy are handled on their own;
        Products, Versions and Manuals are handled with every page under them.

        Args:
            identity: Source page identity
            actor: Requesting user (defaults to the current actor)

        Returns:
            WorkflowPlan with planned lines and the tasks to queue

        Raises:
            WorkflowValidationError: If the source page cannot be used
            WorkflowPermissionError: If the actor may not run the workflow
        """
        actor = actor if actor is not None else self.permissions.identity_provider.current_actor()
        page = self._load_source(identity, actor)

        if page is None or page.page_type == PageType.TOPIC:
            return self._plan_single(identity, page, actor)

        plan = WorkflowPlan(action=self.action, source_identity=identity)
        tree = self.tree_builder.make_tree(page)
        self._plan_node(plan, tree, 0, actor)
        logger.info(
            f"Planned {self.action} of {identity}: {len(plan.tasks)} task(s), "
            f"{len(plan.lines)} line(s)"
        )
        return plan

    def _plan_single(self, identity: str, page: Optional[Page], actor: Actor) -> WorkflowPlan:
        target = self.target_identity(identity)
        if self.store.exists(target):
            if not self.overwrite_allowed:
                raise NothingToDoError(identity, f"'{target}' already exists")
            if self.store.get_body(target) == self.store.get_body(identity):
                raise NothingToDoError(identity, f"'{target}' already matches it")
            status = PlanStatus.CHANGED
        else:
            status = PlanStatus.NEW
        if self._is_blocked(identity, page):
            status = PlanStatus.BLOCKED

        plan = WorkflowPlan(action=self.action, source_identity=identity, single_page=True)
        label = self.model.display_name(page) if page is not None else identity
        plan.lines.append(PlanLine(label, 0, status, identity, target))
        if status != PlanStatus.BLOCKED:
            plan.tasks.append(self._save_task(identity, target, page, actor))
        return plan

    def _plan_node(self, plan: WorkflowPlan, node: PageTreeNode, depth: int, actor: Actor) -> None:
        if node.kind == NodeKind.LABEL:
            plan.lines.append(PlanLine(node.label, depth, PlanStatus.LABEL))
        elif node.kind == NodeKind.BORROWED:
            plan.lines.append(
                PlanLine(node.label, depth, PlanStatus.BORROWED, node.identity)
            )
        else:
            line = self.plan_line(node, depth)
            plan.lines.append(line)
            if line.requires_task:
                plan.tasks.append(
                    self._save_task(node.identity, line.target_identity, node.page, actor)
                )
        for child in node.children:
            self._plan_node(plan, child, depth + 1, actor)

    def _target_parent(self, page: Optional[Page]) -> Optional[str]:
        if page is None or page.parent_page is None:
            return None
        return self.target_identity(page.parent_page)

    def _is_blocked(self, source: str, page: Optional[Page]) -> bool:
        target_parent = self._target_parent(page)
        if target_parent is None or self.store.exists(target_parent):
            return False
        logger.debug(f"{source} is blocked: parent {target_parent} does not exist")
        return True

    def plan_line(self, node: PageTreeNode, depth: int = 0) -> PlanLine:
        """Plan one page node.

        Returns:
            PlanLine whose status says whether a task is needed
        """
        source = node.identity
        target = self.target_identity(source)

        if not self.store.exists(target):
            status = PlanStatus.NEW
        elif not self.overwrite_allowed:
            status = PlanStatus.ALREADY_EXISTS
        elif self.store.get_body(target) == self.store.get_body(source):
            status = PlanStatus.NO_CHANGE
        else:
            status = PlanStatus.CHANGED

        if status in (PlanStatus.NEW, PlanStatus.CHANGED) and self._is_blocked(source, node.page):
            status = PlanStatus.BLOCKED
        return PlanLine(node.label, depth, status, source, target)

    def _save_task(
        self,
        source: str,
        target: str,
        page: Optional[Page],
        actor: Actor
    ) -> MutationTask:
        properties: Dict[str, str] = self.store.get_properties(source)
        target_parent = self._target_parent(page)
        if target_parent is not None:
            properties[PageProperty.PARENT_PAGE] = target_parent
        return MutationTask(
            action=TaskAction.SAVE,
            target_identity=target,
            source_body=self.store.get_body(source) or "",
            actor=actor.name,
            summary=self.summary,
            parent_identity=target_parent,
            properties=properties,
            source_identity=source,
        )

    def enqueue(self, plan: WorkflowPlan, queue: TaskQueue) -> bool:
        """Hand a plan's tasks to a task queue."""
        if not plan.tasks:
            logger.info(f"Nothing to {self.action} for {plan.source_identity}")
            return False
        return queue.enqueue(plan.tasks)


class PublishWorkflow(BulkWorkflow):
    """Publishes Draft pages to their live counterparts."""

    action = "publish"
    summary = "Publish from draft"
    overwrite_allowed = True

    def target_identity(self, identity: str) -> str:
        return self.model.live_identity(identity)

    def validate_source(self, identity: str, page: Optional[Page]) -> None:
        if not self.model.is_draft(identity):
            raise WrongNamespaceError(identity, "Draft")


class CreateDraftWorkflow(BulkWorkflow):
    """Creates Draft copies of live pages, never overwriting existing drafts."""

    action = "create-draft"
    summary = "Create draft"
    overwrite_allowed = False

    def target_identity(self, identity: str) -> str:
        return self.model.draft_identity(identity)

    def validate_source(self, identity: str, page: Optional[Page]) -> None:
        if self.model.is_draft(identity):
            raise WrongNamespaceError(identity, "live")


class CopyWorkflow(BulkWorkflow):
    """Copies a Manual to another Version, optionally of another Product.

    Args:
        to_version: Version string to copy to
        to_product: Product identity to copy to (defaults to the source's)
        to_manual: New name of the Manual (defaults to the source's)
    """

    action = "copy"
    summary = "Copy manual"
    overwrite_allowed = True

    def __init__(
        self,
        model: HierarchyModel,
        resolver: InheritanceResolver,
        toc_engine: TocEngine,
        permissions: PermissionResolver,
        to_version: str = "",
        to_product: Optional[str] = None,
        to_manual: Optional[str] = None,
    ):
        super().__init__(model, resolver, toc_engine, permissions)
        self.to_version = to_version
        self.to_product = to_product
        self.to_manual = to_manual
        self._namespace = ""

    def validate_source(self, identity: str, page: Optional[Page]) -> None:
        if not isinstance(page, ManualPage):
            raise WrongPageTypeError(identity, "Manual")
        if not self.to_version:
            raise WorkflowValidationError("A target version must be given", identity)
        self._namespace = self.model.namespace_prefix(identity)
        if self.target_identity(identity) == identity:
            raise WorkflowValidationError(
                f"'{identity}' cannot be copied onto itself", identity
            )

    def check_permission(self, identity: str, page: Optional[Page], actor: Actor) -> None:
        self._require_global_admin(identity, actor)

    def target_identity(self, identity: str) -> str:
        page = self.model.load(identity)
        if page is None or page.page_type == PageType.PRODUCT:
            return identity
        located = self.model.product_and_version_identities(page)
        if located is None:
            return identity
        product, version = located
        rest = identity[len(f"{product}/{version}"):].lstrip("/")

        if self.to_product:
            product = self.to_product
            if not product.startswith(self._namespace):
                product = self._namespace + product
        segments = [product, self.to_version]
        if rest:
            manual, _, topic = rest.partition("/")
            segments.append(self.to_manual or manual)
            if topic:
                segments.append(topic)
        return "/".join(segments)


class DeleteWorkflow(BulkWorkflow):
    """Deletes a Manual and every page whose parent it is."""

    action = "delete"
    summary = "Delete manual"
    overwrite_allowed = False

    def target_identity(self, identity: str) -> str:
        return identity

    def validate_source(self, identity: str, page: Optional[Page]) -> None:
        if not isinstance(page, ManualPage):
            raise WrongPageTypeError(identity, "Manual")

    def check_permission(self, identity: str, page: Optional[Page], actor: Actor) -> None:
        self._require_global_admin(identity, actor)

    def plan(self, identity: str, actor: Optional[Actor] = None) -> WorkflowPlan:
        """Plan deleting a Manual: its child pages first, then the Manual."""
        actor = actor if actor is not None else self.permissions.identity_provider.current_actor()
        manual = self._load_source(identity, actor)

        plan = WorkflowPlan(action=self.action, source_identity=identity)
        plan.lines.append(PlanLine(
            self.model.display_name(manual), 0, PlanStatus.DELETE, identity, identity
        ))
        children: List[str] = self.model.child_pages(manual)
        for child in children:
            plan.lines.append(PlanLine(child, 1, PlanStatus.DELETE, child, child))
            plan.tasks.append(self._delete_task(child, actor))
        plan.tasks.append(self._delete_task(identity, actor))
        logger.info(f"Planned delete of {identity} and {len(children)} child page(s)")
        return plan

    def _delete_task(self, identity: str, actor: Actor) -> MutationTask:
        return MutationTask(
            action=TaskAction.DELETE,
            target_identity=identity,
            actor=actor.name,
            summary=self.summary,
            source_identity=identity,
        )
