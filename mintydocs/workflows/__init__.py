"""Bulk workflows: publish, create-draft, copy and delete, plus the task queue."""

from .errors import (
    NothingToDoError,
    SourcePageMissingError,
    TaskExecutionError,
    WorkflowError,
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
from .planner import (
    BulkWorkflow,
    CopyWorkflow,
    CreateDraftWorkflow,
    DeleteWorkflow,
    PublishWorkflow,
)
from .task_queue import InMemoryTaskQueue, TaskQueue, TaskResult
from .tree import PageTreeBuilder

__all__ = [
    "BulkWorkflow",
    "CopyWorkflow",
    "CreateDraftWorkflow",
    "DeleteWorkflow",
    "InMemoryTaskQueue",
    "MutationTask",
    "NodeKind",
    "NothingToDoError",
    "PageTreeBuilder",
    "PageTreeNode",
    "PlanLine",
    "PlanStatus",
    "PublishWorkflow",
    "SourcePageMissingError",
    "TaskAction",
    "TaskExecutionError",
    "TaskQueue",
    "TaskResult",
    "WorkflowError",
    "WorkflowPermissionError",
    "WorkflowPlan",
    "WorkflowValidationError",
    "WrongNamespaceError",
    "WrongPageTypeError",
]
