"""Typed exception hierarchy for bulk workflow errors.

Validation and permission errors are raised while a workflow is being
planned, before any task is queued, and abort only the requested operation.
Task execution errors are raised per task by the task queue and never
affect sibling tasks.
"""

from ..page_store.errors import MintyDocsError


class WorkflowError(MintyDocsError):
    """Base exception for all bulk workflow errors."""
    pass


class WorkflowValidationError(WorkflowError):
    """Raised when a workflow cannot be planned for the requested page."""

    def __init__(self, message: str, identity: str):
        super().__init__(message)
        self.identity = identity


class WrongNamespaceError(WorkflowValidationError):
    """Raised when the source page is in the wrong area (Draft or live)."""

    def __init__(self, identity: str, expected: str):
        super().__init__(f"Page '{identity}' must be a {expected} page", identity)
        self.expected = expected


class SourcePageMissingError(WorkflowValidationError):
    """Raised when the source page does not exist."""

    def __init__(self, identity: str):
        super().__init__(f"Page '{identity}' does not exist", identity)


class WrongPageTypeError(WorkflowValidationError):
    """Raised when the source page is not of the type the workflow needs."""

    def __init__(self, identity: str, expected_type: str):
        super().__init__(f"Page '{identity}' must be a {expected_type}", identity)
        self.expected_type = expected_type


class NothingToDoError(WorkflowValidationError):
    """Raised when a single-page workflow has nothing to change."""

    def __init__(self, identity: str, reason: str):
        super().__init__(f"Nothing to do for '{identity}': {reason}", identity)
        self.reason = reason


class WorkflowPermissionError(WorkflowError):
    """Raised when the actor may not run a workflow on a page."""

    def __init__(self, identity: str, actor: str, action: str):
        super().__init__(
            f"User '{actor or 'anonymous'}' is not allowed to {action} '{identity}'"
        )
        self.identity = identity
        self.actor = actor
        self.action = action


class TaskExecutionError(WorkflowError):
    """Raised when a queued task cannot be applied."""

    def __init__(self, target_identity: str, reason: str):
        super().__init__(f"Task for '{target_identity}' failed: {reason}")
        self.target_identity = target_identity
        self.reason = reason
