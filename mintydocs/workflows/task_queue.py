"""Task queue for workflow mutation tasks.

InMemoryTaskQueue applies tasks to a page store when run_pending() is
called. Concurrent run_pending() callers are serialized, so two tasks never
write the store at the same time. Each task is checked on its own when it
runs: a save whose parent page is missing fails without writing anything,
and a failed task does not affect the others.
"""

import logging
import threading
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, Optional

from ..page_store.errors import PageStoreError
from ..page_store.store import PageStore
from .errors import TaskExecutionError
from .models import MutationTask, TaskAction

logger = logging.getLogger(__name__)


class TaskQueue(ABC):
    """Interface of the task queue."""

    @abstractmethod
    def enqueue(self, tasks: List[MutationTask]) -> bool:
        """Accept tasks for later execution. Returns True if accepted."""


@dataclass
class TaskResult:
    """Outcome of running one task.

    Attributes:
        task: The task that ran
        success: Whether the task was applied
        error: Failure message (None on success)
    """
    task: MutationTask
    success: bool
    error: Optional[str] = None


class InMemoryTaskQueue(TaskQueue):
    """Queue that runs tasks against a page store on demand.

    Args:
        store: Page store the tasks are applied to

    Example:
        >>> queue = InMemoryTaskQueue(store)
        >>> queue.enqueue(plan.tasks)
        True
        >>> results = queue.run_pending()
    """

    def __init__(self, store: PageStore):
        self.store = store
        self._pending: List[MutationTask] = []
        self._queue_lock = threading.Lock()
        self._run_lock = threading.Lock()

    def enqueue(self, tasks: List[MutationTask]) -> bool:
        with self._queue_lock:
            self._pending.extend(tasks)
        logger.info(f"Queued {len(tasks)} task(s)")
        return True

    def pending(self) -> List[MutationTask]:
        """Return the tasks not yet run."""
        with self._queue_lock:
            return list(self._pending)

    def run_pending(self) -> List[TaskResult]:
        """Run every queued task in order.

        Returns:
            One TaskResult per task, in the order the tasks ran
        """
        with self._run_lock:
            with self._queue_lock:
                tasks, self._pending = self._pending, []
            return [self._run(task) for task in tasks]

    def _run(self, task: MutationTask) -> TaskResult:
        try:
            self.execute(task)
        except (TaskExecutionError, PageStoreError) as e:
            logger.error(f"Task {task.action.value} {task.target_identity} failed: {e}")
            return TaskResult(task=task, success=False, error=str(e))
        logger.debug(f"Task {task.action.value} {task.target_identity} succeeded")
        return TaskResult(task=task, success=True)

    def execute(self, task: MutationTask) -> None:
        """Apply one task to the store.

        Raises:
            TaskExecutionError: If the task's preconditions do not hold
        """
        if task.action == TaskAction.DELETE:
            if not self.store.exists(task.target_identity):
                raise TaskExecutionError(task.target_identity, "page does not exist")
            self.store.delete_page(task.target_identity)
            return

        if task.parent_identity and not self.store.exists(task.parent_identity):
            raise TaskExecutionError(
                task.target_identity,
                f"parent page '{task.parent_identity}' is missing; canceling save"
            )
        self.store.save_page(
            task.target_identity,
            task.source_body,
            properties=task.properties,
            summary=task.summary,
            actor=task.actor or None,
        )
