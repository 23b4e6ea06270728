"""Controller-side handling of in-flight file operations.

Workers only ever publish to their own queue; everything that touches tabs
or the directory cache happens here, on the loop thread.
"""

from __future__ import annotations

import logging

from ..context import AppContext
from ..errors import WorkerError, format_error
from ..fileops import FileOperationTask

logger = logging.getLogger(__name__)


def poll_operations(context: AppContext, timeout: float = 0.0) -> None:
    """Drain pending progress and join every worker that has finished.

    ``timeout`` bounds the first wait on each queue; zero never blocks.
    Only the newest snapshot of each worker reaches the status line.
    """
    for task in list(context.operations):
        snapshot = task.drain(timeout)
        if snapshot is not None:
            context.set_status(snapshot.describe(task.kind))
        if task.disconnected:
            context.operations.remove(task)
            join_operation(context, task)


def join_operation(context: AppContext, task: FileOperationTask) -> None:
    """Join one finished worker and bring affected tabs up to date.

    A failed worker is reported and nothing is reloaded.
    """
    try:
        task.join()
    except WorkerError as exc:
        logger.error("%s", exc)
        context.set_error(str(exc))
        return

    affected = {task.src_dir, task.dest_dir}
    for directory in affected:
        context.history.depreciate(directory)
    try:
        context.reload_tab(task.tab_src)
        if task.tab_dest != task.tab_src:
            context.reload_tab(task.tab_dest)
        # A third tab may hold one of the affected listings checked out.
        current = context.curr_tab()
        if current.tab_id not in (task.tab_src, task.tab_dest) and current.path in affected:
            context.reload_tab(current.tab_id)
    except OSError as exc:
        logger.warning("reload after %s failed: %s", task.kind, exc)
        context.set_error(format_error(exc))
        return
    context.set_status(f"{task.kind} complete")


__all__ = ["join_operation", "poll_operations"]
