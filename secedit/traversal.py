"""Strategies for running the per-section edit hook over a parsed tree."""

from __future__ import annotations

from concurrent.futures import ALL_COMPLETED, FIRST_EXCEPTION, Executor, wait
from typing import Callable, List, Optional, Protocol, Sequence

from .logging import get_logger
from .section import Section

EditHook = Callable[[Section], None]

logger = get_logger("traversal")


class EditStrategy(Protocol):
    """Runs an edit hook once for every section handed to it."""

    def run(self, sections: Sequence[Section], edit: EditHook) -> None:
        """Invoke ``edit`` on each section; return once all invocations finished."""


class SequentialEdits:
    """Calls the hook in order on the calling thread."""

    def run(self, sections: Sequence[Section], edit: EditHook) -> None:
        for section in sections:
            edit(section)


class ExecutorEdits:
    """Submits one task per section to a caller-owned executor.

    The executor's lifecycle belongs to the caller. ``run`` returns only once
    no task of the batch is running. On failure, tasks that have not started
    yet are cancelled, the running ones are awaited and the first failure is
    re-raised as the original exception.
    """

    def __init__(self, executor: Executor) -> None:
        self.executor = executor

    def run(self, sections: Sequence[Section], edit: EditHook) -> None:
        futures = [self.executor.submit(edit, section) for section in sections]
        done, pending = wait(futures, return_when=FIRST_EXCEPTION)
        failed = [future for future in futures if future in done and future.exception() is not None]
        if not failed:
            return
        cancelled = sum(1 for future in pending if future.cancel())
        logger.debug("Edit hook failed; cancelled %d pending task(s)", cancelled)
        wait(futures, return_when=ALL_COMPLETED)
        raise failed[0].exception()  # type: ignore[misc]


def collect_sections(root: Section) -> List[Section]:
    """Return every node of the tree exactly once, root first."""
    return list(root.walk())


def resolve_strategy(executor: Optional[Executor], count: int) -> EditStrategy:
    """Use the executor only when there is one and more than a single node to edit."""
    if executor is not None and count > 1:
        return ExecutorEdits(executor)
    return SequentialEdits()


def run_edits(
    root: Section,
    edit: EditHook,
    *,
    executor: Optional[Executor] = None,
    strategy: Optional[EditStrategy] = None,
) -> int:
    """Edit every section below and including ``root``; return the number of nodes visited."""
    sections = collect_sections(root)
    chosen = strategy or resolve_strategy(executor, len(sections))
    logger.debug("Editing %d section(s) with %s", len(sections), type(chosen).__name__)
    chosen.run(sections, edit)
    return len(sections)


__all__ = [
    "EditHook",
    "EditStrategy",
    "ExecutorEdits",
    "SequentialEdits",
    "collect_sections",
    "resolve_strategy",
    "run_edits",
]
