"""Tests for edit traversal strategies."""

from __future__ import annotations

import threading
from collections import Counter
from concurrent.futures import ThreadPoolExecutor

import pytest

from secedit.section import Section
from secedit.traversal import (
    ExecutorEdits,
    SequentialEdits,
    collect_sections,
    resolve_strategy,
    run_edits,
)


def _wide_tree(count: int) -> Section:
    root = Section()
    for index in range(count):
        child = Section(str(index))
        child.sections.append(Section(f"{index}.1"))
        root.sections.append(child)
    return root


def test_collect_sections_visits_every_node_once() -> None:
    root = _wide_tree(3)
    names = [section.name for section in collect_sections(root)]
    assert names == [None, "0", "0.1", "1", "1.1", "2", "2.1"]


def test_resolve_strategy_falls_back_to_sequential() -> None:
    assert isinstance(resolve_strategy(None, 10), SequentialEdits)
    with ThreadPoolExecutor(max_workers=2) as pool:
        assert isinstance(resolve_strategy(pool, 1), SequentialEdits)
        assert isinstance(resolve_strategy(pool, 2), ExecutorEdits)


def test_run_edits_with_executor_visits_each_node_once() -> None:
    root = _wide_tree(50)
    seen: Counter[str] = Counter()
    lock = threading.Lock()

    def edit(section: Section) -> None:
        section.append_head("edited\n")
        with lock:
            seen[section.name or "<anon>"] += 1

    with ThreadPoolExecutor(max_workers=8) as pool:
        visited = run_edits(root, edit, executor=pool)

    assert visited == 101
    assert set(seen.values()) == {1}
    assert all(section.head_content == "edited\n" for section in root.walk())


def test_run_edits_accepts_explicit_strategy() -> None:
    root = _wide_tree(2)
    order = []
    run_edits(root, lambda section: order.append(section.name), strategy=SequentialEdits())
    assert order == [None, "0", "0.1", "1", "1.1"]


def test_executor_edits_reraises_original_error() -> None:
    root = _wide_tree(20)
    error = RuntimeError("edit failed")

    def edit(section: Section) -> None:
        if section.name == "7.1":
            raise error

    with ThreadPoolExecutor(max_workers=4) as pool:
        with pytest.raises(RuntimeError) as excinfo:
            ExecutorEdits(pool).run(collect_sections(root), edit)
    assert excinfo.value is error


def test_sequential_edits_stop_at_first_error() -> None:
    root = _wide_tree(3)
    visited = []

    def edit(section: Section) -> None:
        visited.append(section.name)
        if section.name == "1":
            raise KeyError(section.name)

    with pytest.raises(KeyError):
        SequentialEdits().run(collect_sections(root), edit)
    assert visited == [None, "0", "0.1", "1"]
