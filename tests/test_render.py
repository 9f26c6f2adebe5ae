"""Tests for rendering section trees."""

from __future__ import annotations

from secedit.render import render
from secedit.section import Section


def test_render_root_emits_no_marker_lines() -> None:
    root = Section()
    root.head_content = "head\n"
    root.tail_content = "tail\n"
    assert render(root, "\n") == "head\ntail\n"


def test_render_is_pre_order_with_marker_lines() -> None:
    root = Section()
    root.head_content = "top\n"
    child = Section("c", starting_line="// SECTION-START[c]", ending_line="// SECTION-END")
    child.head_content = "c-head\n"
    child.tail_content = "c-tail\n"
    grandchild = Section("g", starting_line="SECTION-START[g]", ending_line="SECTION-END")
    child.sections.append(grandchild)
    root.sections.append(child)
    root.tail_content = "bottom\n"

    assert render(root, "\r\n") == (
        "top\n"
        "// SECTION-START[c]\r\n"
        "c-head\n"
        "SECTION-START[g]\r\n"
        "SECTION-END\r\n"
        "c-tail\n"
        "// SECTION-END\r\n"
        "bottom\n"
    )


def test_render_wrapper_contributes_content_only() -> None:
    root = Section()
    wrapper = Section()
    wrapper.head_content = "between\n"
    wrapper.sections.append(Section("x", starting_line="S[x]", ending_line="E"))
    root.sections.append(wrapper)
    assert render(root, "\n") == "between\nS[x]\nE\n"
