"""Tests for the line feed protocol."""

from __future__ import annotations

import os

import pytest

from secedit.editors import LineEditor, split_lines
from tests._fixtures.editors import NullEditor


def test_line_editor_empty_input_is_one_line() -> None:
    editor = LineEditor()
    assert editor.edit("") == editor.line_separator
    assert editor.line_number == 1


def test_line_editor_appends_separator_to_last_line() -> None:
    editor = LineEditor()
    assert editor.edit("NO LINE SEPARATOR") == "NO LINE SEPARATOR" + editor.line_separator
    assert editor.line_number == 1


def test_line_editor_single_break_is_one_empty_line() -> None:
    editor = LineEditor()
    assert editor.edit("\n") == editor.line_separator
    assert editor.line_number == 1


def test_line_editor_normalises_line_breaks() -> None:
    editor = LineEditor(line_separator="\n")
    assert editor.edit("a\r\nb\rc\n") == "a\nb\nc\n"
    assert editor.line_number == 3


def test_line_editor_uses_configured_separator() -> None:
    editor = LineEditor(line_separator="\r\n")
    assert editor.edit("a\nb\n") == "a\r\nb\r\n"


def test_line_editor_defaults_to_platform_separator() -> None:
    assert LineEditor().line_separator == os.linesep


def test_line_editor_rejects_none() -> None:
    with pytest.raises(TypeError):
        LineEditor().edit(None)  # type: ignore[arg-type]


def test_line_editor_chain_passes_output_on() -> None:
    chained = LineEditor(NullEditor())
    assert chained.edit("") is None
    assert chained.line_number == 1
    assert chained.edit("NO LINE SEPARATOR") is None
    assert chained.edit("\n") is None


def test_null_editor_produces_nothing() -> None:
    assert NullEditor().edit("a\nb\n") is None


def test_split_lines_keeps_blank_lines() -> None:
    assert split_lines("a\n\nb\n") == ["a", "", "b"]
    assert split_lines("a\r\n\r\n") == ["a", ""]
    assert split_lines("") == []
