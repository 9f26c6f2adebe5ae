"""Serialization of section trees back to text."""

from __future__ import annotations

from typing import List

from .section import Section


def render(section: Section, line_separator: str) -> str:
    """Return the exact text of ``section``: marker lines, head, children, tail."""
    buffer: List[str] = []
    _render_into(section, line_separator, buffer)
    return "".join(buffer)


def _render_into(section: Section, line_separator: str, buffer: List[str]) -> None:
    if section.starting_line is not None:
        buffer.append(section.starting_line)
        buffer.append(line_separator)

    buffer.append(section.head_content)

    for child in section.sections:
        _render_into(child, line_separator, buffer)

    buffer.append(section.tail_content)

    if section.ending_line is not None:
        buffer.append(section.ending_line)
        buffer.append(line_separator)


__all__ = ["render"]
