"""Editors used as collaborators in tests."""

from __future__ import annotations

from typing import Optional

from secedit.editors import LineEditor, SectionEditor
from secedit.section import Section


class NullEditor(LineEditor):
    """Drops every line, producing no output."""

    def edit_line(self, line: Optional[str]) -> Optional[str]:
        return None


class RecordingEditor(SectionEditor):
    """Keeps the root of the most recently rendered tree."""

    root: Optional[Section] = None

    def render_output(self, root: Section) -> str:
        self.root = root
        return super().render_output(root)


class SuffixEditor(SectionEditor):
    """Appends ``<name> Head`` / ``<name> Tail`` lines to every named section."""

    def edit_section(self, section: Section) -> None:
        super().edit_section(section)
        if section.name is not None:
            section.append_head(f"{section.name} Head{self.line_separator}")
            section.append_tail(f"{section.name} Tail{self.line_separator}")


class FailingEditor(SectionEditor):
    """Raises the same error instance when editing the section named ``fail_on``."""

    def __init__(self, fail_on: str, **kwargs) -> None:
        super().__init__(**kwargs)
        self.fail_on = fail_on
        self.error = ValueError(f"cannot edit {fail_on}")

    def edit_section(self, section: Section) -> None:
        super().edit_section(section)
        if section.name == self.fail_on:
            raise self.error


__all__ = ["FailingEditor", "NullEditor", "RecordingEditor", "SuffixEditor"]
