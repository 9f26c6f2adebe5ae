"""Section-aware editing of text containing nested section markers.

A section starts on a line containing ``SECTION-START[<name>]`` and ends on
the next line containing ``SECTION-END`` at the same depth. The editor parses
its input into a :class:`~secedit.section.Section` tree, lets
:meth:`SectionEditor.edit_section` rewrite the content of each node and
renders the tree back, leaving marker lines and untouched text as they were.
"""

from __future__ import annotations

import threading
from concurrent.futures import Executor
from dataclasses import dataclass
from enum import Enum
from typing import Dict, FrozenSet, List, Optional

from ..errors import MalformedSectionMarkerError, UnmatchedSectionEndError, UnterminatedSectionError
from ..logging import get_logger
from ..render import render
from ..section import Section
from ..traversal import run_edits
from .line import LineEditor

DEFAULT_SECTION_START = "SECTION-START["
DEFAULT_SECTION_END = "SECTION-END"


class SectionMode(Enum):
    """Where plain lines go while a section is open."""

    HEAD = "head"
    TAIL = "tail"


@dataclass
class _Frame:
    section: Section
    mode: SectionMode = SectionMode.HEAD


class SectionEditor(LineEditor):
    """Parses sections line by line and renders them after editing.

    Nothing is returned until end of input; the final call returns the whole
    rendered text. Override :meth:`edit_section` to change section content,
    and :meth:`detect_section_start` / :meth:`detect_section_end` to use a
    different marker vocabulary.

    When ``executor`` is set, :meth:`edit_section` runs concurrently across
    sections; overrides must then only touch the section they are given.
    An instance handles one :meth:`edit` call at a time.
    """

    def __init__(
        self,
        editor: Optional[LineEditor] = None,
        line_separator: Optional[str] = None,
        *,
        executor: Optional[Executor] = None,
        start_marker: str = DEFAULT_SECTION_START,
        end_marker: str = DEFAULT_SECTION_END,
    ) -> None:
        super().__init__(editor, line_separator)
        self.executor = executor
        self.start_marker = start_marker
        self.end_marker = end_marker
        self.logger = get_logger("editors.section")
        self._stack: Optional[List[_Frame]] = None
        self._presence: Dict[str, bool] = {}
        self._presence_lock = threading.Lock()

    # ------------------------------------------------------------------
    # Parsing

    def start_edit(self) -> None:
        self._stack = None
        with self._presence_lock:
            self._presence.clear()

    def edit_line(self, line: Optional[str]) -> Optional[str]:
        if self._stack is None:
            self._stack = [_Frame(Section())]

        try:
            if line is None:
                return self._finish()
            self._consume(line)
        except Exception:
            self._stack = None
            raise
        return None

    def _consume(self, line: str) -> None:
        stack = self._stack
        assert stack is not None
        current = stack[-1]

        child = self.detect_section_start(line)
        if child is not None:
            child.starting_line = line
            if current.mode is SectionMode.TAIL and current.section.has_tail_content():
                # Free text between two siblings gets its own node so it keeps its position.
                wrapper = Section()
                wrapper.append_head(current.section.take_tail())
                current.section.sections.append(wrapper)
                current = _Frame(wrapper)
                stack.append(current)

            current.section.sections.append(child)
            current.mode = SectionMode.TAIL
            stack.append(_Frame(child))
            self.logger.debug("Line %d opens section %r", self.line_number, child.name)
        elif self.detect_section_end(line):
            closed = stack.pop()
            closed.section.ending_line = line
            if not stack:
                raise UnmatchedSectionEndError(line, self.line_number)
            self.logger.debug("Line %d closes section %r", self.line_number, closed.section.name)
            if stack[-1].section.name is None and len(stack) > 1:
                stack.pop()
        elif current.mode is SectionMode.HEAD:
            current.section.append_head(line + self.line_separator)
        else:
            current.section.append_tail(line + self.line_separator)

    def _finish(self) -> str:
        stack = self._stack
        assert stack is not None
        top = stack.pop()
        if stack:
            name = top.section.name if top.section.name is not None else "/"
            raise UnterminatedSectionError(name, self.line_number)
        self._stack = None
        return self.render_output(top.section)

    def detect_section_start(self, line: str) -> Optional[Section]:
        """Return a new, named section if ``line`` opens one, else ``None``.

        Raises :class:`MalformedSectionMarkerError` when the start marker is
        not followed by ``]`` on the same line.
        """
        marker_index = line.find(self.start_marker)
        if marker_index == -1:
            return None
        start = marker_index + len(self.start_marker)
        end = line.find("]", start)
        if end == -1:
            raise MalformedSectionMarkerError(line, self.line_number)
        return Section(line[start:end])

    def detect_section_end(self, line: str) -> bool:
        """Return ``True`` if ``line`` closes the innermost open section."""
        return self.end_marker in line

    # ------------------------------------------------------------------
    # Editing and rendering

    def edit_section(self, section: Section) -> None:
        """Edit hook called once per section before rendering.

        The default records which named sections were present. Overrides may
        rewrite ``head_content``/``tail_content`` and should call ``super()``.
        """
        if section is None:
            raise TypeError("section must not be None")
        if section.name is not None:
            with self._presence_lock:
                self._presence[section.name] = True

    def render_output(self, root: Section) -> str:
        """Run :meth:`edit_section` over the tree rooted at ``root`` and render it."""
        if root is None:
            raise TypeError("root must not be None")
        with self._presence_lock:
            self._presence.clear()
        visited = run_edits(root, self.edit_section, executor=self.executor)
        self.logger.debug("Edited %d section node(s) across %d line(s)", visited, self.line_number)
        return render(root, self.line_separator)

    def is_section_present(self, name: Optional[str]) -> bool:
        """Whether the most recent edit encountered a section called ``name``."""
        if name is None:
            return False
        with self._presence_lock:
            return self._presence.get(name, False)

    @property
    def present_sections(self) -> FrozenSet[str]:
        with self._presence_lock:
            return frozenset(name for name, present in self._presence.items() if present)


__all__ = [
    "DEFAULT_SECTION_END",
    "DEFAULT_SECTION_START",
    "SectionEditor",
    "SectionMode",
]
