"""Line-oriented editing with optional chaining of editors."""

from __future__ import annotations

import os
import re
from typing import List, Optional

_LINE_BREAK = re.compile(r"\r\n|\r|\n")


def split_lines(text: str) -> List[str]:
    """Split ``text`` on CR, LF or CRLF; a trailing break does not add an empty line."""
    lines = _LINE_BREAK.split(text)
    if lines and lines[-1] == "":
        lines.pop()
    return lines


class LineEditor:
    """Feeds text to :meth:`edit_line` one line at a time and collects the replacements.

    Subclasses override :meth:`edit_line`. After the last line the method is
    called once more with ``None`` to signal end of input; whatever it returns
    is appended without a trailing separator. An optional chained editor
    receives this editor's output as its input.
    """

    def __init__(
        self,
        editor: Optional["LineEditor"] = None,
        line_separator: Optional[str] = None,
    ) -> None:
        self.editor = editor
        self._line_separator = line_separator
        self._line_number = 0

    @property
    def line_separator(self) -> str:
        if self._line_separator is None:
            self._line_separator = os.linesep
        return self._line_separator

    @property
    def line_number(self) -> int:
        """Number of lines fed during the most recent :meth:`edit` call."""
        return self._line_number

    def edit(self, text: str) -> Optional[str]:
        """Edit ``text``; return the output, or ``None`` when nothing was produced."""
        if text is None:
            raise TypeError("text must not be None")

        self._line_number = 0
        self.start_edit()

        parts: List[str] = []
        # Empty input still counts as one (empty) line.
        for line in split_lines(text) if text else [""]:
            self._line_number += 1
            replacement = self.edit_line(line)
            if replacement is not None:
                parts.append(replacement)
                parts.append(self.line_separator)

        replacement = self.edit_line(None)
        if replacement is not None:
            parts.append(replacement)

        edited = "".join(parts) if parts else None

        if self.editor is not None and edited is not None:
            return self.editor.edit(edited)
        return edited

    def start_edit(self) -> None:
        """Hook called at the start of every :meth:`edit` call."""

    def edit_line(self, line: Optional[str]) -> Optional[str]:
        """Return the replacement for ``line``; ``None`` drops the line."""
        return line


__all__ = ["LineEditor", "split_lines"]
