"""Editor removing trailing whitespace."""

from __future__ import annotations

from typing import Optional

from .line import LineEditor


class TrailingWhitespaceEditor(LineEditor):
    """Strips trailing whitespace from every line."""

    def edit_line(self, line: Optional[str]) -> Optional[str]:
        if line is None:
            return None
        return line.rstrip()


__all__ = ["TrailingWhitespaceEditor"]
