"""Line editors, including the section-aware editor."""

from .line import LineEditor, split_lines
from .section import DEFAULT_SECTION_END, DEFAULT_SECTION_START, SectionEditor, SectionMode
from .whitespace import TrailingWhitespaceEditor

__all__ = [
    "DEFAULT_SECTION_END",
    "DEFAULT_SECTION_START",
    "LineEditor",
    "SectionEditor",
    "SectionMode",
    "TrailingWhitespaceEditor",
    "split_lines",
]
