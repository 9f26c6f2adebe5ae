"""Exceptions raised while parsing and editing sectioned text."""

from __future__ import annotations

from typing import Optional


class EditorError(RuntimeError):
    """Base class for failures raised by secedit editors."""


class SectionParseError(EditorError):
    """Raised when the section structure of the input is invalid.

    ``line_number`` is 1-based; ``line`` holds the offending line when there is
    one (end-of-input errors have none).
    """

    def __init__(self, message: str, *, line_number: int, line: Optional[str] = None) -> None:
        super().__init__(message)
        self.line_number = line_number
        self.line = line


class MalformedSectionMarkerError(SectionParseError):
    """A start marker without the closing ``]`` on the same line."""

    def __init__(self, line: str, line_number: int) -> None:
        super().__init__(
            f"Section marker parse failure at line {line_number}: {line!r}",
            line_number=line_number,
            line=line,
        )


class UnmatchedSectionEndError(SectionParseError):
    """An end marker with no open section to close."""

    def __init__(self, line: str, line_number: int) -> None:
        super().__init__(
            f"Unexpected end of section at line {line_number}: {line!r}",
            line_number=line_number,
            line=line,
        )


class UnterminatedSectionError(SectionParseError):
    """End of input reached while a section is still open."""

    def __init__(self, section_name: str, line_number: int) -> None:
        super().__init__(
            f"Unexpected end of input after line {line_number}: "
            f"section {section_name!r} is not terminated",
            line_number=line_number,
        )
        self.section_name = section_name


__all__ = [
    "EditorError",
    "MalformedSectionMarkerError",
    "SectionParseError",
    "UnmatchedSectionEndError",
    "UnterminatedSectionError",
]
