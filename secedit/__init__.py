"""Parse, edit and re-render text containing nested section markers."""

from .editors import LineEditor, SectionEditor, TrailingWhitespaceEditor
from .errors import (
    EditorError,
    MalformedSectionMarkerError,
    SectionParseError,
    UnmatchedSectionEndError,
    UnterminatedSectionError,
)
from .merge import SectionContent, SectionExtractor, SectionMerger, extract_sections, merge_sections
from .render import render
from .section import Section

__all__ = [
    "EditorError",
    "LineEditor",
    "MalformedSectionMarkerError",
    "Section",
    "SectionContent",
    "SectionEditor",
    "SectionExtractor",
    "SectionMerger",
    "SectionParseError",
    "TrailingWhitespaceEditor",
    "UnmatchedSectionEndError",
    "UnterminatedSectionError",
    "extract_sections",
    "merge_sections",
    "render",
]
