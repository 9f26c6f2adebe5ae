"""Carry hand-edited section content over into freshly generated text."""

from __future__ import annotations

import threading
from concurrent.futures import Executor
from dataclasses import dataclass, field
from typing import Collection, Dict, List, Mapping, Optional, Set

from .editors.line import LineEditor
from .editors.section import DEFAULT_SECTION_END, DEFAULT_SECTION_START, SectionEditor
from .section import Section


@dataclass(frozen=True)
class SectionContent:
    """Text captured from a named section.

    ``preceding`` maps the name of each named child to the free text found
    right before it, between the previous child and its start marker.
    """

    name: str
    head: str
    tail: str
    preceding: Mapping[str, str] = field(default_factory=dict)


class SectionExtractor(SectionEditor):
    """Records the content of every named section; output is left unchanged.

    Always runs sequentially so that the first occurrence of a duplicated
    name, in document order, is the one kept.
    """

    def __init__(
        self,
        editor: Optional[LineEditor] = None,
        line_separator: Optional[str] = None,
        *,
        start_marker: str = DEFAULT_SECTION_START,
        end_marker: str = DEFAULT_SECTION_END,
    ) -> None:
        super().__init__(
            editor, line_separator, start_marker=start_marker, end_marker=end_marker
        )
        self.sections: Dict[str, SectionContent] = {}

    def start_edit(self) -> None:
        super().start_edit()
        self.sections = {}

    def edit_section(self, section: Section) -> None:
        super().edit_section(section)
        if section.name is not None and section.name not in self.sections:
            self.sections[section.name] = SectionContent(
                name=section.name,
                head=section.head_content,
                tail=section.tail_content,
                preceding=_preceding_text(section),
            )


class SectionMerger(SectionEditor):
    """Replaces the content of named sections with previously captured content.

    Sections missing from ``contents``, or not listed in ``keep`` when it is
    given, keep the content of the text being edited. A merged section also
    takes over the captured free text in front of each of its named children;
    children the captured section did not have keep theirs.
    """

    def __init__(
        self,
        contents: Mapping[str, SectionContent],
        *,
        keep: Optional[Collection[str]] = None,
        editor: Optional[LineEditor] = None,
        line_separator: Optional[str] = None,
        executor: Optional[Executor] = None,
        start_marker: str = DEFAULT_SECTION_START,
        end_marker: str = DEFAULT_SECTION_END,
    ) -> None:
        super().__init__(
            editor,
            line_separator,
            executor=executor,
            start_marker=start_marker,
            end_marker=end_marker,
        )
        self.contents = dict(contents)
        self.keep = frozenset(keep) if keep is not None else None
        self._merged: Set[str] = set()
        self._merged_lock = threading.Lock()

    @property
    def merged_sections(self) -> Set[str]:
        with self._merged_lock:
            return set(self._merged)

    def start_edit(self) -> None:
        super().start_edit()
        with self._merged_lock:
            self._merged.clear()

    def edit_section(self, section: Section) -> None:
        super().edit_section(section)
        name = section.name
        if name is None or name not in self.contents:
            return
        if self.keep is not None and name not in self.keep:
            return
        content = self.contents[name]
        section.head_content = content.head
        section.tail_content = content.tail
        _restore_preceding_text(section, content.preceding)
        with self._merged_lock:
            self._merged.add(name)


def _preceding_text(section: Section) -> Dict[str, str]:
    preceding: Dict[str, str] = {}
    for child in section.sections:
        if child.name is not None:
            preceding.setdefault(child.name, "")
            continue
        # Wrapper nodes hold the free text and the named section that follows it.
        text = child.head_content
        for nested in child.sections:
            if nested.name is not None:
                preceding.setdefault(nested.name, text)
                text = ""
    return preceding


def _restore_preceding_text(section: Section, preceding: Mapping[str, str]) -> None:
    children: List[Section] = []
    for child in section.sections:
        if child.name is None:
            named = [nested.name for nested in child.sections if nested.name is not None]
            if named and named[0] in preceding:
                child.head_content = preceding[named[0]]
            children.append(child)
        elif preceding.get(child.name):
            wrapper = Section()
            wrapper.append_head(preceding[child.name])
            wrapper.sections.append(child)
            children.append(wrapper)
        else:
            children.append(child)
    section.sections[:] = children


def extract_sections(
    text: str,
    *,
    line_separator: Optional[str] = None,
    start_marker: str = DEFAULT_SECTION_START,
    end_marker: str = DEFAULT_SECTION_END,
) -> Dict[str, SectionContent]:
    """Return the content of every named section in ``text``, keyed by name."""
    extractor = SectionExtractor(
        line_separator=line_separator, start_marker=start_marker, end_marker=end_marker
    )
    extractor.edit(text)
    return extractor.sections


def merge_sections(
    generated: str,
    existing: str,
    *,
    keep: Optional[Collection[str]] = None,
    line_separator: Optional[str] = None,
    executor: Optional[Executor] = None,
    start_marker: str = DEFAULT_SECTION_START,
    end_marker: str = DEFAULT_SECTION_END,
) -> str:
    """Return ``generated`` with section content taken from ``existing`` where both have it."""
    contents = extract_sections(
        existing, line_separator=line_separator, start_marker=start_marker, end_marker=end_marker
    )
    merger = SectionMerger(
        contents,
        keep=keep,
        line_separator=line_separator,
        executor=executor,
        start_marker=start_marker,
        end_marker=end_marker,
    )
    return merger.edit(generated) or ""


__all__ = [
    "SectionContent",
    "SectionExtractor",
    "SectionMerger",
    "extract_sections",
    "merge_sections",
]
