"""File-level runs of the section editor: edit, outline and merge."""

from __future__ import annotations

import difflib
from concurrent.futures import ThreadPoolExecutor
from contextlib import ExitStack
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Collection, Dict, Iterator, List, Optional, Tuple

from .config import SeceditConfig, load_config
from .editors.line import LineEditor
from .editors.section import SectionEditor
from .editors.whitespace import TrailingWhitespaceEditor
from .logging import get_logger
from .merge import SectionContent, SectionMerger, extract_sections
from .section import Section


@dataclass
class EditOutcome:
    """Result of an edit or merge run."""

    path: Path
    diff: str
    changed: bool
    dry_run: bool
    sections: List[str] = field(default_factory=list)


class _OutlineEditor(SectionEditor):
    """Keeps the parsed tree around after rendering."""

    root: Optional[Section] = None

    def render_output(self, root: Section) -> str:
        self.root = root
        return super().render_output(root)


class Orchestrator:
    """Coordinates reading, editing and writing files with section editors."""

    def __init__(
        self,
        config_loader: Callable[[Path], SeceditConfig] = load_config,
    ) -> None:
        self._config_loader = config_loader
        self.logger = get_logger("orchestrator")

    def run_edit(
        self,
        path: str | Path,
        *,
        dry_run: bool = False,
        workers: Optional[int] = None,
        strip_trailing_whitespace: Optional[bool] = None,
    ) -> EditOutcome:
        """Re-serialize a file through the section editor."""
        file_path = Path(path).expanduser().resolve()
        config = self._config_loader(file_path)
        self.logger.info("Editing %s", file_path)
        original = _read_text(file_path)

        strip = config.edit.strip_trailing_whitespace if strip_trailing_whitespace is None else strip_trailing_whitespace
        worker_count = config.edit.workers if workers is None else workers

        with ExitStack() as stack:
            executor = None
            if worker_count > 1:
                executor = stack.enter_context(ThreadPoolExecutor(max_workers=worker_count))
            chained: Optional[LineEditor] = None
            if strip:
                chained = TrailingWhitespaceEditor(line_separator=config.effective_line_separator)
            editor = SectionEditor(
                chained,
                config.effective_line_separator,
                executor=executor,
                start_marker=config.markers.start,
                end_marker=config.markers.end,
            )
            edited = editor.edit(original) or ""

        edited = _keep_final_break(original, edited, config.effective_line_separator)

        sections = sorted(editor.present_sections)
        self.logger.debug("Found %d named section(s)", len(sections))
        return self._finish(file_path, original, edited, dry_run=dry_run, sections=sections)

    def run_sections(self, path: str | Path) -> List[Tuple[int, str]]:
        """Return ``(depth, name)`` for every named section of a file in document order."""
        file_path = Path(path).expanduser().resolve()
        config = self._config_loader(file_path)
        editor = _OutlineEditor(
            line_separator=config.effective_line_separator,
            start_marker=config.markers.start,
            end_marker=config.markers.end,
        )
        editor.edit(_read_text(file_path))
        if editor.root is None:
            return []
        return list(_outline(editor.root, 0))

    def run_merge(
        self,
        generated: str | Path,
        existing: str | Path,
        *,
        output: str | Path | None = None,
        keep: Optional[Collection[str]] = None,
        dry_run: bool = False,
    ) -> EditOutcome:
        """Merge hand-edited sections of ``existing`` into ``generated`` and write the result."""
        generated_path = Path(generated).expanduser().resolve()
        existing_path = Path(existing).expanduser().resolve()
        target = Path(output).expanduser().resolve() if output is not None else existing_path
        config = self._config_loader(existing_path)
        separator = config.effective_line_separator

        generated_text = _read_text(generated_path)
        previous = _read_text(target) if target.exists() else ""
        keep_names = keep if keep else (config.merge.keep or None)

        if not existing_path.exists():
            self.logger.info("%s does not exist; writing generated content as is", existing_path)
            contents: Dict[str, SectionContent] = {}
        else:
            contents = extract_sections(
                _read_text(existing_path),
                line_separator=separator,
                start_marker=config.markers.start,
                end_marker=config.markers.end,
            )

        merger = SectionMerger(
            contents,
            keep=keep_names,
            line_separator=separator,
            start_marker=config.markers.start,
            end_marker=config.markers.end,
        )
        merged = merger.edit(generated_text) or ""
        kept = sorted(merger.merged_sections)
        self.logger.info("Kept %d hand-edited section(s) from %s", len(kept), existing_path)
        return self._finish(target, previous, merged, dry_run=dry_run, sections=kept)

    def _finish(
        self,
        path: Path,
        before: str,
        after: str,
        *,
        dry_run: bool,
        sections: List[str],
    ) -> EditOutcome:
        changed = before != after
        diff = _unified_diff(before, after, path)
        if changed and not dry_run:
            path.parent.mkdir(parents=True, exist_ok=True)
            with path.open("w", encoding="utf-8", newline="") as handle:
                handle.write(after)
            self.logger.info("Wrote %s", path)
        elif not changed:
            self.logger.info("%s already up to date", path)
        return EditOutcome(path=path, diff=diff, changed=changed, dry_run=dry_run, sections=sections)


def _read_text(path: Path) -> str:
    with path.open("r", encoding="utf-8", newline="") as handle:
        return handle.read()


def _keep_final_break(original: str, edited: str, separator: str) -> str:
    """Drop the separator the line editor appends when the file had no final line break."""
    if original.endswith(("\n", "\r")) or not edited.endswith(separator):
        return edited
    return edited[: -len(separator)]


def _unified_diff(before: str, after: str, path: Path) -> str:
    return "".join(
        difflib.unified_diff(
            before.splitlines(keepends=True),
            after.splitlines(keepends=True),
            fromfile=f"a/{path.name}",
            tofile=f"b/{path.name}",
        )
    )


def _outline(section: Section, depth: int) -> Iterator[Tuple[int, str]]:
    for child in section.sections:
        if child.name is None:
            yield from _outline(child, depth)
        else:
            yield depth, child.name
            yield from _outline(child, depth + 1)


__all__ = ["EditOutcome", "Orchestrator"]
