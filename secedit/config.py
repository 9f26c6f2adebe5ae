"""Configuration loading for secedit (.secedit.yml)."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml

from .editors.section import DEFAULT_SECTION_END, DEFAULT_SECTION_START

CONFIG_FILENAME = ".secedit.yml"

LINE_SEPARATORS: Dict[str, Optional[str]] = {
    "lf": "\n",
    "crlf": "\r\n",
    "cr": "\r",
    "native": None,
}


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class MarkerConfig:
    """Marker vocabulary used to detect sections."""

    start: str = DEFAULT_SECTION_START
    end: str = DEFAULT_SECTION_END


@dataclass
class EditConfig:
    """Settings applied when re-serializing a file."""

    workers: int = 0
    strip_trailing_whitespace: bool = False


@dataclass
class MergeConfig:
    """Sections carried over from existing files during a merge; empty keeps all."""

    keep: List[str] = field(default_factory=list)


@dataclass
class SeceditConfig:
    """Represents the settings defined in .secedit.yml."""

    root: Path
    line_separator: Optional[str] = None
    markers: MarkerConfig = field(default_factory=MarkerConfig)
    edit: EditConfig = field(default_factory=EditConfig)
    merge: MergeConfig = field(default_factory=MergeConfig)

    @property
    def effective_line_separator(self) -> str:
        return self.line_separator if self.line_separator is not None else os.linesep


def load_config(config_path: Path) -> SeceditConfig:
    """Load configuration from a directory, a file next to it, or the file itself."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return SeceditConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    line_separator = _as_line_separator(data.get("line_separator"))

    markers = MarkerConfig()
    marker_data = _as_dict(data.get("markers"))
    if marker_data:
        markers.start = _as_marker(marker_data.get("start"), "markers.start") or markers.start
        markers.end = _as_marker(marker_data.get("end"), "markers.end") or markers.end

    edit = EditConfig()
    edit_data = _as_dict(data.get("edit"))
    if edit_data:
        workers = _as_int(edit_data.get("workers"))
        if workers is not None and workers < 0:
            raise ConfigError("edit.workers must not be negative")
        edit.workers = workers or 0
        edit.strip_trailing_whitespace = bool(_as_bool(edit_data.get("strip_trailing_whitespace")))

    merge = MergeConfig()
    merge_data = _as_dict(data.get("merge"))
    if merge_data:
        merge.keep = _as_str_list(merge_data.get("keep"))

    return SeceditConfig(
        root=root,
        line_separator=line_separator,
        markers=markers,
        edit=edit,
        merge=merge,
    )


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    if config_path.name != CONFIG_FILENAME:
        return (config_path.parent / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Any:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded if loaded is not None else {}


def _as_line_separator(value: Any) -> Optional[str]:
    if value is None:
        return None
    if not isinstance(value, str) or value.strip().lower() not in LINE_SEPARATORS:
        choices = ", ".join(sorted(LINE_SEPARATORS))
        raise ConfigError(f"line_separator must be one of: {choices}")
    return LINE_SEPARATORS[value.strip().lower()]


def _as_marker(value: Any, key: str) -> Optional[str]:
    if value is None:
        return None
    if not isinstance(value, str) or not value:
        raise ConfigError(f"{key} must be a non-empty string")
    return value


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value)
        except ValueError:
            return None
    return None


def _as_bool(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "yes", "1"}:
            return True
        if lowered in {"false", "no", "0"}:
            return False
    return None


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float))]
    return []


__all__ = [
    "CONFIG_FILENAME",
    "ConfigError",
    "EditConfig",
    "MarkerConfig",
    "MergeConfig",
    "SeceditConfig",
    "load_config",
]
