"""Tests for secedit.config."""

from __future__ import annotations

import os
from pathlib import Path

import pytest

from secedit.config import ConfigError, SeceditConfig, load_config


def test_load_config_returns_defaults_when_missing(tmp_path: Path) -> None:
    config = load_config(tmp_path)

    assert isinstance(config, SeceditConfig)
    assert config.root == tmp_path.resolve()
    assert config.line_separator is None
    assert config.effective_line_separator == os.linesep
    assert config.markers.start == "SECTION-START["
    assert config.markers.end == "SECTION-END"
    assert config.edit.workers == 0
    assert config.edit.strip_trailing_whitespace is False
    assert config.merge.keep == []


def test_load_config_parses_expected_fields(tmp_path: Path) -> None:
    (tmp_path / ".secedit.yml").write_text(
        """
line_separator: crlf
markers:
  start: "// BEGIN["
  end: "// END"
edit:
  workers: 4
  strip_trailing_whitespace: true
merge:
  keep: [constructors, methods]
""",
        encoding="utf-8",
    )

    config = load_config(tmp_path / "Generated.java")

    assert config.line_separator == "\r\n"
    assert config.effective_line_separator == "\r\n"
    assert config.markers.start == "// BEGIN["
    assert config.markers.end == "// END"
    assert config.edit.workers == 4
    assert config.edit.strip_trailing_whitespace is True
    assert config.merge.keep == ["constructors", "methods"]


def test_load_config_accepts_file_path(tmp_path: Path) -> None:
    config_file = tmp_path / ".secedit.yml"
    config_file.write_text("line_separator: lf\n", encoding="utf-8")
    assert load_config(config_file).line_separator == "\n"


def test_load_config_empty_file_uses_defaults(tmp_path: Path) -> None:
    (tmp_path / ".secedit.yml").write_text("\n", encoding="utf-8")
    assert load_config(tmp_path).markers.start == "SECTION-START["


@pytest.mark.parametrize(
    "content",
    [
        "- not\n- a mapping\n",
        "line_separator: unix\n",
        "markers: {start: ''}\n",
        "edit: {workers: -1}\n",
        "edit: [1,\n",
    ],
)
def test_load_config_rejects_invalid_content(tmp_path: Path, content: str) -> None:
    (tmp_path / ".secedit.yml").write_text(content, encoding="utf-8")
    with pytest.raises(ConfigError):
        load_config(tmp_path)
