"""
Tests for reading uploads and exporting JSON files.
"""

from __future__ import annotations

import io
import json
from pathlib import Path
from types import SimpleNamespace

import pytest

from json_query_toolkit.io_utils import export_json_file, is_json_file, load_json_file, read_text_content


def test_read_text_content_from_file_object() -> None:
    """Byte streams are rewound and decoded as UTF-8."""

    stream = io.BytesIO('{"a": "é"}'.encode("utf-8"))
    stream.read()

    assert read_text_content(stream) == '{"a": "é"}'


def test_read_text_content_from_path(tmp_path: Path) -> None:
    """Paths and objects with a name attribute are opened from disk."""

    path = tmp_path / "data.json"
    path.write_text("[1, 2]", encoding="utf-8")

    assert read_text_content(str(path)) == "[1, 2]"
    assert read_text_content(SimpleNamespace(name=str(path))) == "[1, 2]"


def test_read_text_content_requires_file() -> None:
    """None is rejected with a readable message."""

    with pytest.raises(ValueError, match="No file uploaded"):
        read_text_content(None)


def test_load_json_file(tmp_path: Path) -> None:
    """Valid files parse to Ok, invalid or missing files to Err."""

    good = tmp_path / "good.json"
    good.write_text('{"k": [1, 2]}', encoding="utf-8")
    bad = tmp_path / "bad.json"
    bad.write_text("{k: 1}", encoding="utf-8")

    assert load_json_file(str(good)).value == {"k": [1, 2]}
    assert not load_json_file(str(bad)).ok
    assert not load_json_file(str(tmp_path / "missing.json")).ok
    assert not load_json_file(None).ok


def test_is_json_file() -> None:
    """Extension or mime type marks a JSON file."""

    assert is_json_file("DATA.JSON")
    assert is_json_file(SimpleNamespace(name="upload.bin", mime_type="application/json"))
    assert not is_json_file(SimpleNamespace(name="notes.txt"))
    assert not is_json_file(None)


def test_export_json_file(tmp_path: Path) -> None:
    """Exports add the .json suffix and keep non-ASCII text."""

    path = export_json_file({"name": "café", "n": [1, 2]}, "result", export_dir=str(tmp_path))

    assert path == str(tmp_path / "result.json")
    content = Path(path).read_text(encoding="utf-8")
    assert "café" in content
    assert json.loads(content) == {"name": "café", "n": [1, 2]}


def test_export_json_file_default_name(tmp_path: Path) -> None:
    """A blank name falls back to output.json."""

    path = export_json_file([1], "  ", export_dir=str(tmp_path / "nested"))

    assert Path(path).name == "output.json"
    assert Path(path).exists()
