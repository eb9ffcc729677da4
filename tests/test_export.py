"""
Unit tests for export functionality.

Tests verify that the export method correctly writes the subscription table
to files in JSON format.
"""

import json
from pathlib import Path

from broadcast import Broadcast


def test_export_creates_valid_json_file(tmp_path: Path) -> None:
    """Test that export creates a valid JSON file with correct content."""
    events = Broadcast()

    def handler1(data: str) -> None:
        pass

    def handler2(data: str) -> None:
        pass

    events.subscribe("test.event", handler1)
    events.subscribe("startup", handler2)

    output_file = tmp_path / "broadcast_export.json"
    events.export(output_file)

    assert output_file.exists()

    with open(output_file) as f:
        data = json.load(f)

    assert data == events.to_dict()
    assert "test" in data
    assert "startup" in data


def test_export_with_string_and_path_types(tmp_path: Path) -> None:
    """Test that export accepts both string and Path objects."""
    events = Broadcast()
    events.subscribe("change", lambda: None)

    path_file = tmp_path / "path_export.json"
    str_file = str(tmp_path / "str_export.json")

    events.export(path_file)
    events.export(str_file)

    assert path_file.read_text() == Path(str_file).read_text()


def test_export_empty_broadcaster(tmp_path: Path) -> None:
    """Test that exporting with no subscriptions writes an empty object."""
    output_file = tmp_path / "empty.json"

    Broadcast().export(output_file)

    assert json.loads(output_file.read_text()) == {}


def test_to_string_is_json() -> None:
    """Test that to_string() is the indented JSON form of to_dict()."""
    events = Broadcast()
    events.subscribe("change.ui", lambda: None)

    assert json.loads(events.to_string()) == events.to_dict()
    assert events.to_string() == json.dumps(events.to_dict(), indent=4)
