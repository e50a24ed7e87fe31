"""
Unit tests for state export.

Tests cover:
- JSON field names and contents
- Saved file contents and parent directory creation
- Comparison table as DataFrame and CSV
"""

import json
from pathlib import Path

import pytest

from graylab.core.state import AppState, set_bit_width, set_value
from graylab.export.snapshot import (
    export_json,
    export_state,
    save_export,
    sequence_csv,
    sequence_dataframe,
)


@pytest.fixture
def state() -> AppState:
    state = AppState()
    set_bit_width(state, 4)
    set_value(state, 10)
    return state


class TestExportState:
    """Tests for the export dict."""

    def test_field_names(self, state):
        data = export_state(state)
        assert set(data) == {"bits", "currentValue", "graySequence"}
        assert set(data["graySequence"][0]) == {"decimal", "binary", "gray"}

    def test_contents(self, state):
        data = export_state(state)
        assert data["bits"] == 4
        assert data["currentValue"] == 10
        assert len(data["graySequence"]) == 16
        assert data["graySequence"][10] == {"decimal": 10, "binary": "1010", "gray": "1111"}

    def test_json_parses(self, state):
        assert json.loads(export_json(state)) == export_state(state)


class TestExportFiles:
    """Tests for export file I/O."""

    def test_save_creates_parents(self, state, tmp_path: Path):
        path = save_export(state, tmp_path / "out" / "gray.json")
        assert path.exists()
        assert json.loads(path.read_text(encoding="utf-8")) == export_state(state)

    def test_save_overwrites(self, state, tmp_path: Path):
        path = tmp_path / "gray.json"
        save_export(state, path)
        set_value(state, 3)
        save_export(state, path)
        assert json.loads(path.read_text(encoding="utf-8"))["currentValue"] == 3


class TestSequenceTable:
    """Tests for the DataFrame/CSV table."""

    def test_dataframe_columns(self):
        df = sequence_dataframe(3)
        assert list(df.columns) == ["Decimal", "Binary", "Gray", "Hamming"]
        assert len(df) == 8
        assert (df["Hamming"] == 1).all()

    def test_csv(self):
        lines = sequence_csv(2).strip().splitlines()
        assert lines[0] == "Decimal,Binary,Gray,Hamming"
        assert lines[3] == "2,10,11,1"
