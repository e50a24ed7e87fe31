"""
Export of the current basics state and its Gray sequence.

JSON shape (field names are part of the contract):

    {
      "bits": 4,
      "currentValue": 10,
      "graySequence": [{"decimal": 0, "binary": "0000", "gray": "0000"}, ...]
    }

The comparison table can also be exported as CSV for spreadsheets.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pandas as pd

from graylab.core.sequence import generate_sequence
from graylab.core.state import AppState


def export_state(state: AppState) -> dict[str, Any]:
    """Serializable dict of the basics bit width, value and sequence."""
    bits = state.basics.bits
    return {
        "bits": bits,
        "currentValue": state.basics.value,
        "graySequence": [
            {"decimal": row.index, "binary": row.binary, "gray": row.gray}
            for row in generate_sequence(bits)
        ],
    }


def export_json(state: AppState, indent: int = 2) -> str:
    """Export as a JSON string for the user to copy."""
    return json.dumps(export_state(state), indent=indent, ensure_ascii=False)


def save_export(state: AppState, path: str | Path) -> Path:
    """
    Write the JSON export to a file.

    Args:
        state: Application state to export.
        path: Target file; parent directories are created.

    Returns:
        Path to the written file.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        f.write(export_json(state))
    return path


def sequence_dataframe(bits: int) -> pd.DataFrame:
    """Comparison table as a DataFrame (Decimal, Binary, Gray, Hamming)."""
    rows = generate_sequence(bits)
    return pd.DataFrame({
        "Decimal": [r.index for r in rows],
        "Binary": [r.binary for r in rows],
        "Gray": [r.gray for r in rows],
        "Hamming": [r.hamming_from_previous for r in rows],
    })


def sequence_csv(bits: int) -> str:
    """Comparison table as CSV text."""
    return sequence_dataframe(bits).to_csv(index=False)
