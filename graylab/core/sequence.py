"""
Gray code sequence generation.

Builds the comparison table (decimal, binary, Gray, Hamming distance to the
previous row) for a bit width, and the recursive reflected-binary
construction that derives the same sequence without the XOR formula.

The table is treated as a ring: row 0 is compared against row 2^n - 1, so the
Hamming column shows that the cyclic wrap is also a single-bit step.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator

import numpy as np
from numpy.typing import NDArray

from graylab.utils.encoding import (
    binary_to_gray,
    clamp_bit_width,
    gray_codes,
    hamming_distance,
    pad_binary,
    popcount,
)


@dataclass(frozen=True)
class SequenceRow:
    """One row of the binary / Gray comparison table."""
    index: int
    binary: str
    gray: str
    hamming_from_previous: int


# ---------------------------------------------------------------------------
# Comparison table
# ---------------------------------------------------------------------------

def iter_sequence(bits: int) -> Iterator[SequenceRow]:
    """
    Lazily yield the comparison rows for a bit width.

    Args:
        bits: Bit width; clamped into [1, 12].

    Yields:
        SequenceRow for index 0 .. 2^bits - 1.
    """
    bits = clamp_bit_width(bits)
    size = 1 << bits
    for i in range(size):
        gray = binary_to_gray(i)
        previous_gray = binary_to_gray((i - 1) % size)
        yield SequenceRow(
            index=i,
            binary=pad_binary(i, bits),
            gray=pad_binary(gray, bits),
            hamming_from_previous=hamming_distance(previous_gray, gray),
        )


def generate_sequence(bits: int) -> list[SequenceRow]:
    """Full comparison table for a bit width (at most 4096 rows)."""
    return list(iter_sequence(bits))


def sequence_arrays(
    bits: int,
) -> tuple[NDArray[np.int64], NDArray[np.int64], NDArray[np.int64], NDArray[np.int64]]:
    """
    Vectorised comparison data for charts.

    Returns:
        (indices, gray, gray_distance, binary_distance) where the distances
        are measured to the cyclically previous entry.
    """
    bits = clamp_bit_width(bits)
    indices = np.arange(1 << bits, dtype=np.int64)
    previous = np.roll(indices, 1)
    gray = gray_codes(indices)
    gray_distance = popcount(gray ^ np.roll(gray, 1))
    binary_distance = popcount(indices ^ previous)
    return indices, gray, gray_distance, binary_distance


# ---------------------------------------------------------------------------
# Reflected binary construction
# ---------------------------------------------------------------------------

def reflected_binary_construction(k: int) -> list[str]:
    """
    Build the k-bit Gray sequence by reflection.

    RBC(0) = [""]
    RBC(k) = "0" + each of RBC(k-1), then "1" + each of reversed RBC(k-1)

    Examples:
        >>> reflected_binary_construction(2)
        ['00', '01', '11', '10']
    """
    if k < 0:
        raise ValueError(f"reflected_binary_construction expects k >= 0, got {k}")
    codes = [""]
    for _ in range(k):
        codes = ["0" + c for c in codes] + ["1" + c for c in reversed(codes)]
    return codes


def reflection_stages(k: int) -> list[list[str]]:
    """All intermediate lists RBC(0) .. RBC(k), for step-by-step display."""
    if k < 0:
        raise ValueError(f"reflection_stages expects k >= 0, got {k}")
    stages = [[""]]
    for _ in range(k):
        prev = stages[-1]
        stages.append(["0" + c for c in prev] + ["1" + c for c in reversed(prev)])
    return stages
