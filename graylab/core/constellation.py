"""
Gray-coded modulation constellations.

Compares Gray labelling against natural binary labelling on the classic
digital modulation layouts:

  - M-PAM: M amplitude levels on a line
  - M-PSK: M phases on a circle (uses the cyclic wrap property)
  - square M-QAM: a sqrt(M) x sqrt(M) grid, Gray coded per axis

The figure of merit is the Hamming distance between the labels of nearest
neighbours: a small noise error moves a symbol to a neighbour, so with Gray
labelling it costs exactly one bit.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np

from graylab.utils.encoding import binary_to_gray, hamming_distance, pad_binary

LABELINGS = ("gray", "binary")
SCHEMES = ("pam", "psk", "qam")


@dataclass(frozen=True)
class ConstellationPoint:
    """One symbol: in-phase/quadrature position and its bit label."""
    i: float
    q: float
    label: int
    bits: str


@dataclass(frozen=True)
class NeighbourStats:
    """Bit cost of moving to a nearest neighbour."""
    pairs: int
    mean_bit_errors: float
    max_bit_errors: int


def _label(index: int, labeling: str) -> int:
    if labeling == "gray":
        return binary_to_gray(index)
    if labeling == "binary":
        return index
    raise ValueError(f"labeling must be one of {LABELINGS}, got '{labeling}'")


def pam_constellation(bits_per_symbol: int, labeling: str = "gray") -> list[ConstellationPoint]:
    """M-PAM levels -(M-1), ..., -1, 1, ..., M-1 on the in-phase axis."""
    if bits_per_symbol < 1:
        raise ValueError(f"bits_per_symbol must be >= 1, got {bits_per_symbol}")
    m = 1 << bits_per_symbol
    return [
        ConstellationPoint(
            i=float(2 * k - (m - 1)),
            q=0.0,
            label=_label(k, labeling),
            bits=pad_binary(_label(k, labeling), bits_per_symbol),
        )
        for k in range(m)
    ]


def psk_constellation(bits_per_symbol: int, labeling: str = "gray") -> list[ConstellationPoint]:
    """M-PSK on the unit circle, symbol k at angle 2*pi*k/M."""
    if bits_per_symbol < 1:
        raise ValueError(f"bits_per_symbol must be >= 1, got {bits_per_symbol}")
    m = 1 << bits_per_symbol
    points = []
    for k in range(m):
        phase = 2 * math.pi * k / m
        label = _label(k, labeling)
        points.append(ConstellationPoint(
            i=math.cos(phase),
            q=math.sin(phase),
            label=label,
            bits=pad_binary(label, bits_per_symbol),
        ))
    return points


def qam_constellation(bits_per_symbol: int, labeling: str = "gray") -> list[ConstellationPoint]:
    """
    Square M-QAM; the label is (I-axis label << half) | Q-axis label.

    Raises:
        ValueError: If bits_per_symbol is not a positive even number.
    """
    if bits_per_symbol < 2 or bits_per_symbol % 2:
        raise ValueError(f"square QAM needs an even bits_per_symbol >= 2, got {bits_per_symbol}")
    half = bits_per_symbol // 2
    side = 1 << half
    points = []
    for ix in range(side):
        for iq in range(side):
            label = (_label(ix, labeling) << half) | _label(iq, labeling)
            points.append(ConstellationPoint(
                i=float(2 * ix - (side - 1)),
                q=float(2 * iq - (side - 1)),
                label=label,
                bits=pad_binary(label, bits_per_symbol),
            ))
    return points


def build_constellation(scheme: str, bits_per_symbol: int, labeling: str = "gray") -> list[ConstellationPoint]:
    """Dispatch on scheme name ('pam', 'psk' or 'qam')."""
    builders = {
        "pam": pam_constellation,
        "psk": psk_constellation,
        "qam": qam_constellation,
    }
    if scheme not in builders:
        raise ValueError(f"scheme must be one of {SCHEMES}, got '{scheme}'")
    return builders[scheme](bits_per_symbol, labeling)


def nearest_neighbour_pairs(points: list[ConstellationPoint], tol: float = 1e-9) -> list[tuple[int, int]]:
    """Index pairs (a < b) whose distance equals the minimum distance."""
    if len(points) < 2:
        return []
    xy = np.array([[p.i, p.q] for p in points])
    diff = xy[:, None, :] - xy[None, :, :]
    dist = np.sqrt((diff ** 2).sum(axis=-1))
    np.fill_diagonal(dist, np.inf)
    d_min = dist.min()
    a_idx, b_idx = np.nonzero(np.abs(dist - d_min) <= tol * max(d_min, 1.0))
    return [(int(a), int(b)) for a, b in zip(a_idx, b_idx) if a < b]


def neighbour_stats(points: list[ConstellationPoint]) -> NeighbourStats:
    """Mean and max label Hamming distance over all nearest-neighbour pairs."""
    pairs = nearest_neighbour_pairs(points)
    if not pairs:
        return NeighbourStats(pairs=0, mean_bit_errors=0.0, max_bit_errors=0)
    errors = [hamming_distance(points[a].label, points[b].label) for a, b in pairs]
    return NeighbourStats(
        pairs=len(pairs),
        mean_bit_errors=float(np.mean(errors)),
        max_bit_errors=int(max(errors)),
    )


def compare_labelings(scheme: str, bits_per_symbol: int) -> dict[str, NeighbourStats]:
    """Neighbour statistics for Gray and binary labelling side by side."""
    return {
        labeling: neighbour_stats(build_constellation(scheme, bits_per_symbol, labeling))
        for labeling in LABELINGS
    }
