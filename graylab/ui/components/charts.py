"""
Reusable chart components for the Gray Code Explorer UI.

Provides helper functions that return Plotly figures for:
  - Bit flips per step, Gray vs binary
  - Modulation constellations with Gray / binary labels
  - Neighbour bit-error comparison across constellation sizes
"""

from typing import Optional

import plotly.graph_objects as go
import pandas as pd

from graylab.core.constellation import (
    ConstellationPoint,
    compare_labelings,
    nearest_neighbour_pairs,
)
from graylab.core.sequence import sequence_arrays
from graylab.utils.encoding import hamming_distance


GRAY_COLOR = "#4fc3f7"
BINARY_COLOR = "#e67e22"


# ---------------------------------------------------------------------------
# Sequence charts
# ---------------------------------------------------------------------------

def bit_flip_comparison(bits: int, title: Optional[str] = None) -> go.Figure:
    """
    Grouped bars of bits flipped when stepping into each value.

    Args:
        bits: Bit width of the sequence.
        title: Chart title (auto-generated if None).

    Returns:
        Plotly figure.
    """
    indices, _, gray_distance, binary_distance = sequence_arrays(bits)
    if title is None:
        title = f"Bits flipped per step ({len(indices)} values, wrap included)"

    fig = go.Figure(data=[
        go.Bar(x=indices, y=binary_distance, name="Binary", marker_color=BINARY_COLOR),
        go.Bar(x=indices, y=gray_distance, name="Gray", marker_color=GRAY_COLOR),
    ])
    fig.update_layout(
        title=title,
        barmode="group",
        xaxis_title="Value (step from previous)",
        yaxis_title="Bits changed",
        template="plotly_white",
        legend=dict(orientation="h", yanchor="bottom", y=1.02, xanchor="right", x=1),
    )
    return fig


# ---------------------------------------------------------------------------
# Constellation charts
# ---------------------------------------------------------------------------

def constellation_figure(
    points: list[ConstellationPoint],
    title: str = "Constellation",
    color: str = GRAY_COLOR,
) -> go.Figure:
    """
    Scatter of constellation symbols with their bit labels.

    Nearest-neighbour links are drawn green when the labels differ by one
    bit and red otherwise.
    """
    fig = go.Figure()

    one_bit_x: list = []
    one_bit_y: list = []
    multi_bit_x: list = []
    multi_bit_y: list = []
    for a, b in nearest_neighbour_pairs(points):
        pa, pb = points[a], points[b]
        if hamming_distance(pa.label, pb.label) == 1:
            one_bit_x += [pa.i, pb.i, None]
            one_bit_y += [pa.q, pb.q, None]
        else:
            multi_bit_x += [pa.i, pb.i, None]
            multi_bit_y += [pa.q, pb.q, None]

    if one_bit_x:
        fig.add_trace(go.Scatter(
            x=one_bit_x, y=one_bit_y, mode="lines",
            line=dict(color="rgba(46, 204, 113, 0.6)", width=2),
            name="1-bit neighbours", hoverinfo="skip",
        ))
    if multi_bit_x:
        fig.add_trace(go.Scatter(
            x=multi_bit_x, y=multi_bit_y, mode="lines",
            line=dict(color="rgba(231, 76, 60, 0.6)", width=2),
            name="multi-bit neighbours", hoverinfo="skip",
        ))

    fig.add_trace(go.Scatter(
        x=[p.i for p in points],
        y=[p.q for p in points],
        mode="markers+text",
        text=[p.bits for p in points],
        textposition="top center",
        textfont=dict(family="monospace", size=11),
        marker=dict(size=10, color=color, line=dict(width=1, color="rgba(0,0,0,0.4)")),
        name="Symbols",
        hovertemplate="I=%{x:.2f}, Q=%{y:.2f}<br>%{text}<extra></extra>",
    ))

    fig.update_layout(
        title=title,
        xaxis=dict(title="In-phase", scaleanchor="y", scaleratio=1, zeroline=True),
        yaxis=dict(title="Quadrature", zeroline=True),
        template="plotly_white",
        legend=dict(orientation="h", yanchor="bottom", y=1.02, xanchor="right", x=1),
    )
    return fig


def labeling_comparison(
    scheme: str,
    bit_range: list[int],
    title: Optional[str] = None,
) -> go.Figure:
    """
    Mean bit errors per nearest-neighbour slip, Gray vs binary labelling.

    Args:
        scheme: 'pam', 'psk' or 'qam'.
        bit_range: Bits per symbol to compare (even values only for 'qam').
        title: Chart title (auto-generated if None).

    Returns:
        Plotly figure.
    """
    records = []
    for k in bit_range:
        for labeling, stats in compare_labelings(scheme, k).items():
            records.append({
                "order": f"{1 << k}-{scheme.upper()}",
                "labeling": labeling,
                "mean_bit_errors": stats.mean_bit_errors,
            })
    df = pd.DataFrame(records)

    if title is None:
        title = f"Bit errors per neighbour slip ({scheme.upper()})"

    fig = go.Figure()
    for labeling, color in [("binary", BINARY_COLOR), ("gray", GRAY_COLOR)]:
        sub = df[df["labeling"] == labeling] if not df.empty else df
        fig.add_trace(go.Bar(
            x=sub["order"] if not sub.empty else [],
            y=sub["mean_bit_errors"] if not sub.empty else [],
            name=labeling.title(),
            marker_color=color,
            text=[f"{v:.2f}" for v in sub["mean_bit_errors"]] if not sub.empty else [],
            textposition="auto",
        ))

    fig.update_layout(
        title=title,
        barmode="group",
        xaxis_title="Constellation",
        yaxis_title="Mean bit errors",
        template="plotly_white",
        legend=dict(orientation="h", yanchor="bottom", y=1.02, xanchor="right", x=1),
    )
    return fig
