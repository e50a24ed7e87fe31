"""
Plotly drawing backend for the encoder disc.

Consumes the instruction list produced by `graylab.disc.renderer` and builds
a Plotly figure:
  - sectors merged into runs of equal bits per ring, one filled trace per color
  - the sector under the read head outlined in the accent color
  - bit digits as a text trace
  - center marker and read line as layout shapes

Screen coordinates are kept (y grows downward) by reversing the y axis.
"""

from __future__ import annotations

import math
from collections import defaultdict
from typing import Optional

import numpy as np
import plotly.graph_objects as go

from graylab.disc.renderer import (
    CircleCommand,
    DiscDrawing,
    LineCommand,
    SectorCommand,
    TextCommand,
)


# ---------------------------------------------------------------------------
# Geometry helpers
# ---------------------------------------------------------------------------

def annular_polygon(
    cx: float, cy: float, r0: float, r1: float, a0: float, a1: float,
    resolution: float = math.radians(3),
) -> tuple[np.ndarray, np.ndarray]:
    """Closed outline of an annular sector: outer arc a0→a1, inner arc a1→a0."""
    n = max(2, int(math.ceil(abs(a1 - a0) / resolution)) + 1)
    outer = np.linspace(a0, a1, n)
    inner = outer[::-1]
    xs = np.concatenate([cx + r1 * np.cos(outer), cx + r0 * np.cos(inner), [cx + r1 * math.cos(a0)]])
    ys = np.concatenate([cy + r1 * np.sin(outer), cy + r0 * np.sin(inner), [cy + r1 * math.sin(a0)]])
    return xs, ys


def merge_runs(sectors: list[SectorCommand]) -> list[tuple[SectorCommand, SectorCommand]]:
    """
    Group consecutive sectors of one ring that share a bit.

    Returns:
        (first, last) command of every run, in ring then sector order.
    """
    by_ring: dict[int, list[SectorCommand]] = defaultdict(list)
    for cmd in sectors:
        by_ring[cmd.ring].append(cmd)

    runs = []
    for ring in sorted(by_ring):
        ring_sectors = sorted(by_ring[ring], key=lambda c: c.sector)
        first = last = ring_sectors[0]
        for cmd in ring_sectors[1:]:
            if cmd.bit == last.bit:
                last = cmd
                continue
            runs.append((first, last))
            first = last = cmd
        runs.append((first, last))
    return runs


# ---------------------------------------------------------------------------
# Figure
# ---------------------------------------------------------------------------

def disc_figure(drawing: DiscDrawing, title: Optional[str] = None) -> go.Figure:
    """
    Build a Plotly figure from disc drawing instructions.

    Args:
        drawing: Output of render_disc().
        title: Optional chart title.

    Returns:
        Plotly figure.
    """
    fig = go.Figure()
    cx, cy = drawing.center
    sectors = drawing.sectors()

    border = next((c.stroke for c in sectors if not c.highlighted), None)

    # --- Filled runs, one trace per fill color ---
    fills: dict[str, tuple[list, list]] = {}
    for first, last in merge_runs(sectors):
        xs, ys = annular_polygon(cx, cy, first.inner_radius, first.outer_radius,
                                 first.start_angle, last.end_angle)
        px_list, py_list = fills.setdefault(first.fill, ([], []))
        px_list.extend(xs.tolist() + [None])
        py_list.extend(ys.tolist() + [None])

    for color, (xs, ys) in fills.items():
        fig.add_trace(go.Scatter(
            x=xs, y=ys,
            mode="lines",
            fill="toself",
            fillcolor=color,
            line=dict(color=border or color, width=0.5),
            hoverinfo="skip",
            showlegend=False,
        ))

    # --- Highlighted sector outline ---
    for cmd in sectors:
        if not cmd.highlighted:
            continue
        xs, ys = annular_polygon(cx, cy, cmd.inner_radius, cmd.outer_radius,
                                 cmd.start_angle, cmd.end_angle)
        fig.add_trace(go.Scatter(
            x=xs, y=ys,
            mode="lines",
            line=dict(color=cmd.stroke, width=cmd.line_width),
            hovertemplate=f"Sector {cmd.sector}, ring {cmd.ring}: bit {cmd.bit}<extra></extra>",
            showlegend=False,
        ))

    # --- Bit digits ---
    texts: dict[str, list[TextCommand]] = defaultdict(list)
    for cmd in drawing.texts():
        texts[cmd.color].append(cmd)
    for color, cmds in texts.items():
        fig.add_trace(go.Scatter(
            x=[c.x for c in cmds], y=[c.y for c in cmds],
            mode="text",
            text=[c.text for c in cmds],
            textfont=dict(family="monospace", color=color, size=cmds[0].font_size),
            hoverinfo="skip",
            showlegend=False,
        ))

    # --- Marker and read line ---
    for cmd in drawing.commands:
        if isinstance(cmd, CircleCommand):
            fig.add_shape(
                type="circle",
                x0=cmd.cx - cmd.radius, y0=cmd.cy - cmd.radius,
                x1=cmd.cx + cmd.radius, y1=cmd.cy + cmd.radius,
                line=dict(color=cmd.stroke, width=cmd.line_width),
            )
        elif isinstance(cmd, LineCommand):
            fig.add_shape(
                type="line",
                x0=cmd.x0, y0=cmd.y0, x1=cmd.x1, y1=cmd.y1,
                line=dict(color=cmd.stroke, width=cmd.line_width),
            )

    if title is None:
        kind = "Gray" if drawing.is_gray else "Binary"
        title = f"{kind} disc ({drawing.bits} bits)"

    fig.update_layout(
        title=title,
        width=drawing.width,
        height=drawing.height + 60,
        xaxis=dict(range=[0, drawing.width], visible=False,
                   scaleanchor="y", scaleratio=1, constrain="domain"),
        yaxis=dict(range=[drawing.height, 0], visible=False),
        template="plotly_white",
        plot_bgcolor="rgba(0,0,0,0)",
        margin=dict(l=10, r=10, t=50, b=10),
        showlegend=False,
    )
    return fig


class PlotlyDiscBackend:
    """DrawingBackend that keeps the last drawing as a Plotly figure."""

    def __init__(self, title: Optional[str] = None):
        self.title = title
        self.figure: Optional[go.Figure] = None

    def draw(self, drawing: DiscDrawing) -> None:
        self.figure = disc_figure(drawing, title=self.title)
