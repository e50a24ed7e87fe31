"""
Encoder disc renderer.

Projects the codec and the angle/sector mapper onto ring/sector geometry and
emits a list of drawing instructions. A backend (Plotly in the web UI, or a
recording backend in tests) turns the instructions into pixels, so the
geometry and coloring rules stay testable without a real canvas.

Layout:
  - `bits` concentric rings, ring 0 outermost = most significant bit
  - 2^bits sectors per ring, sector 0 starting at "up", clockwise
  - a fixed read line pointing up and a center marker, unaffected by rotation
  - optional bit digits when rings are wide enough to read
  - optional outline of the sector under the read head
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Optional, Protocol, Union

from graylab.core.config import DiscConfig
from graylab.disc.mapper import sector_count, sector_from_angle, sector_span
from graylab.utils.encoding import binary_to_gray, clamp_bit_width, pad_binary

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Drawing instructions
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class SectorCommand:
    """Filled annular sector, angles in screen radians."""
    ring: int
    sector: int
    inner_radius: float
    outer_radius: float
    start_angle: float
    end_angle: float
    bit: int
    fill: str
    stroke: str
    line_width: float
    highlighted: bool = False


@dataclass(frozen=True)
class TextCommand:
    x: float
    y: float
    text: str
    color: str
    font_size: float


@dataclass(frozen=True)
class CircleCommand:
    cx: float
    cy: float
    radius: float
    stroke: str
    line_width: float


@dataclass(frozen=True)
class LineCommand:
    x0: float
    y0: float
    x1: float
    y1: float
    stroke: str
    line_width: float


DrawCommand = Union[SectorCommand, TextCommand, CircleCommand, LineCommand]


@dataclass
class DiscDrawing:
    """Everything needed to paint one disc."""
    width: float
    height: float
    bits: int
    is_gray: bool
    outer_radius: float
    ring_width: float
    ring_gap: float
    active_sector: int
    commands: list[DrawCommand] = field(default_factory=list)

    @property
    def center(self) -> tuple[float, float]:
        return self.width / 2, self.height / 2

    def sectors(self) -> list[SectorCommand]:
        return [c for c in self.commands if isinstance(c, SectorCommand)]

    def texts(self) -> list[TextCommand]:
        return [c for c in self.commands if isinstance(c, TextCommand)]


class DrawingBackend(Protocol):
    """Anything that can consume a DiscDrawing."""

    def draw(self, drawing: DiscDrawing) -> None: ...


# ---------------------------------------------------------------------------
# Style
# ---------------------------------------------------------------------------

@dataclass
class DiscStyle:
    """Colors and metrics used by the renderer."""
    bit_one: str = "#f5f5f5"
    bit_zero: str = "#1e1e24"
    accent: str = "#4fc3f7"
    border: str = "#555a66"
    read_line: str = "#ef5350"
    ring_gap: float = 4.0
    outer_margin: float = 20.0
    inner_margin: float = 20.0
    min_ring_width: float = 1.0
    text_threshold: float = 12.0
    border_width: float = 0.5
    highlight_width: float = 2.0
    marker_radius: float = 3.0

    @classmethod
    def from_config(cls, config: DiscConfig) -> DiscStyle:
        return cls(
            bit_one=config.colors.bit_one,
            bit_zero=config.colors.bit_zero,
            accent=config.colors.accent,
            border=config.colors.border,
            read_line=config.colors.read_line,
            ring_gap=config.ring_gap,
            outer_margin=config.outer_margin,
            inner_margin=config.inner_margin,
            min_ring_width=config.min_ring_width,
            text_threshold=config.text_threshold,
        )


# ---------------------------------------------------------------------------
# Geometry
# ---------------------------------------------------------------------------

def ring_layout(bits: int, width: float, height: float, style: DiscStyle) -> tuple[float, float, float]:
    """
    Outer radius, ring width and ring gap for a disc.

    The ring width never drops below style.min_ring_width and the innermost
    ring never reaches a negative radius: the gap is dropped first, then the
    hub margin, and the outer radius is raised when the canvas is too small.

    Returns:
        (outer_radius, ring_width, ring_gap)
    """
    bits = clamp_bit_width(bits)
    min_width = style.min_ring_width
    outer = max(min(width, height) / 2 - style.outer_margin, bits * min_width)
    gap = style.ring_gap

    ring_width = (outer - style.inner_margin - (bits - 1) * gap) / bits
    if ring_width < min_width:
        gap = 0.0
        ring_width = (outer - style.inner_margin) / bits
    if ring_width < min_width:
        ring_width = min_width
    return outer, ring_width, gap


def _finite_angle(angle: float, name: str) -> float:
    if math.isfinite(angle):
        return angle
    logger.warning("Non-finite %s %r, drawing at 0", name, angle)
    return 0.0


def ring_radii(ring: int, outer_radius: float, ring_width: float, ring_gap: float) -> tuple[float, float]:
    """(inner, outer) radius of ring `ring` (0 = outermost)."""
    r1 = outer_radius - ring * (ring_width + ring_gap)
    r0 = r1 - ring_width
    return max(r0, 0.0), max(r1, 0.0)


def sector_code(sector: int, is_gray: bool) -> int:
    """Code word printed on a sector: its Gray code or its plain index."""
    return binary_to_gray(sector) if is_gray else sector


def track_bit(code: int, ring: int, bits: int) -> int:
    """Bit of `code` carried by ring `ring` (ring 0 = MSB)."""
    return (code >> (bits - 1 - ring)) & 1


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------

def render_disc(
    bits: int,
    is_gray: bool = True,
    rotation_offset: float = 0.0,
    read_angle: float = 0.0,
    width: float = 360,
    height: float = 360,
    show_numbers: bool = False,
    highlight_sector: bool = True,
    style: Optional[DiscStyle] = None,
) -> DiscDrawing:
    """
    Build the drawing instructions for one encoder disc.

    Args:
        bits: Number of tracks; clamped into [1, 12].
        is_gray: Gray-coded disc (True) or natural binary disc (False).
        rotation_offset: Free rotation of the disc in degrees.
        read_angle: Angle of the read head in degrees, used for highlighting.
        width, height: Canvas size in pixels.
        show_numbers: Overlay bit digits on rings wide enough to read.
        highlight_sector: Outline the sector under the read head.
        style: Colors and metrics; defaults to DiscStyle().

    Returns:
        DiscDrawing with sector commands first, then text, marker and read line.

    A NaN or infinite angle is logged and drawn as 0.
    """
    style = style or DiscStyle()
    bits = clamp_bit_width(bits)
    rotation_offset = _finite_angle(rotation_offset, "rotation_offset")
    read_angle = _finite_angle(read_angle, "read_angle")
    outer, ring_width, gap = ring_layout(bits, width, height, style)
    cx, cy = width / 2, height / 2
    sectors = sector_count(bits)
    active = sector_from_angle(read_angle, bits)
    show_text = show_numbers and ring_width > style.text_threshold
    font_size = min(ring_width * 0.6, 14)

    drawing = DiscDrawing(
        width=width,
        height=height,
        bits=bits,
        is_gray=is_gray,
        outer_radius=outer,
        ring_width=ring_width,
        ring_gap=gap,
        active_sector=active,
    )
    texts: list[TextCommand] = []

    for ring in range(bits):
        r0, r1 = ring_radii(ring, outer, ring_width, gap)
        for s in range(sectors):
            bit = track_bit(sector_code(s, is_gray), ring, bits)
            a0, a1 = sector_span(s, bits, rotation_offset)
            highlighted = highlight_sector and s == active
            drawing.commands.append(SectorCommand(
                ring=ring,
                sector=s,
                inner_radius=r0,
                outer_radius=r1,
                start_angle=a0,
                end_angle=a1,
                bit=bit,
                fill=style.bit_one if bit else style.bit_zero,
                stroke=style.accent if highlighted else style.border,
                line_width=style.highlight_width if highlighted else style.border_width,
                highlighted=highlighted,
            ))

            if show_text:
                mid_angle = (a0 + a1) / 2
                mid_radius = (r0 + r1) / 2
                texts.append(TextCommand(
                    x=cx + mid_radius * math.cos(mid_angle),
                    y=cy + mid_radius * math.sin(mid_angle),
                    text=str(bit),
                    color=style.bit_zero if bit else style.bit_one,
                    font_size=font_size,
                ))

    drawing.commands.extend(texts)
    drawing.commands.append(CircleCommand(
        cx=cx, cy=cy, radius=style.marker_radius,
        stroke=style.accent, line_width=2,
    ))
    drawing.commands.append(LineCommand(
        x0=cx, y0=cy, x1=cx, y1=cy - outer,
        stroke=style.read_line, line_width=2,
    ))
    return drawing


def render_disc_to(target: DrawingBackend, bits: int, is_gray: bool = True,
                   rotation_offset: float = 0.0, **kwargs) -> DiscDrawing:
    """Render a disc and hand the instructions to a drawing backend."""
    drawing = render_disc(bits, is_gray=is_gray, rotation_offset=rotation_offset, **kwargs)
    target.draw(drawing)
    return drawing


# ---------------------------------------------------------------------------
# Read head
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class DiscReading:
    """Value seen by the read head."""
    sector: int
    code: int
    pattern: str


def disc_reading(read_angle: float, bits: int, is_gray: bool = True) -> DiscReading:
    """Sector under the read head and the code word printed on it."""
    bits = clamp_bit_width(bits)
    sector = sector_from_angle(read_angle, bits)
    code = sector_code(sector, is_gray)
    return DiscReading(sector=sector, code=code, pattern=pad_binary(code, bits))
