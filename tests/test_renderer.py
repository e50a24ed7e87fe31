"""
Unit tests for the encoder disc renderer.

Tests cover:
- Ring layout: positive ring widths and non-negative radii for every width
- Ring/bit assignment and colors for Gray and binary discs
- Sector highlighting under the read head
- Digit overlay threshold
- Center marker and read line
- Rendering into a backend
- Read head lookups
- Non-finite angles
"""

import logging
import math

import pytest

from graylab.core.config import DiscConfig
from graylab.disc.renderer import (
    CircleCommand,
    DiscDrawing,
    DiscStyle,
    LineCommand,
    SectorCommand,
    disc_reading,
    render_disc,
    render_disc_to,
    ring_layout,
    ring_radii,
    track_bit,
)
from graylab.utils.encoding import binary_to_gray


class RecordingBackend:
    """Backend that keeps every drawing it receives."""

    def __init__(self):
        self.drawings: list[DiscDrawing] = []

    def draw(self, drawing: DiscDrawing) -> None:
        self.drawings.append(drawing)


# ---------------------------------------------------------------------------
# Layout
# ---------------------------------------------------------------------------

class TestRingLayout:
    """Tests for ring geometry."""

    def test_default_four_bits(self):
        outer, ring_width, gap = ring_layout(4, 360, 360, DiscStyle())
        assert outer == 160
        assert gap == 4
        assert ring_width == pytest.approx((160 - 20 - 3 * 4) / 4)

    @pytest.mark.parametrize("size", [50, 80, 120, 200, 360, 800])
    def test_positive_widths_for_every_bit_count(self, size):
        style = DiscStyle()
        for bits in range(1, 13):
            outer, ring_width, gap = ring_layout(bits, size, size, style)
            assert ring_width >= style.min_ring_width
            assert gap >= 0
            for ring in range(bits):
                r0, r1 = ring_radii(ring, outer, ring_width, gap)
                assert 0 <= r0 <= r1

    def test_gap_dropped_when_crowded(self):
        _, ring_width, gap = ring_layout(12, 120, 120, DiscStyle())
        assert gap == 0.0
        assert ring_width > 0

    def test_uses_smaller_dimension(self):
        wide = ring_layout(3, 800, 300, DiscStyle())
        square = ring_layout(3, 300, 300, DiscStyle())
        assert wide == square

    def test_ring_radii_outermost_first(self):
        r0, r1 = ring_radii(0, 160, 32, 4)
        assert (r0, r1) == (128, 160)
        r0, r1 = ring_radii(1, 160, 32, 4)
        assert (r0, r1) == (92, 124)


# ---------------------------------------------------------------------------
# Sectors
# ---------------------------------------------------------------------------

class TestRenderSectors:
    """Tests for sector commands."""

    def test_sector_count(self):
        for bits in (1, 3, 6):
            drawing = render_disc(bits)
            assert len(drawing.sectors()) == bits * (1 << bits)

    def test_gray_bits_match_codec(self):
        bits = 4
        drawing = render_disc(bits, is_gray=True)
        for cmd in drawing.sectors():
            code = binary_to_gray(cmd.sector)
            assert cmd.bit == (code >> (bits - 1 - cmd.ring)) & 1

    def test_binary_bits_match_index(self):
        bits = 3
        drawing = render_disc(bits, is_gray=False)
        for cmd in drawing.sectors():
            assert cmd.bit == (cmd.sector >> (bits - 1 - cmd.ring)) & 1

    def test_colors_follow_bits(self):
        style = DiscStyle()
        for cmd in render_disc(3).sectors():
            assert cmd.fill == (style.bit_one if cmd.bit else style.bit_zero)

    def test_ring_zero_is_outermost(self):
        sectors = render_disc(3).sectors()
        outer = max(c.outer_radius for c in sectors)
        assert all(c.outer_radius == outer for c in sectors if c.ring == 0)

    def test_adjacent_gray_sectors_differ_in_one_ring(self):
        bits = 5
        drawing = render_disc(bits)
        pattern = {}
        for cmd in drawing.sectors():
            pattern.setdefault(cmd.sector, [0] * bits)[cmd.ring] = cmd.bit
        n = 1 << bits
        for s in range(n):
            a, b = pattern[s], pattern[(s + 1) % n]
            assert sum(x != y for x, y in zip(a, b)) == 1

    def test_bits_clamped(self):
        assert render_disc(0).bits == 1
        assert render_disc(40, width=800, height=800).bits == 12

    def test_rotation_shifts_angles(self):
        plain = render_disc(2).sectors()[0]
        rotated = render_disc(2, rotation_offset=90).sectors()[0]
        assert rotated.start_angle - plain.start_angle == pytest.approx(math.pi / 2)

    def test_track_bit(self):
        assert [track_bit(0b101, ring, 3) for ring in range(3)] == [1, 0, 1]


# ---------------------------------------------------------------------------
# Highlight
# ---------------------------------------------------------------------------

class TestHighlight:
    """Tests for the read-head outline."""

    def test_active_sector_highlighted_on_every_ring(self):
        drawing = render_disc(3, read_angle=100)
        assert drawing.active_sector == 2
        highlighted = [c for c in drawing.sectors() if c.highlighted]
        assert {c.sector for c in highlighted} == {2}
        assert len(highlighted) == 3

    def test_highlight_style(self):
        style = DiscStyle()
        for cmd in render_disc(3, read_angle=100).sectors():
            if cmd.highlighted:
                assert cmd.stroke == style.accent
                assert cmd.line_width == 2.0
            else:
                assert cmd.stroke == style.border
                assert cmd.line_width == 0.5

    def test_highlight_disabled(self):
        drawing = render_disc(3, read_angle=100, highlight_sector=False)
        assert not any(c.highlighted for c in drawing.sectors())


# ---------------------------------------------------------------------------
# Text, marker and read line
# ---------------------------------------------------------------------------

class TestOverlay:
    """Tests for digits, center marker and read line."""

    def test_digits_when_rings_are_wide(self):
        drawing = render_disc(3, show_numbers=True)
        assert drawing.ring_width > 12
        assert len(drawing.texts()) == 3 * 8
        assert all(t.font_size <= 14 for t in drawing.texts())

    def test_no_digits_when_rings_are_narrow(self):
        drawing = render_disc(10, show_numbers=True)
        assert drawing.ring_width <= 12
        assert drawing.texts() == []

    def test_no_digits_when_disabled(self):
        assert render_disc(3, show_numbers=False).texts() == []

    def test_digit_matches_sector_bit(self):
        drawing = render_disc(2, show_numbers=True)
        sectors = drawing.sectors()
        assert [t.text for t in drawing.texts()] == [str(c.bit) for c in sectors]

    def test_marker_and_read_line_last(self):
        drawing = render_disc(4, rotation_offset=33, width=300, height=300)
        marker, line = drawing.commands[-2], drawing.commands[-1]
        assert isinstance(marker, CircleCommand)
        assert isinstance(line, LineCommand)
        assert (marker.cx, marker.cy) == (150, 150)
        assert marker.radius == 3.0

    def test_read_line_points_up_regardless_of_rotation(self):
        for rotation in (0, 45, 190):
            line = render_disc(4, rotation_offset=rotation).commands[-1]
            assert line.x0 == line.x1 == 180
            assert line.y1 == pytest.approx(180 - 160)

    def test_style_from_config(self):
        config = DiscConfig()
        config.colors.bit_one = "#ffffff"
        style = DiscStyle.from_config(config)
        drawing = render_disc(2, style=style)
        assert any(c.fill == "#ffffff" for c in drawing.sectors())


# ---------------------------------------------------------------------------
# Backend and read head
# ---------------------------------------------------------------------------

class TestBackend:
    """Tests for render_disc_to."""

    def test_backend_receives_drawing(self):
        backend = RecordingBackend()
        drawing = render_disc_to(backend, 3, is_gray=False, rotation_offset=10, read_angle=50)
        assert backend.drawings == [drawing]
        assert drawing.is_gray is False
        assert drawing.active_sector == 1

    def test_commands_are_sector_first(self):
        drawing = render_disc(2, show_numbers=True)
        kinds = [type(c) for c in drawing.commands]
        first_other = next(i for i, k in enumerate(kinds) if k is not SectorCommand)
        assert all(k is not SectorCommand for k in kinds[first_other:])


class TestDiscReading:
    """Tests for read-head lookups."""

    def test_gray_reading(self):
        reading = disc_reading(100, 3, is_gray=True)
        assert reading.sector == 2
        assert reading.code == 3
        assert reading.pattern == "011"

    def test_binary_reading(self):
        reading = disc_reading(100, 3, is_gray=False)
        assert reading.pattern == "010"

    def test_reading_matches_highlight(self):
        for angle in (0, 17, 181, 359):
            assert disc_reading(angle, 4).sector == render_disc(4, read_angle=angle).active_sector


class TestNonFiniteAngles:
    """NaN or infinite angles are logged and drawn at 0."""

    @pytest.mark.parametrize("bad", [float("nan"), float("inf"), float("-inf")])
    def test_read_angle(self, bad, caplog):
        with caplog.at_level(logging.WARNING, logger="graylab.disc.renderer"):
            drawing = render_disc(3, read_angle=bad)
        assert drawing.active_sector == 0
        assert "read_angle" in caplog.text

    @pytest.mark.parametrize("bad", [float("nan"), float("inf")])
    def test_rotation_offset(self, bad, caplog):
        with caplog.at_level(logging.WARNING, logger="graylab.disc.renderer"):
            drawing = render_disc(3, rotation_offset=bad)
        plain = render_disc(3)
        assert all(math.isfinite(c.start_angle) and math.isfinite(c.end_angle)
                   for c in drawing.sectors())
        assert drawing.sectors() == plain.sectors()
        assert "rotation_offset" in caplog.text

    def test_reading_at_nan(self):
        assert disc_reading(float("nan"), 4).sector == 0
