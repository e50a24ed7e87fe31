"""
Angle/sector mapping for the rotary encoder disc.

The circle is split into 2^bits equal sectors. Angle 0 points straight up
and angles increase clockwise; sector k covers
[k * 360 / 2^bits, (k + 1) * 360 / 2^bits).
"""

from __future__ import annotations

import logging
import math

logger = logging.getLogger(__name__)


def sector_count(bits: int) -> int:
    """Number of sectors on a disc with `bits` tracks."""
    return 1 << bits


def sector_step(bits: int) -> float:
    """Angular width of one sector in degrees."""
    return 360.0 / sector_count(bits)


def normalize_angle(angle: float) -> float:
    """
    Reduce an angle in degrees into [0, 360).

    Raises:
        ValueError: If angle is NaN or infinite.
    """
    if not math.isfinite(angle):
        raise ValueError(f"Angle must be finite, got {angle}")
    norm = angle % 360.0
    # tiny negative inputs round up to exactly 360.0
    return 0.0 if norm >= 360.0 else norm


def sector_from_angle(angle: float, bits: int) -> int:
    """
    Sector index under an angle (degrees, 0 = up, clockwise).

    Examples:
        >>> sector_from_angle(0, 3)
        0
        >>> sector_from_angle(100, 3)
        2
        >>> sector_from_angle(float("nan"), 3)
        0

    A NaN or infinite angle is logged and reads as sector 0.
    """
    if not math.isfinite(angle):
        logger.warning("Non-finite angle %r, reading sector 0", angle)
        return 0
    sectors = sector_count(bits)
    norm = normalize_angle(angle)
    return int(math.floor(norm * sectors / 360.0)) % sectors


def sector_start_angle(sector: int, bits: int) -> float:
    """Start angle of a sector in degrees (inverse of sector_from_angle)."""
    return (sector % sector_count(bits)) * sector_step(bits)


def sector_span(sector: int, bits: int, rotation_offset: float = 0.0) -> tuple[float, float]:
    """
    Screen-space angular span of a sector in radians.

    The -pi/2 term puts sector 0 at "up" in screen coordinates (y down), and
    rotation_offset (degrees) turns the whole disc clockwise.
    """
    sectors = sector_count(bits)
    rotation = math.radians(rotation_offset)
    a0 = sector / sectors * 2 * math.pi - math.pi / 2 + rotation
    a1 = (sector + 1) / sectors * 2 * math.pi - math.pi / 2 + rotation
    return a0, a1


def step_angle(angle: float, bits: int, direction: int) -> float:
    """Move an angle by one sector (direction +1 or -1), reduced into [0, 360)."""
    return normalize_angle(angle + direction * sector_step(bits))
