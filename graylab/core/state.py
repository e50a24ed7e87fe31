"""
Application state and navigation for the Gray Code Explorer.

The presentation shell owns one AppState and passes it into the functions
below. Every setter validates its input at the point of entry: invalid input
is logged and the previous state is kept, out-of-range bit widths are
clamped, and nothing is raised to the caller.

Value boundary policies at the n-bit modulus:
  - wrap:  v' = ((v ± 1) mod 2^n + 2^n) mod 2^n
  - clamp: v' = max(0, min(2^n - 1, v ± 1))
"""

from __future__ import annotations

import logging
import math
import sys
from dataclasses import dataclass, field
from typing import Any, Optional

from graylab.core.config import AppConfig, get_default_config
from graylab.disc.mapper import step_angle
from graylab.utils.encoding import clamp_bit_width, max_value

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# State containers
# ---------------------------------------------------------------------------

@dataclass
class BasicsState:
    """Bit width, current value and boundary mode of the basics panel."""
    bits: int = 4
    value: int = 0
    wrap: bool = True

    @property
    def max_value(self) -> int:
        return max_value(self.bits)


@dataclass
class DiscState:
    """
    Encoder disc state.

    read_angle drives manual sector stepping and the spin animation;
    rotation_angle is the free rotation of the disc itself. The two are
    independent and both feed the angle/sector mapper.
    """
    bits: int = 4
    read_angle: float = 0.0
    rotation_angle: float = 0.0
    show_numbers: bool = False
    highlight_sector: bool = True


@dataclass
class SpeedState:
    """Live speed parameters read by the animation driver on every tick."""
    autoplay_interval_ms: float = 600
    spin_speed: float = 50
    rotate_speed: float = 20


@dataclass
class AppState:
    """All transient state of one session."""
    basics: BasicsState = field(default_factory=BasicsState)
    disc: DiscState = field(default_factory=DiscState)
    speeds: SpeedState = field(default_factory=SpeedState)

    @classmethod
    def from_config(cls, config: Optional[AppConfig] = None) -> AppState:
        """Build the initial state from a (validated) config."""
        config = config or get_default_config()
        return cls(
            basics=BasicsState(
                bits=clamp_bit_width(config.basics.bits),
                value=config.basics.value,
                wrap=config.basics.wrap,
            ),
            disc=DiscState(
                bits=clamp_bit_width(config.disc.bits),
                show_numbers=config.disc.show_numbers,
                highlight_sector=config.disc.highlight_sector,
            ),
            speeds=SpeedState(
                autoplay_interval_ms=config.animation.autoplay_interval_ms,
                spin_speed=config.animation.spin_speed,
                rotate_speed=config.animation.rotate_speed,
            ),
        )


# ---------------------------------------------------------------------------
# Input parsing
# ---------------------------------------------------------------------------

def parse_integer(raw: Any) -> Optional[int]:
    """
    Parse untrusted numeric input into an int.

    Accepts ints, finite floats (floored) and decimal strings. Returns None
    for anything else, including bools, NaN, infinities and magnitudes beyond
    sys.maxsize.
    """
    if isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        number = raw
    elif isinstance(raw, float):
        if not math.isfinite(raw):
            return None
        number = math.floor(raw)
    elif isinstance(raw, str):
        text = raw.strip()
        try:
            number = int(text, 10)
        except ValueError:
            try:
                as_float = float(text)
            except ValueError:
                return None
            if not math.isfinite(as_float):
                return None
            number = math.floor(as_float)
    else:
        return None

    if abs(number) > sys.maxsize:
        return None
    return number


# ---------------------------------------------------------------------------
# Value navigation
# ---------------------------------------------------------------------------

def wrap_value(value: int, bits: int) -> int:
    """Reduce value modulo 2^bits into [0, 2^bits - 1]."""
    modulus = 1 << bits
    return ((value % modulus) + modulus) % modulus


def clamp_value(value: int, bits: int) -> int:
    """Clamp value into [0, 2^bits - 1]."""
    return max(0, min(max_value(bits), value))


def set_value(state: AppState, raw: Any) -> bool:
    """
    Set the current value from untrusted input.

    Wrap mode reduces modulo 2^n, clamp mode clamps into range.

    Returns:
        True if the value was accepted, False if it was rejected.
    """
    number = parse_integer(raw)
    if number is None:
        logger.warning("Invalid value input %r, keeping %d", raw, state.basics.value)
        return False

    basics = state.basics
    if basics.wrap:
        basics.value = wrap_value(number, basics.bits)
    else:
        basics.value = clamp_value(number, basics.bits)
    return True


def _step_value(state: AppState, delta: int, wrap: Optional[bool]) -> int:
    basics = state.basics
    use_wrap = basics.wrap if wrap is None else wrap
    stepped = basics.value + delta
    if use_wrap:
        basics.value = wrap_value(stepped, basics.bits)
    else:
        basics.value = clamp_value(stepped, basics.bits)
    return basics.value


def increment_value(state: AppState, wrap: Optional[bool] = None) -> int:
    """Step the value up by one. wrap=None uses the state's wrap flag."""
    return _step_value(state, 1, wrap)


def decrement_value(state: AppState, wrap: Optional[bool] = None) -> int:
    """Step the value down by one. wrap=None uses the state's wrap flag."""
    return _step_value(state, -1, wrap)


def set_wrap(state: AppState, wrap: bool) -> None:
    state.basics.wrap = bool(wrap)


# ---------------------------------------------------------------------------
# Bit widths
# ---------------------------------------------------------------------------

def set_bit_width(state: AppState, raw: Any) -> int:
    """
    Set the basics bit width, clamped into [1, 12].

    A value above the new maximum is pulled down to it.

    Returns:
        The effective bit width (unchanged if the input was rejected).
    """
    number = parse_integer(raw)
    if number is None:
        logger.warning("Invalid bit width input %r, keeping %d", raw, state.basics.bits)
        return state.basics.bits

    basics = state.basics
    basics.bits = clamp_bit_width(number)
    if basics.value > basics.max_value:
        basics.value = basics.max_value
    return basics.bits


def set_disc_bits(state: AppState, raw: Any) -> int:
    """Set the disc bit width, clamped into [1, 12]. Independent of the basics width."""
    number = parse_integer(raw)
    if number is None:
        logger.warning("Invalid disc bit width input %r, keeping %d", raw, state.disc.bits)
        return state.disc.bits
    state.disc.bits = clamp_bit_width(number)
    return state.disc.bits


# ---------------------------------------------------------------------------
# Disc stepping
# ---------------------------------------------------------------------------

def step_sector(state: AppState, direction: int) -> float:
    """Turn the read head by one sector (+1 clockwise, -1 counter-clockwise)."""
    if direction not in (1, -1):
        logger.warning("Invalid sector step direction %r", direction)
        return state.disc.read_angle
    state.disc.read_angle = step_angle(state.disc.read_angle, state.disc.bits, direction)
    return state.disc.read_angle
