"""
Configuration system for the Gray Code Explorer.

Provides a hierarchical dataclass-based config with JSON serialization,
validation, and sensible defaults for the basics panel, the encoder disc,
and the animation channels.
"""

from __future__ import annotations

import json
import warnings
from copy import deepcopy
from dataclasses import dataclass, field, fields, asdict, is_dataclass
from pathlib import Path
from typing import Any

from graylab.utils.encoding import MIN_BITS, MAX_BITS


# ---------------------------------------------------------------------------
# Sub-config dataclasses (grouped by panel)
# ---------------------------------------------------------------------------

@dataclass
class BasicsConfig:
    """Initial state of the basics panel."""
    bits: int = 4
    value: int = 0
    wrap: bool = True

    def validate(self) -> list[str]:
        errors = []
        if not (MIN_BITS <= self.bits <= MAX_BITS):
            errors.append(f"basics.bits must be in [{MIN_BITS}, {MAX_BITS}], got {self.bits}")
        elif not (0 <= self.value < (1 << self.bits)):
            errors.append(
                f"basics.value must be in [0, {(1 << self.bits) - 1}] for {self.bits} bits, "
                f"got {self.value}"
            )
        return errors


@dataclass
class DiscColors:
    """Colors used by the disc renderer."""
    bit_one: str = "#f5f5f5"
    bit_zero: str = "#1e1e24"
    accent: str = "#4fc3f7"
    border: str = "#555a66"
    read_line: str = "#ef5350"

    def validate(self) -> list[str]:
        errors = []
        for f in fields(self):
            color = getattr(self, f.name)
            if not isinstance(color, str) or not color:
                errors.append(f"disc.colors.{f.name} must be a non-empty color string")
        return errors


@dataclass
class DiscConfig:
    """Encoder disc geometry and display settings."""
    bits: int = 4
    canvas_size: int = 360
    show_numbers: bool = False
    highlight_sector: bool = True
    ring_gap: float = 4.0
    outer_margin: float = 20.0      # canvas edge to outer ring
    inner_margin: float = 20.0      # empty hub radius
    min_ring_width: float = 1.0
    text_threshold: float = 12.0    # ring width needed for digit overlay
    colors: DiscColors = field(default_factory=DiscColors)

    def validate(self) -> list[str]:
        errors = []
        if not (MIN_BITS <= self.bits <= MAX_BITS):
            errors.append(f"disc.bits must be in [{MIN_BITS}, {MAX_BITS}], got {self.bits}")
        if self.canvas_size < 50:
            errors.append(f"disc.canvas_size must be >= 50, got {self.canvas_size}")
        if self.canvas_size > 4000:
            errors.append(f"disc.canvas_size must be <= 4000, got {self.canvas_size}")
        if self.ring_gap < 0:
            errors.append(f"disc.ring_gap must be >= 0, got {self.ring_gap}")
        if self.outer_margin < 0:
            errors.append(f"disc.outer_margin must be >= 0, got {self.outer_margin}")
        if self.inner_margin < 0:
            errors.append(f"disc.inner_margin must be >= 0, got {self.inner_margin}")
        if self.min_ring_width <= 0:
            errors.append(f"disc.min_ring_width must be > 0, got {self.min_ring_width}")
        if self.text_threshold < 0:
            errors.append(f"disc.text_threshold must be >= 0, got {self.text_threshold}")
        errors.extend(self.colors.validate())
        return errors


@dataclass
class AnimationConfig:
    """Tick source and per-channel speed settings."""
    tick_period_ms: int = 16              # ~60 ticks per second, fixed
    autoplay_interval_ms: int = 600       # ms per value step
    spin_speed: int = 50                  # read-angle speed slider
    rotate_speed: int = 20                # disc rotation speed slider
    spin_divisor: float = 25.0            # degrees per tick = spin_speed / divisor
    rotate_divisor: float = 10.0          # degrees per tick = rotate_speed / divisor
    autoplay_interval_range: list[int] = field(default_factory=lambda: [100, 2000])
    spin_speed_range: list[int] = field(default_factory=lambda: [1, 100])
    rotate_speed_range: list[int] = field(default_factory=lambda: [1, 100])

    def validate(self) -> list[str]:
        errors = []
        if self.tick_period_ms < 1:
            errors.append(f"animation.tick_period_ms must be >= 1, got {self.tick_period_ms}")
        if self.spin_divisor <= 0:
            errors.append(f"animation.spin_divisor must be > 0, got {self.spin_divisor}")
        if self.rotate_divisor <= 0:
            errors.append(f"animation.rotate_divisor must be > 0, got {self.rotate_divisor}")
        for name, value, rng in [
            ("autoplay_interval_ms", self.autoplay_interval_ms, self.autoplay_interval_range),
            ("spin_speed", self.spin_speed, self.spin_speed_range),
            ("rotate_speed", self.rotate_speed, self.rotate_speed_range),
        ]:
            if len(rng) != 2 or rng[0] > rng[1]:
                errors.append(f"animation.{name}_range must be [low, high] with low <= high")
            elif rng[0] <= 0:
                errors.append(f"animation.{name}_range low must be > 0, got {rng[0]}")
            elif not (rng[0] <= value <= rng[1]):
                errors.append(f"animation.{name} must be in {rng}, got {value}")
        return errors


# ---------------------------------------------------------------------------
# Top-level config
# ---------------------------------------------------------------------------

@dataclass
class AppConfig:
    """
    Top-level application configuration.

    Nested dataclasses group related settings.
    Load from JSON with `load_config()`, validate with `validate()`.
    """
    basics: BasicsConfig = field(default_factory=BasicsConfig)
    disc: DiscConfig = field(default_factory=DiscConfig)
    animation: AnimationConfig = field(default_factory=AnimationConfig)

    def validate(self) -> list[str]:
        """Validate all config sections. Returns list of error messages (empty = valid)."""
        errors = []
        for f in fields(self):
            sub = getattr(self, f.name)
            if hasattr(sub, "validate"):
                errors.extend(sub.validate())
        return errors

    def to_dict(self) -> dict[str, Any]:
        """Convert to nested dict for JSON serialization."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> AppConfig:
        """Create AppConfig from nested dict, merging with defaults."""
        config = cls()
        _merge_into_dataclass(config, data)
        return config

    def copy(self) -> AppConfig:
        """Deep copy of this config."""
        return deepcopy(self)


# ---------------------------------------------------------------------------
# JSON I/O helpers
# ---------------------------------------------------------------------------

def _merge_into_dataclass(target: Any, source: dict[str, Any]) -> None:
    """
    Recursively merge a dict into a dataclass instance.
    Unknown keys emit a warning but don't raise.
    """
    if not isinstance(source, dict):
        return

    known_fields = {f.name for f in fields(target)}
    for key, value in source.items():
        if key not in known_fields:
            warnings.warn(
                f"Unknown config key '{key}' in section {type(target).__name__}, ignored.",
                UserWarning,
                stacklevel=3,
            )
            continue

        current = getattr(target, key)

        if hasattr(current, "__dataclass_fields__") and isinstance(value, dict):
            _merge_into_dataclass(current, value)
        else:
            setattr(target, key, value)


def load_config(path: str | Path) -> AppConfig:
    """
    Load config from a JSON file. Missing fields use defaults.

    Args:
        path: Path to JSON config file.

    Returns:
        Validated AppConfig instance.

    Raises:
        FileNotFoundError: If path doesn't exist.
        json.JSONDecodeError: If JSON is malformed.
        ValueError: If config values are invalid.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)

    config = AppConfig.from_dict(data)

    errors = config.validate()
    if errors:
        msg = "Invalid configuration:\n" + "\n".join(f"  - {e}" for e in errors)
        raise ValueError(msg)

    return config


def save_config(config: AppConfig, path: str | Path) -> None:
    """Save config to JSON file."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(config.to_dict(), f, indent=2, ensure_ascii=False)


def get_default_config() -> AppConfig:
    """Return a fresh default config (all defaults, validated)."""
    config = AppConfig()
    errors = config.validate()
    assert not errors, f"Default config is invalid: {errors}"
    return config


def apply_param_override(config: AppConfig, dotted_key: str, value: Any) -> None:
    """
    Apply a single parameter override using dot notation.

    Example:
        apply_param_override(config, "disc.bits", 6)
        apply_param_override(config, "disc.colors.accent", "#ff9800")

    Raises:
        KeyError: If the path doesn't exist.
    """
    parts = dotted_key.split(".")
    obj = config
    for part in parts[:-1]:
        if not hasattr(obj, part):
            raise KeyError(f"Config path '{dotted_key}' invalid: '{part}' not found in {type(obj).__name__}")
        obj = getattr(obj, part)

    final_key = parts[-1]
    if not hasattr(obj, final_key):
        raise KeyError(f"Config path '{dotted_key}' invalid: '{final_key}' not found in {type(obj).__name__}")

    setattr(obj, final_key, value)


def with_overrides(config: AppConfig, overrides: dict[str, Any]) -> AppConfig:
    """
    Return a copy of `config` with dot-notation overrides applied.

    The input config is left untouched.

    Raises:
        KeyError: If an override path doesn't exist or names a whole section.
        ValueError: If the overridden config is invalid.
    """
    updated = config.copy()
    for dotted_key, value in overrides.items():
        current = updated
        for part in dotted_key.split("."):
            current = getattr(current, part, None)
        if is_dataclass(current):
            raise KeyError(f"Config path '{dotted_key}' is a section, not a value")
        apply_param_override(updated, dotted_key, value)

    try:
        errors = updated.validate()
    except TypeError as e:
        # a string where a number belongs
        raise ValueError(f"Invalid configuration: {e}") from e
    if errors:
        msg = "Invalid configuration:\n" + "\n".join(f"  - {e}" for e in errors)
        raise ValueError(msg)
    return updated
