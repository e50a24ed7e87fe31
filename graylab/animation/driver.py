"""
Animation Driver: three independent tick channels.

  - AUTOPLAY: steps the basics value (honouring the wrap flag)
  - SPIN:     advances the disc read angle
  - ROTATE:   advances the free rotation of the disc

Each channel owns at most one repeating tick source. The tick period is
fixed (~60 ticks/s); only the per-tick effect depends on speed, and speed is
read from the live SpeedState inside the tick, so a speed change applies on
the very next tick without restarting anything.

Tick sources come from a Scheduler:
  - ManualScheduler: ticks when told to (Streamlit frame loop, tests)
  - AsyncioScheduler: repeating loop.call_later on the running event loop
"""

from __future__ import annotations

import asyncio
import itertools
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Optional, Protocol

from graylab.core.config import AnimationConfig
from graylab.core.state import AppState, increment_value, parse_integer
from graylab.utils.encoding import clamp

logger = logging.getLogger(__name__)


class Channel(str, Enum):
    AUTOPLAY = "autoplay"
    SPIN = "spin"
    ROTATE = "rotate"


# ---------------------------------------------------------------------------
# Schedulers
# ---------------------------------------------------------------------------

class Scheduler(Protocol):
    """Creates and cancels repeating tick sources."""

    def schedule_repeating(self, period: float, callback: Callable[[], None]) -> Any: ...

    def cancel(self, handle: Any) -> None: ...


class ManualScheduler:
    """
    Deterministic scheduler driven by explicit `advance()` calls.

    Every active source fires once per advanced tick, in creation order.
    """

    def __init__(self):
        self._ids = itertools.count(1)
        self._sources: dict[int, tuple[float, Callable[[], None]]] = {}

    def schedule_repeating(self, period: float, callback: Callable[[], None]) -> int:
        handle = next(self._ids)
        self._sources[handle] = (period, callback)
        return handle

    def cancel(self, handle: int) -> None:
        self._sources.pop(handle, None)

    @property
    def active_count(self) -> int:
        return len(self._sources)

    def advance(self, ticks: int = 1) -> None:
        """Fire every active source `ticks` times."""
        for _ in range(ticks):
            # a callback may cancel sources, so iterate over a snapshot
            for handle in list(self._sources):
                source = self._sources.get(handle)
                if source is not None:
                    source[1]()


class _RepeatingCall:
    """Re-arms loop.call_later after every callback until cancelled."""

    def __init__(self, loop: asyncio.AbstractEventLoop, period: float, callback: Callable[[], None]):
        self._loop = loop
        self._period = period
        self._callback = callback
        self._timer: Optional[asyncio.TimerHandle] = None
        self.cancelled = False
        self._arm()

    def _arm(self) -> None:
        self._timer = self._loop.call_later(self._period, self._fire)

    def _fire(self) -> None:
        if self.cancelled:
            return
        try:
            self._callback()
        except Exception as e:
            logger.error("Animation tick failed: %s", e, exc_info=True)
        if not self.cancelled:
            self._arm()

    def cancel(self) -> None:
        self.cancelled = True
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None


class AsyncioScheduler:
    """Single-threaded tick sources on an asyncio event loop."""

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None):
        self._loop = loop

    def schedule_repeating(self, period: float, callback: Callable[[], None]) -> _RepeatingCall:
        loop = self._loop or asyncio.get_running_loop()
        return _RepeatingCall(loop, period, callback)

    def cancel(self, handle: _RepeatingCall) -> None:
        handle.cancel()


# ---------------------------------------------------------------------------
# Driver
# ---------------------------------------------------------------------------

@dataclass
class _ChannelRuntime:
    handle: Any = None          # None = not running
    ticks: int = 0
    autoplay_phase: float = 0.0


class AnimationDriver:
    """
    Start/stop/speed control for the three animation channels.

    Attributes:
        state: Shared application state mutated by ticks.
        scheduler: Source of repeating ticks.
        config: Tick period, speed divisors and speed ranges.
        on_render: Optional callback invoked after each tick(channel).
    """

    def __init__(
        self,
        state: AppState,
        scheduler: Scheduler,
        config: Optional[AnimationConfig] = None,
        on_render: Optional[Callable[[Channel], None]] = None,
    ):
        self.state = state
        self.scheduler = scheduler
        self.config = config or AnimationConfig()
        self.on_render = on_render
        self._channels = {channel: _ChannelRuntime() for channel in Channel}

    @property
    def tick_period(self) -> float:
        """Fixed tick period in seconds."""
        return self.config.tick_period_ms / 1000.0

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def _resolve(self, channel: Any) -> Optional[Channel]:
        try:
            return Channel(channel)
        except (ValueError, TypeError):
            logger.warning("Unknown animation channel %r ignored", channel)
            return None

    def start(self, channel: Channel) -> bool:
        """
        Start a channel, replacing any tick source it already has.

        Returns:
            True if started, False for an unknown channel.
        """
        channel = self._resolve(channel)
        if channel is None:
            return False
        runtime = self._channels[channel]
        if runtime.handle is not None:
            self.scheduler.cancel(runtime.handle)
            runtime.handle = None
        runtime.autoplay_phase = 0.0
        runtime.handle = self.scheduler.schedule_repeating(
            self.tick_period, lambda: self.tick(channel)
        )
        logger.debug("Started %s channel", channel.value)
        return True

    def stop(self, channel: Channel) -> None:
        """Cancel a channel's tick source. Other channels keep running."""
        channel = self._resolve(channel)
        if channel is None:
            return
        runtime = self._channels[channel]
        if runtime.handle is None:
            return
        self.scheduler.cancel(runtime.handle)
        runtime.handle = None
        logger.debug("Stopped %s channel after %d ticks", channel.value, runtime.ticks)

    def stop_all(self) -> None:
        for channel in Channel:
            self.stop(channel)

    def is_running(self, channel: Channel) -> bool:
        channel = self._resolve(channel)
        return channel is not None and self._channels[channel].handle is not None

    def running_channels(self) -> list[Channel]:
        return [c for c in Channel if self.is_running(c)]

    def tick_count(self, channel: Channel) -> int:
        channel = self._resolve(channel)
        return 0 if channel is None else self._channels[channel].ticks

    # ------------------------------------------------------------------
    # Speed
    # ------------------------------------------------------------------

    def set_speed(self, channel: Channel, raw: Any) -> bool:
        """
        Update a channel's speed parameter, clamped to its configured range.

        The running tick source is left untouched.

        Returns:
            True if accepted, False if the channel or the input was rejected.
        """
        channel = self._resolve(channel)
        if channel is None:
            return False
        number = parse_integer(raw)
        if number is None:
            logger.warning("Invalid %s speed %r ignored", channel.value, raw)
            return False

        speeds = self.state.speeds
        cfg = self.config
        if channel is Channel.AUTOPLAY:
            speeds.autoplay_interval_ms = clamp(number, *cfg.autoplay_interval_range)
        elif channel is Channel.SPIN:
            speeds.spin_speed = clamp(number, *cfg.spin_speed_range)
        else:
            speeds.rotate_speed = clamp(number, *cfg.rotate_speed_range)
        return True

    # ------------------------------------------------------------------
    # Tick
    # ------------------------------------------------------------------

    def tick(self, channel: Channel) -> None:
        """Apply one tick of a channel, then request a re-render."""
        channel = self._resolve(channel)
        if channel is None:
            return
        runtime = self._channels[channel]
        speeds = self.state.speeds

        if channel is Channel.AUTOPLAY:
            interval = max(float(speeds.autoplay_interval_ms), 1.0)
            runtime.autoplay_phase += self.config.tick_period_ms / interval
            steps = int(runtime.autoplay_phase)
            runtime.autoplay_phase -= steps
            for _ in range(steps):
                increment_value(self.state)
        elif channel is Channel.SPIN:
            disc = self.state.disc
            disc.read_angle = (disc.read_angle + speeds.spin_speed / self.config.spin_divisor) % 360
        else:
            disc = self.state.disc
            disc.rotation_angle = (disc.rotation_angle + speeds.rotate_speed / self.config.rotate_divisor) % 360

        runtime.ticks += 1
        if self.on_render is not None:
            self.on_render(channel)
