"""
Command objects and dispatch.

The presentation shell turns user interaction into small request objects and
hands them to `dispatch()`. Each request type maps to exactly one handler;
handlers mutate the AppState (or the animation driver) and return a plain
value for the shell to display.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Optional, Union

from graylab.animation.driver import AnimationDriver, Channel
from graylab.core import state as nav
from graylab.core.conversion import convert
from graylab.core.state import AppState


@dataclass(frozen=True)
class SetValue:
    value: Any


@dataclass(frozen=True)
class IncrementValue:
    wrap: Optional[bool] = None


@dataclass(frozen=True)
class DecrementValue:
    wrap: Optional[bool] = None


@dataclass(frozen=True)
class SetWrap:
    wrap: bool


@dataclass(frozen=True)
class SetBitWidth:
    bits: Any


@dataclass(frozen=True)
class SetDiscBits:
    bits: Any


@dataclass(frozen=True)
class StepSector:
    direction: int


@dataclass(frozen=True)
class Convert:
    text: Any
    to_gray: bool


@dataclass(frozen=True)
class StartAnimation:
    channel: Channel


@dataclass(frozen=True)
class StopAnimation:
    channel: Channel


@dataclass(frozen=True)
class SetSpeed:
    channel: Channel
    value: Any


Command = Union[
    SetValue, IncrementValue, DecrementValue, SetWrap, SetBitWidth, SetDiscBits,
    StepSector, Convert, StartAnimation, StopAnimation, SetSpeed,
]


class CommandDispatcher:
    """
    Routes commands to their handlers.

    Attributes:
        state: Application state the handlers operate on.
        driver: Animation driver for the animation commands (optional).
    """

    def __init__(self, state: AppState, driver: Optional[AnimationDriver] = None):
        self.state = state
        self.driver = driver
        self._handlers: dict[type, Callable[[Any], Any]] = {
            SetValue: lambda c: nav.set_value(self.state, c.value),
            IncrementValue: lambda c: nav.increment_value(self.state, c.wrap),
            DecrementValue: lambda c: nav.decrement_value(self.state, c.wrap),
            SetWrap: lambda c: nav.set_wrap(self.state, c.wrap),
            SetBitWidth: lambda c: nav.set_bit_width(self.state, c.bits),
            SetDiscBits: lambda c: nav.set_disc_bits(self.state, c.bits),
            StepSector: lambda c: nav.step_sector(self.state, c.direction),
            Convert: lambda c: convert(c.text, c.to_gray),
            StartAnimation: lambda c: self._require_driver().start(c.channel),
            StopAnimation: lambda c: self._require_driver().stop(c.channel),
            SetSpeed: lambda c: self._require_driver().set_speed(c.channel, c.value),
        }

    def _require_driver(self) -> AnimationDriver:
        if self.driver is None:
            raise RuntimeError("Animation commands need an AnimationDriver")
        return self.driver

    def dispatch(self, command: Command) -> Any:
        """Run the handler registered for the command's type."""
        handler = self._handlers.get(type(command))
        if handler is None:
            raise TypeError(f"No handler for command {type(command).__name__}")
        return handler(command)
