"""
Session state helpers shared by all pages.

One AppState, one AnimationDriver (on a ManualScheduler) and one
CommandDispatcher live in st.session_state for the whole browser session.
Pages dispatch commands and, while a channel is running, drive the
scheduler from a frame loop.
"""

import os
import time
from typing import Callable

import streamlit as st

from graylab.animation.driver import AnimationDriver, Channel, ManualScheduler
from graylab.core.commands import CommandDispatcher
from graylab.core.config import AppConfig, get_default_config, load_config
from graylab.core.state import AppState

CONFIG_ENV_VAR = "GRAYLAB_CONFIG"
TICKS_PER_FRAME = 6  # redraw at ~10 fps while ticking at ~60 Hz


def _load_session_config() -> AppConfig:
    path = os.environ.get(CONFIG_ENV_VAR)
    if path:
        return load_config(path)
    return get_default_config()


def init_session_state() -> None:
    """Create the shared state objects once per session."""
    if "config" not in st.session_state:
        st.session_state.config = _load_session_config()
    if "app_state" not in st.session_state:
        config = st.session_state.config
        app_state = AppState.from_config(config)
        scheduler = ManualScheduler()
        driver = AnimationDriver(app_state, scheduler, config.animation)
        st.session_state.app_state = app_state
        st.session_state.scheduler = scheduler
        st.session_state.driver = driver
        st.session_state.dispatcher = CommandDispatcher(app_state, driver)


def app_state() -> AppState:
    return st.session_state.app_state


def driver() -> AnimationDriver:
    return st.session_state.driver


def dispatcher() -> CommandDispatcher:
    return st.session_state.dispatcher


def run_frame_loop(channels: list[Channel], redraw: Callable[[], None]) -> None:
    """
    Tick the scheduler and redraw while any of `channels` is running.

    Streamlit interrupts this loop on the next widget interaction, which
    reruns the page with the updated state.
    """
    drv = driver()
    scheduler: ManualScheduler = st.session_state.scheduler
    while any(drv.is_running(c) for c in channels):
        scheduler.advance(TICKS_PER_FRAME)
        redraw()
        time.sleep(drv.tick_period * TICKS_PER_FRAME)


def bind(key: str, value) -> None:
    """Point a widget at the current state before it is drawn."""
    st.session_state[key] = value
