"""
Encoder Disc page for the Gray Code Explorer UI.

Shows a Gray-coded and a natural-binary rotary encoder disc side by side:
  - manual stepping of the read head one sector at a time
  - spin animation of the read head
  - free rotation of both discs
  - optional bit digits and read-head highlighting
"""

import itertools

import streamlit as st

from graylab.animation.driver import Channel
from graylab.core.commands import SetDiscBits, SetSpeed, StartAnimation, StepSector, StopAnimation
from graylab.disc.mapper import sector_count
from graylab.disc.renderer import DiscStyle, disc_reading, render_disc_to
from graylab.ui.components.disc_view import PlotlyDiscBackend
from graylab.ui.session import app_state, bind, dispatcher, driver, init_session_state, run_frame_loop
from graylab.utils.encoding import MAX_BITS, MIN_BITS


def render_disc_page() -> None:
    """Render the encoder disc page."""
    init_session_state()
    state = app_state()
    dispatch = dispatcher().dispatch
    config = st.session_state.config
    st.title("💿 Rotary Encoder Disc")

    # --- Controls ---
    bind("d_bits", state.disc.bits)
    bind("d_numbers", state.disc.show_numbers)
    bind("d_highlight", state.disc.highlight_sector)
    bind("d_spin_speed", int(state.speeds.spin_speed))
    bind("d_rotate_speed", int(state.speeds.rotate_speed))

    col1, col2, col3, col4 = st.columns(4)
    with col1:
        st.number_input("Disc bits", min_value=MIN_BITS, max_value=MAX_BITS, step=1, key="d_bits",
                        on_change=lambda: dispatch(SetDiscBits(st.session_state.d_bits)))
    with col2:
        st.checkbox("Show digits", key="d_numbers", on_change=_sync_display_flags)
        st.checkbox("Highlight read sector", key="d_highlight", on_change=_sync_display_flags)
    with col3:
        st.button("⟲ Previous sector", key="d_prev", on_click=dispatch, args=(StepSector(-1),))
        st.button("⟳ Next sector", key="d_next", on_click=dispatch, args=(StepSector(1),))
    with col4:
        st.metric("Sectors", sector_count(state.disc.bits))

    spin_col, rotate_col = st.columns(2)
    with spin_col:
        _channel_controls(Channel.SPIN, "Spin read head", "d_spin")
        st.slider("Spin speed", *config.animation.spin_speed_range, key="d_spin_speed",
                  on_change=lambda: dispatch(SetSpeed(Channel.SPIN, st.session_state.d_spin_speed)))
    with rotate_col:
        _channel_controls(Channel.ROTATE, "Rotate disc", "d_rotate")
        st.slider("Rotation speed", *config.animation.rotate_speed_range, key="d_rotate_speed",
                  on_change=lambda: dispatch(SetSpeed(Channel.ROTATE, st.session_state.d_rotate_speed)))

    st.markdown("---")

    readout = st.empty()
    gray_col, binary_col = st.columns(2)
    gray_slot = gray_col.empty()
    binary_slot = binary_col.empty()

    frames = itertools.count()

    def redraw() -> None:
        _draw(readout, gray_slot, binary_slot, next(frames))

    redraw()
    run_frame_loop([Channel.SPIN, Channel.ROTATE], redraw)


def _channel_controls(channel: Channel, label: str, key: str) -> None:
    """Start/stop button pair for one animation channel."""
    running = driver().is_running(channel)
    start_col, stop_col = st.columns(2)
    start_col.button(f"▶ {label}", key=f"{key}_start", disabled=running,
                     on_click=dispatcher().dispatch, args=(StartAnimation(channel),))
    stop_col.button("⏹ Stop", key=f"{key}_stop", disabled=not running,
                    on_click=dispatcher().dispatch, args=(StopAnimation(channel),))


def _sync_display_flags() -> None:
    state = app_state()
    state.disc.show_numbers = bool(st.session_state.d_numbers)
    state.disc.highlight_sector = bool(st.session_state.d_highlight)


def _draw(readout, gray_slot, binary_slot, frame: int) -> None:
    """Render both discs and the read-head values. `frame` keeps chart keys unique per redraw."""
    state = app_state()
    disc = state.disc
    config = st.session_state.config
    style = DiscStyle.from_config(config.disc)
    size = config.disc.canvas_size

    gray_reading = disc_reading(disc.read_angle, disc.bits, is_gray=True)
    binary_reading = disc_reading(disc.read_angle, disc.bits, is_gray=False)

    with readout.container():
        c1, c2, c3, c4 = st.columns(4)
        c1.metric("Read angle", f"{disc.read_angle:.1f}°")
        c2.metric("Sector", gray_reading.sector)
        c3.metric("Gray reading", gray_reading.pattern)
        c4.metric("Binary reading", binary_reading.pattern)

    for slot, is_gray in [(gray_slot, True), (binary_slot, False)]:
        backend = PlotlyDiscBackend()
        render_disc_to(
            backend,
            disc.bits,
            is_gray=is_gray,
            rotation_offset=disc.rotation_angle,
            read_angle=disc.read_angle,
            width=size,
            height=size,
            show_numbers=disc.show_numbers,
            highlight_sector=disc.highlight_sector,
            style=style,
        )
        slot.plotly_chart(backend.figure, use_container_width=False,
                         key=f"d_chart_{int(is_gray)}_{frame}")
