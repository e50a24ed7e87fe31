"""
Converter page for the Gray Code Explorer UI.

Binary → Gray and Gray → binary conversion of arbitrary bit strings (up to
32 bits) with the per-bit XOR walk-through.
"""

import streamlit as st

from graylab.core.commands import Convert
from graylab.core.conversion import (
    MAX_INPUT_BITS,
    ConversionStep,
    binary_to_gray_steps,
    gray_to_binary_steps,
    sanitize_bit_string,
)
from graylab.ui.session import dispatcher, init_session_state

UNAVAILABLE = "—"


def render_convert() -> None:
    """Render the converter page."""
    init_session_state()
    dispatch = dispatcher().dispatch
    st.title("🔁 Binary ⇄ Gray Converter")
    st.caption(f"Only 0 and 1 are used; other characters are ignored. Up to {MAX_INPUT_BITS} bits.")

    to_gray_col, to_binary_col = st.columns(2)

    with to_gray_col:
        st.subheader("Binary → Gray")
        binary_in = st.text_input("Binary", value="1010", max_chars=64, key="c_bin_in")
        result = dispatch(Convert(binary_in, to_gray=True))
        st.metric("Gray", result or UNAVAILABLE)
        digits = sanitize_bit_string(binary_in)
        if digits:
            _show_steps(binary_to_gray_steps(digits))

    with to_binary_col:
        st.subheader("Gray → Binary")
        gray_in = st.text_input("Gray", value="1111", max_chars=64, key="c_gray_in")
        result = dispatch(Convert(gray_in, to_gray=False))
        st.metric("Binary", result or UNAVAILABLE)
        digits = sanitize_bit_string(gray_in)
        if digits:
            _show_steps(gray_to_binary_steps(digits))


def _show_steps(steps: list[ConversionStep]) -> None:
    with st.expander("Show the steps", expanded=True):
        for step in steps:
            st.markdown(f"**{step.header}**")
            st.code(step.calculation)
            if step.result:
                st.caption(step.result)
