"""
Basics page for the Gray Code Explorer UI.

Allows users to:
  - Pick a bit width and a current value
  - Step through values with wrap or clamp at the boundary
  - Autoplay through the sequence at an adjustable speed
  - Compare binary and Gray codes in a table and a bit-flip chart
  - Export the sequence as JSON or CSV
"""

import streamlit as st

from graylab.animation.driver import Channel
from graylab.core.commands import (
    DecrementValue,
    IncrementValue,
    SetBitWidth,
    SetSpeed,
    SetValue,
    SetWrap,
    StartAnimation,
    StopAnimation,
)
from graylab.core.sequence import reflection_stages
from graylab.export.snapshot import export_json, sequence_csv, sequence_dataframe
from graylab.ui.components.charts import bit_flip_comparison
from graylab.ui.session import app_state, bind, dispatcher, driver, init_session_state, run_frame_loop
from graylab.utils.encoding import MAX_BITS, MIN_BITS, binary_to_gray, hamming_distance, pad_binary


def render_basics() -> None:
    """Render the basics page."""
    init_session_state()
    state = app_state()
    dispatch = dispatcher().dispatch
    st.title("🔢 Binary vs Gray Code")

    # --- Controls ---
    bind("b_bits", state.basics.bits)
    bind("b_value", state.basics.value)
    bind("b_wrap", state.basics.wrap)
    bind("b_auto", driver().is_running(Channel.AUTOPLAY))
    bind("b_speed", int(state.speeds.autoplay_interval_ms))

    col1, col2, col3 = st.columns([1, 3, 1])
    with col1:
        st.number_input("Bits", min_value=MIN_BITS, max_value=MAX_BITS, step=1, key="b_bits",
                        on_change=lambda: dispatch(SetBitWidth(st.session_state.b_bits)))
    with col2:
        st.slider("Value", min_value=0, max_value=state.basics.max_value, key="b_value",
                  on_change=lambda: dispatch(SetValue(st.session_state.b_value)))
    with col3:
        st.checkbox("Wrap around", key="b_wrap",
                    on_change=lambda: dispatch(SetWrap(st.session_state.b_wrap)))

    btn1, btn2, btn3, btn4 = st.columns(4)
    btn1.button("◀ Prev", key="b_prev", on_click=dispatch, args=(DecrementValue(),))
    btn2.button("Next ▶", key="b_next", on_click=dispatch, args=(IncrementValue(),))
    btn3.toggle("Autoplay", key="b_auto", on_change=_toggle_autoplay)
    btn4.slider("Step interval (ms)", 100, 2000, step=50, key="b_speed",
                on_change=lambda: dispatch(SetSpeed(Channel.AUTOPLAY, st.session_state.b_speed)))

    st.markdown("---")

    readout = st.empty()
    _render_readout(readout)

    # --- Table and chart ---
    tab_table, tab_chart, tab_reflect = st.tabs(["Comparison Table", "Bit Flips", "Reflection"])
    with tab_table:
        df = sequence_dataframe(state.basics.bits)
        active = state.basics.value
        st.dataframe(
            df.style.apply(
                lambda row: ["background-color: rgba(79, 195, 247, 0.3)" if row.name == active else ""
                             for _ in row],
                axis=1,
            ),
            use_container_width=True,
            height=360,
        )
    with tab_chart:
        st.plotly_chart(bit_flip_comparison(state.basics.bits), use_container_width=True)
    with tab_reflect:
        k = min(state.basics.bits, 6)
        st.caption("Prefix 0 to the previous list, then 1 to its mirror image.")
        for stage_bits, stage in enumerate(reflection_stages(k)[1:], start=1):
            st.code(f"{stage_bits} bit: " + " ".join(stage))

    # --- Export ---
    with st.expander("📤 Export"):
        json_text = export_json(state)
        st.code(json_text, language="json")
        ex1, ex2 = st.columns(2)
        ex1.download_button("⬇️ Download JSON", data=json_text, file_name="gray_sequence.json",
                            mime="application/json", key="b_dl_json")
        ex2.download_button("⬇️ Download CSV", data=sequence_csv(state.basics.bits),
                            file_name="gray_sequence.csv", mime="text/csv", key="b_dl_csv")

    run_frame_loop([Channel.AUTOPLAY], lambda: _render_readout(readout))


def _render_readout(container) -> None:
    """Decimal / binary / Gray readout plus Hamming distance to the next value."""
    state = app_state()
    bits = state.basics.bits
    value = state.basics.value
    nxt = (value + 1) & state.basics.max_value
    gray_hd = hamming_distance(binary_to_gray(value), binary_to_gray(nxt))
    bin_hd = hamming_distance(value, nxt)

    with container.container():
        c1, c2, c3, c4 = st.columns(4)
        c1.metric("Decimal", value)
        c2.metric("Binary", pad_binary(value, bits))
        c3.metric("Gray", pad_binary(binary_to_gray(value), bits))
        c4.metric("Bits flipped to next", f"Gray={gray_hd} / Bin={bin_hd}")


def _toggle_autoplay() -> None:
    channel = Channel.AUTOPLAY
    if st.session_state.b_auto:
        dispatcher().dispatch(StartAnimation(channel))
    else:
        dispatcher().dispatch(StopAnimation(channel))
