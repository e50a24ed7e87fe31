"""
Use Cases page for the Gray Code Explorer UI.

Gray-coded modulation: plots PAM / PSK / QAM constellations with Gray and
natural-binary labels and compares how many bits a nearest-neighbour symbol
error costs.
"""

import streamlit as st

from graylab.core.constellation import build_constellation, compare_labelings
from graylab.ui.components.charts import BINARY_COLOR, GRAY_COLOR, constellation_figure, labeling_comparison

_SCHEME_BITS = {
    "pam": [1, 2, 3, 4],
    "psk": [1, 2, 3, 4],
    "qam": [2, 4, 6],
}


def render_usecases() -> None:
    """Render the use cases page."""
    st.title("📡 Gray Code in Digital Modulation")
    st.markdown("""
    A receiver that mistakes a symbol usually picks a **neighbouring** symbol.
    With Gray labels every neighbour differs by exactly **one bit**, so a symbol
    error becomes a single bit error. Rotary encoders, Karnaugh maps and
    asynchronous FIFO pointers rely on the same single-bit-step property.
    """)

    col1, col2 = st.columns(2)
    with col1:
        scheme = st.selectbox("Scheme", options=list(_SCHEME_BITS), index=2,
                              format_func=str.upper, key="u_scheme")
    with col2:
        k = st.select_slider("Bits per symbol", options=_SCHEME_BITS[scheme],
                             value=_SCHEME_BITS[scheme][1], key=f"u_bits_{scheme}")

    stats = compare_labelings(scheme, k)
    m1, m2, m3 = st.columns(3)
    m1.metric("Neighbour pairs", stats["gray"].pairs)
    m2.metric("Gray: bits per slip", f"{stats['gray'].mean_bit_errors:.2f}")
    m3.metric("Binary: bits per slip", f"{stats['binary'].mean_bit_errors:.2f}",
              delta=f"{stats['binary'].mean_bit_errors - stats['gray'].mean_bit_errors:+.2f}",
              delta_color="inverse")

    gray_col, binary_col = st.columns(2)
    order = f"{1 << k}-{scheme.upper()}"
    with gray_col:
        st.plotly_chart(constellation_figure(build_constellation(scheme, k, "gray"),
                                             title=f"{order}, Gray labels", color=GRAY_COLOR),
                        use_container_width=True)
    with binary_col:
        st.plotly_chart(constellation_figure(build_constellation(scheme, k, "binary"),
                                             title=f"{order}, binary labels", color=BINARY_COLOR),
                        use_container_width=True)

    st.plotly_chart(labeling_comparison(scheme, _SCHEME_BITS[scheme]), use_container_width=True)
