"""
Gray Code Explorer — Streamlit Web UI

Single-session application with sidebar navigation:
  1. Basics      — Binary vs Gray table, stepping and autoplay
  2. Encoder Disc — Gray and binary rotary encoder discs
  3. Converter   — Bit-string conversion with the XOR walk-through
  4. Use Cases   — Gray-coded modulation constellations
"""

import streamlit as st

# Must be the very first Streamlit command
st.set_page_config(
    page_title="Gray Code Explorer",
    page_icon="🔢",
    layout="wide",
    initial_sidebar_state="expanded",
)


def main() -> None:
    """Main entry point for the Streamlit app."""

    # --- Sidebar navigation ---
    st.sidebar.title("🔢 Gray Code Explorer")
    st.sidebar.markdown("---")

    page = st.sidebar.radio(
        "Navigation",
        options=[
            "🏠 Home",
            "🔢 Basics",
            "💿 Encoder Disc",
            "🔁 Converter",
            "📡 Use Cases",
        ],
        index=0,
    )

    st.sidebar.markdown("---")
    st.sidebar.caption("Reflected binary code, hands on")

    # --- Page routing ---
    if page == "🏠 Home":
        _render_home()
    elif page == "🔢 Basics":
        from graylab.ui.pages.basics import render_basics
        render_basics()
    elif page == "💿 Encoder Disc":
        from graylab.ui.pages.disc import render_disc_page
        render_disc_page()
    elif page == "🔁 Converter":
        from graylab.ui.pages.convert import render_convert
        render_convert()
    elif page == "📡 Use Cases":
        from graylab.ui.pages.usecases import render_usecases
        render_usecases()


def _render_home() -> None:
    """Render the home page."""
    st.title("🔢 Gray Code Explorer")
    st.markdown("""
    **Gray code** (reflected binary code) orders the numbers 0 … 2ⁿ−1 so that
    each step, including the wrap from the last value back to 0, changes exactly
    **one bit**.

    ### Quick Start

    1. **🔢 Basics** — Step through values and watch binary flip many bits while
       Gray flips one
    2. **💿 Encoder Disc** — Spin a rotary encoder and compare what a Gray and a
       binary disc read under the head
    3. **🔁 Converter** — Convert any bit string and follow the XOR steps
    4. **📡 Use Cases** — See why modulation constellations are Gray labelled

    ### Key Formulas

    | Direction | Formula |
    |-----------|---------|
    | **Binary → Gray** | G = B ⊕ (B ≫ 1) |
    | **Gray → Binary** | B = G ⊕ (G ≫ 1) ⊕ (G ≫ 2) ⊕ … |
    | **Reflection** | RBC(k) = 0·RBC(k−1), then 1·reverse(RBC(k−1)) |
    """)


if __name__ == "__main__":
    main()
