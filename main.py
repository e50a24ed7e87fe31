"""
Gray Code Explorer — CLI Entry Point

Usage:
    python main.py --ui
    python main.py --mode table --bits 4 --value 10
    python main.py --mode convert --input 1010 --to gray
    python main.py --mode disc --bits 3 --angle 100
    python main.py --mode export --bits 4 --value 10 --output gray.json
    python main.py --mode constellation --scheme qam --bits 4
    python main.py --mode disc --set disc.canvas_size=600 --save-config my.json
"""

import argparse
import json
import logging
import math
import os
import sys
from pathlib import Path


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Gray Code Explorer — binary/Gray conversion, encoder discs and more",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python main.py --ui                                   Launch Streamlit UI
  python main.py --mode table --bits 4                  Print the comparison table
  python main.py --mode convert --input 1111 --to binary
  python main.py --mode disc --bits 3 --angle 100       Read an encoder disc
  python main.py --set disc.show_numbers=true --save-config my.json
        """,
    )

    parser.add_argument(
        "--mode",
        choices=["table", "convert", "disc", "export", "constellation"],
        default=None,
        help="What to compute",
    )
    parser.add_argument(
        "--ui",
        action="store_true",
        help="Launch Streamlit web UI (ignores --mode)",
    )
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Path to JSON config file (defaults are used when omitted)",
    )
    parser.add_argument("--bits", type=str, default=None,
                        help="Bit width (clamped to 1..12; bits per symbol for constellation)")
    parser.add_argument("--value", type=str, default=None, help="Current value for table/export")
    parser.add_argument("--input", type=str, default=None, help="Bit string to convert")
    parser.add_argument("--to", choices=["gray", "binary"], default="gray",
                        help="Conversion target (default: gray)")
    parser.add_argument("--angle", type=float, default=0.0, help="Read-head angle in degrees")
    parser.add_argument("--rotation", type=float, default=0.0, help="Disc rotation in degrees")
    parser.add_argument("--scheme", choices=["pam", "psk", "qam"], default="qam",
                        help="Constellation scheme (default: qam)")
    parser.add_argument("--output", type=str, default=None, help="Output file for export")
    parser.add_argument(
        "--set",
        dest="overrides",
        action="append",
        default=[],
        metavar="KEY=VALUE",
        help="Override a config value in dot notation, e.g. disc.bits=6 (repeatable; not applied to --ui)",
    )
    parser.add_argument("--save-config", type=str, default=None,
                        help="Write the resulting config (after --set) to this JSON file")
    parser.add_argument("--verbose", action="store_true", help="Debug logging")

    return parser.parse_args(argv)


def launch_ui(config_path: str | None = None) -> None:
    """Launch the Streamlit web UI."""
    import subprocess
    ui_path = Path(__file__).parent / "graylab" / "ui" / "app.py"
    if not ui_path.exists():
        print(f"Error: UI app not found at {ui_path}")
        sys.exit(1)
    env = dict(os.environ)
    if config_path:
        from graylab.ui.session import CONFIG_ENV_VAR
        env[CONFIG_ENV_VAR] = str(Path(config_path).resolve())
    subprocess.run(
        [
            sys.executable, "-m", "streamlit", "run", str(ui_path),
            "--server.port=8501",
            "--server.headless=true",
            "--browser.gatherUsageStats=false",
        ],
        check=True,
        env=env,
    )


def parse_override(text: str) -> tuple[str, object]:
    """
    Split a KEY=VALUE override. The value is read as JSON when it parses
    (numbers, true/false, lists) and kept as a plain string otherwise.
    """
    key, sep, raw = text.partition("=")
    if not sep or not key:
        raise ValueError(f"Override '{text}' must look like KEY=VALUE")
    try:
        value = json.loads(raw)
    except json.JSONDecodeError:
        value = raw
    return key.strip(), value


def build_config(config_path: str | None, overrides: list[str] | None = None):
    """Config file (or defaults) with --set overrides applied and validated."""
    from graylab.core.config import get_default_config, load_config, with_overrides

    try:
        base = load_config(config_path) if config_path else get_default_config()
        pairs = dict(parse_override(o) for o in overrides or [])
        return with_overrides(base, pairs)
    except FileNotFoundError as e:
        print(f"Error: {e}")
        sys.exit(1)
    except KeyError as e:
        print(f"Error: {e.args[0]}")
        sys.exit(1)
    except ValueError as e:
        print(f"Error: {e}")
        sys.exit(1)


def build_state(config, bits: str | None, value: str | None):
    """Initial AppState from config plus CLI overrides."""
    from graylab.core.state import AppState, set_bit_width, set_disc_bits, set_value

    state = AppState.from_config(config)
    if bits is not None:
        set_bit_width(state, bits)
        set_disc_bits(state, bits)
    if value is not None:
        set_value(state, value)
    return state


def run_table(state) -> None:
    """Print the binary/Gray comparison table."""
    from graylab.core.sequence import generate_sequence

    bits = state.basics.bits
    print(f"[Gray Code Explorer] {bits}-bit sequence")
    print(f"  {'Dec':>5}  {'Binary':>{max(bits, 6)}}  {'Gray':>{max(bits, 6)}}  Hamming")
    for row in generate_sequence(bits):
        marker = "◀" if row.index == state.basics.value else ""
        print(f"  {row.index:5d}  {row.binary:>{max(bits, 6)}}  {row.gray:>{max(bits, 6)}}"
              f"  {row.hamming_from_previous:7d} {marker}")


def run_convert(text: str | None, to_gray: bool) -> None:
    """Convert one bit string and print the steps."""
    from graylab.core.conversion import (
        binary_to_gray_steps,
        convert,
        gray_to_binary_steps,
        sanitize_bit_string,
    )

    if text is None:
        print("Error: --mode convert needs --input")
        sys.exit(1)

    result = convert(text, to_gray)
    direction = "Binary → Gray" if to_gray else "Gray → Binary"
    print(f"[{direction}]")
    if result is None:
        print("  Result: — (input needs 1 to 32 binary digits)")
        return

    digits = sanitize_bit_string(text)
    steps = binary_to_gray_steps(digits) if to_gray else gray_to_binary_steps(digits)
    for step in steps:
        print(f"  {step.header}")
        print(f"    {step.calculation}")
    print(f"  Result: {result}")


def run_disc(config, state, angle: float, rotation: float) -> None:
    """Print what the read head sees on Gray and binary discs."""
    from graylab.disc.renderer import DiscStyle, disc_reading, render_disc

    for name, degrees in (("--angle", angle), ("--rotation", rotation)):
        if not math.isfinite(degrees):
            print(f"Error: {name} must be a finite number of degrees, got {degrees}")
            sys.exit(1)

    bits = state.disc.bits
    gray = disc_reading(angle, bits, is_gray=True)
    binary = disc_reading(angle, bits, is_gray=False)
    drawing = render_disc(
        bits,
        is_gray=True,
        rotation_offset=rotation,
        read_angle=angle,
        width=config.disc.canvas_size,
        height=config.disc.canvas_size,
        style=DiscStyle.from_config(config.disc),
    )

    print(f"[Encoder Disc] {bits} bits, {1 << bits} sectors")
    print(f"  Angle: {angle}° → sector {gray.sector}")
    print(f"  Gray reading:   {gray.pattern}")
    print(f"  Binary reading: {binary.pattern}")
    print(f"  Ring width: {drawing.ring_width:.1f}px, outer radius: {drawing.outer_radius:.1f}px")
    for ring in range(bits):
        track = "".join(
            str(cmd.bit) for cmd in drawing.sectors() if cmd.ring == ring
        )
        print(f"  Ring {ring} (bit {bits - 1 - ring}): {track}")


def run_export(state, output: str | None) -> None:
    """Print or save the JSON export."""
    from graylab.export.snapshot import export_json, save_export

    if output:
        path = save_export(state, output)
        print(f"  Export saved to: {path}")
    else:
        print(export_json(state))


def run_constellation(scheme: str, bits: str | None) -> None:
    """Compare Gray and binary labelling of one constellation."""
    from graylab.core.constellation import build_constellation, compare_labelings
    from graylab.core.state import parse_integer

    k = parse_integer(bits) if bits is not None else (4 if scheme == "qam" else 3)
    if k is None or not (1 <= k <= 8):
        print(f"Error: --bits must be an integer in 1..8 for constellations, got {bits!r}")
        sys.exit(1)
    try:
        stats = compare_labelings(scheme, k)
    except ValueError as e:
        print(f"Error: {e}")
        sys.exit(1)

    print(f"[Constellation] {1 << k}-{scheme.upper()}")
    for point in build_constellation(scheme, k, "gray"):
        print(f"  ({point.i:+.2f}, {point.q:+.2f})  {point.bits}")
    for labeling, s in stats.items():
        print(f"  {labeling:>6}: {s.pairs} neighbour pairs, "
              f"mean {s.mean_bit_errors:.2f} / max {s.max_bit_errors} bit errors per slip")


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.ui:
        launch_ui(args.config)
        return

    if args.save_config:
        from graylab.core.config import save_config

        save_config(build_config(args.config, args.overrides), args.save_config)
        print(f"  Config saved to: {args.save_config}")
        if args.mode is None:
            return

    if args.mode is None:
        print("Error: Specify --mode (table|convert|disc|export|constellation) or --ui.")
        print("Run with --help for usage information.")
        sys.exit(1)

    if args.mode == "convert":
        run_convert(args.input, to_gray=(args.to == "gray"))
    elif args.mode == "constellation":
        run_constellation(args.scheme, args.bits)
    else:
        config = build_config(args.config, args.overrides)
        state = build_state(config, args.bits, args.value)
        if args.mode == "table":
            run_table(state)
        elif args.mode == "disc":
            run_disc(config, state, args.angle, args.rotation)
        elif args.mode == "export":
            run_export(state, args.output)


if __name__ == "__main__":
    main()
