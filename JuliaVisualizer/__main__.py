"""
Command-line entry point: python -m JuliaVisualizer
"""
import argparse
import sys

from .colormaps import list_palette_names
from .config import ConfigError, build_settings, load_settings_file


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        prog="julia-visualizer",
        description="Interactive Julia set viewer",
    )
    parser.add_argument(
        "--config",
        help="JSON settings file; command-line options override its values",
    )
    parser.add_argument("--width", type=int, help="window width in pixels (default 640)")
    parser.add_argument("--height", type=int, help="window height in pixels (default 480)")
    parser.add_argument(
        "--max-iterations",
        type=int,
        help="iteration budget per pixel (default 64)",
    )
    parser.add_argument(
        "--escape-threshold",
        type=float,
        help="bound on |z|^2 at which a point escapes (default 1000)",
    )
    parser.add_argument(
        "--constant",
        type=float,
        nargs=2,
        metavar=("RE", "IM"),
        help="Julia constant c (default 0.355534 -0.337292)",
    )
    parser.add_argument(
        "--displacement-step",
        type=float,
        nargs=2,
        metavar=("RE", "IM"),
        help="amount one keypress moves c by (default 0.001 0.001)",
    )
    parser.add_argument(
        "--palette",
        choices=list_palette_names(),
        help="color scheme (default Grayscale)",
    )
    return parser.parse_args(argv)


def load_settings(args):
    """Build Settings from a parsed command line (file first, then options)."""
    file_values = load_settings_file(args.config) if args.config else None
    overrides = {
        'width': args.width,
        'height': args.height,
        'max_iterations': args.max_iterations,
        'escape_threshold': args.escape_threshold,
        'constant': args.constant,
        'displacement_step': args.displacement_step,
        'palette': args.palette,
    }
    return build_settings(file_values, overrides)


def main(argv=None):
    args = parse_args(argv)
    try:
        settings = load_settings(args)
    except ConfigError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2

    print(f"Julia constant: {settings.constant}")
    print(f"max iterations: {settings.max_iterations}")
    print(f"escape threshold: {settings.escape_threshold}")
    print(f"dims: {settings.width}x{settings.height}")

    # Imported here so --help and bad settings never open a window
    from .app import run
    run(settings)
    return 0


if __name__ == "__main__":
    sys.exit(main())
