"""
Julia Set Visualizer Package

An interactive Julia set explorer using Pygame for display and Numba
for JIT-compiled computation. Every frame is recomputed from scratch in
single precision.

Quick Start:
    from JuliaVisualizer import run
    run()

Or from command line:
    python -m JuliaVisualizer --constant -0.8 0.156

Package Structure:
    - state.py: Complex values, view state, Julia and render parameters
    - compute.py: JIT-compiled iteration, pixel mapping and frame loop
    - view.py: Pixel to complex-plane mapping
    - colormaps.py: 256-entry palettes (grayscale, hot, ocean, etc.)
    - renderer.py: Frame buffer rendering
    - controller.py: Input commands and the mutable view/parameter state
    - config.py: Settings from defaults, JSON file and command line
    - app.py: Main application and event loop

Controls:
    - Arrows: Pan
    - + / -: Zoom (scale up / down)
    - A / D: Move the real part of c
    - W / S: Move the imaginary part of c
    - P: Print c and the pan point
    - R: Reset view and c
    - C: Next palette
    - F12: Save a PNG of the current frame
    - ESC / Q: Quit
"""

from .state import Complex, ViewState, JuliaParameters, RenderParameters
from .compute import InvalidDimensionsError, iterate
from .view import pixel_to_plane
from .colormaps import PALETTES, build_default, color_for, get_palette, list_palette_names
from .renderer import FrameRenderer, render
from .controller import Command, InteractionController, apply_command, apply_commands
from .config import ConfigError, Settings, build_settings

__version__ = "1.0.0"
__all__ = [
    "Complex",
    "ViewState",
    "JuliaParameters",
    "RenderParameters",
    "InvalidDimensionsError",
    "iterate",
    "pixel_to_plane",
    "PALETTES",
    "build_default",
    "color_for",
    "get_palette",
    "list_palette_names",
    "FrameRenderer",
    "render",
    "Command",
    "InteractionController",
    "apply_command",
    "apply_commands",
    "ConfigError",
    "Settings",
    "build_settings",
]


def run(settings=None):
    """Run the viewer (imports pygame on first use)."""
    from .app import run as _run
    _run(settings)
