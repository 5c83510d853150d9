"""
Palette definitions for Julia set visualization.

Each palette function returns a numpy array of shape (256, 3) with RGB
values (uint8). An escape time is quantized to one of the 256 entries by
color_for (no interpolation between entries).

To add a new palette:
1. Define a create_palette_xxx() function that returns the color array
2. Add it to the PALETTES dictionary at the bottom of this file
"""

import numpy as np

from .compute import NUM_PALETTE_ENTRIES, palette_index


NUM_COLORS = NUM_PALETTE_ENTRIES


def _freeze(colors):
    """Mark a palette read-only; it is shared by every frame."""
    colors.setflags(write=False)
    return colors


def create_palette_grayscale():
    """
    Grayscale palette: entry i is (i, i, i).

    The default. Escaping points are dark, points that stay bounded for
    the whole iteration budget are white.
    """
    ramp = np.arange(NUM_COLORS, dtype=np.uint8)
    return _freeze(np.stack([ramp, ramp, ramp], axis=1))


def _ramp(t, start, slope):
    """Linear channel ramp clipped to [0, 255]; start and slope in 0..1 units."""
    return np.clip(255 * (start + slope * t), 0, 255)


def _from_channels(red, green, blue):
    return _freeze(np.rint(np.stack([red, green, blue], axis=1)).astype(np.uint8))


def _positions():
    return np.linspace(0.0, 1.0, NUM_COLORS)


def create_palette_hot():
    """Fire: red saturates first, then green, then blue."""
    t = _positions() ** 0.8
    return _from_channels(_ramp(t, 0, 2.5), _ramp(t, -1.0, 2.5), _ramp(t, -2.31, 3.3))


def create_palette_ocean():
    """Blue-heavy ramp towards white."""
    t = _positions()
    return _from_channels(_ramp(t, -1.0, 2.0), _ramp(t, 0, 1.0), _ramp(t, 50 / 255, 205 / 255))


def create_palette_forest():
    """Greens, warming to yellow at the top."""
    t = _positions()
    return _from_channels(_ramp(t, -0.42, 1.4), _ramp(t, 80 / 255, 175 / 255), _ramp(t, -2.31, 3.3))


def create_palette_purple():
    """Violet through pink."""
    t = _positions()
    return _from_channels(_ramp(t, 100 / 255, 155 / 255), _ramp(t, -0.42, 1.4), _ramp(t, 80 / 255, 175 / 255))


def create_palette_rainbow():
    """Two full hue turns at full saturation and value."""
    hue = (_positions() * 2) % 1.0
    # Distance of each channel's hue from the sample, on the colour wheel
    channels = []
    for offset in (0.0, 1 / 3, 2 / 3):
        d = np.abs((hue - offset + 0.5) % 1.0 - 0.5)
        channels.append(np.clip(255 * (2 - 6 * d), 0, 255))
    return _from_channels(*channels)


# Registry of all available palettes.
# Keys are display names, values are factory functions.
PALETTES = {
    'Grayscale': create_palette_grayscale,
    'Hot': create_palette_hot,
    'Ocean': create_palette_ocean,
    'Forest': create_palette_forest,
    'Purple': create_palette_purple,
    'Rainbow': create_palette_rainbow,
}

DEFAULT_PALETTE = 'Grayscale'


def build_default():
    """Get the default palette (Grayscale)."""
    return create_palette_grayscale()


def get_palette(name):
    """
    Get a palette by name.

    Args:
        name: Key from PALETTES dictionary

    Returns:
        Palette array (256, 3) of uint8 RGB values

    Raises:
        KeyError if name not found
    """
    return PALETTES[name]()


def list_palette_names():
    """Get list of available palette names."""
    return list(PALETTES.keys())


def color_for(escape_time, max_iterations, palette):
    """
    Color of an escape time.

    The escape time is normalized by max_iterations, clamped to [0, 1]
    and rounded to the nearest of the 256 palette entries.

    Returns:
        (r, g, b) tuple of ints
    """
    r, g, b = palette[palette_index(escape_time, max_iterations)]
    return int(r), int(g), int(b)
