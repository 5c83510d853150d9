"""
Julia set computation functions using Numba JIT compilation.

This module contains the performance-critical code of the viewer. All
fractal arithmetic is carried out in single precision (float32):
- Escape-time iteration of z <- z² + c for one point
- Pixel to complex-plane mapping for a pan/scale view
- Escape-time to palette index quantization
- The full-frame loop that fills an ARGB pixel buffer

The kernels are compiled without parallel=True: a frame is evaluated on
the calling thread, row by row.
"""

import numpy as np
from numba import jit

from .state import Complex


NUM_PALETTE_ENTRIES = 256
ALPHA_OPAQUE = 255

# Byte offsets of each channel within one pixel of the frame buffer
CHANNEL_A = 0
CHANNEL_R = 1
CHANNEL_G = 2
CHANNEL_B = 3


class InvalidDimensionsError(ValueError):
    """Raised when a frame size is not strictly positive."""


def check_dimensions(width, height):
    """Raise InvalidDimensionsError unless width and height are both > 0."""
    if width <= 0 or height <= 0:
        raise InvalidDimensionsError(
            f"frame dimensions must be positive, got {width}x{height}"
        )


@jit(nopython=True, cache=True)
def escape_time(z0r, z0i, cr, ci, max_iter, escape_threshold):
    """
    Iterate z <- z² + c starting from z0 until |z|² exceeds the threshold.

    Args:
        z0r, z0i: Starting point
        cr, ci: Julia constant
        max_iter: Iteration budget (>= 1)
        escape_threshold: Bound on the squared magnitude of z

    Returns:
        The 1-based index of the update that escaped, or max_iter if the
        orbit stayed bounded for the whole budget.
    """
    zr = np.float32(z0r)
    zi = np.float32(z0i)
    c_r = np.float32(cr)
    c_i = np.float32(ci)
    threshold = np.float32(escape_threshold)

    for i in range(1, max_iter + 1):
        new_r = zr * zr - zi * zi + c_r
        zi = (zr + zr) * zi + c_i
        zr = new_r
        if zr * zr + zi * zi > threshold:
            return i
    return max_iter


@jit(nopython=True, cache=True)
def map_pixel(px, py, width, height, pan_r, pan_i, scale):
    """
    Map a pixel to the complex plane.

    The image center lands on the pan point; the visible extent is
    `scale` plane units along each axis whatever the window size.
    """
    w = np.float32(width)
    h = np.float32(height)
    s = np.float32(scale)
    half = np.float32(0.5)
    real = s * (np.float32(px) - w * half) / w + np.float32(pan_r)
    imag = s * (np.float32(py) - h * half) / h + np.float32(pan_i)
    return real, imag


@jit(nopython=True, cache=True)
def palette_index(escape, max_iter):
    """Quantize an escape time to an index in [0, 255]."""
    t = escape / max_iter
    if t < 0.0:
        t = 0.0
    elif t > 1.0:
        t = 1.0
    index = int(np.floor(t * (NUM_PALETTE_ENTRIES - 1) + 0.5))
    # Clamp again in case of rounding at the top of the range
    return min(max(index, 0), NUM_PALETTE_ENTRIES - 1)


@jit(nopython=True, cache=True)
def render_julia(out, pan_r, pan_i, scale, cr, ci, max_iter, escape_threshold, palette):
    """
    Fill an ARGB frame buffer with the Julia set for the given view.

    Every pixel is recomputed; nothing from a previous frame is reused.

    Args:
        out: Output array (height, width, 4) of uint8, modified in place
        pan_r, pan_i: Plane point at the image center
        scale: Zoom factor
        cr, ci: Julia constant
        max_iter: Iteration budget
        escape_threshold: Squared escape radius
        palette: (256, 3) array of uint8 RGB colors
    """
    height = out.shape[0]
    width = out.shape[1]

    for py in range(height):
        for px in range(width):
            zr, zi = map_pixel(px, py, width, height, pan_r, pan_i, scale)
            t = escape_time(zr, zi, cr, ci, max_iter, escape_threshold)
            idx = palette_index(t, max_iter)
            out[py, px, CHANNEL_A] = ALPHA_OPAQUE
            out[py, px, CHANNEL_R] = palette[idx, 0]
            out[py, px, CHANNEL_G] = palette[idx, 1]
            out[py, px, CHANNEL_B] = palette[idx, 2]


def iterate(z0: Complex, c: Complex, max_iterations: int, escape_threshold: float) -> int:
    """Escape time of z0 under z <- z² + c (see escape_time)."""
    return int(escape_time(z0.real, z0.imag, c.real, c.imag,
                           max_iterations, np.float32(escape_threshold)))


def warmup_jit(palette):
    """
    Warm up JIT compilation with a tiny frame.

    Call this once at startup so the first real frame does not pay the
    compilation cost.

    Args:
        palette: A palette array to use for warming up render_julia
    """
    dummy = np.zeros((4, 4, 4), dtype=np.uint8)
    render_julia(dummy, np.float32(0.0), np.float32(0.0), np.float32(1.0),
                 np.float32(0.0), np.float32(0.0), 4, np.float32(4.0), palette)
