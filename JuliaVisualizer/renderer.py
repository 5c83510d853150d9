"""
Frame renderer for the Julia set viewer.

Turns the current view, Julia parameters and render parameters into an
ARGB frame buffer:
- Validates the frame size before any pixel math
- Owns (and reuses) the output buffer between frames
- Recomputes every pixel each call, with no caching of escape times

The buffer is a (height, width, 4) uint8 array in row-major order with
channels A, R, G, B. Upload it with pygame.image.frombuffer(..., "ARGB").
"""

import numpy as np

from .compute import NUM_PALETTE_ENTRIES, check_dimensions, render_julia
from .colormaps import build_default
from .state import JuliaParameters, RenderParameters, ViewState


BYTES_PER_PIXEL = 4


def allocate_frame(width, height):
    """Allocate an uninitialized frame buffer; MemoryError propagates."""
    check_dimensions(width, height)
    return np.empty((height, width, BYTES_PER_PIXEL), dtype=np.uint8)


def _check_palette(palette):
    if palette.shape != (NUM_PALETTE_ENTRIES, 3) or palette.dtype != np.uint8:
        raise ValueError(
            f"palette must be a ({NUM_PALETTE_ENTRIES}, 3) uint8 array, "
            f"got {palette.shape} {palette.dtype}"
        )


def render(width, height, view: ViewState, params: JuliaParameters,
           render_params: RenderParameters, palette, out=None):
    """
    Render one full frame.

    Args:
        width, height: Frame size in pixels
        view: Pan and scale
        params: Julia constant (the displacement step is not used here)
        render_params: Iteration budget and escape threshold
        palette: (256, 3) uint8 color table
        out: Optional (height, width, 4) uint8 buffer to overwrite

    Returns:
        The filled frame buffer

    Raises:
        InvalidDimensionsError if width or height is not positive
        ValueError if out or palette has the wrong shape or dtype
    """
    check_dimensions(width, height)
    _check_palette(palette)
    if out is None:
        out = allocate_frame(width, height)
    elif out.shape != (height, width, BYTES_PER_PIXEL) or out.dtype != np.uint8:
        raise ValueError(
            f"output buffer must be ({height}, {width}, {BYTES_PER_PIXEL}) uint8, "
            f"got {out.shape} {out.dtype}"
        )

    render_julia(
        out,
        view.pan.real, view.pan.imag, view.scale,
        params.constant.real, params.constant.imag,
        render_params.max_iterations, render_params.escape_threshold,
        palette,
    )
    return out


class FrameRenderer:
    """
    Renders frames into a buffer that is kept between calls.

    Usage:
        renderer = FrameRenderer()
        frame = renderer.render(640, 480, view, params, render_params)
        # frame is valid until the next call to render()

    Attributes:
        palette: (256, 3) uint8 color table used for every frame
        frame: The last rendered buffer (None before the first frame)
    """

    def __init__(self, palette=None):
        self.palette = build_default() if palette is None else palette
        _check_palette(self.palette)
        self.frame = None

    def set_palette(self, palette):
        """Swap the palette; takes effect on the next frame."""
        _check_palette(palette)
        self.palette = palette

    def render(self, width, height, view, params, render_params):
        """Render a frame, reallocating the buffer only if the size changed."""
        check_dimensions(width, height)
        if self.frame is None or self.frame.shape[:2] != (height, width):
            self.frame = allocate_frame(width, height)
        return render(width, height, view, params, render_params,
                      self.palette, out=self.frame)
