"""
Pixel to complex-plane mapping for a ViewState.
"""

from .compute import check_dimensions, map_pixel
from .state import Complex, ViewState


def pixel_to_plane(px, py, width, height, view: ViewState) -> Complex:
    """
    Convert pixel coordinates to a point in the complex plane.

    real = scale * (px - width/2) / width  + pan.real
    imag = scale * (py - height/2) / height + pan.imag

    Raises:
        InvalidDimensionsError if width or height is not positive
    """
    check_dimensions(width, height)
    real, imag = map_pixel(px, py, width, height,
                           view.pan.real, view.pan.imag, view.scale)
    return Complex(real, imag)

