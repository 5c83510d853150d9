import numpy as np
import pytest

from JuliaVisualizer.compute import (
    InvalidDimensionsError,
    check_dimensions,
    escape_time,
    iterate,
    palette_index,
)
from JuliaVisualizer.state import Complex, DEFAULT_CONSTANT


@pytest.mark.parametrize("z0", [
    Complex(40.0, 0.0),
    Complex(0.0, 35.0),
    Complex(-25.0, 25.0),
])
def test_point_outside_threshold_escapes_on_first_update(z0):
    assert z0.squared_norm() > 1000
    assert iterate(z0, Complex(0.3, -0.2), 64, 1000.0) == 1


def test_known_escape_times():
    origin = Complex(0.0, 0.0)
    # 0 -> 1 -> 2 -> 5 -> 26 -> 677
    assert iterate(origin, Complex(1.0, 0.0), 64, 1000.0) == 5
    # 0 -> 2 -> 6 -> 38
    assert iterate(origin, Complex(2.0, 0.0), 64, 1000.0) == 3


def test_bounded_orbit_returns_max_iterations():
    assert iterate(Complex(0.0, 0.0), Complex(0.0, 0.0), 17, 1000.0) == 17
    assert iterate(Complex(0.5, 0.5), Complex(0.0, 0.0), 1, 4.0) == 1


def test_default_constant_center_pixel_is_bounded():
    # Regression fixture: the orbit of 0 under the default constant stays
    # inside |z|^2 < 1 for the whole budget
    c = Complex(*DEFAULT_CONSTANT)
    assert iterate(Complex(0.0, 0.0), c, 64, 1000.0) == 64


def test_escape_time_always_within_budget():
    c = Complex(*DEFAULT_CONSTANT)
    for max_iter in (1, 2, 7, 64):
        for re in np.linspace(-2.0, 2.0, 9):
            for im in np.linspace(-2.0, 2.0, 9):
                t = iterate(Complex(re, im), c, max_iter, 4.0)
                assert 1 <= t <= max_iter


def test_iterate_is_deterministic():
    z0 = Complex(-0.31, 0.42)
    c = Complex(*DEFAULT_CONSTANT)
    first = iterate(z0, c, 200, 1000.0)
    assert all(iterate(z0, c, 200, 1000.0) == first for _ in range(5))


def test_escape_time_accepts_float32_and_python_floats():
    a = escape_time(np.float32(0.0), np.float32(0.0), np.float32(1.0),
                    np.float32(0.0), 64, np.float32(1000.0))
    b = escape_time(0.0, 0.0, 1.0, 0.0, 64, 1000.0)
    assert a == b == 5


@pytest.mark.parametrize("escape, max_iter, expected", [
    (0, 64, 0),
    (64, 64, 255),
    (32, 64, 128),  # 127.5 rounds up
    (1, 255, 1),
    (500, 64, 255),
    (-3, 64, 0),
])
def test_palette_index(escape, max_iter, expected):
    assert palette_index(escape, max_iter) == expected


def test_check_dimensions():
    check_dimensions(1, 1)
    for width, height in ((0, 10), (10, 0), (-1, 5)):
        with pytest.raises(InvalidDimensionsError):
            check_dimensions(width, height)
