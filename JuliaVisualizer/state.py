"""
Value types shared by the renderer and the interaction controller.

All numeric state is kept in single precision (numpy.float32), which is
what the JIT kernels in compute.py iterate in.
"""

from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np


# Default Julia constant and render budget
DEFAULT_CONSTANT = (0.355534, -0.337292)
DEFAULT_DISPLACEMENT_STEP = (0.001, 0.001)
DEFAULT_MAX_ITERATIONS = 64
DEFAULT_ESCAPE_THRESHOLD = 1000.0  # Compared against |z|^2, radius ~31.6


@dataclass(frozen=True)
class Complex:
    """A complex number stored as a pair of float32 values."""

    real: np.float32 = np.float32(0.0)
    imag: np.float32 = np.float32(0.0)

    def __post_init__(self):
        object.__setattr__(self, "real", np.float32(self.real))
        object.__setattr__(self, "imag", np.float32(self.imag))

    def __add__(self, other: Complex) -> Complex:
        return Complex(self.real + other.real, self.imag + other.imag)

    def __sub__(self, other: Complex) -> Complex:
        return Complex(self.real - other.real, self.imag - other.imag)

    def __mul__(self, other: Complex) -> Complex:
        return Complex(
            self.real * other.real - self.imag * other.imag,
            self.real * other.imag + self.imag * other.real,
        )

    def squared_norm(self) -> np.float32:
        return np.float32(self.real * self.real + self.imag * self.imag)

    def __str__(self):
        return f"({float(self.real):.6f}, {float(self.imag):+.6f}i)"


@dataclass
class ViewState:
    """Pan point at the image center and zoom scale (1 = default framing)."""

    pan: Complex = field(default_factory=Complex)
    scale: np.float32 = np.float32(1.0)

    def __post_init__(self):
        self.scale = np.float32(self.scale)
        if not self.scale > 0:
            raise ValueError(f"scale must be positive, got {self.scale}")


@dataclass
class JuliaParameters:
    """The recurrence constant c and the per-keypress step applied to it."""

    constant: Complex = field(default_factory=lambda: Complex(*DEFAULT_CONSTANT))
    displacement_step: Complex = field(
        default_factory=lambda: Complex(*DEFAULT_DISPLACEMENT_STEP)
    )


@dataclass(frozen=True)
class RenderParameters:
    """Iteration budget and squared escape radius, fixed at startup."""

    max_iterations: int = DEFAULT_MAX_ITERATIONS
    escape_threshold: np.float32 = np.float32(DEFAULT_ESCAPE_THRESHOLD)

    def __post_init__(self):
        object.__setattr__(self, "max_iterations", int(self.max_iterations))
        object.__setattr__(self, "escape_threshold", np.float32(self.escape_threshold))
        if self.max_iterations < 1:
            raise ValueError(
                f"max_iterations must be at least 1, got {self.max_iterations}"
            )
        if not self.escape_threshold > 0:
            raise ValueError(
                f"escape_threshold must be positive, got {self.escape_threshold}"
            )
