"""
Startup configuration for the Julia set viewer.

Settings come from three layers, later ones winning:
1. Built-in defaults
2. An optional JSON settings file
3. Command-line overrides

Every key is optional. A key that is present but malformed is an error:
the viewer refuses to start rather than render something misleading.
"""

import json
import math
from dataclasses import dataclass

import numpy as np

from .colormaps import DEFAULT_PALETTE, PALETTES
from .state import (
    DEFAULT_CONSTANT,
    DEFAULT_DISPLACEMENT_STEP,
    DEFAULT_ESCAPE_THRESHOLD,
    DEFAULT_MAX_ITERATIONS,
    Complex,
    JuliaParameters,
    RenderParameters,
)


DEFAULT_WIDTH = 640
DEFAULT_HEIGHT = 480
FLOAT32_MAX = float(np.finfo(np.float32).max)


class ConfigError(ValueError):
    """Raised when a configuration value cannot be used."""


@dataclass(frozen=True)
class Settings:
    """Validated startup settings."""

    width: int = DEFAULT_WIDTH
    height: int = DEFAULT_HEIGHT
    max_iterations: int = DEFAULT_MAX_ITERATIONS
    escape_threshold: float = DEFAULT_ESCAPE_THRESHOLD
    constant: tuple = DEFAULT_CONSTANT
    displacement_step: tuple = DEFAULT_DISPLACEMENT_STEP
    palette: str = DEFAULT_PALETTE

    def julia_parameters(self):
        return JuliaParameters(
            constant=Complex(*self.constant),
            displacement_step=Complex(*self.displacement_step),
        )

    def render_parameters(self):
        return RenderParameters(
            max_iterations=self.max_iterations,
            escape_threshold=self.escape_threshold,
        )


def _positive_int(key, value, minimum=1):
    # bool is an int subclass; "true" is not a window width
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigError(f"{key} must be an integer, got {value!r}")
    if value < minimum:
        raise ConfigError(f"{key} must be at least {minimum}, got {value}")
    return value


def _finite_float(key, value):
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ConfigError(f"{key} must be a number, got {value!r}")
    value = float(value)
    if not math.isfinite(value):
        raise ConfigError(f"{key} must be finite, got {value}")
    # Everything downstream is float32
    if abs(value) > FLOAT32_MAX:
        raise ConfigError(f"{key} is out of single-precision range, got {value}")
    return value


def _positive_float(key, value):
    value = _finite_float(key, value)
    if value <= 0:
        raise ConfigError(f"{key} must be positive, got {value}")
    return value


def _complex_pair(key, value):
    if not isinstance(value, (list, tuple)) or len(value) != 2:
        raise ConfigError(f"{key} must be a pair [real, imag], got {value!r}")
    return (_finite_float(f"{key}[0]", value[0]),
            _finite_float(f"{key}[1]", value[1]))


def _palette_name(key, value):
    if value not in PALETTES:
        raise ConfigError(
            f"{key} must be one of {', '.join(PALETTES)}, got {value!r}"
        )
    return value


_VALIDATORS = {
    'width': _positive_int,
    'height': _positive_int,
    'max_iterations': _positive_int,
    'escape_threshold': _positive_float,
    'constant': _complex_pair,
    'displacement_step': _complex_pair,
    'palette': _palette_name,
}


def load_settings_file(path):
    """
    Read a JSON settings file.

    Returns:
        dict of raw values, validated later by build_settings

    Raises:
        ConfigError if the file cannot be read, is not valid JSON, or is
        not a JSON object
    """
    try:
        with open(path, 'r') as f:
            data = json.load(f)
    except OSError as e:
        raise ConfigError(f"could not read settings file {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise ConfigError(f"invalid JSON in settings file {path}: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"settings file {path} must contain a JSON object")
    return data


def build_settings(*sources):
    """
    Merge raw setting dicts over the defaults and validate them.

    Args:
        *sources: dicts applied in order; None values and None sources are
            skipped, so unset command-line options leave earlier values alone

    Returns:
        A Settings instance

    Raises:
        ConfigError on unknown keys or malformed values
    """
    values = {}
    for source in sources:
        if not source:
            continue
        for key, value in source.items():
            if value is None:
                continue
            if key not in _VALIDATORS:
                raise ConfigError(f"unknown setting {key!r}")
            values[key] = _VALIDATORS[key](key, value)
    return Settings(**values)
