"""
Interaction controller for the Julia set viewer.

Owns the mutable view state (pan, scale) and Julia parameters, and
applies discrete input commands to them in arrival order. Translation
from raw pygame events to commands happens in app.py.
"""

import enum
from dataclasses import replace

import numpy as np

from .compute import check_dimensions
from .state import Complex, JuliaParameters, ViewState


ZOOM_IN_FACTOR = np.float32(1.05)
ZOOM_OUT_FACTOR = np.float32(0.95)
PAN_PIXELS = 5  # Pan step, in pixels at scale 1


class Command(enum.Enum):
    """Discrete input commands understood by the controller."""

    ZOOM_IN = "zoom-in"
    ZOOM_OUT = "zoom-out"
    PAN_UP = "pan-up"
    PAN_DOWN = "pan-down"
    PAN_LEFT = "pan-left"
    PAN_RIGHT = "pan-right"
    REAL_INCREASE = "real-increase"
    REAL_DECREASE = "real-decrease"
    IMAG_INCREASE = "imag-increase"
    IMAG_DECREASE = "imag-decrease"
    REPORT = "report"
    RESET = "reset"
    QUIT = "quit"


# Pan direction as (real, imag) unit; screen y grows downward, so does imag
_PAN_DIRECTIONS = {
    Command.PAN_UP: (0, -1),
    Command.PAN_DOWN: (0, 1),
    Command.PAN_LEFT: (-1, 0),
    Command.PAN_RIGHT: (1, 0),
}

# Which component of the constant moves, and in which direction
_CONSTANT_STEPS = {
    Command.REAL_INCREASE: (1, 0),
    Command.REAL_DECREASE: (-1, 0),
    Command.IMAG_INCREASE: (0, 1),
    Command.IMAG_DECREASE: (0, -1),
}


class InteractionController:
    """
    Flat mutable record of view and Julia parameters.

    Attributes:
        view: Current ViewState (pan, scale)
        params: Current JuliaParameters (constant, displacement step)
        width, height: Output size, used to size the pan step
        running: False once a QUIT command has been applied
    """

    def __init__(self, view=None, params=None, width=640, height=480):
        check_dimensions(width, height)
        self.view = view if view is not None else ViewState()
        self.params = params if params is not None else JuliaParameters()
        self.width = width
        self.height = height
        self.running = True

        # Snapshot for RESET
        self._initial_view = replace(self.view)
        self._initial_params = replace(self.params)

    def resize(self, width, height):
        """Update the output size the pan step is derived from."""
        check_dimensions(width, height)
        self.width = width
        self.height = height

    def apply(self, command):
        """Apply a single command. Returns self."""
        if command is Command.ZOOM_IN:
            self._zoom(ZOOM_IN_FACTOR)
        elif command is Command.ZOOM_OUT:
            self._zoom(ZOOM_OUT_FACTOR)
        elif command in _PAN_DIRECTIONS:
            self._pan(*_PAN_DIRECTIONS[command])
        elif command in _CONSTANT_STEPS:
            dr, di = _CONSTANT_STEPS[command]
            step = self.params.displacement_step
            self.params.constant = self.params.constant + Complex(
                dr * step.real, di * step.imag
            )
        elif command is Command.REPORT:
            self.report()
        elif command is Command.RESET:
            self.view = replace(self._initial_view)
            self.params = replace(self.params, constant=self._initial_params.constant)
        elif command is Command.QUIT:
            self.running = False
        return self

    def _zoom(self, factor):
        # A scale that would overflow to inf or underflow to 0 is not applied
        with np.errstate(over="ignore", under="ignore"):
            scale = np.float32(self.view.scale * factor)
        if np.isfinite(scale) and scale > 0:
            self.view.scale = scale

    def _pan(self, ux, uy):
        with np.errstate(over="ignore"):
            step_x = np.float32(self.view.scale * np.float32(PAN_PIXELS / self.width))
            step_y = np.float32(self.view.scale * np.float32(PAN_PIXELS / self.height))
            pan = self.view.pan + Complex(ux * step_x, uy * step_y)
        if np.isfinite(pan.real) and np.isfinite(pan.imag):
            self.view.pan = pan

    def report(self):
        """Print the current constant and pan point."""
        print(f"constant: {self.params.constant}  pan: {self.view.pan}  "
              f"scale: {float(self.view.scale):.6f}")


def apply_command(state, command):
    """Apply one command to an InteractionController and return it."""
    return state.apply(command)


def apply_commands(state, commands):
    """Apply commands in arrival order and return the controller."""
    for command in commands:
        state.apply(command)
    return state
