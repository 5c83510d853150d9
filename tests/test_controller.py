import numpy as np
import pytest

from JuliaVisualizer.compute import InvalidDimensionsError
from JuliaVisualizer.controller import (
    Command,
    InteractionController,
    apply_command,
    apply_commands,
)
from JuliaVisualizer.state import Complex, JuliaParameters, ViewState


@pytest.fixture
def controller():
    return InteractionController(width=640, height=480)


def test_zoom_in_then_out_compounds(controller):
    apply_command(controller, Command.ZOOM_IN)
    apply_command(controller, Command.ZOOM_OUT)
    expected = np.float32(np.float32(1.0) * np.float32(1.05))
    expected = np.float32(expected * np.float32(0.95))
    assert controller.view.scale == expected
    assert controller.view.scale != np.float32(1.0)
    assert float(controller.view.scale) == pytest.approx(0.9975, rel=1e-6)


def test_zoom_keeps_scale_positive(controller):
    apply_commands(controller, [Command.ZOOM_OUT] * 500)
    assert controller.view.scale > 0


def test_pan_right_then_left_is_exact(controller):
    original = controller.view.pan
    apply_command(controller, Command.PAN_RIGHT)
    assert controller.view.pan != original
    apply_command(controller, Command.PAN_LEFT)
    assert controller.view.pan == original


def test_pan_up_then_down_is_exact(controller):
    original = controller.view.pan
    apply_commands(controller, [Command.PAN_UP, Command.PAN_DOWN])
    assert controller.view.pan == original


def test_pan_step_scales_with_zoom(controller):
    apply_command(controller, Command.PAN_RIGHT)
    assert float(controller.view.pan.real) == pytest.approx(5 / 640, rel=1e-6)
    assert controller.view.pan.imag == 0

    zoomed = InteractionController(view=ViewState(scale=2.0), width=640, height=480)
    apply_command(zoomed, Command.PAN_DOWN)
    assert float(zoomed.view.pan.imag) == pytest.approx(2 * 5 / 480, rel=1e-6)


def test_pan_up_moves_toward_negative_imaginary(controller):
    apply_command(controller, Command.PAN_UP)
    assert controller.view.pan.imag < 0
    apply_command(controller, Command.PAN_LEFT)
    assert controller.view.pan.real < 0


def test_constant_steps():
    params = JuliaParameters(constant=Complex(0.25, -0.5),
                             displacement_step=Complex(0.125, 0.0625))
    controller = InteractionController(params=params)
    apply_command(controller, Command.REAL_INCREASE)
    assert controller.params.constant == Complex(0.375, -0.5)
    apply_command(controller, Command.IMAG_INCREASE)
    assert controller.params.constant == Complex(0.375, -0.4375)
    apply_commands(controller, [Command.REAL_DECREASE, Command.IMAG_DECREASE])
    assert controller.params.constant == Complex(0.25, -0.5)


def test_report_prints_without_changing_state(controller, capsys):
    pan = controller.view.pan
    constant = controller.params.constant
    apply_command(controller, Command.REPORT)
    out = capsys.readouterr().out
    assert "constant: (0.355534, -0.337292i)" in out
    assert "pan: (0.000000, +0.000000i)" in out
    assert controller.view.pan == pan
    assert controller.params.constant == constant


def test_quit(controller):
    assert controller.running
    apply_command(controller, Command.QUIT)
    assert not controller.running


def test_reset_restores_view_and_constant(controller):
    apply_commands(controller, [Command.ZOOM_IN, Command.PAN_RIGHT,
                                Command.REAL_INCREASE, Command.IMAG_DECREASE])
    apply_command(controller, Command.RESET)
    assert controller.view == ViewState()
    assert controller.params.constant == JuliaParameters().constant


def test_commands_apply_in_arrival_order(controller):
    # Pan size depends on the scale at the time of the pan
    a = apply_commands(InteractionController(), [Command.ZOOM_IN, Command.PAN_RIGHT])
    b = apply_commands(InteractionController(), [Command.PAN_RIGHT, Command.ZOOM_IN])
    assert a.view.scale == b.view.scale
    assert a.view.pan.real > b.view.pan.real


def test_apply_command_returns_state(controller):
    assert apply_command(controller, Command.ZOOM_IN) is controller


def test_resize(controller):
    controller.resize(320, 240)
    apply_command(controller, Command.PAN_RIGHT)
    assert float(controller.view.pan.real) == pytest.approx(5 / 320, rel=1e-6)
    with pytest.raises(InvalidDimensionsError):
        controller.resize(0, 240)
    with pytest.raises(InvalidDimensionsError):
        InteractionController(width=640, height=0)


def test_scale_stays_finite_after_many_zoom_ins(controller):
    apply_commands(controller, [Command.ZOOM_IN] * 2000)
    assert np.isfinite(controller.view.scale)
    apply_commands(controller, [Command.PAN_RIGHT, Command.PAN_DOWN] * 500)
    assert np.isfinite(controller.view.pan.real)
    assert np.isfinite(controller.view.pan.imag)

    top = controller.view.scale
    apply_command(controller, Command.ZOOM_OUT)
    assert controller.view.scale < top


def test_scale_stays_positive_after_many_zoom_outs(controller):
    apply_commands(controller, [Command.ZOOM_OUT] * 5000)
    assert controller.view.scale > 0
    bottom = controller.view.scale
    apply_command(controller, Command.ZOOM_IN)
    assert controller.view.scale > bottom
