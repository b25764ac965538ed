from __future__ import annotations

import math

import numpy as np
import pytest

from integration_viz.animation import CURVE, FrameClock
from integration_viz.function_model import Function
from integration_viz.function_range import FromZero, Symmetric
from integration_viz.function_view import FunctionView, RangeMismatchError
from integration_viz.integral import Analytical, Midpoint, Trapezoidal
from integration_viz.layers import LayerRenderer


class FakeClock(FrameClock):
    def __init__(self) -> None:
        self.callback = None
        self._paused = True

    def bind(self, callback) -> None:
        self.callback = callback

    @property
    def paused(self) -> bool:
        return self._paused

    def pause(self) -> None:
        self._paused = True

    def resume(self) -> None:
        self._paused = False

    def fire(self) -> None:
        if not self._paused:
            self.callback()


class FakeTime:
    def __init__(self) -> None:
        self.now = 100.0

    def __call__(self) -> float:
        return self.now


class RecordingRenderer(LayerRenderer):
    def __init__(self) -> None:
        self.frames = []

    def render(self, layers) -> None:
        self.frames.append(layers)


def _cubic() -> Function:
    return Function(Symmetric(2), Symmetric(2), lambda x: 2 * (x - 1) ** 3)


def _make_view(function=None, **kwargs):
    clock = FakeClock()
    now = FakeTime()
    renderer = RecordingRenderer()
    view = FunctionView(
        function or _cubic(),
        width=200,
        height=100,
        renderer=renderer,
        clock=clock,
        time_source=now,
        **kwargs,
    )
    return view, clock, now, renderer


def test_construction_renders_hidden_curve_without_ticking() -> None:
    view, clock, _now, renderer = _make_view()
    assert renderer.frames
    layers = view.layers
    assert layers.stroke.stroke_end == 0.0
    assert not layers.stroke.path.is_empty
    assert layers.fill.path.is_empty
    assert clock.paused
    assert not view.is_animating


def test_draw_function_then_delayed_integral() -> None:
    view, clock, now, renderer = _make_view()
    f = _cubic()
    view.draw_function(f, animation_duration=1)
    view.draw_integral(Midpoint(3), animation_duration=1, delay=1)
    assert view.is_animating

    now.now += 0.5
    clock.fire()
    assert view.layers.stroke.stroke_end == pytest.approx(0.5)
    assert view.layers.mask.rect.width == 0.0

    now.now += 1.0
    clock.fire()
    assert view.layers.stroke.stroke_end == 1.0
    assert view.integral_progress == pytest.approx(0.5)
    assert len(view.layers.fill.knobs) == 3

    now.now += 0.5
    clock.fire()
    assert view.curve_progress == 1.0
    assert view.integral_progress == 1.0
    assert not view.is_animating
    frames = len(renderer.frames)
    clock.fire()
    assert len(renderer.frames) == frames


def test_mask_spans_visible_curve_with_padding() -> None:
    view, clock, now, _renderer = _make_view()
    view.draw_integral(Analytical(), animation_duration=0)
    rect = view.layers.mask.rect
    padding = view.style.mask_padding
    assert rect.x == pytest.approx(view.curve.first_x - padding)
    assert rect.width == pytest.approx(view.curve.last_x - view.curve.first_x + 2 * padding)
    assert rect.top < 0 and rect.bottom > view.height


def test_range_mismatch_is_fatal_and_leaves_view_untouched() -> None:
    view, _clock, _now, _renderer = _make_view()
    before = view.function
    other = Function(Symmetric(2), FromZero(2), lambda x: x)
    with pytest.raises(RangeMismatchError):
        view.draw_function(other)
    assert view.function is before
    assert view.curve_progress == 0.0


def test_clearing_the_integral_is_immediate() -> None:
    view, clock, now, _renderer = _make_view()
    view.draw_integral(Trapezoidal(2), animation_duration=1)
    assert view.layers.fill.knobs
    view.draw_integral(None, animation_duration=5, delay=5)
    assert view.layers.fill.path.is_empty
    assert view.layers.fill.knobs == ()
    assert view.integral_progress == 1.0
    assert not view.is_animating


def test_latest_request_wins() -> None:
    view, clock, now, _renderer = _make_view()
    view.draw_integral(Midpoint(2), animation_duration=1)
    now.now += 0.9
    view.draw_integral(Midpoint(5), animation_duration=1)
    assert view.integral == Midpoint(5)
    assert view.integral_progress == 0.0
    assert len(view.shape.knobs) == 5


def test_fully_clipped_function_produces_empty_geometry() -> None:
    view, _clock, _now, _renderer = _make_view()
    view.draw_function(Function(Symmetric(2), Symmetric(2), lambda x: 3.0))
    view.draw_integral(Midpoint(3))
    assert view.curve.is_empty
    assert view.shape.is_empty
    assert view.layers.mask.rect is None


def test_resize_rebuilds_geometry() -> None:
    view, _clock, _now, _renderer = _make_view()
    view.resize(400, 200, scale=2.0)
    assert len(view.curve) > 0
    assert view.curve.last_x <= 400
    assert view.baseline_y == pytest.approx(100.0)


def test_invalid_arguments() -> None:
    view, _clock, _now, _renderer = _make_view()
    with pytest.raises(ValueError):
        view.draw_function(_cubic(), animation_duration=-1)
    with pytest.raises(ValueError):
        view.draw_integral(Midpoint(2), delay=-1)
    with pytest.raises(TypeError):
        view.draw_integral("midpoint")
    with pytest.raises(ValueError):
        Midpoint(0)
    with pytest.raises(TypeError):
        Midpoint(2.5)


def test_partly_undefined_function_draws_with_gaps() -> None:
    view, _clock, _now, _renderer = _make_view(function=Function(Symmetric(2), Symmetric(2), math.sqrt))
    view.draw_function(Function(Symmetric(2), Symmetric(2), math.log), animation_duration=1)
    assert not view.curve.is_empty
    assert view.curve.first_x > view.width / 2
    assert view.scheduler.plan(CURVE) is not None


def test_failing_function_restores_previous_state() -> None:
    view, _clock, _now, _renderer = _make_view()
    before_function = view.function
    before_curve = view.curve

    def _broken(x):
        raise RuntimeError("cannot evaluate")

    with pytest.raises(RuntimeError):
        view.draw_function(Function(Symmetric(2), Symmetric(2), _broken))
    assert view.function is before_function
    np.testing.assert_allclose(view.curve.points, before_curve.points)
    assert view.scheduler.plan(CURVE) is None


def test_clearing_the_integral_ignores_timing_arguments() -> None:
    view, _clock, _now, _renderer = _make_view()
    view.draw_integral(Midpoint(2))
    view.draw_integral(None, animation_duration=-1, delay=-1)
    assert view.integral is None
    assert view.integral_progress == 1.0
