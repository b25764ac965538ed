from __future__ import annotations

import numpy as np
import pytest

from integration_viz.geometry import quad_bezier
from integration_viz.integral import Analytical, Midpoint, Simpson, Trapezoidal
from integration_viz.integral_shapes import (
    SIMPSON_MID_KNOB_RATIO,
    IntegralShape,
    build_integral_shape,
    simpson_control_point,
)

BASELINE = 100.0


def _line_points(count: int = 11) -> np.ndarray:
    xs = np.linspace(0.0, 100.0, count)
    return np.column_stack([xs, 90.0 - 0.5 * xs])


def test_simpson_control_point_example() -> None:
    assert simpson_control_point((0, 0), (1, 2), (2, 0)) == (1.0, 4.0)


def test_simpson_curve_passes_through_middle_sample() -> None:
    first, mid, last = (0.0, 5.0), (3.0, 1.0), (6.0, 4.0)
    control = simpson_control_point(first, mid, last)
    np.testing.assert_allclose(quad_bezier(first, control, last, np.array([0.5]))[0], mid)


def test_no_integral_is_empty() -> None:
    shape = build_integral_shape(None, _line_points(), BASELINE)
    assert shape.is_empty
    assert shape == IntegralShape(path=shape.path)


def test_empty_points_give_empty_shape() -> None:
    assert build_integral_shape(Midpoint(3), np.empty((0, 2)), BASELINE).is_empty


def test_analytical_follows_curve_between_baseline_anchors() -> None:
    points = _line_points()
    shape = build_integral_shape(Analytical(), points, BASELINE)
    commands = shape.path.commands
    assert commands[0] == ("M", 0.0, BASELINE)
    assert [c[1:] for c in commands[1:-2]] == [tuple(p) for p in points]
    assert commands[-2] == ("L", 100.0, BASELINE)
    assert commands[-1] == ("Z",)
    assert shape.knobs == ()


def test_midpoint_single_part_uses_middle_sample() -> None:
    points = _line_points(11)
    shape = build_integral_shape(Midpoint(1), points, BASELINE, knob_diameter=8)
    assert len(shape.knobs) == 1
    knob = shape.knobs[0]
    assert (knob.x, knob.y, knob.diameter) == (50.0, 65.0, 8.0)
    tops = [c for c in shape.path.commands if c[0] == "L" and c[2] == 65.0]
    assert [c[1] for c in tops] == [0.0, 100.0]


def test_midpoint_one_knob_per_partition() -> None:
    shape = build_integral_shape(Midpoint(3), _line_points(31), BASELINE)
    assert len(shape.knobs) == 3
    # rectangle per partition: 4 line commands each, plus move and close
    assert len(shape.path.commands) == 1 + 4 * 3 + 1


def test_trapezoidal_knobs_at_partition_edges() -> None:
    points = _line_points(11)
    shape = build_integral_shape(Trapezoidal(2), points, BASELINE)
    assert [(k.x, k.y) for k in shape.knobs] == [(0.0, 90.0), (50.0, 65.0), (50.0, 65.0), (100.0, 40.0)]


def test_simpson_has_three_knobs_with_smaller_middle() -> None:
    shape = build_integral_shape(Simpson(2), _line_points(21), BASELINE, knob_diameter=8)
    assert len(shape.knobs) == 6
    diameters = [k.diameter for k in shape.knobs]
    assert diameters == [8, 8 * SIMPSON_MID_KNOB_RATIO, 8] * 2
    quads = [c for c in shape.path.commands if c[0] == "Q"]
    assert len(quads) == 2
    # straight data: control point lies on the line itself
    cx, cy, x, y = quads[0][1:]
    assert cy == pytest.approx(90.0 - 0.5 * cx)


def test_shapes_close_at_baseline() -> None:
    for integral in (Analytical(), Midpoint(4), Trapezoidal(4), Simpson(4)):
        commands = build_integral_shape(integral, _line_points(41), BASELINE).path.commands
        assert commands[0][2] == BASELINE
        assert commands[-2][2] == BASELINE
        assert commands[-1] == ("Z",)


def test_unsupported_integral_type() -> None:
    with pytest.raises(TypeError):
        build_integral_shape(object(), _line_points(), BASELINE)
