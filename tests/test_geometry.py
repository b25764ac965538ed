from __future__ import annotations

import numpy as np
import pytest

from integration_viz.geometry import (
    Knob,
    Path,
    Rect,
    clip_polygon_to_band,
    polyline_length,
    quad_bezier,
    truncate_polyline,
)


def test_path_records_commands_and_svg() -> None:
    path = Path().move_to(0, 10).line_to(0, 0).quad_to((1, -2), (2, 0)).line_to(2, 10).close()
    assert [c[0] for c in path.commands] == ["M", "L", "Q", "L", "Z"]
    assert path.to_svg() == "M 0,10 L 0,0 Q 1,-2 2,0 L 2,10 Z"
    assert path.current_point == (0.0, 10.0)


def test_path_requires_move_first() -> None:
    with pytest.raises(ValueError, match="move_to"):
        Path().line_to(1, 1)


def test_flatten_closes_subpath_and_samples_curves() -> None:
    path = Path().move_to(0, 0).quad_to((1, 2), (2, 0)).close()
    (polyline,) = path.flatten(curve_steps=4)
    assert len(polyline) == 1 + 4 + 1
    np.testing.assert_allclose(polyline[0], polyline[-1])
    np.testing.assert_allclose(polyline[2], [1.0, 1.0])


def test_quad_bezier_endpoints() -> None:
    points = quad_bezier((0, 0), (1, 4), (2, 0), np.array([0.0, 0.5, 1.0]))
    np.testing.assert_allclose(points, [[0, 0], [1, 2], [2, 0]])


def test_truncate_polyline_follows_arc_length() -> None:
    polyline = np.array([[0.0, 0.0], [10.0, 0.0], [10.0, 10.0]])
    half = truncate_polyline(polyline, 0.5)
    np.testing.assert_allclose(half, [[0, 0], [10, 0]])
    quarter = truncate_polyline(polyline, 0.25)
    np.testing.assert_allclose(quarter[-1], [5.0, 0.0])
    assert polyline_length(quarter) == pytest.approx(5.0)
    assert len(truncate_polyline(polyline, 0.0)) == 0
    np.testing.assert_allclose(truncate_polyline(polyline, 1.0), polyline)


def test_clip_polygon_to_band() -> None:
    square = np.array([[0.0, 0.0], [10.0, 0.0], [10.0, 10.0], [0.0, 10.0], [0.0, 0.0]])
    clipped = clip_polygon_to_band(square, 2.0, 5.0)
    assert clipped[:, 0].min() == pytest.approx(2.0)
    assert clipped[:, 0].max() == pytest.approx(5.0)
    np.testing.assert_allclose(clipped[0], clipped[-1])
    assert len(clip_polygon_to_band(square, 20.0, 30.0)) == 0
    assert len(clip_polygon_to_band(square, 5.0, 5.0)) == 0


def test_rect_and_knob_bounds() -> None:
    rect = Rect(x=10, y=-5, width=-4, height=20)
    assert (rect.left, rect.right, rect.top, rect.bottom) == (6, 10, -5, 15)
    assert rect.contains(8, 0)
    assert Knob(5, 5, 4).bounds == Rect(3, 3, 4, 4)


def test_path_bounds_and_length() -> None:
    path = Path().move_to(0, 0).line_to(3, 0).line_to(3, 4)
    assert path.bounds() == Rect(0, 0, 3, 4)
    assert path.length() == pytest.approx(7.0)
    assert Path().bounds() is None
