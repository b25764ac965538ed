from __future__ import annotations

import pytest

from integration_viz.coordinate_grid import TICK_COUNT, CoordinateGrid
from integration_viz.function_range import FromZero, Symmetric


def test_symmetric_ranges_center_the_axes() -> None:
    grid = CoordinateGrid.for_diagram(Symmetric(2), Symmetric(2), 340, 170)
    x0, y0 = grid.diagram_origin
    assert grid.frame_width == pytest.approx(400)
    assert grid.frame_height == pytest.approx(200)
    assert grid.y_axis_x == pytest.approx(x0 + 170)
    assert grid.x_axis_y == pytest.approx(y0 + 85)
    assert len(grid.x_ticks) == TICK_COUNT - 1
    assert len(grid.y_ticks) == TICK_COUNT - 1
    assert [t.value for t in grid.x_ticks] == [-2.0, -1.0, 1.0, 2.0]
    assert [t.value for t in grid.y_ticks] == [2.0, 1.0, -1.0, -2.0]


def test_from_zero_ranges_put_axes_at_lower_left() -> None:
    grid = CoordinateGrid.for_diagram(FromZero(4), FromZero(8), 170, 170)
    x0, y0 = grid.diagram_origin
    assert grid.y_axis_x == pytest.approx(x0)
    assert grid.x_axis_y == pytest.approx(y0 + 170)
    assert [t.value for t in grid.x_ticks] == [1.0, 2.0, 3.0, 4.0]
    assert [t.value for t in grid.y_ticks] == [8.0, 6.0, 4.0, 2.0]


def test_margins_split_by_left_share() -> None:
    grid = CoordinateGrid.for_diagram(Symmetric(1), Symmetric(1), 85, 85)
    x0, y0 = grid.diagram_origin
    # 15 units of margin: one third left/bottom, two thirds right/top
    assert x0 == pytest.approx(5)
    assert y0 == pytest.approx(10)
    assert grid.to_frame(0, 0) == (x0, y0)


def test_lines_and_marks() -> None:
    grid = CoordinateGrid.for_diagram(Symmetric(2), Symmetric(2), 340, 170)
    assert len(grid.grid_lines()) == 8
    assert len(grid.tick_marks()) == 8
    (x_axis, y_axis) = grid.axes
    assert x_axis[1][0] == pytest.approx(grid.frame_width)
    assert y_axis[1][1] == pytest.approx(grid.frame_height)
    ((_, top), (_, bottom)) = grid.tick_marks()[0]
    assert bottom - top == pytest.approx(grid.mark_length)


def test_invalid_size_factor() -> None:
    with pytest.raises(ValueError):
        CoordinateGrid.for_diagram(Symmetric(1), Symmetric(1), 10, 10, size_factor=0)
