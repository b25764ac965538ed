"""Coordinate axes, tick marks and grid lines for a function diagram.

The grid frame is larger than the diagram: the diagram occupies
``size_factor`` of the frame in each direction, and the remaining margin is
split ``left_margin_share`` to the left / bottom and the rest to the right /
top. Axes cross at the value ``0`` for symmetric ranges and at the lower-left
corner otherwise. Each axis carries ``TICK_COUNT`` evenly spaced ticks over
the diagram; the tick where the other axis crosses is omitted.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from .function_range import FunctionRange

__all__ = ["Tick", "Segment", "CoordinateGrid", "TICK_COUNT"]

TICK_COUNT = 5
RELATIVE_MARK_LENGTH = 0.02

Segment = Tuple[Tuple[float, float], Tuple[float, float]]


@dataclass(frozen=True)
class Tick:
    """One axis tick: screen position along its axis and the value it labels."""

    position: float
    value: float


@dataclass(frozen=True)
class CoordinateGrid:
    """Frame-space geometry of the coordinate system behind a diagram.

    All coordinates are in the frame's screen space (x right, y down). The
    diagram's top-left corner sits at ``diagram_origin``.
    """

    frame_width: float
    frame_height: float
    diagram_origin: Tuple[float, float]
    diagram_width: float
    diagram_height: float
    x_axis_y: float
    y_axis_x: float
    x_ticks: Tuple[Tick, ...]
    y_ticks: Tuple[Tick, ...]

    @classmethod
    def for_diagram(
        cls,
        definition_range: FunctionRange,
        value_range: FunctionRange,
        diagram_width: float,
        diagram_height: float,
        *,
        size_factor: float = 0.85,
        left_margin_share: float = 1 / 3,
    ) -> "CoordinateGrid":
        if not 0 < size_factor <= 1:
            raise ValueError("size_factor must be within (0, 1]")
        frame_width = diagram_width / size_factor
        frame_height = diagram_height / size_factor
        margin = 1 - size_factor

        x_min = margin * left_margin_share * frame_width
        x_max = x_min + diagram_width
        y_min = margin * (1 - left_margin_share) * frame_height
        y_max = y_min + diagram_height

        last = TICK_COUNT - 1
        x_axis_y = (y_min + y_max) / 2 if value_range.is_symmetric else y_max
        y_axis_x = (x_min + x_max) / 2 if definition_range.is_symmetric else x_min
        hidden_x_index = last // 2 if definition_range.is_symmetric else 0
        hidden_y_index = last // 2 if value_range.is_symmetric else last

        x_ticks = tuple(
            Tick(
                position=x_min + i * diagram_width / last,
                value=definition_range.from_percentage(i / last),
            )
            for i in range(TICK_COUNT)
            if i != hidden_x_index
        )
        y_ticks = tuple(
            Tick(
                position=y_min + i * diagram_height / last,
                value=value_range.from_percentage(1 - i / last),
            )
            for i in range(TICK_COUNT)
            if i != hidden_y_index
        )

        return cls(
            frame_width=frame_width,
            frame_height=frame_height,
            diagram_origin=(x_min, y_min),
            diagram_width=diagram_width,
            diagram_height=diagram_height,
            x_axis_y=x_axis_y,
            y_axis_x=y_axis_x,
            x_ticks=x_ticks,
            y_ticks=y_ticks,
        )

    @property
    def mark_length(self) -> float:
        return RELATIVE_MARK_LENGTH * self.frame_width

    @property
    def axes(self) -> Tuple[Segment, Segment]:
        """x axis then y axis, each spanning the whole frame."""
        return (
            ((0.0, self.x_axis_y), (self.frame_width, self.x_axis_y)),
            ((self.y_axis_x, 0.0), (self.y_axis_x, self.frame_height)),
        )

    def grid_lines(self) -> Tuple[Segment, ...]:
        """Vertical lines at x ticks and horizontal lines at y ticks, within the diagram."""
        x0, y0 = self.diagram_origin
        x1, y1 = x0 + self.diagram_width, y0 + self.diagram_height
        vertical = tuple(((t.position, y0), (t.position, y1)) for t in self.x_ticks)
        horizontal = tuple(((x0, t.position), (x1, t.position)) for t in self.y_ticks)
        return vertical + horizontal

    def tick_marks(self) -> Tuple[Segment, ...]:
        half = self.mark_length / 2
        x_marks = tuple(
            ((t.position, self.x_axis_y - half), (t.position, self.x_axis_y + half)) for t in self.x_ticks
        )
        y_marks = tuple(
            ((self.y_axis_x - half, t.position), (self.y_axis_x + half, t.position)) for t in self.y_ticks
        )
        return x_marks + y_marks

    def to_frame(self, x: float, y: float) -> Tuple[float, float]:
        """Translate a diagram-space point into frame space."""
        return (x + self.diagram_origin[0], y + self.diagram_origin[1])
