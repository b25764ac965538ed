"""Screen-space geometry primitives.

``Path`` records move/line/quadratic-curve commands the way a vector drawing
API would, and offers the few operations the renderers need: SVG export,
flattening into polylines, arc-length truncation (stroke reveal), and clipping
against a vertical band (integral reveal mask).

Screen coordinates grow rightwards in x and downwards in y.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple

import numpy as np

__all__ = [
    "Point",
    "Rect",
    "Knob",
    "Path",
    "quad_bezier",
    "polyline_length",
    "truncate_polyline",
    "clip_polygon_to_band",
]

Point = Tuple[float, float]


@dataclass(frozen=True)
class Rect:
    """Axis-aligned rectangle with origin at its top-left corner."""

    x: float
    y: float
    width: float
    height: float

    @property
    def left(self) -> float:
        return min(self.x, self.x + self.width)

    @property
    def right(self) -> float:
        return max(self.x, self.x + self.width)

    @property
    def top(self) -> float:
        return min(self.y, self.y + self.height)

    @property
    def bottom(self) -> float:
        return max(self.y, self.y + self.height)

    def contains(self, x: float, y: float) -> bool:
        return self.left <= x <= self.right and self.top <= y <= self.bottom


@dataclass(frozen=True)
class Knob:
    """Circular marker centred at ``(x, y)``."""

    x: float
    y: float
    diameter: float

    @property
    def bounds(self) -> Rect:
        r = self.diameter / 2
        return Rect(self.x - r, self.y - r, self.diameter, self.diameter)


def quad_bezier(start: Point, control: Point, end: Point, t: np.ndarray) -> np.ndarray:
    """Evaluate a quadratic Bézier at parameters ``t``; returns an ``(n, 2)`` array."""
    t = np.asarray(t, dtype=float)[:, None]
    p0, p1, p2 = (np.asarray(p, dtype=float) for p in (start, control, end))
    return (1 - t) ** 2 * p0 + 2 * (1 - t) * t * p1 + t**2 * p2


class Path:
    """Mutable 2D path of move, line, quadratic-curve and close commands.

    Commands are stored as tuples: ``("M", x, y)``, ``("L", x, y)``,
    ``("Q", cx, cy, x, y)`` and ``("Z",)``.
    """

    def __init__(self) -> None:
        self._commands: List[tuple] = []
        self._current: Optional[Point] = None
        self._subpath_start: Optional[Point] = None

    def __repr__(self) -> str:
        return f"Path({len(self._commands)} commands)"

    @property
    def commands(self) -> Tuple[tuple, ...]:
        return tuple(self._commands)

    @property
    def is_empty(self) -> bool:
        return not self._commands

    @property
    def current_point(self) -> Optional[Point]:
        return self._current

    def move_to(self, x: float, y: float) -> "Path":
        self._commands.append(("M", float(x), float(y)))
        self._current = self._subpath_start = (float(x), float(y))
        return self

    def line_to(self, x: float, y: float) -> "Path":
        self._require_current()
        self._commands.append(("L", float(x), float(y)))
        self._current = (float(x), float(y))
        return self

    def quad_to(self, control: Point, end: Point) -> "Path":
        self._require_current()
        cx, cy = control
        x, y = end
        self._commands.append(("Q", float(cx), float(cy), float(x), float(y)))
        self._current = (float(x), float(y))
        return self

    def close(self) -> "Path":
        self._require_current()
        self._commands.append(("Z",))
        self._current = self._subpath_start
        return self

    def _require_current(self) -> None:
        if self._current is None:
            raise ValueError("Path has no current point; call move_to first")

    def to_svg(self) -> str:
        """Return the path as an SVG path string (usable in Plotly ``path`` shapes)."""
        parts = []
        for command in self._commands:
            op, *coords = command
            if op == "Q":
                parts.append(f"Q {coords[0]:g},{coords[1]:g} {coords[2]:g},{coords[3]:g}")
            elif op == "Z":
                parts.append("Z")
            else:
                parts.append(f"{op} {coords[0]:g},{coords[1]:g}")
        return " ".join(parts)

    def flatten(self, curve_steps: int = 24) -> List[np.ndarray]:
        """Approximate the path by polylines, one ``(n, 2)`` array per subpath.

        Quadratic segments are sampled at ``curve_steps`` evenly spaced
        parameters. Closed subpaths repeat their first point at the end.
        """
        polylines: List[np.ndarray] = []
        current: List[np.ndarray] = []

        def flush() -> None:
            if current:
                polylines.append(np.vstack(current))
            current.clear()

        t = np.linspace(0.0, 1.0, max(2, int(curve_steps)) + 1)[1:]
        cursor: Optional[Point] = None
        start: Optional[Point] = None
        for command in self._commands:
            op = command[0]
            if op == "M":
                flush()
                cursor = start = (command[1], command[2])
                current.append(np.array([cursor]))
            elif op == "L":
                cursor = (command[1], command[2])
                current.append(np.array([cursor]))
            elif op == "Q":
                end = (command[3], command[4])
                current.append(quad_bezier(cursor, (command[1], command[2]), end, t))
                cursor = end
            elif op == "Z":
                current.append(np.array([start]))
                cursor = start
        flush()
        return polylines

    def length(self, curve_steps: int = 24) -> float:
        return float(sum(polyline_length(p) for p in self.flatten(curve_steps)))

    def bounds(self) -> Optional[Rect]:
        """Bounding box of the command coordinates (control points included)."""
        xs: List[float] = []
        ys: List[float] = []
        for command in self._commands:
            coords = command[1:]
            xs.extend(coords[0::2])
            ys.extend(coords[1::2])
        if not xs:
            return None
        return Rect(min(xs), min(ys), max(xs) - min(xs), max(ys) - min(ys))


def polyline_length(points: np.ndarray) -> float:
    points = np.asarray(points, dtype=float)
    if len(points) < 2:
        return 0.0
    return float(np.sum(np.hypot(*np.diff(points, axis=0).T)))


def truncate_polyline(points: np.ndarray, fraction: float) -> np.ndarray:
    """Return the leading part of ``points`` covering ``fraction`` of its arc length.

    The cut point is interpolated inside the segment where the length runs out.
    """
    points = np.asarray(points, dtype=float)
    fraction = min(max(float(fraction), 0.0), 1.0)
    if len(points) < 2 or fraction >= 1.0:
        return points.copy() if fraction > 0 else points[:0].copy()
    if fraction <= 0.0:
        return points[:0].copy()

    cumulative = np.concatenate([[0.0], np.cumsum(np.hypot(*np.diff(points, axis=0).T))])
    target = fraction * cumulative[-1]
    if cumulative[-1] == 0.0:
        return points[:1].copy()
    index = int(np.searchsorted(cumulative, target, side="right"))
    index = min(index, len(points) - 1)
    segment = cumulative[index] - cumulative[index - 1]
    ratio = 0.0 if segment == 0 else (target - cumulative[index - 1]) / segment
    if ratio == 0.0:
        return points[:index].copy()
    cut = points[index - 1] + ratio * (points[index] - points[index - 1])
    return np.vstack([points[:index], cut])


def _clip_against(polygon: List[np.ndarray], bound: float, keep_greater: bool) -> List[np.ndarray]:
    def inside(p: np.ndarray) -> bool:
        return p[0] >= bound if keep_greater else p[0] <= bound

    def crossing(p: np.ndarray, q: np.ndarray) -> np.ndarray:
        ratio = (bound - p[0]) / (q[0] - p[0])
        return np.array([bound, p[1] + ratio * (q[1] - p[1])])

    output: List[np.ndarray] = []
    for i, current in enumerate(polygon):
        previous = polygon[i - 1]
        if inside(current):
            if not inside(previous):
                output.append(crossing(previous, current))
            output.append(current)
        elif inside(previous):
            output.append(crossing(previous, current))
    return output


def clip_polygon_to_band(polygon: np.ndarray, left: float, right: float) -> np.ndarray:
    """Clip a closed polygon to the vertical band ``left <= x <= right``.

    Sutherland–Hodgman against the two band edges. The result is closed
    (first point repeated) unless it is empty.
    """
    polygon = np.asarray(polygon, dtype=float)
    if len(polygon) == 0 or right <= left:
        return np.empty((0, 2))
    vertices = [p for p in polygon]
    if len(vertices) > 1 and np.array_equal(vertices[0], vertices[-1]):
        vertices = vertices[:-1]
    vertices = _clip_against(vertices, left, keep_greater=True)
    if vertices:
        vertices = _clip_against(vertices, right, keep_greater=False)
    if not vertices:
        return np.empty((0, 2))
    return np.vstack(vertices + [vertices[0]])
