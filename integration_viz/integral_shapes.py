"""Closed fill paths and knob markers for each integral method.

Every shape starts at the baseline below the first sampled point, walks along
the method-specific segment tops, and closes back along the baseline. The
baseline is the screen y of the value ``0``.

========== =================================== ===============================
Method     Segment top                         Knobs
========== =================================== ===============================
analytical the sampled curve                   none
midpoint   horizontal at the middle sample     middle sample
trapezoid  line from first to last sample      first and last sample
simpson    quadratic Bézier through all three  first, middle (small), last
========== =================================== ===============================
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Dict, Sequence, Tuple, Type

import numpy as np

from .geometry import Knob, Path, Point
from .integral import Analytical, IntegralLike, Midpoint, PartitionedIntegral, Simpson, Trapezoidal
from .partition import partition

__all__ = ["IntegralShape", "build_integral_shape", "simpson_control_point", "SIMPSON_MID_KNOB_RATIO"]

logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())

# Middle Simpson knob is drawn at 2.5 line widths instead of 4.
SIMPSON_MID_KNOB_RATIO = 2.5 / 4


@dataclass(frozen=True)
class IntegralShape:
    """Fill path plus knob markers of one integral approximation."""

    path: Path
    knobs: Tuple[Knob, ...] = ()

    @classmethod
    def empty(cls) -> "IntegralShape":
        return cls(path=Path())

    @property
    def is_empty(self) -> bool:
        return self.path.is_empty and not self.knobs


def simpson_control_point(first: Point, mid: Point, last: Point) -> Point:
    """Control point of the quadratic Bézier from ``first`` to ``last`` through ``mid``.

    The curve passes through ``mid`` at ``t = 0.5``.

    >>> simpson_control_point((0, 0), (1, 2), (2, 0))
    (1.0, 4.0)
    """
    return (
        2 * float(mid[0]) - 0.5 * float(first[0]) - 0.5 * float(last[0]),
        2 * float(mid[1]) - 0.5 * float(first[1]) - 0.5 * float(last[1]),
    )


def _open_at_baseline(points: np.ndarray, baseline_y: float) -> Path:
    return Path().move_to(points[0, 0], baseline_y)


def _build_analytical(points: np.ndarray, baseline_y: float, integral, knob_diameter: float) -> IntegralShape:
    path = _open_at_baseline(points, baseline_y)
    for x, y in points:
        path.line_to(x, y)
    path.line_to(points[-1, 0], baseline_y)
    path.close()
    return IntegralShape(path=path)


def _build_midpoint(points: np.ndarray, baseline_y: float, integral, knob_diameter: float) -> IntegralShape:
    path = _open_at_baseline(points, baseline_y)
    knobs = []
    for segment in partition(points, integral.parts):
        x_start, x_end = segment[0, 0], segment[-1, 0]
        x_mid, y_mid = segment[len(segment) // 2]
        path.line_to(x_start, baseline_y)
        path.line_to(x_start, y_mid)
        path.line_to(x_end, y_mid)
        path.line_to(x_end, baseline_y)
        knobs.append(Knob(float(x_mid), float(y_mid), knob_diameter))
    path.close()
    return IntegralShape(path=path, knobs=tuple(knobs))


def _build_trapezoidal(points: np.ndarray, baseline_y: float, integral, knob_diameter: float) -> IntegralShape:
    path = _open_at_baseline(points, baseline_y)
    knobs = []
    for segment in partition(points, integral.parts):
        (x_start, y_start), (x_end, y_end) = segment[0], segment[-1]
        path.line_to(x_start, baseline_y)
        path.line_to(x_start, y_start)
        path.line_to(x_end, y_end)
        path.line_to(x_end, baseline_y)
        knobs.append(Knob(float(x_start), float(y_start), knob_diameter))
        knobs.append(Knob(float(x_end), float(y_end), knob_diameter))
    path.close()
    return IntegralShape(path=path, knobs=tuple(knobs))


def _build_simpson(points: np.ndarray, baseline_y: float, integral, knob_diameter: float) -> IntegralShape:
    path = _open_at_baseline(points, baseline_y)
    knobs = []
    for segment in partition(points, integral.parts):
        first, mid, last = segment[0], segment[len(segment) // 2], segment[-1]
        path.line_to(first[0], baseline_y)
        path.line_to(first[0], first[1])
        path.quad_to(simpson_control_point(first, mid, last), (last[0], last[1]))
        path.line_to(last[0], baseline_y)
        knobs.append(Knob(float(first[0]), float(first[1]), knob_diameter))
        knobs.append(Knob(float(mid[0]), float(mid[1]), knob_diameter * SIMPSON_MID_KNOB_RATIO))
        knobs.append(Knob(float(last[0]), float(last[1]), knob_diameter))
    path.close()
    return IntegralShape(path=path, knobs=tuple(knobs))


_BUILDERS: Dict[Type, Callable[..., IntegralShape]] = {
    Analytical: _build_analytical,
    Midpoint: _build_midpoint,
    Trapezoidal: _build_trapezoidal,
    Simpson: _build_simpson,
}


def build_integral_shape(
    integral: IntegralLike,
    points: Sequence[Point],
    baseline_y: float,
    knob_diameter: float = 6.0,
) -> IntegralShape:
    """Build the fill path and knobs for ``integral`` over sampled ``points``.

    Parameters
    ----------
    integral : Integral or None
        Method to draw; ``None`` yields an empty shape.
    points : sequence of (x, y)
        Sampled screen points, ordered left to right.
    baseline_y : float
        Screen y of the value ``0``.
    knob_diameter : float
        Diameter of the regular knob markers.
    """
    points = np.asarray(points, dtype=float).reshape(-1, 2)
    if integral is None or len(points) == 0:
        return IntegralShape.empty()

    builder = _BUILDERS.get(type(integral))
    if builder is None:
        raise TypeError(f"Unsupported integral type: {type(integral).__name__}")
    if isinstance(integral, PartitionedIntegral) and integral.parts > len(points):
        logger.debug("%d parts requested for %d samples", integral.parts, len(points))
    return builder(points, float(baseline_y), integral, float(knob_diameter))
