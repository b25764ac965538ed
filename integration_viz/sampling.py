"""Rasterize a :class:`~integration_viz.function_model.Function` into screen points.

One sample is taken per device pixel column (``pixels = int(width * scale)``,
columns ``0..pixels`` inclusive). Absent samples are dropped, not kept as
gaps, so the result may be shorter than ``pixels + 1``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

import numpy as np

from .function_model import Function
from .geometry import Path

__all__ = ["SampledCurve", "sample_curve", "pixel_count"]


def pixel_count(width: float, scale: float = 1.0) -> int:
    return int(width * scale)


@dataclass(frozen=True, eq=False)
class SampledCurve:
    """Ordered screen points of one sampled function.

    Parameters
    ----------
    points : numpy.ndarray
        ``(k, 2)`` array of ``(x, y)`` screen coordinates, sorted by x.
    width, height : float
        Logical size of the drawing surface the points were sampled for.
    """

    points: np.ndarray = field(default_factory=lambda: np.empty((0, 2)))
    width: float = 0.0
    height: float = 0.0

    def __len__(self) -> int:
        return len(self.points)

    @property
    def is_empty(self) -> bool:
        return len(self.points) == 0

    @property
    def first_x(self) -> Optional[float]:
        return None if self.is_empty else float(self.points[0, 0])

    @property
    def last_x(self) -> Optional[float]:
        return None if self.is_empty else float(self.points[-1, 0])

    def to_path(self) -> Path:
        """Polyline through all points (empty path when there are none)."""
        path = Path()
        if self.is_empty:
            return path
        x0, y0 = self.points[0]
        path.move_to(x0, y0)
        for x, y in self.points[1:]:
            path.line_to(x, y)
        return path


def sample_curve(function: Function, width: float, height: float, scale: float = 1.0) -> SampledCurve:
    """Sample ``function`` at pixel resolution.

    Screen y is inverted relative to the value range: the range maximum maps
    to ``y = 0`` and the minimum to ``y = height``.
    """
    pixels = pixel_count(width, scale)
    if pixels <= 0 or height <= 0 or scale <= 0:
        return SampledCurve(width=width, height=height)

    pixel = np.arange(pixels + 1, dtype=float)
    percentages = function.sample_percentages(pixel / pixels)
    keep = ~np.isnan(percentages)
    points = np.column_stack([pixel[keep] / scale, height * (1.0 - percentages[keep])])
    return SampledCurve(points=points, width=width, height=height)
