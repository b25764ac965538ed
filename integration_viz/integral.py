"""Integral methods shown beneath a function curve.

``None`` stands for "no integral". The partitioned methods split the sampled
curve into ``parts`` contiguous segments (see :mod:`integration_viz.partition`).
"""

from __future__ import annotations

import numbers
from dataclasses import dataclass
from typing import Optional, Union

__all__ = [
    "Integral",
    "Analytical",
    "PartitionedIntegral",
    "Midpoint",
    "Trapezoidal",
    "Simpson",
    "IntegralLike",
]


@dataclass(frozen=True)
class Integral:
    """Base class for integral methods."""

    name = "integral"


@dataclass(frozen=True)
class Analytical(Integral):
    """The exact area between the curve and the baseline."""

    name = "analytical"


@dataclass(frozen=True)
class PartitionedIntegral(Integral):
    """An approximation built from ``parts`` equal segments.

    Parameters
    ----------
    parts : int
        Number of segments, at least 1.
    """

    parts: int = 1

    def __post_init__(self) -> None:
        if isinstance(self.parts, bool) or not isinstance(self.parts, numbers.Integral):
            raise TypeError(f"parts must be an int, got {type(self.parts).__name__}")
        if self.parts < 1:
            raise ValueError(f"parts must be >= 1, got {self.parts}")


@dataclass(frozen=True)
class Midpoint(PartitionedIntegral):
    """Rectangles at the height of each segment's middle sample."""

    name = "midpoint"


@dataclass(frozen=True)
class Trapezoidal(PartitionedIntegral):
    """Straight lines between each segment's first and last sample."""

    name = "trapezoidal"


@dataclass(frozen=True)
class Simpson(PartitionedIntegral):
    """Parabolic arcs through each segment's first, middle and last sample."""

    name = "simpson"


IntegralLike = Optional[Union[Analytical, Midpoint, Trapezoidal, Simpson]]
