"""Domain and value ranges for plotted functions.

A range is one of two variants:

- ``FromZero(extent)`` covers ``[0, extent]``,
- ``Symmetric(extent)`` covers ``[-extent, extent]``.

Ranges are immutable. Equality is variant-aware, so ``FromZero(2)`` and
``Symmetric(2)`` are different ranges even though they share ``max``.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

__all__ = ["FunctionRange", "FromZero", "Symmetric"]


@dataclass(frozen=True)
class FunctionRange:
    """Closed interval used as a function domain or value range.

    Parameters
    ----------
    extent : float
        Positive upper bound of the interval.

    Notes
    -----
    Use one of the concrete variants :class:`FromZero` or :class:`Symmetric`.
    """

    extent: float

    def __post_init__(self) -> None:
        if type(self) is FunctionRange:
            raise TypeError("FunctionRange is abstract; use FromZero or Symmetric")
        extent = float(self.extent)
        if not math.isfinite(extent) or extent <= 0:
            raise ValueError(f"Range extent must be a finite number > 0, got {self.extent!r}")

    @property
    def min(self) -> float:
        raise NotImplementedError

    @property
    def max(self) -> float:
        return float(self.extent)

    @property
    def span(self) -> float:
        return self.max - self.min

    @property
    def is_symmetric(self) -> bool:
        return self.min == -self.max

    def to_percentage(self, value):
        """Map ``value`` into ``[0, 1]`` (``min -> 0``, ``max -> 1``).

        Works on floats and numpy arrays alike.
        """
        return (value - self.min) / self.span

    def from_percentage(self, percentage):
        """Inverse of :meth:`to_percentage`."""
        return percentage * self.max + (1 - percentage) * self.min

    def contains(self, value: float) -> bool:
        return self.min <= value <= self.max


@dataclass(frozen=True)
class FromZero(FunctionRange):
    """Range ``[0, extent]``."""

    @property
    def min(self) -> float:
        return 0.0


@dataclass(frozen=True)
class Symmetric(FunctionRange):
    """Range ``[-extent, extent]``."""

    @property
    def min(self) -> float:
        return -float(self.extent)
