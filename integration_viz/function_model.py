"""Function model: a pure evaluation mapping bound to a domain and value range.

Purpose
-------
``Function`` is the value object handed to :class:`~integration_viz.FunctionView`.
It couples a callable with its :class:`~integration_viz.function_range.FunctionRange`
domain and value range, and converts between domain positions and normalized
percentages of the value range.

Important gotchas
-----------------
- Samples whose value lies outside the value range are *absent*
  (``None`` from :meth:`Function.sample_at`, NaN from
  :meth:`Function.sample_percentages`). This is the only mechanism for
  clipping; it never raises.
- A curve is expected to leave the value range only at the left or right edge
  of the domain. This is not checked; violating it produces a polygon that
  bridges the gap.
- ``evaluate`` is called with scalars unless ``vectorized=True``.

Examples
--------
>>> from integration_viz import Function, Symmetric
>>> f = Function(Symmetric(2), Symmetric(2), lambda x: x / 2)
>>> f.sample_at(1.0)
0.75
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Callable, Optional

import numpy as np
import sympy as sp
from sympy.core.symbol import Symbol

from .function_range import FunctionRange

__all__ = ["Function"]


@dataclass(frozen=True)
class Function:
    """A real function plotted over a fixed domain and value range.

    Parameters
    ----------
    definition_range : FunctionRange
        Domain over which ``evaluate`` is sampled.
    value_range : FunctionRange
        Visible value window; values outside are clipped.
    evaluate : callable
        Mapping ``x -> y``.
    vectorized : bool, default=False
        Set when ``evaluate`` accepts and returns numpy arrays.
    label : str, optional
        Human-readable label used by the explorer readout.
    """

    definition_range: FunctionRange
    value_range: FunctionRange
    evaluate: Callable[[Any], Any]
    vectorized: bool = False
    label: str = ""

    @classmethod
    def from_expression(
        cls,
        expr: Any,
        var: Symbol,
        definition_range: FunctionRange,
        value_range: FunctionRange,
        *,
        label: Optional[str] = None,
    ) -> "Function":
        """Build a vectorized function from a SymPy expression in ``var``.

        Raises
        ------
        ValueError
            If ``expr`` has free symbols other than ``var``.
        """
        symbolic = sp.sympify(expr)
        extra = symbolic.free_symbols - {var}
        if extra:
            names = ", ".join(sorted(str(s) for s in extra))
            raise ValueError(f"Expression depends on symbols other than {var}: {names}")
        compiled = sp.lambdify(var, symbolic, modules="numpy")
        return cls(
            definition_range=definition_range,
            value_range=value_range,
            evaluate=compiled,
            vectorized=True,
            label=str(symbolic) if label is None else label,
        )

    @property
    def percentage_at_zero(self) -> float:
        """Normalized position of the value ``0``, i.e. the integral baseline."""
        return self.value_to_percentage(0.0)

    def value_to_percentage(self, y):
        return self.value_range.to_percentage(y)

    def x_at(self, x_percentage):
        """Domain position for a normalized domain percentage."""
        return self.definition_range.from_percentage(x_percentage)

    def domain_percentage_to_y(self, x_percentage: float) -> float:
        """Normalized value at ``x_percentage`` of the domain, without clipping."""
        return self.value_to_percentage(self._evaluate_scalar(self.x_at(x_percentage)))

    def sample_at(self, x_percentage: float) -> Optional[float]:
        """Normalized value at ``x_percentage``, or ``None`` when out of range."""
        y = self._evaluate_scalar(self.x_at(x_percentage))
        if not self.value_range.contains(y):
            return None
        return self.value_to_percentage(y)

    def evaluate_many(self, xs: np.ndarray) -> np.ndarray:
        """Evaluate at every position of ``xs``; failures become NaN."""
        xs = np.asarray(xs, dtype=float)
        if self.vectorized:
            with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
                ys = np.asarray(self.evaluate(xs), dtype=float)
            if ys.ndim == 0:
                ys = np.full_like(xs, float(ys))
            return ys
        return np.fromiter(
            (self._evaluate_scalar(float(x)) for x in xs.ravel()),
            dtype=float,
            count=xs.size,
        ).reshape(xs.shape)

    def sample_percentages(self, x_percentages: np.ndarray) -> np.ndarray:
        """Vectorized :meth:`sample_at`; absent samples are NaN."""
        ys = self.evaluate_many(self.x_at(np.asarray(x_percentages, dtype=float)))
        vr = self.value_range
        # NaN compares False on both sides, so it is dropped as well.
        inside = (ys >= vr.min) & (ys <= vr.max)
        return np.where(inside, (ys - vr.min) / vr.span, np.nan)

    def has_same_ranges(self, other: "Function") -> bool:
        return (
            self.definition_range == other.definition_range
            and self.value_range == other.value_range
        )

    def _evaluate_scalar(self, x: float) -> float:
        try:
            y = float(self.evaluate(x))
        except (ZeroDivisionError, OverflowError, ValueError):
            return math.nan
        return y
