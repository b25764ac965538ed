"""Numeric values of the integral approximations drawn by the view.

Each partitioned method splits the definition range into ``parts`` equal
sub-intervals and applies the matching composite rule; ``Analytical`` defers
to ``scipy.integrate.quad``. Values are computed on the unclipped function,
in the function's own units.
"""

from __future__ import annotations

import numpy as np

from .function_model import Function
from .integral import Analytical, IntegralLike, Midpoint, Simpson, Trapezoidal

__all__ = [
    "exact_integral",
    "midpoint_rule",
    "trapezoidal_rule",
    "simpson_rule",
    "approximate_integral",
]


def _edges(function: Function, parts: int) -> np.ndarray:
    if parts < 1:
        raise ValueError(f"parts must be >= 1, got {parts}")
    domain = function.definition_range
    return np.linspace(domain.min, domain.max, int(parts) + 1)


def exact_integral(function: Function) -> float:
    """Integral over the definition range by adaptive quadrature."""
    from scipy.integrate import quad

    def _integrand(t):
        return float(np.asarray(function.evaluate_many(np.array([t])))[0])

    domain = function.definition_range
    value, _error = quad(_integrand, domain.min, domain.max, limit=200)
    return value


def midpoint_rule(function: Function, parts: int) -> float:
    edges = _edges(function, parts)
    widths = np.diff(edges)
    mids = (edges[:-1] + edges[1:]) / 2
    return float(np.sum(widths * function.evaluate_many(mids)))


def trapezoidal_rule(function: Function, parts: int) -> float:
    edges = _edges(function, parts)
    values = function.evaluate_many(edges)
    return float(np.sum(np.diff(edges) * (values[:-1] + values[1:]) / 2))


def simpson_rule(function: Function, parts: int) -> float:
    """Composite Simpson rule with one parabola per sub-interval."""
    edges = _edges(function, parts)
    mids = (edges[:-1] + edges[1:]) / 2
    values = function.evaluate_many(edges)
    mid_values = function.evaluate_many(mids)
    return float(np.sum(np.diff(edges) / 6 * (values[:-1] + 4 * mid_values + values[1:])))


def approximate_integral(function: Function, integral: IntegralLike) -> float:
    """Value of ``function``'s integral as approximated by ``integral``.

    Raises
    ------
    ValueError
        If ``integral`` is ``None``.
    TypeError
        For unsupported integral types.
    """
    if integral is None:
        raise ValueError("No integral method given")
    if isinstance(integral, Analytical):
        return exact_integral(function)
    if isinstance(integral, Midpoint):
        return midpoint_rule(function, integral.parts)
    if isinstance(integral, Trapezoidal):
        return trapezoidal_rule(function, integral.parts)
    if isinstance(integral, Simpson):
        return simpson_rule(function, integral.parts)
    raise TypeError(f"Unsupported integral type: {type(integral).__name__}")
