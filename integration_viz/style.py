"""Visual and timing configuration for :class:`~integration_viz.FunctionView`."""

from __future__ import annotations

from dataclasses import dataclass

__all__ = ["FunctionViewStyle"]


@dataclass(frozen=True)
class FunctionViewStyle:
    """Frozen bundle of presentation constants.

    Parameters
    ----------
    curve_color : str
        Stroke color of the function curve.
    integral_color : str
        Stroke color of the integral outline and knobs, as ``#RRGGBB``.
    fill_opacity : float
        Opacity of the integral fill (``0.0`` – ``1.0``).
    relative_line_width : float
        Curve line width as a fraction of the surface width, clamped to
        ``[min_line_width, max_line_width]``.
    knob_factor : float
        Knob diameter in curve line widths.
    mask_padding : float
        Horizontal padding of the integral reveal mask beyond the curve edges.
    mask_overshoot : float
        Vertical overshoot of the reveal mask above and below the surface.
    frame_interval_s : float
        Tick cadence of timer-based frame clocks.
    curve_steps : int
        Samples per quadratic segment when flattening paths for display.
    grid_color, axis_color : str
        Coordinate grid colors.
    """

    curve_color: str = "#FF3B30"
    integral_color: str = "#5856D6"
    fill_opacity: float = 0.3
    relative_line_width: float = 0.006
    min_line_width: float = 1.5
    max_line_width: float = 3.5
    knob_factor: float = 4.0
    mask_padding: float = 10.0
    mask_overshoot: float = 1000.0
    frame_interval_s: float = 1 / 60
    curve_steps: int = 24
    axis_color: str = "#443A41"
    grid_color: str = "rgba(68, 58, 65, 0.3)"

    def __post_init__(self) -> None:
        if not 0.0 <= self.fill_opacity <= 1.0:
            raise ValueError("fill_opacity must be within [0, 1]")
        if self.frame_interval_s <= 0:
            raise ValueError("frame_interval_s must be > 0")

    def line_width(self, width: float) -> float:
        return min(self.max_line_width, max(self.min_line_width, self.relative_line_width * width))

    def knob_diameter(self, width: float) -> float:
        return self.line_width(width) * self.knob_factor

    @property
    def fill_color(self) -> str:
        """``integral_color`` at ``fill_opacity`` as an ``rgba(...)`` string."""
        hex_value = self.integral_color.lstrip("#")
        r, g, b = (int(hex_value[i : i + 2], 16) for i in (0, 2, 4))
        return f"rgba({r}, {g}, {b}, {self.fill_opacity:g})"
