"""Orchestrator that samples, builds and animates one function diagram.

Purpose
-------
``FunctionView`` is the single owner of the current
:class:`~integration_viz.function_model.Function`, the current integral method,
and both reveal plans. Callers interact with it only through
:meth:`FunctionView.draw_function` and :meth:`FunctionView.draw_integral`;
each call replaces the previous request for its element, re-samples the
curve, rebuilds the integral shape, and (re)starts the reveal animation.

Architecture notes
------------------
- Geometry lives in immutable layers (:mod:`integration_viz.layers`) that
  are rebuilt on every draw and re-composed with the current progress on
  every animation tick, then handed to the optional renderer.
- Ticks come from a frame clock owned by the
  :class:`~integration_viz.animation.AnimationScheduler`; the clock is paused
  while nothing is animating.
- The domain and value ranges are fixed by the constructor's function.
  Drawing a function with other ranges raises :class:`RangeMismatchError`,
  a contract violation that callers are not expected to recover from.

Examples
--------
>>> from integration_viz import FunctionView, Function, Midpoint, Symmetric
>>> f = Function(Symmetric(2), Symmetric(2), lambda x: x**3 / 4)
>>> view = FunctionView(f, width=400, height=300)  # doctest: +SKIP
>>> view.draw_function(f, animation_duration=1)  # doctest: +SKIP
>>> view.draw_integral(Midpoint(3), animation_duration=1, delay=1)  # doctest: +SKIP
"""

from __future__ import annotations

import logging
import time
from typing import Callable, Optional

from .animation import CURVE, INTEGRAL, AnimationScheduler, FrameClock, RenderPlan, TimerFrameClock
from .function_model import Function
from .geometry import Rect
from .integral import Integral, IntegralLike
from .integral_shapes import IntegralShape, build_integral_shape
from .layers import FillLayer, LayerRenderer, LayerStack, MaskLayer, StrokeLayer
from .sampling import SampledCurve, sample_curve
from .style import FunctionViewStyle

__all__ = ["FunctionView", "RangeMismatchError"]

# Module logger
# - Uses a NullHandler so importing this module never configures global logging.
# - Callers can enable logs via standard logging configuration.
logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())


class RangeMismatchError(RuntimeError):
    """A function with different domain or value range was drawn on a fixed surface."""


def _check_timing(animation_duration: float, delay: float) -> None:
    if animation_duration < 0:
        raise ValueError(f"animation_duration must be >= 0, got {animation_duration}")
    if delay < 0:
        raise ValueError(f"delay must be >= 0, got {delay}")


class FunctionView:
    """Animated diagram of one function and an optional integral.

    Parameters
    ----------
    function : Function
        Initial function; its ranges stay fixed for the view's lifetime.
    width, height : float
        Logical size of the drawing surface.
    scale : float, default=1.0
        Device pixels per logical unit; one sample is taken per device pixel.
    renderer : LayerRenderer, optional
        Receives the composed layers after every rebuild and tick.
    clock : FrameClock, optional
        Tick source; defaults to a :class:`TimerFrameClock` at the style's
        frame interval.
    time_source : callable, default=time.monotonic
        Seconds used for render plans.
    style : FunctionViewStyle, optional
        Colors, line widths and mask geometry.
    """

    def __init__(
        self,
        function: Function,
        *,
        width: float = 600.0,
        height: float = 400.0,
        scale: float = 1.0,
        renderer: Optional[LayerRenderer] = None,
        clock: Optional[FrameClock] = None,
        time_source: Callable[[], float] = time.monotonic,
        style: Optional[FunctionViewStyle] = None,
    ) -> None:
        self._function = function
        self._integral: IntegralLike = None
        self._style = style or FunctionViewStyle()
        self._renderer = renderer
        self._width = 0.0
        self._height = 0.0
        self._scale = 1.0
        self._curve = SampledCurve()
        self._shape = IntegralShape.empty()
        self._base_layers: Optional[LayerStack] = None
        self._layers: Optional[LayerStack] = None
        self._scheduler = AnimationScheduler(
            self._apply_progress,
            clock=clock or TimerFrameClock(self._style.frame_interval_s),
            time_source=time_source,
        )
        self.resize(width, height, scale)

    # ------------------------------------------------------------------
    # Read-only state
    # ------------------------------------------------------------------
    @property
    def function(self) -> Function:
        return self._function

    @property
    def integral(self) -> IntegralLike:
        return self._integral

    @property
    def style(self) -> FunctionViewStyle:
        return self._style

    @property
    def width(self) -> float:
        return self._width

    @property
    def height(self) -> float:
        return self._height

    @property
    def scale(self) -> float:
        return self._scale

    @property
    def curve(self) -> SampledCurve:
        return self._curve

    @property
    def shape(self) -> IntegralShape:
        return self._shape

    @property
    def layers(self) -> Optional[LayerStack]:
        """Layers as of the most recent tick."""
        return self._layers

    @property
    def scheduler(self) -> AnimationScheduler:
        return self._scheduler

    @property
    def curve_progress(self) -> float:
        return self._scheduler.progress(CURVE)

    @property
    def integral_progress(self) -> float:
        return self._scheduler.progress(INTEGRAL)

    @property
    def is_animating(self) -> bool:
        return self._scheduler.is_running

    @property
    def baseline_y(self) -> float:
        """Screen y of the value ``0``."""
        return self._height * (1 - self._function.percentage_at_zero)

    # ------------------------------------------------------------------
    # Draw requests
    # ------------------------------------------------------------------
    def draw_function(self, function: Function, animation_duration: float = 1.0, delay: float = 0.0) -> None:
        """Replace the function and reveal its curve over ``animation_duration`` seconds.

        Raises
        ------
        RangeMismatchError
            If ``function`` has a different domain or value range than the
            function the view was created with. The view is left untouched.

        Errors raised by ``function`` while sampling propagate after the
        previous function and its geometry are restored.
        """
        if not function.has_same_ranges(self._function):
            raise RangeMismatchError(
                "Changing the definition range and/or the value range of a FunctionView is illegal: "
                f"view has {self._function.definition_range!r}/{self._function.value_range!r}, "
                f"got {function.definition_range!r}/{function.value_range!r}"
            )
        _check_timing(animation_duration, delay)
        logger.debug("draw_function(%s, duration=%s, delay=%s)", function.label or "<callable>", animation_duration, delay)
        previous = self._function
        self._function = function
        try:
            self._rebuild()
        except Exception:
            self._function = previous
            self._rebuild()
            raise
        self._scheduler.schedule(CURVE, animation_duration, delay)

    def draw_integral(self, integral: IntegralLike, animation_duration: float = 1.0, delay: float = 0.0) -> None:
        """Replace the integral and reveal it left to right.

        ``None`` clears the integral immediately; timing arguments are ignored.
        """
        if integral is not None and not isinstance(integral, Integral):
            raise TypeError(f"integral must be an Integral or None, got {type(integral).__name__}")
        if integral is not None:
            _check_timing(animation_duration, delay)
        logger.debug("draw_integral(%r, duration=%s, delay=%s)", integral, animation_duration, delay)
        self._integral = integral
        self._rebuild()
        if integral is None:
            now = self._scheduler.now()
            self._scheduler.set_plan(INTEGRAL, RenderPlan(start=now, end=now))
        else:
            self._scheduler.schedule(INTEGRAL, animation_duration, delay)

    def resize(self, width: float, height: float, scale: Optional[float] = None) -> None:
        """Change the surface size and rebuild geometry without restarting animations."""
        self._width = float(width)
        self._height = float(height)
        if scale is not None:
            if scale <= 0:
                raise ValueError(f"scale must be > 0, got {scale}")
            self._scale = float(scale)
        self._rebuild()
        self._scheduler.tick()

    def refresh(self) -> None:
        """Recompose layers at the current time (one manual tick)."""
        self._scheduler.tick()

    # ------------------------------------------------------------------
    # Geometry and progress
    # ------------------------------------------------------------------
    def mask_rect(self, progress: float) -> Optional[Rect]:
        """Integral reveal window for ``progress``; ``None`` when no point is visible."""
        first_x, last_x = self._curve.first_x, self._curve.last_x
        if first_x is None or last_x is None:
            return None
        padding = self._style.mask_padding
        overshoot = self._style.mask_overshoot
        return Rect(
            x=first_x - padding,
            y=-overshoot,
            width=(last_x - first_x + 2 * padding) * progress,
            height=self._height + 2 * overshoot,
        )

    def _rebuild(self) -> None:
        style = self._style
        self._curve = sample_curve(self._function, self._width, self._height, self._scale)
        self._shape = build_integral_shape(
            self._integral,
            self._curve.points,
            self.baseline_y,
            style.knob_diameter(self._width),
        )
        line_width = style.line_width(self._width)
        self._base_layers = LayerStack(
            fill=FillLayer(
                path=self._shape.path,
                knobs=self._shape.knobs,
                stroke_color=style.integral_color,
                fill_color=style.fill_color,
                line_width=line_width / 2,
            ),
            stroke=StrokeLayer(
                path=self._curve.to_path(),
                color=style.curve_color,
                line_width=line_width,
            ),
            mask=MaskLayer(rect=None),
        )
        logger.debug(
            "rebuilt geometry: %d samples, %d knobs, integral=%r",
            len(self._curve),
            len(self._shape.knobs),
            self._integral,
        )

    def _apply_progress(self, curve_progress: float, integral_progress: float) -> None:
        if self._base_layers is None:
            return
        self._layers = self._base_layers.with_progress(
            curve_progress, MaskLayer(rect=self.mask_rect(integral_progress))
        )
        if self._renderer is not None:
            self._renderer.render(self._layers)
