"""Top-level public API for the ``integration_viz`` package.

This module re-exports the notebook-facing surface so users can import from a
single namespace, for example:

>>> from integration_viz import Function, FunctionView, Midpoint, Symmetric  # doctest: +SKIP

It exposes both the orchestrating :class:`FunctionView` / :class:`IntegralExplorer`
and the pure building blocks (sampling, partitioning, shape building,
animation plans) for custom renderers.
"""

from .animation import AnimationScheduler, FrameClock, RenderPlan, TimerFrameClock
from .coordinate_grid import CoordinateGrid, Tick
from .explorer import IntegralExplorer
from .frame_driver import AnimationFrameDriver
from .function_model import Function
from .function_range import FromZero, FunctionRange, Symmetric
from .function_view import FunctionView, RangeMismatchError
from .geometry import Knob, Path, Rect
from .integral import Analytical, Integral, Midpoint, Simpson, Trapezoidal
from .integral_shapes import IntegralShape, build_integral_shape, simpson_control_point
from .layers import FillLayer, LayerRenderer, LayerStack, MaskLayer, StrokeLayer
from .numeric_operations import approximate_integral, exact_integral
from .partition import partition, partition_bounds, partition_sizes
from .plotly_renderer import PlotlyRenderer
from .sampling import SampledCurve, sample_curve
from .style import FunctionViewStyle

__all__ = [
    "AnimationFrameDriver",
    "AnimationScheduler",
    "Analytical",
    "CoordinateGrid",
    "FillLayer",
    "FrameClock",
    "FromZero",
    "Function",
    "FunctionRange",
    "FunctionView",
    "FunctionViewStyle",
    "Integral",
    "IntegralExplorer",
    "IntegralShape",
    "Knob",
    "LayerRenderer",
    "LayerStack",
    "MaskLayer",
    "Midpoint",
    "Path",
    "PlotlyRenderer",
    "RangeMismatchError",
    "Rect",
    "RenderPlan",
    "SampledCurve",
    "Simpson",
    "StrokeLayer",
    "Symmetric",
    "Tick",
    "TimerFrameClock",
    "Trapezoidal",
    "approximate_integral",
    "build_integral_shape",
    "exact_integral",
    "partition",
    "partition_bounds",
    "partition_sizes",
    "sample_curve",
    "simpson_control_point",
]
