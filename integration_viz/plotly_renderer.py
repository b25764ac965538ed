"""Composite :class:`~integration_viz.layers.LayerStack` frames into a Plotly figure.

Purpose
-------
``PlotlyRenderer`` owns one ``plotly.graph_objects.FigureWidget`` with three
traces in z-order (integral fill, function curve, knobs) and draws the
optional coordinate grid as layout shapes underneath them.

Rendering details
-----------------
- Paths are flattened to polylines; quadratic segments are sampled at
  ``style.curve_steps`` points.
- The curve is truncated to ``stroke_end`` of its arc length.
- The fill polygon is clipped to the mask's x band and knobs outside the
  band are hidden. The mask's vertical extent always overshoots the surface,
  so only x is clipped.
- The y axis is reversed so screen coordinates (y down) display upright.
- Flattened paths are cached per path object; ticks that only change
  progress do not re-flatten.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Sequence

import numpy as np
import plotly.graph_objects as go

from .coordinate_grid import CoordinateGrid
from .geometry import Path, clip_polygon_to_band, truncate_polyline
from .layers import LayerRenderer, LayerStack
from .style import FunctionViewStyle

__all__ = ["PlotlyRenderer"]

logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())

FILL_TRACE, CURVE_TRACE, KNOB_TRACE = 0, 1, 2


def _join_with_gaps(polylines: Sequence[np.ndarray], axis: int) -> List[Optional[float]]:
    """Concatenate one coordinate of several polylines, separated by ``None``."""
    values: List[Optional[float]] = []
    for polyline in polylines:
        if len(polyline) == 0:
            continue
        if values:
            values.append(None)
        values.extend(float(v) for v in polyline[:, axis])
    return values


class PlotlyRenderer(LayerRenderer):
    """Render function-view layers into a ``go.FigureWidget``.

    Parameters
    ----------
    width, height : float
        Diagram size in logical units (pixels).
    style : FunctionViewStyle, optional
        Colors and flattening resolution.
    grid : CoordinateGrid, optional
        Coordinate system drawn beneath the diagram. When given, the figure
        takes the grid's frame size and the diagram is offset to its origin.
    """

    def __init__(
        self,
        width: float,
        height: float,
        *,
        style: Optional[FunctionViewStyle] = None,
        grid: Optional[CoordinateGrid] = None,
    ) -> None:
        self._style = style or FunctionViewStyle()
        self._grid = grid
        if grid is not None:
            self._frame_size = (grid.frame_width, grid.frame_height)
            self._offset = np.asarray(grid.diagram_origin, dtype=float)
        else:
            self._frame_size = (float(width), float(height))
            self._offset = np.zeros(2)
        self._flat_cache: Dict[int, tuple] = {}
        self._figure = go.FigureWidget()
        self._figure.update_layout(**self._default_figure_layout())
        self._add_traces()
        if grid is not None:
            self._figure.update_layout(shapes=self._grid_shapes(grid))

    @property
    def figure(self) -> go.FigureWidget:
        return self._figure

    @property
    def widget(self) -> go.FigureWidget:
        return self._figure

    def _default_figure_layout(self) -> Dict[str, Any]:
        frame_width, frame_height = self._frame_size
        hidden_axis = dict(
            visible=False,
            showgrid=False,
            zeroline=False,
            fixedrange=True,
        )
        return dict(
            width=int(round(frame_width)),
            height=int(round(frame_height)),
            autosize=False,
            template="plotly_white",
            showlegend=False,
            margin=dict(l=0, r=0, t=0, b=0),
            paper_bgcolor="#ffffff",
            plot_bgcolor="#ffffff",
            xaxis=dict(range=[0, frame_width], **hidden_axis),
            yaxis=dict(range=[frame_height, 0], **hidden_axis),
        )

    def _add_traces(self) -> None:
        style = self._style
        self._figure.add_trace(
            go.Scatter(
                x=[],
                y=[],
                mode="lines",
                fill="toself",
                fillcolor=style.fill_color,
                line=dict(color=style.integral_color, width=1),
                hoverinfo="skip",
                name="integral",
            )
        )
        self._figure.add_trace(
            go.Scatter(
                x=[],
                y=[],
                mode="lines",
                line=dict(color=style.curve_color, width=2),
                hoverinfo="skip",
                name="function",
            )
        )
        self._figure.add_trace(
            go.Scatter(
                x=[],
                y=[],
                mode="markers",
                marker=dict(color=style.integral_color, size=[]),
                hoverinfo="skip",
                name="knobs",
            )
        )

    def _grid_shapes(self, grid: CoordinateGrid) -> List[Dict[str, Any]]:
        style = self._style

        def line(segment, color: str, width: float) -> Dict[str, Any]:
            (x0, y0), (x1, y1) = segment
            return dict(
                type="line", x0=x0, y0=y0, x1=x1, y1=y1,
                xref="x", yref="y", layer="below",
                line=dict(color=color, width=width),
            )

        shapes = [line(s, style.grid_color, 0.75) for s in grid.grid_lines()]
        shapes += [line(s, style.axis_color, 1.5) for s in grid.tick_marks()]
        shapes += [line(s, style.axis_color, 1.5) for s in grid.axes]
        return shapes

    def _flatten(self, path: Path) -> List[np.ndarray]:
        # Keyed by id; the path is kept alive in the entry so the id stays unique.
        cached = self._flat_cache.get(id(path))
        if cached is not None and cached[0] is path:
            return cached[1]
        polylines = [p + self._offset for p in path.flatten(self._style.curve_steps)]
        if len(self._flat_cache) > 8:
            self._flat_cache.clear()
        self._flat_cache[id(path)] = (path, polylines)
        return polylines

    def render(self, layers: LayerStack) -> None:
        stroke = [truncate_polyline(p, layers.stroke.stroke_end) for p in self._flatten(layers.stroke.path)]

        rect = layers.mask.rect
        if rect is None:
            fill: List[np.ndarray] = []
            knobs = ()
        else:
            left = rect.left + self._offset[0]
            right = rect.right + self._offset[0]
            fill = [clip_polygon_to_band(p, left, right) for p in self._flatten(layers.fill.path)]
            knobs = tuple(k for k in layers.fill.knobs if layers.mask.reveals(k.x))

        figure = self._figure
        with figure.batch_update():
            figure.data[FILL_TRACE].x = _join_with_gaps(fill, 0)
            figure.data[FILL_TRACE].y = _join_with_gaps(fill, 1)
            figure.data[FILL_TRACE].line.width = layers.fill.line_width
            figure.data[FILL_TRACE].line.color = layers.fill.stroke_color
            figure.data[FILL_TRACE].fillcolor = layers.fill.fill_color
            figure.data[CURVE_TRACE].x = _join_with_gaps(stroke, 0)
            figure.data[CURVE_TRACE].y = _join_with_gaps(stroke, 1)
            figure.data[CURVE_TRACE].line.width = layers.stroke.line_width
            figure.data[CURVE_TRACE].line.color = layers.stroke.color
            figure.data[KNOB_TRACE].x = [k.x + self._offset[0] for k in knobs]
            figure.data[KNOB_TRACE].y = [k.y + self._offset[1] for k in knobs]
            figure.data[KNOB_TRACE].marker.size = [k.diameter for k in knobs]
            figure.data[KNOB_TRACE].marker.color = layers.fill.stroke_color
