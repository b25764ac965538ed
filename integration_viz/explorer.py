"""Notebook control panel around a :class:`~integration_viz.FunctionView`.

``IntegralExplorer`` assembles:

- a method ``Dropdown`` (none / analytical / midpoint / trapezoidal / simpson),
- a part-count ``IntSlider`` (1–10),
- a "Draw" ``Button``,
- an ``HTML`` readout comparing the approximation with the exact integral,
- the Plotly figure from :class:`~integration_viz.plotly_renderer.PlotlyRenderer`,
- a hidden :class:`~integration_viz.frame_driver.AnimationFrameDriver` that
  ticks the animation from the browser.

The view is injected into the controls; there is no global registry of
views. Pressing "Draw" reveals the curve over one second and the integral
over the following second.

Examples
--------
>>> import sympy as sp  # doctest: +SKIP
>>> from integration_viz import Function, IntegralExplorer, Symmetric  # doctest: +SKIP
>>> x = sp.symbols("x")  # doctest: +SKIP
>>> f = Function.from_expression(2 * (x - 1) ** 3, x, Symmetric(2), Symmetric(2))  # doctest: +SKIP
>>> IntegralExplorer(f)  # doctest: +SKIP
"""

from __future__ import annotations

import html
import logging
from typing import Any, Callable, Dict, Optional

import ipywidgets as widgets
from IPython.display import display

from .coordinate_grid import CoordinateGrid
from .frame_driver import AnimationFrameDriver
from .function_model import Function
from .function_view import FunctionView
from .integral import Analytical, IntegralLike, Midpoint, PartitionedIntegral, Simpson, Trapezoidal
from .numeric_operations import approximate_integral, exact_integral
from .plotly_renderer import PlotlyRenderer
from .style import FunctionViewStyle

__all__ = ["IntegralExplorer", "METHODS"]

logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())

METHODS: Dict[str, Callable[[int], IntegralLike]] = {
    "None": lambda parts: None,
    "Analytical": lambda parts: Analytical(),
    "Midpoint": lambda parts: Midpoint(parts),
    "Trapezoidal": lambda parts: Trapezoidal(parts),
    "Simpson": lambda parts: Simpson(parts),
}

MAX_PARTS = 10


class IntegralExplorer:
    """Interactive explorer for one function and its integral approximations.

    Parameters
    ----------
    function : Function
        Function to explore; fixes the diagram's ranges.
    width, height : float
        Diagram size in pixels.
    method : str
        Initially selected key of :data:`METHODS`.
    parts : int
        Initial part count.
    style : FunctionViewStyle, optional
        Presentation constants shared by view and renderer.
    show_grid : bool
        Draw the coordinate grid behind the diagram.
    """

    def __init__(
        self,
        function: Function,
        *,
        width: float = 600.0,
        height: float = 400.0,
        method: str = "Midpoint",
        parts: int = 3,
        style: Optional[FunctionViewStyle] = None,
        show_grid: bool = True,
    ) -> None:
        if method not in METHODS:
            raise ValueError(f"Unknown method {method!r}; expected one of {sorted(METHODS)}")
        self._style = style or FunctionViewStyle()
        grid = (
            CoordinateGrid.for_diagram(function.definition_range, function.value_range, width, height)
            if show_grid
            else None
        )
        self._renderer = PlotlyRenderer(width, height, style=self._style, grid=grid)
        self._driver = AnimationFrameDriver()
        self._view = FunctionView(
            function,
            width=width,
            height=height,
            renderer=self._renderer,
            clock=self._driver,
            style=self._style,
        )

        self.method_dropdown = widgets.Dropdown(
            options=list(METHODS),
            value=method,
            description="Method",
            layout=widgets.Layout(width="220px"),
        )
        self.parts_slider = widgets.IntSlider(
            value=min(max(int(parts), 1), MAX_PARTS),
            min=1,
            max=MAX_PARTS,
            step=1,
            description="Parts",
            continuous_update=False,
        )
        self.draw_button = widgets.Button(description="Draw", button_style="primary")
        self.readout = widgets.HTML(layout=widgets.Layout(margin="4px 0 0 0"))

        self.draw_button.on_click(lambda _button: self.draw())
        self.parts_slider.observe(self._on_parts_change, names="value")
        self.method_dropdown.observe(self._on_method_change, names="value")
        self._sync_parts_enabled()

        controls = widgets.HBox(
            [self.method_dropdown, self.parts_slider, self.draw_button],
            layout=widgets.Layout(align_items="center", gap="8px"),
        )
        self._root = widgets.VBox(
            [controls, self.readout, self._renderer.widget, self._driver],
            layout=widgets.Layout(width="100%"),
        )

    @property
    def view(self) -> FunctionView:
        return self._view

    @property
    def widget(self) -> widgets.VBox:
        return self._root

    def _ipython_display_(self, **kwargs: Any) -> None:
        display(self._root)

    def selected_integral(self) -> IntegralLike:
        return METHODS[self.method_dropdown.value](self.parts_slider.value)

    def draw(self, function: Optional[Function] = None) -> None:
        """Reveal the curve, then the selected integral one second later."""
        function = self._view.function if function is None else function
        integral = self.selected_integral()
        logger.debug("explorer draw: method=%s integral=%r", self.method_dropdown.value, integral)
        self._view.draw_function(function, animation_duration=1)
        self._view.draw_integral(integral, animation_duration=1, delay=1)
        self._update_readout()

    def _on_parts_change(self, _change: Dict[str, Any]) -> None:
        # Curve stays in place; only the integral on screen animates again.
        current = self._view.integral
        if isinstance(current, PartitionedIntegral):
            self._view.draw_integral(type(current)(self.parts_slider.value), animation_duration=1)
            self._update_readout()

    def _on_method_change(self, _change: Dict[str, Any]) -> None:
        self._sync_parts_enabled()

    def _sync_parts_enabled(self) -> None:
        self.parts_slider.disabled = self.method_dropdown.value in ("None", "Analytical")

    def _update_readout(self) -> None:
        integral = self._view.integral
        if integral is None:
            self.readout.value = ""
            return
        exact = exact_integral(self._view.function)
        approximation = approximate_integral(self._view.function, integral)
        label = html.escape(self._view.function.label or "f")
        if isinstance(integral, Analytical):
            text = f"&int; {label} dx = {exact:.6g}"
        else:
            error = approximation - exact
            text = (
                f"{type(integral).__name__}, {integral.parts} part{'s' if integral.parts != 1 else ''}: "
                f"{approximation:.6g} (exact {exact:.6g}, error {error:+.3g})"
            )
        self.readout.value = text
