"""Drawable layers produced by :class:`~integration_viz.FunctionView`.

Three independent layers are composited in a fixed order, bottom to top:

1. ``fill``: integral fill path and outline (knobs are drawn on top of the
   curve stroke but clipped with the fill),
2. ``stroke``: the function curve,
3. ``mask``: the integral reveal window, applied to the fill and its knobs.

Layers are immutable; the view replaces them wholesale on every redraw and
every animation tick.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Optional, Tuple

from .geometry import Knob, Path, Rect

__all__ = ["StrokeLayer", "FillLayer", "MaskLayer", "LayerStack", "LayerRenderer", "Z_ORDER"]

Z_ORDER = ("fill", "stroke", "mask")


@dataclass(frozen=True)
class StrokeLayer:
    """Curve stroke revealed up to ``stroke_end`` of its arc length."""

    path: Path
    color: str
    line_width: float
    stroke_end: float = 1.0


@dataclass(frozen=True)
class FillLayer:
    """Integral fill with outline and knob markers."""

    path: Path
    knobs: Tuple[Knob, ...]
    stroke_color: str
    fill_color: str
    line_width: float


@dataclass(frozen=True)
class MaskLayer:
    """Visible window of the fill layer; ``None`` hides the fill entirely."""

    rect: Optional[Rect]

    def reveals(self, x: float) -> bool:
        return self.rect is not None and self.rect.left <= x <= self.rect.right


@dataclass(frozen=True)
class LayerStack:
    fill: FillLayer
    stroke: StrokeLayer
    mask: MaskLayer

    def with_progress(self, stroke_end: float, mask: MaskLayer) -> "LayerStack":
        return replace(self, stroke=replace(self.stroke, stroke_end=stroke_end), mask=mask)


class LayerRenderer:
    """Interface of anything that displays a :class:`LayerStack`."""

    def render(self, layers: LayerStack) -> None:
        raise NotImplementedError
