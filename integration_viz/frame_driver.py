"""Browser-driven frame clock for notebook animations.

``AnimationFrameDriver`` is a hidden ``anywidget.AnyWidget`` whose frontend
runs a ``requestAnimationFrame`` loop while the synced ``running`` trait is
on, sending one ``{"type": "tick"}`` custom message per displayed frame. The
Python side forwards each message to the bound callback, so ticks follow the
display refresh cadence and arrive on the kernel thread.

The driver must be displayed (e.g. placed inside the explorer layout) for
ticks to flow; an undisplayed driver simply never ticks.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Optional

import anywidget
import traitlets

from .animation import FrameClock

__all__ = ["AnimationFrameDriver"]

logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())


class AnimationFrameDriver(anywidget.AnyWidget, FrameClock):
    """Frame clock backed by the browser's ``requestAnimationFrame``.

    Traitlets (synced to frontend)
    ------------------------------
    running:
        While True, the frontend sends a tick message every animation frame.
    """

    running = traitlets.Bool(False).tag(sync=True)

    _esm = r"""
    export default {
      render({ model, el }) {
        // The driver node is an implementation detail: it should not affect layout.
        el.style.display = "none";

        let handle = null;

        function frame() {
          if (!model.get("running")) {
            handle = null;
            return;
          }
          model.send({ type: "tick" });
          handle = requestAnimationFrame(frame);
        }

        function sync() {
          if (model.get("running") && handle === null) {
            handle = requestAnimationFrame(frame);
          }
        }

        model.on("change:running", sync);
        sync();

        return () => {
          try { if (handle !== null) cancelAnimationFrame(handle); } catch (e) {}
          try { model.off("change:running", sync); } catch (e) {}
        };
      }
    };
    """

    def __init__(self, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self._callback: Optional[Callable[[], Any]] = None
        self.on_msg(self._handle_custom_msg)

    @property
    def paused(self) -> bool:
        return not self.running

    def bind(self, callback: Callable[[], Any]) -> None:
        self._callback = callback

    def pause(self) -> None:
        self.running = False

    def resume(self) -> None:
        self.running = True

    def _handle_custom_msg(self, _widget: Any, content: Any, _buffers: Any) -> None:
        if not isinstance(content, dict) or content.get("type") != "tick":
            return
        if self.paused or self._callback is None:
            return
        try:
            self._callback()
        except Exception:
            logger.exception("AnimationFrameDriver callback failed")
