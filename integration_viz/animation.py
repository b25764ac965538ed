"""Time-windowed reveal progress and the frame clocks that drive it.

Purpose
-------
``AnimationScheduler`` owns one optional :class:`RenderPlan` per animated
element (``"curve"`` and ``"integral"``). Each tick converts the plans into
progress values in ``[0, 1]``, reports them, and pauses its frame clock once
nothing is left to animate. Installing a new plan resumes the clock.

Frame clocks
------------
A frame clock calls one bound callback repeatedly while it is not paused.
Pausing keeps the binding; resuming restarts ticking without re-registration.

- :class:`TimerFrameClock` ticks on the running asyncio loop via
  ``loop.call_later`` (Jupyter kernels always have one) and falls back to a
  daemon ``threading.Timer`` outside an event loop.
- :class:`~integration_viz.frame_driver.AnimationFrameDriver` ticks from the
  browser's ``requestAnimationFrame``.
"""

from __future__ import annotations

import asyncio
import logging
import threading
import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

__all__ = [
    "CURVE",
    "INTEGRAL",
    "ZERO_WINDOW_EPSILON",
    "RenderPlan",
    "FrameClock",
    "TimerFrameClock",
    "AnimationScheduler",
]

logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())

CURVE = "curve"
INTEGRAL = "integral"
ZERO_WINDOW_EPSILON = 1e-6


@dataclass(frozen=True)
class RenderPlan:
    """One reveal window ``[start, end]`` on the scheduler's time source (seconds)."""

    start: float
    end: float

    @classmethod
    def scheduled(cls, now: float, duration: float, delay: float = 0.0) -> "RenderPlan":
        if duration < 0:
            raise ValueError(f"animation duration must be >= 0, got {duration}")
        if delay < 0:
            raise ValueError(f"delay must be >= 0, got {delay}")
        start = now + delay
        return cls(start=start, end=start + duration)

    def progress(self, now: float) -> float:
        """Elapsed fraction of the window, clamped to ``[0, 1]``.

        Windows shorter than ``ZERO_WINDOW_EPSILON`` behave as a step at ``start``.
        """
        length = self.end - self.start
        if length < ZERO_WINDOW_EPSILON:
            return 1.0 if now >= self.start else 0.0
        return min(max((now - self.start) / length, 0.0), 1.0)


class FrameClock:
    """Interface of a pausable per-frame callback source."""

    def bind(self, callback: Callable[[], Any]) -> None:
        raise NotImplementedError

    @property
    def paused(self) -> bool:
        raise NotImplementedError

    def pause(self) -> None:
        raise NotImplementedError

    def resume(self) -> None:
        raise NotImplementedError


class TimerFrameClock(FrameClock):
    """Frame clock ticking every ``interval_s`` seconds.

    Parameters
    ----------
    interval_s:
        Tick cadence in seconds, ``1/60`` by default.
    """

    def __init__(self, interval_s: float = 1 / 60) -> None:
        if interval_s <= 0:
            raise ValueError("interval_s must be > 0")
        self._interval_s = float(interval_s)
        self._callback: Optional[Callable[[], Any]] = None
        self._paused = True
        self._lock = threading.Lock()
        self._timer: Optional[Any] = None

    @property
    def interval_s(self) -> float:
        return self._interval_s

    @property
    def paused(self) -> bool:
        return self._paused

    def bind(self, callback: Callable[[], Any]) -> None:
        self._callback = callback

    def pause(self) -> None:
        with self._lock:
            self._paused = True

    def resume(self) -> None:
        with self._lock:
            self._paused = False
            if self._timer is None:
                self._schedule_next_locked()

    def _schedule_next_locked(self) -> None:
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            timer = threading.Timer(self._interval_s, self._on_tick)
            timer.daemon = True
            self._timer = timer
            timer.start()
            return

        self._timer = loop.call_later(self._interval_s, self._on_tick)

    def _on_tick(self) -> None:
        with self._lock:
            self._timer = None
            if self._paused or self._callback is None:
                return
            callback = self._callback

        try:
            callback()
        except Exception:
            logger.exception("TimerFrameClock callback failed")

        with self._lock:
            if not self._paused and self._timer is None:
                self._schedule_next_locked()


ProgressCallback = Callable[[float, float], Any]


class AnimationScheduler:
    """Turn curve and integral render plans into reveal progress.

    Parameters
    ----------
    on_progress:
        Called on every tick with ``(curve_progress, integral_progress)``.
    clock:
        Frame clock to drive ticks; it is bound to :meth:`tick`.
    time_source:
        Monotonic seconds, ``time.monotonic`` by default.
    """

    def __init__(
        self,
        on_progress: ProgressCallback,
        *,
        clock: FrameClock,
        time_source: Callable[[], float] = time.monotonic,
    ) -> None:
        self._on_progress = on_progress
        self._clock = clock
        self._time_source = time_source
        self._plans: Dict[str, Optional[RenderPlan]] = {CURVE: None, INTEGRAL: None}
        self._progress: Dict[str, float] = {CURVE: 0.0, INTEGRAL: 0.0}
        # Timer threads tick while callers install plans; both run under this lock.
        self._lock = threading.RLock()
        clock.bind(self.tick)

    @property
    def clock(self) -> FrameClock:
        return self._clock

    @property
    def is_running(self) -> bool:
        return not self._clock.paused

    def now(self) -> float:
        return self._time_source()

    def plan(self, element: str) -> Optional[RenderPlan]:
        return self._plans[element]

    def schedule(self, element: str, duration: float, delay: float = 0.0) -> RenderPlan:
        """Replace ``element``'s plan with one starting ``delay`` seconds from now."""
        plan = RenderPlan.scheduled(self.now(), duration, delay)
        self.set_plan(element, plan)
        return plan

    def set_plan(self, element: str, plan: Optional[RenderPlan]) -> None:
        if element not in self._plans:
            raise KeyError(f"Unknown animated element: {element!r}")
        with self._lock:
            self._plans[element] = plan
            self._tick_locked()

    def progress(self, element: str, now: Optional[float] = None) -> float:
        plan = self._plans[element]
        if plan is None:
            return 0.0
        return plan.progress(self.now() if now is None else now)

    def last_progress(self, element: str) -> float:
        """Progress reported by the most recent tick."""
        return self._progress[element]

    def tick(self) -> None:
        """Report current progress, then pause or resume the clock to match the plans."""
        with self._lock:
            self._tick_locked()

    def _tick_locked(self) -> None:
        now = self.now()
        curve = self.progress(CURVE, now)
        integral = self.progress(INTEGRAL, now)
        self._progress[CURVE] = curve
        self._progress[INTEGRAL] = integral
        self._on_progress(curve, integral)

        needs_ticks = (self._plans[CURVE] is not None and curve < 1) or (
            self._plans[INTEGRAL] is not None and integral < 1
        )
        if needs_ticks and self._clock.paused:
            logger.debug("resuming frame clock (curve=%.3f integral=%.3f)", curve, integral)
            self._clock.resume()
        elif not needs_ticks and not self._clock.paused:
            logger.debug("pausing frame clock, animations complete")
            self._clock.pause()
