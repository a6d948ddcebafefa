# src/convsim_core/simulation/scheduler.py
"""
Host frame schedulers.

The engine never loops on its own. It asks a host scheduler for the next animation
frame, does one tick of bounded work when the callback fires, and yields again.
`ManualFrameScheduler` is a deterministic host for headless runs and tests;
`AsyncioFrameScheduler` drives frames from an asyncio event loop.
"""
import asyncio
import itertools
import logging
from typing import Callable, Dict, Optional, Protocol, runtime_checkable

from ..constants import DEFAULT_FRAME_RATE_HZ, DEFAULT_MAX_FRAMES
from ..units import frame_interval_ms

logger = logging.getLogger(__name__)

FrameCallback = Callable[[float], None]


@runtime_checkable
class FrameScheduler(Protocol):
    """The contract between the engine and whatever hosts its animation frames."""

    def request_frame(self, callback: FrameCallback) -> int:
        """Schedules `callback(timestamp_ms)` for the next frame and returns a handle."""
        ...

    def cancel_frame(self, handle: int) -> None:
        """Cancels a pending frame. Unknown or already-fired handles are ignored."""
        ...


class ManualFrameScheduler:
    """
    A scheduler whose frames advance only when `step()` is called.

    Each step fires the callbacks that were pending when the step began. Callbacks
    requested during a step wait for the next one, as with a browser's frame queue.
    """

    def __init__(self, frame_rate_hz: float = DEFAULT_FRAME_RATE_HZ):
        self.interval_ms = frame_interval_ms(frame_rate_hz)
        self.now_ms = 0.0
        self.frames_fired = 0
        self._handles = itertools.count(1)
        self._pending: Dict[int, FrameCallback] = {}

    @property
    def pending_count(self) -> int:
        return len(self._pending)

    def request_frame(self, callback: FrameCallback) -> int:
        handle = next(self._handles)
        self._pending[handle] = callback
        return handle

    def cancel_frame(self, handle: int) -> None:
        self._pending.pop(handle, None)

    def step(self) -> int:
        """Fires one frame. Returns the number of callbacks invoked."""
        if not self._pending:
            return 0
        self.now_ms += self.interval_ms
        self.frames_fired += 1
        due = list(self._pending.items())
        self._pending.clear()
        for _, callback in due:
            callback(self.now_ms)
        return len(due)

    def run_until_idle(self, max_frames: int = DEFAULT_MAX_FRAMES) -> int:
        """
        Steps until no frame is pending or `max_frames` have fired.
        Returns the number of frames fired by this call.
        """
        fired = 0
        while self._pending and fired < max_frames:
            self.step()
            fired += 1
        if self._pending:
            logger.warning(f"Scheduler still has {self.pending_count} pending frame(s) after {max_frames} frames.")
        return fired


class AsyncioFrameScheduler:
    """Schedules frames on an asyncio event loop at a fixed frame rate."""

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None, frame_rate_hz: float = DEFAULT_FRAME_RATE_HZ):
        self.loop = loop if loop is not None else asyncio.get_running_loop()
        self.interval_ms = frame_interval_ms(frame_rate_hz)
        self._handles = itertools.count(1)
        self._timers: Dict[int, asyncio.TimerHandle] = {}

    @property
    def pending_count(self) -> int:
        return len(self._timers)

    def request_frame(self, callback: FrameCallback) -> int:
        handle = next(self._handles)
        self._timers[handle] = self.loop.call_later(self.interval_ms / 1000.0, self._fire, handle, callback)
        return handle

    def cancel_frame(self, handle: int) -> None:
        timer = self._timers.pop(handle, None)
        if timer is not None:
            timer.cancel()

    def _fire(self, handle: int, callback: FrameCallback) -> None:
        self._timers.pop(handle, None)
        callback(self.loop.time() * 1000.0)
