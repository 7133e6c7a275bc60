from __future__ import annotations

from collections.abc import Iterable

from domain.geometry import Rect
from ports.vision import Frame, TrackerPort

Step = tuple[bool, Rect | None]


class ScriptedTrackerPort(TrackerPort):
    """Returns scripted ``advance`` results; records every call.

    Once the script runs out the last entry repeats (or a failure if empty).
    """

    def __init__(self, init_ok: bool = True, steps: Iterable[Step] = ()) -> None:
        self.init_ok = init_ok
        self.steps: list[Step] = list(steps)
        self.init_calls: list[tuple[int, Rect]] = []
        self.advance_calls: list[int] = []

    def initialize(self, frame: Frame, roi: Rect) -> bool:
        self.init_calls.append((frame.index, roi))
        return self.init_ok

    def advance(self, frame: Frame) -> tuple[bool, Rect | None]:
        n = len(self.advance_calls)
        self.advance_calls.append(frame.index)
        if not self.steps:
            return False, None
        return self.steps[min(n, len(self.steps) - 1)]


class FollowingTrackerPort(TrackerPort):
    """Reports the initial ROI shifted by ``dx, dy`` per frame."""

    def __init__(self, dx: int = 0, dy: int = 0) -> None:
        self.dx = dx
        self.dy = dy
        self._rect: Rect | None = None

    def initialize(self, frame: Frame, roi: Rect) -> bool:
        self._rect = roi
        return True

    def advance(self, frame: Frame) -> tuple[bool, Rect | None]:
        if self._rect is None:
            return False, None
        r = self._rect
        self._rect = Rect(r.x + self.dx, r.y + self.dy, r.width, r.height)
        return True, self._rect


class TrackerFactoryRecorder:
    """Tracker factory handing out ``ScriptedTrackerPort`` instances."""

    def __init__(self, init_ok: bool = True, steps: Iterable[Step] = ()) -> None:
        self.init_ok = init_ok
        self.steps = list(steps)
        self.created: list[ScriptedTrackerPort] = []

    def __call__(self) -> ScriptedTrackerPort:
        t = ScriptedTrackerPort(init_ok=self.init_ok, steps=self.steps)
        self.created.append(t)
        return t
