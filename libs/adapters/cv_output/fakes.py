from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from typing import Any

from ports.input import PointerEvent
from ports.vision import FrameSinkPort, WindowPort


class FakeFrameSink(FrameSinkPort):
    """Keeps every written image."""

    def __init__(self) -> None:
        self.images: list[Any] = []
        self.closed = False

    def write(self, image: Any) -> None:
        self.images.append(image)

    def close(self) -> None:
        self.closed = True


class ScriptedDisplay(WindowPort):
    """Replays pointer events during the event pump that follows frame N.

    ``script`` maps a 1-based presented-frame count to the events delivered
    while polling after that frame. ``quit_after`` ends the loop after that
    many frames.
    """

    def __init__(
        self,
        script: Mapping[int, Iterable[PointerEvent]] | None = None,
        quit_after: int | None = None,
    ) -> None:
        self._script = {k: list(v) for k, v in (script or {}).items()}
        self._quit_after = quit_after
        self._subs: list[Callable[[PointerEvent], None]] = []
        self.presented: list[Any] = []
        self.poll_timeouts: list[int] = []
        self.closed = False

    def subscribe(self, callback: Callable[[PointerEvent], None]) -> None:
        self._subs.append(callback)

    # Test helper: deliver one event right now
    def trigger(self, event: PointerEvent) -> None:
        for cb in list(self._subs):
            cb(event)

    def present(self, image: Any) -> None:
        self.presented.append(image)

    def poll_quit(self, timeout_ms: int) -> bool:
        self.poll_timeouts.append(timeout_ms)
        n = len(self.presented)
        for ev in self._script.get(n, []):
            self.trigger(ev)
        return self._quit_after is not None and n >= self._quit_after

    def close(self) -> None:
        self.closed = True
