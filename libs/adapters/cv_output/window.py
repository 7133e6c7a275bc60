from __future__ import annotations

from collections.abc import Callable
from typing import Any, Final

import cv2
from ports.input import PointerEvent, PointerKind
from ports.vision import WindowPort

_EVENTS: Final[dict[int, PointerKind]] = {
    cv2.EVENT_LBUTTONDOWN: "press",
    cv2.EVENT_MOUSEMOVE: "move",
    cv2.EVENT_LBUTTONUP: "release",
    cv2.EVENT_RBUTTONDOWN: "secondary_press",
}

QUIT_KEYS: Final = (ord("q"), 27)  # q, ESC


class OpenCVWindow(WindowPort):
    """HighGUI window. Mouse callbacks fire inside ``poll_quit`` (cv2.waitKey)."""

    def __init__(self, name: str = "Video") -> None:
        self.name = name
        self._subs: list[Callable[[PointerEvent], None]] = []
        try:
            cv2.namedWindow(name, cv2.WINDOW_AUTOSIZE)
            cv2.setMouseCallback(name, self._on_mouse)
        except cv2.error as ex:
            raise RuntimeError(f"Failed to open window {name!r}: {ex}") from ex

    def subscribe(self, callback: Callable[[PointerEvent], None]) -> None:
        self._subs.append(callback)

    def _on_mouse(self, event: int, x: int, y: int, flags: int, param: Any) -> None:
        kind = _EVENTS.get(event)
        if kind is None:
            return
        ev = PointerEvent(kind=kind, x=int(x), y=int(y))
        for cb in list(self._subs):
            cb(ev)

    def present(self, image: Any) -> None:
        cv2.imshow(self.name, image)

    def poll_quit(self, timeout_ms: int) -> bool:
        key = cv2.waitKey(max(1, int(timeout_ms))) & 0xFF
        return key in QUIT_KEYS

    def close(self) -> None:
        try:
            cv2.destroyWindow(self.name)
        except cv2.error:
            pass


class HeadlessDisplay(WindowPort):
    """No window, no pointer; the loop runs until the source is exhausted."""

    def subscribe(self, callback: Callable[[PointerEvent], None]) -> None:
        pass

    def present(self, image: Any) -> None:
        pass

    def poll_quit(self, timeout_ms: int) -> bool:
        return False

    def close(self) -> None:
        pass
