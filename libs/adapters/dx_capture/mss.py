from __future__ import annotations

import time
from typing import Any, cast

import cv2
import numpy as np

try:
    import mss  # type: ignore
except Exception:  # pragma: no cover
    mss = None

from ports.vision import Frame, FrameSourcePort


class MSSCapture(FrameSourcePort):
    """Screen source (``screen:<monitor>``); BGRA grabs become resized BGR frames."""

    def __init__(
        self,
        monitor: int = 1,
        output_size: tuple[int, int] = (1024, 800),
        target_fps: float = 10.0,
    ) -> None:
        self._monitor_idx = int(monitor)
        self._size = (int(output_size[0]), int(output_size[1]))
        self._target_fps = float(target_fps)
        self._sct: Any = None
        self._mon: dict[str, int] | None = None
        self._last_times: list[float] = []
        self._index = 0

    def open(self) -> None:
        if mss is None:
            raise RuntimeError("mss is not installed")
        idx = self._monitor_idx
        try:
            sct = mss.mss()
            monitors = sct.monitors
            # clamp to a real monitor (monitors[0] is "all")
            if idx < 1 or idx >= len(monitors):
                idx = 1
            mon = cast(dict[str, int], dict(monitors[idx]))
        except Exception as ex:
            raise RuntimeError(f"Failed to open screen capture {idx}: {ex}") from ex
        self._mon = mon
        self._sct = sct

    def read(self) -> Frame | None:
        if self._sct is None or self._mon is None:
            self.open()
        assert self._sct is not None and self._mon is not None
        shot: Any = self._sct.grab(self._mon)
        bgra = np.asarray(shot, dtype=np.uint8).reshape(shot.height, shot.width, 4)
        image = cv2.cvtColor(bgra, cv2.COLOR_BGRA2BGR)
        if (image.shape[1], image.shape[0]) != self._size:
            image = cv2.resize(image, self._size)
        self._maybe_sleep()
        self._tick_fps()
        self._index += 1
        return Frame(image=image, index=self._index)

    def fps(self) -> float:
        now = time.perf_counter()
        self._last_times = [t for t in self._last_times if now - t <= 1.0]
        return float(len(self._last_times))

    def close(self) -> None:
        if self._sct:
            try:
                self._sct.close()
            except Exception:
                pass
        self._sct = None
        self._mon = None
        self._last_times.clear()

    def _maybe_sleep(self) -> None:
        if self._target_fps > 0:
            time.sleep(max(0.0, (1.0 / self._target_fps) * 0.25))

    def _tick_fps(self) -> None:
        self._last_times.append(time.perf_counter())
