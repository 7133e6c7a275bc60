from __future__ import annotations

from collections.abc import Iterable

import numpy as np
from ports.vision import Frame, FrameSourcePort


def blank_image(width: int = 1024, height: int = 800, value: int = 0) -> np.ndarray:
    return np.full((height, width, 3), value, dtype=np.uint8)


class FakeFrameSource(FrameSourcePort):
    """Yields ``count`` synthetic frames (or the given images), then end of stream."""

    def __init__(
        self,
        count: int = 3,
        size: tuple[int, int] = (1024, 800),
        images: Iterable[np.ndarray] | None = None,
        fps_value: float = 25.0,
    ) -> None:
        if images is None:
            images = [blank_image(size[0], size[1], value=i % 256) for i in range(count)]
        self._images = list(images)
        self._fps = float(fps_value)
        self._pos = 0
        self.opened = False
        self.closed = False

    def open(self) -> None:
        self.opened = True

    def read(self) -> Frame | None:
        if self._pos >= len(self._images):
            return None
        image = self._images[self._pos]
        self._pos += 1
        # fresh buffer per iteration
        return Frame(image=image.copy(), index=self._pos)

    def fps(self) -> float:
        return self._fps

    def close(self) -> None:
        self.closed = True
