from __future__ import annotations

import logging
from typing import Final

import cv2
from ports.vision import Frame, FrameSourcePort

LOG: Final = logging.getLogger("tracker.capture")


def _parse_source(source: str) -> str | int:
    # "0", "1", ... select a camera; anything else is a path or URL
    s = source.strip()
    return int(s) if s.isdigit() else s


class OpenCVCapture(FrameSourcePort):
    """File / camera / stream source; every frame is resized to ``output_size``."""

    def __init__(self, source: str, output_size: tuple[int, int] = (1024, 800)) -> None:
        self._source = _parse_source(source)
        self._size = (int(output_size[0]), int(output_size[1]))
        self._cap: cv2.VideoCapture | None = None
        self._index = 0

    def open(self) -> None:
        cap = cv2.VideoCapture(self._source)
        if not cap.isOpened():
            cap.release()
            raise RuntimeError(f"Failed to open video capture: {self._source!r}")
        self._cap = cap
        LOG.debug(
            "Opened %r: %dx%d @ %.2f fps",
            self._source,
            int(cap.get(cv2.CAP_PROP_FRAME_WIDTH)),
            int(cap.get(cv2.CAP_PROP_FRAME_HEIGHT)),
            cap.get(cv2.CAP_PROP_FPS),
        )

    def read(self) -> Frame | None:
        if self._cap is None:
            self.open()
        assert self._cap is not None
        ok, image = self._cap.read()
        if not ok or image is None:
            return None
        if (image.shape[1], image.shape[0]) != self._size:
            image = cv2.resize(image, self._size)
        self._index += 1
        return Frame(image=image, index=self._index)

    def fps(self) -> float:
        if self._cap is None:
            return 0.0
        value = float(self._cap.get(cv2.CAP_PROP_FPS))
        return value if value > 0 else 0.0

    def close(self) -> None:
        if self._cap is not None:
            self._cap.release()
        self._cap = None
