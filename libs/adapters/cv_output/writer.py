from __future__ import annotations

import logging
from typing import Any, Final

import cv2
from ports.vision import FrameSinkPort

LOG: Final = logging.getLogger("tracker.output")


class OpenCVVideoWriter(FrameSinkPort):
    def __init__(
        self, path: str, fourcc: str, fps: float, size: tuple[int, int] = (1024, 800)
    ) -> None:
        if len(fourcc) != 4:
            raise RuntimeError(f"fourcc must be 4 characters, got {fourcc!r}")
        self.path = path
        self._size = (int(size[0]), int(size[1]))
        self._writer = cv2.VideoWriter(
            path, cv2.VideoWriter_fourcc(*fourcc), float(fps), self._size, True
        )
        if not self._writer.isOpened():
            raise RuntimeError(f"Failed to open video output: {path} ({fourcc})")
        LOG.debug("Writing %s %dx%d @ %.2f fps (%s)", path, *self._size, fps, fourcc)

    def write(self, image: Any) -> None:
        self._writer.write(image)

    def close(self) -> None:
        self._writer.release()


class NullSink(FrameSinkPort):
    """Used when no output path is configured."""

    def write(self, image: Any) -> None:
        pass

    def close(self) -> None:
        pass
