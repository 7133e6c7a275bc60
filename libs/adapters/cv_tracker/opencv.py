from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any, Final

import cv2
from domain.geometry import Rect
from ports.vision import Frame, TrackerPort

LOG: Final = logging.getLogger("tracker.cv")

ALGORITHMS: Final = ("csrt", "kcf", "mil")


def _resolve_constructor(algorithm: str) -> Callable[[], Any]:
    """Find a constructor for ``algorithm`` across OpenCV API generations."""
    name = algorithm.upper()
    cls = getattr(cv2, f"Tracker{name}", None)
    if cls is not None and hasattr(cls, "create"):
        return cls.create
    legacy_ctor = getattr(cv2, f"Tracker{name}_create", None)
    if legacy_ctor is not None:
        return legacy_ctor
    legacy = getattr(cv2, "legacy", None)
    if legacy is not None and hasattr(legacy, f"Tracker{name}_create"):
        return getattr(legacy, f"Tracker{name}_create")
    raise RuntimeError(
        f"OpenCV tracker '{algorithm}' not available (install opencv-contrib-python)"
    )


class OpenCVTracker(TrackerPort):
    """Wraps one OpenCV tracker instance; build a new one per episode."""

    def __init__(self, algorithm: str = "csrt") -> None:
        algorithm = algorithm.lower()
        if algorithm not in ALGORITHMS:
            raise RuntimeError(f"Unknown tracker algorithm: {algorithm!r}")
        ctor = _resolve_constructor(algorithm)
        try:
            self._impl = ctor()
        except cv2.error as ex:
            raise RuntimeError(f"Failed to create tracker '{algorithm}': {ex}") from ex
        if self._impl is None:
            raise RuntimeError(f"Failed to create tracker '{algorithm}'")
        self.algorithm = algorithm

    def initialize(self, frame: Frame, roi: Rect) -> bool:
        try:
            result = self._impl.init(frame.image, roi.as_tuple())
        except cv2.error as ex:
            LOG.debug("%s init failed: %s", self.algorithm, ex)
            return False
        # OpenCV >= 4.5.1 returns None from init()
        return result is None or bool(result)

    def advance(self, frame: Frame) -> tuple[bool, Rect | None]:
        try:
            ok, box = self._impl.update(frame.image)
        except cv2.error as ex:
            LOG.debug("%s update failed: %s", self.algorithm, ex)
            return False, None
        if not ok:
            return False, None
        x, y, w, h = box
        return True, Rect.from_float(x, y, w, h)


def opencv_tracker_factory(algorithm: str = "csrt") -> Callable[[], OpenCVTracker]:
    """Build one tracker eagerly so a missing algorithm fails at setup."""
    OpenCVTracker(algorithm)

    def factory() -> OpenCVTracker:
        return OpenCVTracker(algorithm)

    return factory
