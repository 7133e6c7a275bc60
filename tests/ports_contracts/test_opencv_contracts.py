from __future__ import annotations

from pathlib import Path

import numpy as np
import pytest

cv2 = pytest.importorskip("cv2")

from adapters.cv_capture.opencv import OpenCVCapture  # noqa: E402
from adapters.cv_output.writer import OpenCVVideoWriter  # noqa: E402
from adapters.cv_tracker.opencv import OpenCVTracker, opencv_tracker_factory  # noqa: E402
from domain.geometry import Rect  # noqa: E402
from ports.vision import Frame  # noqa: E402

pytestmark = pytest.mark.contract

W, H = 320, 240


def _square(x: int, y: int) -> np.ndarray:
    img = np.full((H, W, 3), 40, dtype=np.uint8)
    cv2.rectangle(img, (x, y), (x + 40, y + 40), (0, 220, 255), -1)
    cv2.circle(img, (x + 20, y + 20), 8, (200, 30, 30), -1)
    return img


def _write_clip(path: Path, n: int = 8) -> None:
    writer = OpenCVVideoWriter(str(path), "MJPG", 10.0, (W, H))
    try:
        for i in range(n):
            writer.write(_square(40 + 4 * i, 60))
    finally:
        writer.close()


def _csrt_available() -> bool:
    try:
        OpenCVTracker("csrt")
    except RuntimeError:
        return False
    return True


def test_capture_resizes_to_output_size_and_ends(tmp_path: Path):
    clip = tmp_path / "clip.avi"
    _write_clip(clip, n=5)

    cap = OpenCVCapture(str(clip), output_size=(160, 100))
    cap.open()
    try:
        frames = []
        while (f := cap.read()) is not None:
            frames.append(f)
        assert len(frames) == 5
        assert all(f.size() == (160, 100) for f in frames)
        assert [f.index for f in frames] == [1, 2, 3, 4, 5]
        assert cap.fps() > 0
    finally:
        cap.close()


def test_capture_missing_file_is_runtime_error(tmp_path: Path):
    with pytest.raises(RuntimeError):
        OpenCVCapture(str(tmp_path / "nope.mp4")).open()


def test_writer_bad_fourcc_is_runtime_error(tmp_path: Path):
    with pytest.raises(RuntimeError):
        OpenCVVideoWriter(str(tmp_path / "x.avi"), "XX", 10.0, (W, H))


def test_unknown_algorithm_is_runtime_error():
    with pytest.raises(RuntimeError):
        OpenCVTracker("boosting")


@pytest.mark.skipif(not _csrt_available(), reason="opencv-contrib CSRT tracker unavailable")
def test_csrt_follows_moving_square():
    factory = opencv_tracker_factory("csrt")
    tracker = factory()
    assert factory() is not tracker

    assert tracker.initialize(Frame(image=_square(40, 60), index=1), Rect(36, 56, 48, 48))
    ok, rect = False, None
    for i in range(1, 6):
        ok, rect = tracker.advance(Frame(image=_square(40 + 4 * i, 60), index=i + 1))
    assert ok and rect is not None
    # the square moved 20 px right
    assert abs(rect.x - 56) <= 8
    assert abs(rect.y - 56) <= 8


class _RaisingImpl:
    def init(self, image, box):
        raise cv2.error("init blew up")

    def update(self, image):
        raise cv2.error("update blew up")


def test_opencv_errors_become_failed_results(monkeypatch):
    import adapters.cv_tracker.opencv as cv_tracker

    monkeypatch.setattr(cv_tracker, "_resolve_constructor", lambda _algo: _RaisingImpl)
    tracker = OpenCVTracker("csrt")
    frame = Frame(image=_square(40, 60), index=1)
    assert tracker.initialize(frame, Rect(36, 56, 48, 48)) is False
    assert tracker.advance(frame) == (False, None)
