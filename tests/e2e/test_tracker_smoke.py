# tests/e2e/test_tracker_smoke.py
from __future__ import annotations

from pathlib import Path

import numpy as np
import pytest

cv2 = pytest.importorskip("cv2")

from adapters.cv_capture.opencv import OpenCVCapture  # noqa: E402
from adapters.cv_output import ScriptedDisplay  # noqa: E402
from adapters.cv_output.writer import OpenCVVideoWriter  # noqa: E402
from adapters.cv_tracker import FollowingTrackerPort  # noqa: E402
from adapters.ipc_inproc import InprocTelemetryPubPort  # noqa: E402
from ports.input import PointerEvent  # noqa: E402

from apps.tracker.compose import TrackerApp  # noqa: E402
from apps.tracker.settings import TrackerSettings  # noqa: E402


def _clip(path: Path, n: int) -> None:
    w = cv2.VideoWriter(str(path), cv2.VideoWriter_fourcc(*"MJPG"), 10.0, (640, 480))
    for i in range(n):
        img = np.full((480, 640, 3), 30, dtype=np.uint8)
        cv2.rectangle(img, (100 + 5 * i, 100), (180 + 5 * i, 200), (0, 200, 0), -1)
        w.write(img)
    w.release()


def test_tracker_smoke_file_to_file(tmp_path: Path):
    src_path = tmp_path / "in.avi"
    out_path = tmp_path / "out.avi"
    _clip(src_path, n=6)

    settings = TrackerSettings.model_validate(
        {
            "source": str(src_path),
            "output": str(out_path),
            "fourcc": "MJPG",
            "frame_width": 1024,
            "frame_height": 800,
            "display": False,
        }
    )
    source = OpenCVCapture(settings.source, output_size=settings.frame_size)
    source.open()
    display = ScriptedDisplay(
        script={1: [PointerEvent("press", 400, 300), PointerEvent("release", 600, 450)]}
    )
    app = TrackerApp(
        settings,
        source=source,
        sink=OpenCVVideoWriter(settings.output, settings.fourcc, 10.0, settings.frame_size),
        display=display,
        tracker_factory=lambda: FollowingTrackerPort(dx=2),
        telemetry=InprocTelemetryPubPort.create(),
    )

    assert app.run() == 6
    assert app.ctx.is_tracking
    assert all(img.shape == (800, 1024, 3) for img in display.presented)

    # frame 2 carries the red outline of the tracked box at (402,300,200,150)
    assert tuple(display.presented[1][300, 500]) == (0, 0, 255)

    check = cv2.VideoCapture(str(out_path))
    try:
        assert check.isOpened()
        assert int(check.get(cv2.CAP_PROP_FRAME_COUNT)) == 6
    finally:
        check.release()
