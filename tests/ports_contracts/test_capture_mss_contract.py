# tests/ports_contracts/test_capture_mss_contract.py
import importlib.util
import os
import sys

import pytest

mss_available = importlib.util.find_spec("mss") is not None
has_screen = sys.platform in ("win32", "darwin") or bool(os.environ.get("DISPLAY"))

pytestmark = [
    pytest.mark.contract,
    pytest.mark.skipif(not (mss_available and has_screen), reason="mss or a screen unavailable"),
]


def test_read_returns_resized_bgr_frame():
    from adapters.dx_capture.mss import MSSCapture

    cap = MSSCapture(monitor=1, output_size=(320, 200), target_fps=0)
    cap.open()
    try:
        frame = cap.read()
        assert frame is not None
        assert frame.size() == (320, 200)
        assert frame.image.shape == (200, 320, 3)
    finally:
        cap.close()


def test_fps_increases_when_grabbing_loop():
    from adapters.dx_capture.mss import MSSCapture

    cap = MSSCapture(monitor=99, output_size=(160, 100), target_fps=10.0)  # clamps to 1
    cap.open()
    try:
        for _ in range(4):
            cap.read()
        assert cap.fps() > 0.0
    finally:
        cap.close()
