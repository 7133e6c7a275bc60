from .input import PointerEvent, PointerKind, PointerSourcePort
from .ipc import TelemetryPubPort
from .time import ClockPort
from .vision import (
    DisplayPort,
    Frame,
    FrameSinkPort,
    FrameSourcePort,
    OverlayRendererPort,
    TrackerPort,
    WindowPort,
)

__all__ = [
    "PointerEvent",
    "PointerKind",
    "PointerSourcePort",
    "Frame",
    "FrameSourcePort",
    "FrameSinkPort",
    "DisplayPort",
    "OverlayRendererPort",
    "TrackerPort",
    "WindowPort",
    "TelemetryPubPort",
    "ClockPort",
]
