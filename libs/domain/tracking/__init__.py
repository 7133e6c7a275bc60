from .model import (
    Drawing,
    Episode,
    Idle,
    InteractionContext,
    InteractionState,
    PendingInit,
    Tracking,
    TrackingDegraded,
)
from .pointer import PointerHandler
from .session import OverlayPlan, TrackingSession

__all__ = [
    "Idle",
    "Drawing",
    "PendingInit",
    "Tracking",
    "TrackingDegraded",
    "InteractionState",
    "InteractionContext",
    "Episode",
    "PointerHandler",
    "OverlayPlan",
    "TrackingSession",
]
