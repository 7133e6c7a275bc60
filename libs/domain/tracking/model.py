from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal, Union

from domain.geometry import Point, Rect

StateName = Literal["IDLE", "DRAWING", "PENDING_INIT", "TRACKING", "DEGRADED"]


@dataclass
class Episode:
    """One interval from a successful tracker init to redraw or stream end."""

    episode_id: int
    roi: Rect
    last_rect: Rect | None = None
    frames: int = 0
    lost_streak: int = 0


@dataclass(frozen=True)
class Idle:
    name: StateName = field(default="IDLE", init=False)


@dataclass(frozen=True)
class Drawing:
    start: Point
    current: Point
    name: StateName = field(default="DRAWING", init=False)


@dataclass(frozen=True)
class PendingInit:
    rect: Rect
    name: StateName = field(default="PENDING_INIT", init=False)


@dataclass(frozen=True)
class Tracking:
    episode: Episode
    name: StateName = field(default="TRACKING", init=False)


@dataclass(frozen=True)
class TrackingDegraded:
    episode: Episode
    name: StateName = field(default="DEGRADED", init=False)


InteractionState = Union[Idle, Drawing, PendingInit, Tracking, TrackingDegraded]


@dataclass
class InteractionContext:
    """Shared handle passed explicitly to the pointer handler and the session.

    Only those two components replace ``state``; everyone else reads it.
    """

    frame_width: int
    frame_height: int
    state: InteractionState = field(default_factory=Idle)

    @property
    def is_drawing(self) -> bool:
        return isinstance(self.state, Drawing)

    @property
    def is_tracking(self) -> bool:
        return isinstance(self.state, (Tracking, TrackingDegraded))

    @property
    def needs_init(self) -> bool:
        return isinstance(self.state, PendingInit)
