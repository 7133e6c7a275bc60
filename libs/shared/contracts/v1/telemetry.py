from __future__ import annotations

from typing import Literal

from pydantic import BaseModel


class TrackTelemetry(BaseModel):
    api: Literal["v1"] = "v1"
    state: Literal["IDLE", "DRAWING", "PENDING_INIT", "TRACKING", "DEGRADED"]
    frame_index: int
    episode_id: int | None = None
    roi: tuple[int, int, int, int] | None = None  # x, y, w, h
    lost_streak: int = 0
    ts: float
    fps: float | None = None
