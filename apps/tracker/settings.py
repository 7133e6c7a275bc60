from __future__ import annotations

from typing import Literal

from pydantic import Field, NonNegativeInt, PositiveFloat, PositiveInt
from pydantic_settings import BaseSettings, SettingsConfigDict


class TrackerSettings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="ROIT_", extra="ignore")

    # input: file path / URL, camera index ("0"), or "screen:<monitor>"
    source: str = "track.mp4"
    # encoded output; empty string disables writing
    output: str = "video.mp4"
    fourcc: str = Field(default="mp4v", min_length=4, max_length=4)
    fallback_fps: PositiveFloat = 25.0

    # every frame is resized to this before any geometry runs
    frame_width: PositiveInt = 1024
    frame_height: PositiveInt = 800

    preview_width: PositiveInt = 320
    preview_height: PositiveInt = 460
    preview_x: NonNegativeInt = 1
    preview_y: NonNegativeInt = 1

    tracker_algorithm: Literal["csrt", "kcf", "mil"] = "csrt"
    # 0 = never drop a track on failed updates
    max_lost_frames: NonNegativeInt = 0

    display: bool = True
    window_name: str = "Video"
    wait_ms: PositiveInt = 20

    # telemetry transport
    ipc_impl: Literal["inproc", "zmq"] = "inproc"
    telem_bind: str = "tcp://127.0.0.1:7789"
    telem_hz: PositiveFloat = 5.0

    @property
    def frame_size(self) -> tuple[int, int]:
        return self.frame_width, self.frame_height
