from __future__ import annotations

from datetime import UTC, datetime
from typing import Literal

from pydantic import BaseModel, Field

SCHEMA_V1: Literal[1] = 1


def utc_now() -> datetime:
    return datetime.now(UTC)


class TelemetryEnvelope(BaseModel):
    schema_version: Literal[1] = Field(default=SCHEMA_V1)
    msg_id: str
    ts: datetime = Field(default_factory=utc_now)
    topic: str
    data: dict  # TrackTelemetry.model_dump()
