from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any


class TelemetryPubPort(ABC):
    """Tracker publishes per-frame telemetry (PUB)."""

    @abstractmethod
    def publish(self, topic: str, payload: Mapping[str, Any]) -> None: ...

    @abstractmethod
    def close(self) -> None: ...


__all__ = ["TelemetryPubPort"]
