from __future__ import annotations

from collections import deque
from collections.abc import Mapping
from typing import Any

from ports.ipc import TelemetryPubPort


class InprocTelemetryPubPort(TelemetryPubPort):
    """In-process PUB counterpart; keeps the last ``maxlen`` messages."""

    def __init__(self, maxlen: int = 1000) -> None:
        self.messages: deque[tuple[str, dict[str, Any]]] = deque(maxlen=maxlen)

    @classmethod
    def create(cls) -> InprocTelemetryPubPort:
        return cls()

    def publish(self, topic: str, payload: Mapping[str, Any]) -> None:
        self.messages.append((topic, dict(payload)))

    def topic(self, name: str) -> list[dict[str, Any]]:
        return [p for t, p in self.messages if t == name]

    def close(self) -> None:
        pass
