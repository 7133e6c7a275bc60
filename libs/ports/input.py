from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass
from typing import Literal

PointerKind = Literal["press", "move", "release", "secondary_press"]


@dataclass(frozen=True)
class PointerEvent:
    kind: PointerKind
    x: int
    y: int  # output-frame pixel space, untrusted (may be out of bounds)


class PointerSourcePort(ABC):
    """Delivers pointer events synchronously from the window event pump."""

    @abstractmethod
    def subscribe(self, callback: Callable[[PointerEvent], None]) -> None: ...

    # callback runs on the loop thread, between frames
