# libs/ports/vision.py
from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Protocol

from .input import PointerSourcePort

if TYPE_CHECKING:
    from domain.geometry import Rect
    from domain.tracking.session import OverlayPlan


@dataclass(frozen=True)
class Frame:
    # BGR ndarray (rows, cols, 3). Owned by one pipeline iteration.
    image: Any
    index: int = 0

    @property
    def width(self) -> int:
        return int(self.image.shape[1])

    @property
    def height(self) -> int:
        return int(self.image.shape[0])

    def size(self) -> tuple[int, int]:
        return self.width, self.height


class FrameSourcePort(Protocol):
    def open(self) -> None: ...
    def read(self) -> Frame | None: ...  # None == end of stream
    def fps(self) -> float: ...
    def close(self) -> None: ...


class FrameSinkPort(ABC):
    """Persists rendered frames (e.g. an encoded video file)."""

    @abstractmethod
    def write(self, image: Any) -> None: ...

    @abstractmethod
    def close(self) -> None: ...


class DisplayPort(ABC):
    """Presents frames and pumps window events once per iteration."""

    @abstractmethod
    def present(self, image: Any) -> None: ...

    @abstractmethod
    def poll_quit(self, timeout_ms: int) -> bool: ...

    @abstractmethod
    def close(self) -> None: ...


class OverlayRendererPort(ABC):
    @abstractmethod
    def render(self, frame: Frame, plan: OverlayPlan) -> Any: ...


class TrackerPort(ABC):
    """Opaque single-object tracking capability; one instance per episode."""

    @abstractmethod
    def initialize(self, frame: Frame, roi: Rect) -> bool: ...

    @abstractmethod
    def advance(self, frame: Frame) -> tuple[bool, Rect | None]: ...


class WindowPort(DisplayPort, PointerSourcePort):
    """A display that also delivers pointer events from its event pump."""
