from __future__ import annotations

import logging
from typing import Final

from domain.geometry import Point, is_valid, normalize
from ports.input import PointerEvent

from .model import Drawing, Idle, InteractionContext, PendingInit

LOG: Final = logging.getLogger("tracker.pointer")


class PointerHandler:
    """Turns press/move/release events into a drag draft and a committed ROI.

    A press always starts a new drag, even over an active track. A release
    either commits a valid ROI (``PendingInit``) or discards the drag
    (``Idle``); there is no partially committed outcome.
    """

    def __init__(self, ctx: InteractionContext) -> None:
        self.ctx: Final = ctx

    def handle(self, event: PointerEvent) -> None:
        if event.kind == "press":
            self.press(event.x, event.y)
        elif event.kind == "move":
            self.move(event.x, event.y)
        elif event.kind == "release":
            self.release(event.x, event.y)
        elif event.kind == "secondary_press":
            self.secondary_press(event.x, event.y)

    __call__ = handle

    def press(self, x: int, y: int) -> None:
        p = Point(x, y)
        if self.ctx.is_tracking:
            LOG.info("New selection started; dropping current track.")
        self.ctx.state = Drawing(start=p, current=p)

    def move(self, x: int, y: int) -> None:
        state = self.ctx.state
        if isinstance(state, Drawing):
            self.ctx.state = Drawing(start=state.start, current=Point(x, y))

    def release(self, x: int, y: int) -> None:
        state = self.ctx.state
        if not isinstance(state, Drawing):
            return
        w, h = self.ctx.frame_width, self.ctx.frame_height
        roi = normalize(state.start, Point(x, y), w, h)
        if is_valid(roi, w, h):
            LOG.debug("ROI committed: %s", roi.as_tuple())
            self.ctx.state = PendingInit(rect=roi)
        else:
            LOG.debug("Invalid ROI selected: %s", roi.as_tuple())
            self.ctx.state = Idle()

    def secondary_press(self, x: int, y: int) -> None:
        LOG.debug("Secondary button pressed at %d,%d", x, y)
