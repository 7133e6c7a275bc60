from .overlay import ACTIVE_STYLE, PENDING_STYLE, OpenCVOverlayRenderer, RectStyle

__all__ = ["OpenCVOverlayRenderer", "RectStyle", "PENDING_STYLE", "ACTIVE_STYLE"]
