from .fakes import FakeFrameSource, blank_image

__all__ = ["FakeFrameSource", "blank_image"]
