from .fakes import FakeClockPort, ManualClockPort

__all__ = ["FakeClockPort", "ManualClockPort"]
