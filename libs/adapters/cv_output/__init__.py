from .fakes import FakeFrameSink, ScriptedDisplay

__all__ = ["FakeFrameSink", "ScriptedDisplay"]
