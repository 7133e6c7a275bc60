from .fakes import FollowingTrackerPort, ScriptedTrackerPort, TrackerFactoryRecorder

__all__ = ["ScriptedTrackerPort", "FollowingTrackerPort", "TrackerFactoryRecorder"]
