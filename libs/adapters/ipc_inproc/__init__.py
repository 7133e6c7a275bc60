from .inproc import InprocTelemetryPubPort

__all__ = ["InprocTelemetryPubPort"]
