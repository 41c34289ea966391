"""Reference collaborators for wiring and tests."""

from .events import LoggingEventSink, RecordingEventSink
from .graph import StaticGraphSource
from .redaction import KeyMaskingShield, PassThroughShield

__all__ = [
    "LoggingEventSink",
    "RecordingEventSink",
    "StaticGraphSource",
    "KeyMaskingShield",
    "PassThroughShield",
]
