# Ports layer - Abstract interfaces (Protocols)

from .record_sink import RecordSink, RecordSinkError
from .speech import TranscriptSource

__all__ = [
    "RecordSink",
    "RecordSinkError",
    "TranscriptSource",
]
