# Adapters layer - Concrete implementations (HTTP record store, in-memory, scripted)

from .http_sink import HttpRecordSink
from .memory_sink import InMemoryRecordSink
from .scripted_source import ScriptedTranscriptSource

__all__ = [
    "HttpRecordSink",
    "InMemoryRecordSink",
    "ScriptedTranscriptSource",
]
