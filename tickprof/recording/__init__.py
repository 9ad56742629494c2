"""Call-tree statistics recording."""

from tickprof.recording.recorder import CallTreeRecorder, record_call

__all__ = ["CallTreeRecorder", "record_call"]
