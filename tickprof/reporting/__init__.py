"""Report renderers and delivery sinks."""

from tickprof.reporting.callgrind import render_callgrind
from tickprof.reporting.sinks import CallbackSink, LoggingSink, ReportSink, StreamSink
from tickprof.reporting.table import FunctionStats, build_stats, render_table

__all__ = [
    "CallbackSink",
    "FunctionStats",
    "LoggingSink",
    "ReportSink",
    "StreamSink",
    "build_stats",
    "render_callgrind",
    "render_table",
]
