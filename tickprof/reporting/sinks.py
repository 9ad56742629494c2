"""Delivery channels for rendered reports."""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass
from typing import Callable, Protocol, TextIO, runtime_checkable


@runtime_checkable
class ReportSink(Protocol):
    """Fire-and-forget receiver of report text."""

    def emit(self, text: str) -> None: ...


@dataclass(slots=True)
class StreamSink:
    """Writes reports to a text stream, stdout by default."""

    stream: TextIO | None = None

    def emit(self, text: str) -> None:
        target = self.stream if self.stream is not None else sys.stdout
        target.write(text + "\n")
        target.flush()


@dataclass(slots=True)
class LoggingSink:
    """Routes reports through a standard library logger."""

    logger_name: str = "tickprof.report"
    level: int = logging.INFO

    def emit(self, text: str) -> None:
        logging.getLogger(self.logger_name).log(self.level, "%s", text)


@dataclass(slots=True)
class CallbackSink:
    """Hands reports to an arbitrary callable, e.g. a mailer."""

    callback: Callable[[str], object]

    def emit(self, text: str) -> None:
        self.callback(text)
