"""
Sinks - output destinations for finished records

A sink receives ``log(severity, record, extra)`` for every emitted record,
drops records below its own minimum severity, encodes the rest with its
formatter and writes one line.

Failures while writing are not caught here; they surface from the logging
call that triggered them.

Usage:
    from fieldlog.sinks import StreamSink, FileSink, MultiSink
    from fieldlog.levels import Severity

    sink = MultiSink([
        StreamSink(level=Severity.INFO),
        FileSink("/var/log/app/app.log", level=Severity.DEBUG),
    ])
"""

import sys
from abc import ABC, abstractmethod
from typing import TextIO

from beartype.typing import Any, Iterable, Mapping, Optional, Protocol, Sequence, Union, runtime_checkable

from fieldlog.file_handler import FileHandler
from fieldlog.formatters import JsonFormatter, RecordFormatter
from fieldlog.levels import Severity


@runtime_checkable
class RecordSink(Protocol):
    """Contract a Logger expects from its output destination"""

    def log(self, severity: Severity, record: Mapping[str, Any], extra: Sequence[Any] = ()) -> None: ...


class Sink(ABC):
    """Base sink with level filtering and encoding"""

    def __init__(self, level: Union[Severity, str, int] = Severity.ERROR, formatter: Optional[RecordFormatter] = None):
        self.level = Severity.parse(level)
        self.formatter = formatter or JsonFormatter()

    def accepts(self, severity: Severity) -> bool:
        return severity >= self.level

    def log(self, severity: Severity, record: Mapping[str, Any], extra: Sequence[Any] = ()) -> None:
        if not self.accepts(severity):
            return
        self.write(self.formatter.format(record, extra) + "\n")

    @abstractmethod
    def write(self, line: str) -> None: ...

    def flush(self) -> None:
        pass

    def close(self) -> None:
        self.flush()


class StreamSink(Sink):
    """
    Writes to a text stream (default: sys.stderr).

    The default stream is looked up on every write so that replacing
    sys.stderr (test runners, CLI harnesses) is honoured.
    """

    def __init__(
        self,
        stream: Optional[TextIO] = None,
        level: Union[Severity, str, int] = Severity.ERROR,
        formatter: Optional[RecordFormatter] = None,
    ):
        super().__init__(level, formatter)
        self._stream = stream

    @property
    def stream(self) -> TextIO:
        return self._stream or sys.stderr

    def write(self, line: str) -> None:
        stream = self.stream
        stream.write(line)
        stream.flush()

    def flush(self) -> None:
        self.stream.flush()


class FileSink(Sink):
    """Appends records to a file through a FileHandler"""

    def __init__(
        self,
        path: str,
        level: Union[Severity, str, int] = Severity.ERROR,
        formatter: Optional[RecordFormatter] = None,
    ):
        super().__init__(level, formatter)
        self.handler = FileHandler(path)

    @property
    def path(self):
        return self.handler.filepath

    def write(self, line: str) -> None:
        self.handler.write(line)

    def flush(self) -> None:
        self.handler.flush()

    def close(self) -> None:
        self.handler.close()


class MultiSink:
    """
    Fan a record out to several sinks, in order.

    Each child applies its own level and formatter. An exception from one
    child stops the fan-out and propagates.
    """

    def __init__(self, sinks: Iterable[RecordSink]):
        self.sinks = list(sinks)

    def log(self, severity: Severity, record: Mapping[str, Any], extra: Sequence[Any] = ()) -> None:
        for sink in self.sinks:
            sink.log(severity, record, extra)

    def flush(self) -> None:
        for sink in self.sinks:
            sink.flush()

    def close(self) -> None:
        for sink in self.sinks:
            sink.close()
