"""
Record encoders

Turn an assembled record (a mapping that always carries "level" and
"message") into a single output line. Three encodings are available:

- json:     {"level": "info", "message": "Started", "port": 8080, "timestamp": "..."}
- simple:   info: Started {"port": 8080, "timestamp": "..."}
- logstash: {"@message": "Started", "@timestamp": "...", "@fields": {"level": "info", "port": 8080}}

Every encoder stamps the record with a UTC ISO-8601 "timestamp" at format
time. Values that JSON cannot represent natively are rendered with str().
"""

import json
from abc import ABC, abstractmethod
from datetime import datetime, timezone

from beartype.typing import Any, Callable, Dict, Mapping, Sequence

FORMAT_SIMPLE = "simple"
FORMAT_JSON = "json"
FORMAT_LOGSTASH = "logstash"
FORMATS = (FORMAT_SIMPLE, FORMAT_JSON, FORMAT_LOGSTASH)
DEFAULT_FORMAT = FORMAT_JSON


def utc_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


def _dumps(obj: Any) -> str:
    return json.dumps(obj, default=str)


class RecordFormatter(ABC):
    """Base encoder. ``clock`` is injectable so output can be pinned in tests."""

    name = ""

    def __init__(self, clock: Callable[[], str] = utc_timestamp):
        self.clock = clock

    def _stamp(self, record: Mapping[str, Any]) -> Dict[str, Any]:
        entry = dict(record)
        entry["timestamp"] = self.clock()
        return entry

    @abstractmethod
    def format(self, record: Mapping[str, Any], extra: Sequence[Any] = ()) -> str: ...


class JsonFormatter(RecordFormatter):
    """One JSON object per line (NDJSON)"""

    name = FORMAT_JSON

    def format(self, record: Mapping[str, Any], extra: Sequence[Any] = ()) -> str:
        entry = self._stamp(record)
        if extra:
            entry["splat"] = list(extra)
        return _dumps(entry)


class SimpleFormatter(RecordFormatter):
    """
    ``<level>: <message>`` followed by the remaining keys as JSON.

    Positional extras are appended to the message, space separated.
    """

    name = FORMAT_SIMPLE

    def format(self, record: Mapping[str, Any], extra: Sequence[Any] = ()) -> str:
        entry = self._stamp(record)
        level = entry.pop("level", "")
        message = entry.pop("message", "")

        parts = [f"{level}: {message}"]
        parts.extend(str(item) for item in extra)
        if entry:
            parts.append(_dumps(entry))
        return " ".join(parts)


class LogstashFormatter(RecordFormatter):
    """Logstash event layout: message and timestamp at the top, everything else under @fields"""

    name = FORMAT_LOGSTASH

    def format(self, record: Mapping[str, Any], extra: Sequence[Any] = ()) -> str:
        entry = self._stamp(record)
        event = {"@message": entry.pop("message", None), "@timestamp": entry.pop("timestamp")}
        if extra:
            entry["splat"] = list(extra)
        event["@fields"] = entry
        return _dumps(event)


_FORMATTERS = {
    FORMAT_SIMPLE: SimpleFormatter,
    FORMAT_JSON: JsonFormatter,
    FORMAT_LOGSTASH: LogstashFormatter,
}


def get_formatter(name: str) -> RecordFormatter:
    """Return an encoder for ``name``; unrecognized names fall back to json"""
    return _FORMATTERS.get(name, JsonFormatter)()
