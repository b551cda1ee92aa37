"""
Context - field accumulator for one log call chain

A Context is a mutating fluent builder: every ``with_*`` call appends to the
same instance and returns it. It has a single owner at a time; sharing one
instance between threads that add fields concurrently is not supported.

Usage:
    logger.with_field("order_id", 42).with_sensitive_field("email", email).info("Order placed")
"""

import traceback
from typing import TYPE_CHECKING

from beartype.typing import Any, Dict, List, Tuple

from fieldlog.errors import ContextConstructionError
from fieldlog.field import Field
from fieldlog.levels import Severity

if TYPE_CHECKING:
    from fieldlog.logger import Logger

REDACTED = ""


def describe_error(err: Any) -> str:
    """
    String rendering used for the "error" field.

    Exceptions render as the final traceback line ("ValueError: bad input");
    anything else falls back to str().
    """
    if isinstance(err, BaseException):
        return "".join(traceback.format_exception_only(type(err), err)).strip()
    return str(err)


class Context:
    """
    Collects fields and emits them as one record per level call.

    Each level call re-reads the current fields, so a context may be emitted
    more than once, picking up fields added in between.
    """

    def __init__(self, logger: "Logger"):
        """
        Args:
            logger: Owning Logger (shared, not owned)

        Raises:
            ContextConstructionError: logger is None
        """
        if logger is None:
            raise ContextConstructionError()
        self._logger = logger
        self._fields: List[Field] = []

    @property
    def logger(self) -> "Logger":
        return self._logger

    @property
    def fields(self) -> Tuple[Field, ...]:
        return tuple(self._fields)

    def with_field(self, name: str, value: Any) -> "Context":
        """
        Append a field to the log line.

        Args:
            name: Field name
            value: Raw value; serialized immediately, callables are deferred

        Returns:
            This context
        """
        self._fields.append(Field(name, value, False))
        return self

    def with_sensitive_field(self, name: str, value: Any) -> "Context":
        """Append a field whose value is emitted as "" outside development mode."""
        self._fields.append(Field(name, value, True))
        return self

    def with_error(self, err: Any) -> "Context":
        """
        Report ``err`` to the logger's error reporter and add an "error" field.

        Reporter failures propagate; the field is only added after a successful capture.
        """
        self._logger.error_reporter.capture_exception(err)
        return self.with_field("error", describe_error(err))

    def error(self, message: Any = None, *extra: Any) -> None:
        self._print(Severity.ERROR, message, *extra)

    def info(self, message: Any = None, *extra: Any) -> None:
        self._print(Severity.INFO, message, *extra)

    def debug(self, message: Any = None, *extra: Any) -> None:
        self._print(Severity.DEBUG, message, *extra)

    def build_record(self, severity: Severity, message: Any = None) -> Dict[str, Any]:
        """
        Assemble the record for one emission.

        Global fields are applied first and context fields second, so a
        context field replaces a global field of the same name. Field names
        are not checked: a field called "level" or "message" replaces that
        key in the record.
        """
        record: Dict[str, Any] = {
            "level": severity.label,
            "message": message,
        }

        disclose_sensitive = self._logger.development_mode
        for field in (*self._logger.global_fields, *self._fields):
            value = field.resolve()
            if field.sensitive and not disclose_sensitive:
                value = REDACTED
            record[field.name] = value

        return record

    def _print(self, severity: Severity, message: Any, *extra: Any) -> None:
        record = self.build_record(severity, message)
        self._logger.sink.log(severity, record, extra)
