"""
Logger - shared configuration and global fields

A Logger is built once and passed by reference to everything that logs.
It owns the development-mode flag, the append-only list of global fields,
the sink and the error reporter, and hands out Contexts.

Usage:
    from fieldlog import Logger

    logger = Logger()  # configured from the environment
    logger.set_global_field("service", "billing")
    logger.with_field("invoice", invoice_id).info("Invoice sent")

    # Explicit wiring
    logger = Logger(config=LoggingConfig(environment="development"), sink=StreamSink(level="debug"))
"""

import threading

from beartype.typing import Any, Callable, Optional, Tuple

from fieldlog.config import LoggingConfig
from fieldlog.context import Context
from fieldlog.field import Field
from fieldlog.reporting import ErrorReporter, SentryErrorReporter
from fieldlog.sinks import RecordSink

UNKNOWN_ENVIRONMENT = "unknown"


class Logger:
    """
    Factory for Contexts plus level shortcuts.

    Global fields are published as an immutable tuple that is replaced on
    every append; emitters read whichever tuple is current without locking.
    """

    def __init__(
        self,
        config: Optional[LoggingConfig] = None,
        sink: Optional[RecordSink] = None,
        error_reporter: Optional[ErrorReporter] = None,
    ):
        """
        Args:
            config: Configuration (default: LoggingConfig.from_env())
            sink: Object with a ``log(severity, record, extra)`` method (default: config.build_sink())
            error_reporter: Error tracking collaborator (default: SentryErrorReporter)
        """
        self.config = config if config is not None else LoggingConfig.from_env()
        self.development_mode = self.config.development_mode
        self.sink = sink if sink is not None else self.config.build_sink()
        self.error_reporter = error_reporter if error_reporter is not None else SentryErrorReporter()
        self.error_reporting_enabled = False
        self._global_fields: Tuple[Field, ...] = ()
        self._lock = threading.Lock()

    @property
    def global_fields(self) -> Tuple[Field, ...]:
        return self._global_fields

    def set_global_field(self, name: str, value: Any) -> "Logger":
        """
        Add a field to every record emitted after this call.

        There is no way to remove a global field.
        """
        field = Field(name, value, False)
        with self._lock:
            self._global_fields = self._global_fields + (field,)
        return self

    def with_field(self, name: str, value: Any) -> Context:
        return Context(self).with_field(name, value)

    def with_sensitive_field(self, name: str, value: Any) -> Context:
        return Context(self).with_sensitive_field(name, value)

    def with_error(self, err: Any) -> Context:
        return Context(self).with_error(err)

    def error(self, message: Any = None, *extra: Any) -> None:
        Context(self).error(message, *extra)

    def info(self, message: Any = None, *extra: Any) -> None:
        Context(self).info(message, *extra)

    def debug(self, message: Any = None, *extra: Any) -> None:
        Context(self).debug(message, *extra)

    def enable_error_reporting(self, dsn: Optional[str]) -> "Logger":
        """
        Start sending captured errors to the error reporter.

        Tags the reporter scope with the configured environment name
        ("unknown" when unset). A falsy ``dsn`` leaves reporting untouched.
        """
        if dsn:
            environment = self.config.environment or UNKNOWN_ENVIRONMENT
            self.error_reporter.init(dsn, environment)
            self.error_reporter.configure_scope(lambda scope: scope.set_tag("environment", environment))
            self.error_reporting_enabled = True
        return self

    def configure_error_reporting(self, callback: Callable[[Any], None]) -> "Logger":
        """Pass a scope callback straight to the error reporter."""
        self.error_reporter.configure_scope(callback)
        return self


_default_logger: Optional[Logger] = None
_default_lock = threading.Lock()


def get_logger() -> Logger:
    """
    Process-wide Logger configured from the environment.

    Built on first use. Prefer passing an explicit Logger where practical.
    """
    global _default_logger
    if _default_logger is None:
        with _default_lock:
            if _default_logger is None:
                _default_logger = Logger()
    return _default_logger
