"""
fieldlog - structured logging facade

Attach named fields to a log line, redact sensitive ones outside
development, route records through sinks and forward errors to Sentry.

Usage:
    from fieldlog import get_logger

    log = get_logger()
    log.set_global_field("service", "billing")
    log.with_field("invoice", 1042).with_sensitive_field("card", card_number).info("Charged")

Configuration:
    export ENVIRONMENT=development
    export LOG_LEVEL=debug
    export LOG_FORMAT=logstash
    export LOG_FILE=/var/log/billing/app.log
"""

__version__ = "1.0.0"

from fieldlog.config import LoggingConfig
from fieldlog.context import Context
from fieldlog.errors import ConfigurationError, ContextConstructionError, FieldLogError, FieldSerializationError
from fieldlog.field import Field
from fieldlog.levels import Severity
from fieldlog.logger import Logger, get_logger
from fieldlog.reporting import ErrorReporter, SentryErrorReporter
from fieldlog.sinks import FileSink, MultiSink, RecordSink, Sink, StreamSink

__all__ = [
    "ConfigurationError",
    "Context",
    "ContextConstructionError",
    "ErrorReporter",
    "Field",
    "FieldLogError",
    "FieldSerializationError",
    "FileSink",
    "Logger",
    "LoggingConfig",
    "MultiSink",
    "RecordSink",
    "SentryErrorReporter",
    "Severity",
    "Sink",
    "StreamSink",
    "get_logger",
]
