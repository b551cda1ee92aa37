"""
Configuration System - environment driven settings for fieldlog

Environment variables:
    ENVIRONMENT:     Runtime environment name. Only "development" discloses sensitive fields.
    LOG_LEVEL:       Console minimum severity: debug, info, error (default: error)
    LOG_FORMAT:      simple, json or logstash (default: json, also used for unknown values)
    LOG_FILE:        Path of a log file. Empty disables file output.
    LOG_FILE_LEVEL:  File minimum severity (default: LOG_LEVEL)

Values may reference other variables with ${VAR_NAME}, e.g.
LOG_FILE=/var/log/${ENVIRONMENT}/app.log
"""

import os
import re
from dataclasses import dataclass
from typing import TextIO

from beartype.typing import Any, Dict, Mapping, Optional, Tuple, Union
from serde import serialize, to_dict

from fieldlog.errors import ConfigurationError
from fieldlog.formatters import DEFAULT_FORMAT, FORMATS, get_formatter
from fieldlog.levels import Severity
from fieldlog.sinks import FileSink, MultiSink, StreamSink

DEVELOPMENT_ENVIRONMENT = "development"
DEFAULT_LEVEL = "error"

ENV_MAPPINGS = {
    "ENVIRONMENT": "environment",
    "LOG_LEVEL": "log_level",
    "LOG_FORMAT": "log_format",
    "LOG_FILE": "log_file_path",
    "LOG_FILE_LEVEL": "log_file_level",
}


@serialize
@dataclass(frozen=True)
class LoggingConfig:
    """
    Immutable logger configuration.

    Example:
        config = LoggingConfig.from_env()
        sink = config.build_sink()
    """

    environment: Optional[str] = None
    log_level: str = DEFAULT_LEVEL
    log_format: str = DEFAULT_FORMAT
    log_file_path: Optional[str] = None
    log_file_level: Optional[str] = None

    def __post_init__(self):
        if self.log_format not in FORMATS:
            object.__setattr__(self, "log_format", DEFAULT_FORMAT)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "LoggingConfig":
        """
        Build configuration from environment variables.

        Empty variables count as unset.

        Args:
            environ: Mapping to read instead of os.environ

        Returns:
            LoggingConfig instance
        """
        environ = os.environ if environ is None else environ
        values = {}
        for env_var, config_key in ENV_MAPPINGS.items():
            value = environ.get(env_var)
            if value:
                values[config_key] = cls._substitute_env_vars(value, environ)
        return cls(**values)

    @staticmethod
    def _substitute_env_vars(value: str, environ: Mapping[str, str]) -> str:
        """Replace ${VAR_NAME} references; unknown variables are left as written."""

        def replace_env(match):
            return environ.get(match.group(1), match.group(0))

        return re.sub(r"\$\{([^}]+)\}", replace_env, value)

    @property
    def development_mode(self) -> bool:
        return self.environment == DEVELOPMENT_ENVIRONMENT

    @property
    def min_level(self) -> Severity:
        return Severity.parse(self.log_level)

    @property
    def file_level(self) -> Severity:
        return Severity.parse(self.log_file_level or self.log_level)

    def validate(self) -> Tuple[bool, str]:
        """
        Validate level names.

        Returns:
            Tuple of (is_valid, error_message)
        """
        try:
            Severity.parse(self.log_level)
            Severity.parse(self.log_file_level or self.log_level)
        except ConfigurationError as e:
            return False, str(e)
        return True, ""

    def build_sink(self, stream: Optional[TextIO] = None) -> Union[StreamSink, MultiSink]:
        """
        Wire the configured outputs: a console sink, plus a file sink when
        log_file_path is set. Both share the configured encoding.

        Raises:
            ConfigurationError: log_level or log_file_level is not a known severity
        """
        console = StreamSink(stream, level=self.min_level, formatter=get_formatter(self.log_format))
        if not self.log_file_path:
            return console

        file_sink = FileSink(self.log_file_path, level=self.file_level, formatter=get_formatter(self.log_format))
        return MultiSink([console, file_sink])

    def describe(self) -> Dict[str, Any]:
        """Configuration as a plain dict, including derived values"""
        described = to_dict(self)
        described["development_mode"] = self.development_mode
        return described
