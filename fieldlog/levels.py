"""
Severity levels for fieldlog records.

Values match the numeric levels of the standard library ``logging`` module so
that filtering (``severity >= sink.level``) reads the same way it does there.
"""

from enum import IntEnum

from beartype.typing import Union

from fieldlog.errors import ConfigurationError


class Severity(IntEnum):
    """Record severity, totally ordered: ERROR > INFO > DEBUG"""

    DEBUG = 10
    INFO = 20
    ERROR = 40

    @property
    def label(self) -> str:
        """Lowercase name used in emitted records ("error", "info", "debug")"""
        return self.name.lower()

    @classmethod
    def parse(cls, value: Union["Severity", int, str]) -> "Severity":
        """
        Resolve a severity from a name or number.

        Names are case-insensitive. Unknown values raise ConfigurationError.

        Example:
            Severity.parse("Info")  # Severity.INFO
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls[value.strip().upper()]
            except KeyError:
                raise ConfigurationError(
                    f"Invalid log level: {value}. Must be one of: {', '.join(m.label for m in cls)}"
                ) from None
        if isinstance(value, int) and not isinstance(value, bool):
            try:
                return cls(value)
            except ValueError:
                raise ConfigurationError(
                    f"Invalid log level: {value}. Must be one of: {', '.join(str(m.value) for m in cls)}"
                ) from None
        raise ConfigurationError(f"Invalid log level type: {type(value).__name__}")
