class FieldLogError(Exception):
    """Base class for errors raised by fieldlog itself.

    Failures raised by sinks or error reporters are never wrapped in this
    type; they reach the caller of the emitting method unchanged.
    """


class ContextConstructionError(FieldLogError, ValueError):
    """Raised when a Context is created without an owning Logger."""

    def __init__(self, reason: str = "context requires a logger"):
        self.reason = reason
        super().__init__(reason)


class FieldSerializationError(FieldLogError, ValueError):
    """Exception raised when a field value cannot be rendered as JSON text.

    Attributes:
        field_name: name of the field being attached
        reason: message of the underlying encoder error
    """

    def __init__(self, field_name: str, reason=""):
        self.field_name = field_name
        self.reason = reason
        super().__init__(f"Unable to serialize value of field '{field_name}'. {reason}")


class ConfigurationError(FieldLogError, ValueError):
    """Raised for configuration values fieldlog cannot interpret (e.g. unknown level names)."""
