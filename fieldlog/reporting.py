"""
Error reporting collaborators

Logger.with_error() forwards every captured error to an ErrorReporter. The
default reporter hands errors to Sentry; until ``init`` has been called,
Sentry drops captures without sending anything.
"""

import sentry_sdk
from beartype.typing import Any, Callable, Protocol


class ErrorReporter(Protocol):
    """Contract a Logger expects from an error-tracking service"""

    def init(self, dsn: str, environment: str) -> None: ...

    def capture_exception(self, err: Any) -> None: ...

    def configure_scope(self, callback: Callable[[Any], None]) -> None: ...


class SentryErrorReporter:
    """ErrorReporter backed by the sentry_sdk client"""

    def init(self, dsn: str, environment: str) -> None:
        sentry_sdk.init(dsn=dsn, environment=environment)

    def capture_exception(self, err: Any) -> None:
        if isinstance(err, BaseException):
            sentry_sdk.capture_exception(err)
        else:
            # Sentry only builds exception events from exception instances
            sentry_sdk.capture_message(str(err), level="error")

    def configure_scope(self, callback: Callable[[Any], None]) -> None:
        """Run ``callback`` against the global scope so tags reach every future event"""
        callback(sentry_sdk.get_global_scope())
