"""
Field - one named value attached to a log record

A field's value is serialized once, when the field is created:

- ``None`` becomes an empty string
- ``str``, ``int``, ``float`` and ``bool`` are kept as they are
- callables are kept as a deferred value and called at emission time
- anything else is rendered to compact JSON text

Usage:
    Field("user", {"id": 7}).resolve()          # '{"id":7}'
    Field("rows", lambda: count_rows()).resolve()  # evaluated on each call
"""

import json
from dataclasses import dataclass

from beartype.typing import Any, Callable, Union

from fieldlog.errors import FieldSerializationError

PASS_THROUGH_TYPES = (str, int, float, bool)


@dataclass(frozen=True)
class LiteralValue:
    """Value serialized at attachment time"""

    serialized: Any

    def resolve(self) -> Any:
        return self.serialized


@dataclass(frozen=True)
class LazyValue:
    """Value produced by calling ``thunk()`` each time a record is emitted"""

    thunk: Callable[[], Any]

    def resolve(self) -> Any:
        return self.thunk()


FieldValue = Union[LiteralValue, LazyValue]


def serialize_value(name: str, value: Any) -> FieldValue:
    """
    Convert a raw value into its stored form.

    Args:
        name: Field name, used in error messages
        value: Raw value supplied by the caller

    Returns:
        LiteralValue or LazyValue

    Raises:
        FieldSerializationError: value is a circular structure
    """
    if value is None:
        return LiteralValue("")
    if isinstance(value, PASS_THROUGH_TYPES):
        return LiteralValue(value)
    if callable(value):
        return LazyValue(value)
    try:
        return LiteralValue(json.dumps(value, separators=(",", ":"), default=str))
    except (TypeError, ValueError) as e:
        raise FieldSerializationError(name, str(e)) from e


@dataclass(frozen=True)
class Field:
    """
    Immutable name/value/sensitivity triple.

    Raw values passed to the constructor are serialized in ``__post_init__``;
    already serialized LiteralValue/LazyValue instances are stored unchanged.
    """

    name: str
    value: FieldValue
    sensitive: bool = False

    def __post_init__(self):
        if not isinstance(self.value, (LiteralValue, LazyValue)):
            object.__setattr__(self, "value", serialize_value(self.name, self.value))

    @property
    def is_lazy(self) -> bool:
        return isinstance(self.value, LazyValue)

    def resolve(self) -> Any:
        """Value to place in an emitted record; deferred values are evaluated here."""
        return self.value.resolve()
