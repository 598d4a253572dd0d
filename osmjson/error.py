"""
Error types.

```
                        (ParseError)
                             ╷
         ┌───────────────────┼─────────────────────────┐
         ╵                   ╵                         ╵
MalformedInputError     SchemaError       UnknownElementTypeError
```

Every error is fatal to the ``parse()`` call that raised it: parsing is a pure function
of its input, so retrying with the same input cannot succeed.
"""

from dataclasses import dataclass
from typing import TypeGuard


__docformat__ = "google"
__all__ = (
    "ParseError",
    "MalformedInputError",
    "SchemaError",
    "UnknownElementTypeError",
    "is_malformed_input",
    "is_schema_violation",
    "is_unknown_element_type",
)


class ParseError(Exception):
    """Base exception for input that cannot be turned into ``OsmData``."""


@dataclass(kw_only=True)
class MalformedInputError(ParseError):
    """
    The input is not valid JSON.

    This includes bytes that are not valid UTF-8, and the ``NaN`` and ``Infinity``
    literals that Python's decoder would otherwise accept.

    Attributes:
        cause: the error raised while decoding, usually a ``JSONDecodeError``
    """

    cause: ValueError

    def __str__(self) -> str:
        return f"malformed JSON: {self.cause}"


@dataclass(kw_only=True)
class SchemaError(ParseError):
    """
    A required field is missing, or a field has the wrong type.

    Attributes:
        path: location of the offending value, f.e. ``$.elements[2].lat``
        reason: what was expected at that location
    """

    path: str
    reason: str

    def __str__(self) -> str:
        return f"invalid value at '{self.path}': {self.reason}"


@dataclass(kw_only=True)
class UnknownElementTypeError(ParseError):
    """
    An element's ``type`` is neither "node", "way", nor "relation".

    Attributes:
        path: location of the element, f.e. ``$.elements[2]``
        element_type: the unrecognized ``type`` value
    """

    path: str
    element_type: str

    def __str__(self) -> str:
        return f"invalid element type {self.element_type!r} at '{self.path}'"


def is_malformed_input(err: ParseError | None) -> TypeGuard[MalformedInputError]:
    """``True`` if this is a ``MalformedInputError``."""
    return isinstance(err, MalformedInputError)


def is_schema_violation(err: ParseError | None) -> TypeGuard[SchemaError]:
    """``True`` if this is a ``SchemaError``."""
    return isinstance(err, SchemaError)


def is_unknown_element_type(err: ParseError | None) -> TypeGuard[UnknownElementTypeError]:
    """``True`` if this is an ``UnknownElementTypeError``."""
    return isinstance(err, UnknownElementTypeError)
