"""Decoding of raw event text into a record."""

import json
from typing import Any

SHAPE_MESSAGE = "Please provide a single JSON object, not an array or primitive."


class EventParseError(Exception):
    """Raised when raw text cannot be turned into an event record."""


class InvalidSyntax(EventParseError):
    """Text is not well-formed JSON."""


class InvalidShape(EventParseError):
    """Text is valid JSON but not a single object."""

    def __init__(self, message: str = SHAPE_MESSAGE):
        super().__init__(message)


def _reject_constant(name: str) -> Any:
    # json accepts NaN/Infinity by default, strict JSON does not
    raise ValueError(f"Unexpected token {name} is not valid JSON")


def parse_event(text: str) -> dict[str, Any]:
    """Parse raw text into an event record.

    Args:
        text: JSON text holding a single object

    Returns:
        The decoded object, keys and values untouched

    Raises:
        InvalidSyntax: If the text is not well-formed JSON
        InvalidShape: If the decoded value is not an object
    """
    try:
        value = json.loads(text, parse_constant=_reject_constant)
    except (ValueError, RecursionError) as e:
        raise InvalidSyntax(str(e) or "Invalid JSON.") from e

    if not isinstance(value, dict):
        raise InvalidShape()

    return value
