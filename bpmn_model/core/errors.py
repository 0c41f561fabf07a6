"""
Error Taxonomy

The model types make most invalid states unrepresentable, so errors only
arise at the boundary where external data is decoded into the model.
"""

from typing import Any, Dict, List, Optional, Sequence, Tuple, Union

from pydantic import ValidationError

Location = Tuple[Union[int, str], ...]

# pydantic error types meaning "a required element is absent or empty"
MISSING_ELEMENT_ERROR_TYPES = frozenset({"missing", "too_short"})


class BPMNModelError(Exception):
    """Base class for all bpmn_model errors."""


class DecodeError(BPMNModelError):
    """External representation could not be decoded into the model."""

    def __init__(self, message: str, errors: Optional[Sequence[Dict[str, Any]]] = None):
        super().__init__(message)
        self.message = message
        self.errors: List[Dict[str, Any]] = list(errors or [])

    def __str__(self) -> str:
        if not self.errors:
            return self.message
        details = "; ".join(
            f"{format_location(err['loc'])}: {err['msg']}" for err in self.errors
        )
        return f"{self.message}: {details}"


class MissingRequiredElementError(DecodeError):
    """A required element, or every element of a non-empty collection, is missing."""

    def __init__(
        self,
        message: str,
        location: Location,
        errors: Optional[Sequence[Dict[str, Any]]] = None,
    ):
        super().__init__(message, errors)
        self.location = location


def format_location(loc: Sequence[Union[int, str]]) -> str:
    """Render a pydantic error location as ``processes[0].start_events``."""
    rendered = ""
    for part in loc:
        if isinstance(part, int):
            rendered += f"[{part}]"
        else:
            rendered += f".{part}" if rendered else str(part)
    return rendered or "<root>"


def from_validation_error(exc: ValidationError, subject: str) -> DecodeError:
    """Translate a pydantic ``ValidationError`` into the project taxonomy.

    Args:
        exc: Error raised while validating external data
        subject: Name of the model being decoded (used in the message)

    Returns:
        ``MissingRequiredElementError`` when any failure is an absent or
        empty required element, ``DecodeError`` otherwise
    """
    errors = [
        {"loc": tuple(err["loc"]), "msg": err["msg"], "type": err["type"]}
        for err in exc.errors()
    ]

    missing = [err for err in errors if err["type"] in MISSING_ELEMENT_ERROR_TYPES]
    if missing:
        location = missing[0]["loc"]
        return MissingRequiredElementError(
            f"Invalid {subject}: missing required element '{format_location(location)}'",
            location=location,
            errors=errors,
        )

    return DecodeError(f"Invalid {subject}", errors=errors)


__all__ = [
    "BPMNModelError",
    "DecodeError",
    "MissingRequiredElementError",
    "format_location",
    "from_validation_error",
]
