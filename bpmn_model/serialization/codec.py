"""
JSON Codec

Boundary between the external JSON representation and the model. This is
the one place where runtime checks happen: a JSON array cannot enforce
"at least one start event" by itself, so decoding validates it and
reports failures with the project's error taxonomy.
"""

import logging
from pathlib import Path
from typing import Any, Mapping, Optional, Type, TypeVar, Union

from pydantic import BaseModel, ValidationError

from bpmn_model.core.errors import DecodeError, from_validation_error
from bpmn_model.core.observability import Timer, log_execution, span
from bpmn_model.models.bpmn_elements import Definitions, Process

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)

JSONInput = Union[str, bytes, bytearray, Mapping[str, Any]]


def _decode(model: Type[ModelT], data: JSONInput) -> ModelT:
    subject = model.__name__
    with span(f"decode.{subject}", {"input.kind": type(data).__name__}), Timer(f"decode_{subject}"):
        try:
            if isinstance(data, (str, bytes, bytearray)):
                result = model.model_validate_json(data)
            elif isinstance(data, Mapping):
                result = model.model_validate(dict(data))
            else:
                raise DecodeError(
                    f"Invalid {subject}: expected JSON text or a mapping, got {type(data).__name__}"
                )
        except ValidationError as exc:
            error = from_validation_error(exc, subject)
            logger.debug(f"Rejected {subject}: {error}")
            raise error from exc

    logger.debug(f"Decoded {subject} '{getattr(result, 'id', None) or getattr(result, 'name', None)}'")
    return result


def _encode(value: BaseModel, indent: Optional[int]) -> str:
    subject = type(value).__name__
    with span(f"encode.{subject}"), Timer(f"encode_{subject}"):
        return value.model_dump_json(indent=indent)


def decode_definitions(data: JSONInput) -> Definitions:
    """Decode a ``Definitions`` document.

    Args:
        data: JSON text/bytes or an already-parsed mapping

    Returns:
        The decoded definitions

    Raises:
        MissingRequiredElementError: a required element is absent, or a
            process has no start event
        DecodeError: any other malformed input
    """
    return _decode(Definitions, data)


def decode_process(data: JSONInput) -> Process:
    """Decode a single ``Process`` (same error contract as ``decode_definitions``)."""
    return _decode(Process, data)


def encode_definitions(definitions: Definitions, indent: Optional[int] = None) -> str:
    """Encode definitions as JSON text; absent optional fields become ``null``."""
    return _encode(definitions, indent)


def encode_process(process: Process, indent: Optional[int] = None) -> str:
    return _encode(process, indent)


@log_execution()
def load_definitions(path: Union[str, Path]) -> Definitions:
    """Read and decode a UTF-8 JSON definitions file."""
    return decode_definitions(Path(path).read_bytes())


@log_execution()
def dump_definitions(
    definitions: Definitions, path: Union[str, Path], indent: Optional[int] = 2
) -> Path:
    """Encode definitions and write them to ``path`` (UTF-8)."""
    target = Path(path)
    target.write_text(encode_definitions(definitions, indent=indent) + "\n", encoding="utf-8")
    return target


__all__ = [
    "JSONInput",
    "decode_definitions",
    "decode_process",
    "encode_definitions",
    "encode_process",
    "load_definitions",
    "dump_definitions",
]
