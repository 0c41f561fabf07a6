"""
Serialization of BPMN definitions to and from JSON.
"""

from .codec import (
    JSONInput,
    decode_definitions,
    decode_process,
    dump_definitions,
    encode_definitions,
    encode_process,
    load_definitions,
)

__all__ = [
    "JSONInput",
    "decode_definitions",
    "decode_process",
    "encode_definitions",
    "encode_process",
    "load_definitions",
    "dump_definitions",
]
