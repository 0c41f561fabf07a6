"""
BPMN Model: Typed BPMN 2.0 Process Definitions

Pydantic models for a subset of BPMN 2.0 (definitions, processes, events,
tasks, gateways and sequence flows) in which a process without a start
event cannot be represented, plus a JSON codec that enforces the same rule
at the decoding boundary.
"""

from loguru import logger

# Core components
from bpmn_model.core import (
    BPMNModelError,
    DecodeError,
    MissingRequiredElementError,
    ModelConfig,
    ObservabilityConfig,
    ObservabilityManager,
)

# Models
from bpmn_model.models import (
    BPMNElementType,
    Definitions,
    EndEvent,
    Gateway,
    Process,
    SequenceFlow,
    StartEvent,
    Task,
)

# Serialization
from bpmn_model.serialization import (
    decode_definitions,
    decode_process,
    dump_definitions,
    encode_definitions,
    encode_process,
    load_definitions,
)
from bpmn_model.types import NonEmptyList

# Silent until an application initializes observability
logger.disable("bpmn_model")

__version__ = "0.1.0"

__all__ = [
    # Version
    "__version__",
    # Types
    "NonEmptyList",
    # Models
    "BPMNElementType",
    "Definitions",
    "Process",
    "StartEvent",
    "Task",
    "Gateway",
    "EndEvent",
    "SequenceFlow",
    # Serialization
    "decode_definitions",
    "decode_process",
    "encode_definitions",
    "encode_process",
    "load_definitions",
    "dump_definitions",
    # Core
    "BPMNModelError",
    "DecodeError",
    "MissingRequiredElementError",
    "ModelConfig",
    "ObservabilityConfig",
    "ObservabilityManager",
]
