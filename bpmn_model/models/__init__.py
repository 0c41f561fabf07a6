"""
Data models for BPMN definitions.
"""

from .bpmn_elements import (
    BaseElement,
    BPMNElementType,
    Definitions,
    EndEvent,
    FlowNode,
    Gateway,
    Process,
    SequenceFlow,
    StartEvent,
    Task,
)

__all__ = [
    "BPMNElementType",
    "BaseElement",
    "StartEvent",
    "Task",
    "Gateway",
    "EndEvent",
    "FlowNode",
    "SequenceFlow",
    "Process",
    "Definitions",
]
