"""
BPMN 2.0 Domain Model

Pydantic-based models for the subset of BPMN 2.0 covered by this package:
https://www.omg.org/spec/BPMN/2.0.2/

A ``Definitions`` root owns ``Process`` values; each process owns its start
events, tasks, gateways, end events and the sequence flows between them.
Flow references (``source_ref``/``target_ref``) are plain element IDs and
are not resolved here.
"""

from copy import copy
from enum import Enum
from typing import ClassVar, Iterator, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from bpmn_model.types import NonEmptyList


class BPMNElementType(str, Enum):
    """BPMN element types."""

    DEFINITIONS = "definitions"
    PROCESS = "process"
    START_EVENT = "startEvent"
    TASK = "task"
    GATEWAY = "gateway"
    END_EVENT = "endEvent"
    SEQUENCE_FLOW = "sequenceFlow"


class BaseElement(BaseModel):
    """Base class for all identified BPMN elements."""

    element_type: ClassVar[BPMNElementType]

    id: str = Field(..., description="Element ID (uniqueness is not enforced)")
    name: Optional[str] = Field(None, description="Element name/label")

    model_config = ConfigDict(frozen=True)


class StartEvent(BaseElement):
    """Start Event (process initiation point)."""

    element_type: ClassVar[BPMNElementType] = BPMNElementType.START_EVENT


class Task(BaseElement):
    """Generic BPMN Task."""

    element_type: ClassVar[BPMNElementType] = BPMNElementType.TASK


class Gateway(BaseElement):
    """Gateway (branching/merging point, no routing semantics attached)."""

    element_type: ClassVar[BPMNElementType] = BPMNElementType.GATEWAY


class EndEvent(BaseElement):
    """End Event (process termination point)."""

    element_type: ClassVar[BPMNElementType] = BPMNElementType.END_EVENT


FlowNode = Union[StartEvent, Task, Gateway, EndEvent]


class SequenceFlow(BaseElement):
    """Sequence Flow (control flow between elements)."""

    element_type: ClassVar[BPMNElementType] = BPMNElementType.SEQUENCE_FLOW

    source_ref: str = Field(..., description="Source element ID")
    target_ref: str = Field(..., description="Target element ID")


class Process(BaseElement):
    """BPMN Process (main workflow container).

    A process must start somewhere: ``start_events`` is a ``NonEmptyList``,
    so a process without a start event cannot be constructed or decoded.
    """

    element_type: ClassVar[BPMNElementType] = BPMNElementType.PROCESS

    start_events: NonEmptyList[StartEvent] = Field(..., description="Process entry points")
    tasks: List[Task] = Field(default_factory=list, description="Tasks")
    gateways: List[Gateway] = Field(default_factory=list, description="Gateways")
    end_events: List[EndEvent] = Field(default_factory=list, description="Process exit points")
    sequence_flows: List[SequenceFlow] = Field(default_factory=list, description="Control flows")

    def __copy__(self) -> "Process":
        copied = super().__copy__()
        # Frozen model: write the fresh container straight into __dict__
        copied.__dict__["start_events"] = copy(self.start_events)
        return copied

    @property
    def primary_start_event(self) -> StartEvent:
        return self.start_events.first()

    def iter_flow_nodes(self) -> Iterator[FlowNode]:
        """Yield start events, tasks, gateways and end events, in that order."""
        yield from self.start_events
        yield from self.tasks
        yield from self.gateways
        yield from self.end_events


class Definitions(BaseModel):
    """BPMN Definitions (root container)."""

    element_type: ClassVar[BPMNElementType] = BPMNElementType.DEFINITIONS

    name: Optional[str] = Field(None, description="Definitions name")
    target_namespace: Optional[str] = Field(None, description="Target namespace URI")
    processes: List[Process] = Field(default_factory=list, description="Process definitions")

    model_config = ConfigDict(frozen=True)

    def __copy__(self) -> "Definitions":
        copied = super().__copy__()
        copied.__dict__["processes"] = [copy(process) for process in self.processes]
        return copied

    @property
    def primary_process(self) -> Optional[Process]:
        """Get primary process (first process if available)."""
        return self.processes[0] if self.processes else None


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
