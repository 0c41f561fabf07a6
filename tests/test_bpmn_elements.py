"""
Tests for the BPMN process model records.

Tests:
- Required and optional fields
- The at-least-one-start-event rule
- Structural equality (including collection order)
- Immutability after construction
- Convenience readers
"""

import copy

import pytest
from pydantic import ValidationError

from bpmn_model.models.bpmn_elements import (
    BPMNElementType,
    Definitions,
    EndEvent,
    Gateway,
    Process,
    SequenceFlow,
    StartEvent,
    Task,
)
from bpmn_model.types import NonEmptyList


def make_process(**overrides) -> Process:
    """Helper to create a minimal Process."""
    fields = {"id": "p1", "start_events": NonEmptyList(StartEvent(id="s1"))}
    fields.update(overrides)
    return Process(**fields)


# ===========================
# Flow nodes and flows
# ===========================


@pytest.mark.parametrize(
    "node_cls,element_type",
    [
        (StartEvent, BPMNElementType.START_EVENT),
        (Task, BPMNElementType.TASK),
        (Gateway, BPMNElementType.GATEWAY),
        (EndEvent, BPMNElementType.END_EVENT),
    ],
)
def test_flow_node_kinds(node_cls, element_type):
    node = node_cls(id="n1")
    assert node.id == "n1"
    assert node.name is None
    assert node.element_type == element_type
    # The kind is a class attribute, not part of the data
    assert node.model_dump() == {"id": "n1", "name": None}


def test_node_requires_id():
    with pytest.raises(ValidationError):
        Task(name="No id")


def test_node_kinds_are_distinct():
    assert Task(id="x") != Gateway(id="x")


def test_sequence_flow_requires_refs():
    with pytest.raises(ValidationError) as exc_info:
        SequenceFlow(id="f1", source_ref="a")
    assert exc_info.value.errors()[0]["loc"] == ("target_ref",)


def test_sequence_flow_refs_not_resolved():
    """Dangling references are representable; resolution is left to consumers."""
    process = make_process(
        sequence_flows=[SequenceFlow(id="f1", source_ref="missing", target_ref="also_missing")]
    )
    assert process.sequence_flows[0].source_ref == "missing"


# ===========================
# Process
# ===========================


def test_process_requires_start_events():
    with pytest.raises(ValidationError) as exc_info:
        Process(id="p1")
    assert exc_info.value.errors()[0]["loc"] == ("start_events",)
    assert exc_info.value.errors()[0]["type"] == "missing"


def test_process_rejects_empty_start_events():
    with pytest.raises(ValidationError) as exc_info:
        Process(id="p1", start_events=[])
    assert exc_info.value.errors()[0]["type"] == "too_short"


def test_process_collections_default_empty():
    process = make_process()
    assert process.tasks == []
    assert process.gateways == []
    assert process.end_events == []
    assert process.sequence_flows == []
    assert len(process.start_events) == 1


def test_process_accepts_plain_list_of_start_events():
    process = Process(id="p1", start_events=[StartEvent(id="s1"), {"id": "s2"}])
    assert isinstance(process.start_events, NonEmptyList)
    assert [event.id for event in process.start_events] == ["s1", "s2"]


def test_process_rejects_wrong_node_kind_as_start_event():
    with pytest.raises(ValidationError):
        Process(id="p1", start_events=[Task(id="t1")])


def test_primary_start_event(order_process):
    assert order_process.primary_start_event.id == "start_web"


def test_iter_flow_nodes_order(order_process):
    assert [node.id for node in order_process.iter_flow_nodes()] == [
        "start_web",
        "start_phone",
        "task_check",
        "task_ship",
        "gw_stock",
        "end_shipped",
        "end_cancelled",
    ]


def test_process_is_frozen(order_process):
    with pytest.raises(ValidationError):
        order_process.name = "Renamed"


def test_start_events_can_still_grow(order_process):
    order_process.start_events.append(StartEvent(id="start_email"))
    assert len(order_process.start_events) == 3
    assert order_process.primary_start_event.id == "start_web"


class TestProcessEquality:
    """Tests for field-by-field structural equality."""

    def test_identical_construction_is_equal(self, order_process):
        start_events = NonEmptyList(StartEvent(id="start_web", name="Order received online"))
        start_events.append(StartEvent(id="start_phone", name="Order received by phone"))
        other = order_process.model_copy(update={"start_events": start_events})
        assert other == order_process

    def test_start_event_order_matters(self):
        reordered = NonEmptyList(StartEvent(id="start_web", name="Order received online"))
        reordered.append(StartEvent(id="start_email"))
        reordered.append(StartEvent(id="start_phone", name="Order received by phone"))
        original = NonEmptyList(StartEvent(id="start_web", name="Order received online"))
        original.append(StartEvent(id="start_phone", name="Order received by phone"))
        original.append(StartEvent(id="start_email"))

        assert make_process(start_events=reordered) != make_process(start_events=original)

    @pytest.mark.parametrize("field", ["tasks", "gateways", "end_events", "sequence_flows"])
    def test_collection_order_matters(self, order_process, field):
        items = list(getattr(order_process, field))
        if len(items) < 2:
            items.append(items[0].model_copy(update={"id": "extra"}))
            order_process = order_process.model_copy(update={field: items})
        swapped = order_process.model_copy(update={field: list(reversed(items))})
        assert swapped != order_process

    def test_name_matters(self, order_process):
        assert order_process.model_copy(update={"name": None}) != order_process


# ===========================
# Definitions
# ===========================


def test_definitions_defaults():
    definitions = Definitions()
    assert definitions.name is None
    assert definitions.target_namespace is None
    assert definitions.processes == []
    assert definitions.primary_process is None


def test_definitions_primary_process(definitions, order_process):
    assert definitions.primary_process == order_process


def test_definitions_nested_validation_error_location():
    with pytest.raises(ValidationError) as exc_info:
        Definitions(processes=[{"id": "p1", "start_events": []}])
    assert exc_info.value.errors()[0]["loc"] == ("processes", 0, "start_events")


# ===========================
# Copies
# ===========================


def test_model_copy_does_not_share_start_events():
    process = Process(id="p", start_events=[{"id": "s1"}])
    copied = process.model_copy()

    copied.start_events.append(StartEvent(id="s2"))

    assert len(process.start_events) == 1
    assert len(copied.start_events) == 2
    assert copied.start_events is not process.start_events


def test_copied_process_is_equal_to_original(order_process):
    assert copy.copy(order_process) == order_process
    assert order_process.model_copy(deep=True) == order_process


def test_definitions_copy_does_not_share_processes(definitions):
    copied = definitions.model_copy()

    copied.processes[0].start_events.append(StartEvent(id="start_email"))

    assert len(definitions.processes[0].start_events) == 2
    assert copied.processes is not definitions.processes
