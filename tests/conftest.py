"""Pytest configuration for bpmn-model tests."""

import json

import pytest
from click.testing import CliRunner
from loguru import logger

from bpmn_model.core.observability import ObservabilityManager
from bpmn_model.models.bpmn_elements import (
    Definitions,
    EndEvent,
    Gateway,
    Process,
    SequenceFlow,
    StartEvent,
    Task,
)
from bpmn_model.types import NonEmptyList


@pytest.fixture(autouse=True)
def reset_observability():
    """Keep observability state from leaking between tests."""
    yield
    ObservabilityManager.reset()
    logger.remove()
    logger.disable("bpmn_model")


# ===========================
# Model fixtures
# ===========================


@pytest.fixture
def order_process_data():
    """Plain-data form of a small order process: start -> task -> gateway -> end."""
    return {
        "id": "order_process",
        "name": "Order Handling",
        "start_events": [
            {"id": "start_web", "name": "Order received online"},
            {"id": "start_phone", "name": "Order received by phone"},
        ],
        "tasks": [
            {"id": "task_check", "name": "Check stock"},
            {"id": "task_ship", "name": "Ship order"},
        ],
        "gateways": [{"id": "gw_stock", "name": "In stock?"}],
        "end_events": [
            {"id": "end_shipped", "name": "Order shipped"},
            {"id": "end_cancelled", "name": None},
        ],
        "sequence_flows": [
            {"id": "f1", "name": None, "source_ref": "start_web", "target_ref": "task_check"},
            {"id": "f2", "name": None, "source_ref": "start_phone", "target_ref": "task_check"},
            {"id": "f3", "name": None, "source_ref": "task_check", "target_ref": "gw_stock"},
            {"id": "f4", "name": "yes", "source_ref": "gw_stock", "target_ref": "task_ship"},
            {"id": "f5", "name": "no", "source_ref": "gw_stock", "target_ref": "end_cancelled"},
            {"id": "f6", "name": None, "source_ref": "task_ship", "target_ref": "end_shipped"},
        ],
    }


@pytest.fixture
def definitions_data(order_process_data):
    """Plain-data form of a definitions document with one process."""
    return {
        "name": "Sales",
        "target_namespace": "http://example.com/bpmn/sales",
        "processes": [order_process_data],
    }


@pytest.fixture
def order_process():
    """The order process built field by field."""
    start_events = NonEmptyList(StartEvent(id="start_web", name="Order received online"))
    start_events.append(StartEvent(id="start_phone", name="Order received by phone"))

    return Process(
        id="order_process",
        name="Order Handling",
        start_events=start_events,
        tasks=[Task(id="task_check", name="Check stock"), Task(id="task_ship", name="Ship order")],
        gateways=[Gateway(id="gw_stock", name="In stock?")],
        end_events=[EndEvent(id="end_shipped", name="Order shipped"), EndEvent(id="end_cancelled")],
        sequence_flows=[
            SequenceFlow(id="f1", source_ref="start_web", target_ref="task_check"),
            SequenceFlow(id="f2", source_ref="start_phone", target_ref="task_check"),
            SequenceFlow(id="f3", source_ref="task_check", target_ref="gw_stock"),
            SequenceFlow(id="f4", name="yes", source_ref="gw_stock", target_ref="task_ship"),
            SequenceFlow(id="f5", name="no", source_ref="gw_stock", target_ref="end_cancelled"),
            SequenceFlow(id="f6", source_ref="task_ship", target_ref="end_shipped"),
        ],
    )


@pytest.fixture
def definitions(order_process):
    return Definitions(
        name="Sales",
        target_namespace="http://example.com/bpmn/sales",
        processes=[order_process],
    )


@pytest.fixture
def definitions_file(tmp_path, definitions_data):
    """Definitions written to a JSON file."""
    path = tmp_path / "sales.json"
    path.write_text(json.dumps(definitions_data), encoding="utf-8")
    return path


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()
