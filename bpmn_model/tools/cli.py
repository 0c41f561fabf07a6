"""
BPMN Model CLI Interface

Command-line tool for checking, inspecting and normalizing BPMN definitions
stored as JSON.
"""

import json
import logging
import sys
from typing import Any, Dict, Optional

import click

from bpmn_model import __version__
from bpmn_model.core.config import ModelConfig
from bpmn_model.core.errors import DecodeError
from bpmn_model.core.observability import LogLevel, ObservabilityManager
from bpmn_model.models.bpmn_elements import BPMNElementType, Definitions, Process
from bpmn_model.serialization.codec import dump_definitions, encode_definitions, load_definitions

logger = logging.getLogger(__name__)


@click.group()
@click.version_option(__version__, prog_name="bpmn-model")
@click.option(
    "--verbose/--quiet",
    default=None,
    help="Verbose (DEBUG) or quiet (ERROR) logging output",
)
@click.option(
    "--json-logs",
    is_flag=True,
    help="Emit logs as JSON lines on stderr",
)
@click.pass_context
def cli(ctx: click.Context, verbose: Optional[bool], json_logs: bool) -> None:
    """BPMN Model CLI - Check and normalize BPMN process definitions."""
    config = ModelConfig.from_env()
    if verbose is True:
        config.log_level = LogLevel.DEBUG
    elif verbose is False:
        config.log_level = LogLevel.ERROR
    if json_logs:
        config.json_logs = True

    ObservabilityManager.initialize(config.to_observability_config())
    ctx.obj = config


@cli.command()
@click.argument("definitions_file", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["text", "json"]),
    default="text",
    help="Output format",
)
def inspect(definitions_file: str, output_format: str) -> None:
    """
    Summarize the processes in a definitions file.

    \b
    Examples:
        bpmn-model inspect order.json
        bpmn-model inspect order.json --format json
    """
    definitions = _load_or_exit(definitions_file)
    summary = _summarize_definitions(definitions)

    if output_format == "json":
        click.echo(json.dumps(summary, indent=2))
        return

    click.echo(f"Definitions: {summary['name'] or '-'}")
    click.echo(f"Namespace: {summary['target_namespace'] or '-'}")
    click.echo(f"Processes: {len(summary['processes'])}")
    for process in summary["processes"]:
        click.echo(f"\n  Process {process['id']} ({process['name'] or 'unnamed'})")
        click.echo(f"    Primary start event: {process['primary_start_event']}")
        for key in ("start_events", "tasks", "gateways", "end_events", "sequence_flows"):
            click.echo(f"    {key.replace('_', ' ').capitalize()}: {process['counts'][key]}")


@cli.command()
@click.argument("definitions_file", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False),
    help="Output file path (stdout if omitted)",
)
@click.option(
    "--indent",
    type=click.IntRange(min=0),
    default=None,
    help="JSON indentation (defaults to BPMN_MODEL_JSON_INDENT or 2)",
)
@click.pass_obj
def normalize(
    config: ModelConfig, definitions_file: str, output: Optional[str], indent: Optional[int]
) -> None:
    """
    Decode a definitions file and write it back in canonical form.

    \b
    Examples:
        bpmn-model normalize order.json
        bpmn-model normalize order.json -o order.normalized.json --indent 4
    """
    definitions = _load_or_exit(definitions_file)
    effective_indent = indent if indent is not None else config.json_indent

    if not output:
        click.echo(encode_definitions(definitions, indent=effective_indent))
        return

    try:
        dump_definitions(definitions, output, indent=effective_indent)
    except OSError as e:
        click.echo(f"Error writing {output}: {e}", err=True)
        sys.exit(1)
    click.echo(f"Normalized definitions written to: {output}", err=True)


@cli.command()
@click.argument("definitions_file", type=click.Path(exists=True, dir_okay=False))
def check(definitions_file: str) -> None:
    """
    Check that a definitions file decodes into a valid model.

    Dangling flow references and duplicate IDs are not checked.
    """
    definitions = _load_or_exit(definitions_file)
    click.echo(f"OK: {len(definitions.processes)} process(es)")


@cli.command()
def info() -> None:
    """Show package version and supported element types."""
    info_dict = {
        "name": "BPMN Model",
        "version": __version__,
        "description": "Typed BPMN 2.0 process definitions with a JSON codec",
        "element_types": [element_type.value for element_type in BPMNElementType],
        "formats": ["json"],
    }

    click.echo(json.dumps(info_dict, indent=2))


# ==================
# Helper Functions
# ==================


def _load_or_exit(path: str) -> Definitions:
    """Load definitions, reporting decode and I/O errors as exit status 1."""
    try:
        return load_definitions(path)
    except DecodeError as e:
        logger.debug(f"Decode failed for {path}: {e}")
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
    except OSError as e:
        click.echo(f"Error reading {path}: {e}", err=True)
        sys.exit(1)


def _summarize_process(process: Process) -> Dict[str, Any]:
    return {
        "id": process.id,
        "name": process.name,
        "primary_start_event": process.primary_start_event.id,
        "counts": {
            "start_events": len(process.start_events),
            "tasks": len(process.tasks),
            "gateways": len(process.gateways),
            "end_events": len(process.end_events),
            "sequence_flows": len(process.sequence_flows),
        },
        "flow_nodes": [node.id for node in process.iter_flow_nodes()],
    }


def _summarize_definitions(definitions: Definitions) -> Dict[str, Any]:
    return {
        "name": definitions.name,
        "target_namespace": definitions.target_namespace,
        "processes": [_summarize_process(process) for process in definitions.processes],
    }


if __name__ == "__main__":
    cli()
