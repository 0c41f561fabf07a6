"""
BPMN Model Tools

Command-line entry points for bpmn_model.
"""

from bpmn_model.tools.cli import cli

__all__ = ["cli"]
