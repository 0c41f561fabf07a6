"""
Container types shared by the BPMN model.
"""

from .non_empty import NonEmptyList

__all__ = ["NonEmptyList"]
