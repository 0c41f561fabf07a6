"""
Core infrastructure module for bpmn_model.

Provides the error taxonomy, logging, observability, and configuration management.
"""

from .config import ModelConfig
from .errors import (
    BPMNModelError,
    DecodeError,
    MissingRequiredElementError,
    format_location,
    from_validation_error,
)
from .observability import (
    LogLevel,
    ObservabilityConfig,
    ObservabilityManager,
    Timer,
    log_execution,
    record_metric,
    span,
)

__all__ = [
    # Errors
    "BPMNModelError",
    "DecodeError",
    "MissingRequiredElementError",
    "format_location",
    "from_validation_error",
    # Observability
    "LogLevel",
    "ObservabilityConfig",
    "ObservabilityManager",
    "Timer",
    "log_execution",
    "record_metric",
    "span",
    # Configuration
    "ModelConfig",
]
