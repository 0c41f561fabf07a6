"""
Runtime Configuration

Defines settings for logging, tracing and serialization output, loadable
from ``BPMN_MODEL_*`` environment variables.
"""

import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional

from bpmn_model.core.observability import LogLevel, ObservabilityConfig

logger = logging.getLogger(__name__)

ENV_PREFIX = "BPMN_MODEL_"

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


@dataclass
class ModelConfig:
    """Complete runtime configuration."""

    service_name: str = "bpmn-model"

    # Observability
    log_level: LogLevel = LogLevel.WARNING
    json_logs: bool = False
    enable_tracing: bool = True
    enable_metrics: bool = True

    # Serialization
    json_indent: Optional[int] = 2

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "ModelConfig":
        """Create config from environment variables.

        Unset variables keep their defaults; unparsable values are logged
        and replaced by the default as well.

        Args:
            environ: Mapping to read from (defaults to ``os.environ``)

        Returns:
            ModelConfig instance
        """
        env = os.environ if environ is None else environ
        defaults = cls()

        return cls(
            service_name=env.get(f"{ENV_PREFIX}SERVICE_NAME", defaults.service_name),
            log_level=_parse_log_level(env.get(f"{ENV_PREFIX}LOG_LEVEL"), defaults.log_level),
            json_logs=_parse_bool(env, "JSON_LOGS", defaults.json_logs),
            enable_tracing=_parse_bool(env, "ENABLE_TRACING", defaults.enable_tracing),
            enable_metrics=_parse_bool(env, "ENABLE_METRICS", defaults.enable_metrics),
            json_indent=_parse_indent(env.get(f"{ENV_PREFIX}JSON_INDENT"), defaults.json_indent),
        )

    def to_observability_config(self) -> ObservabilityConfig:
        return ObservabilityConfig(
            service_name=self.service_name,
            log_level=self.log_level,
            json_logs=self.json_logs,
            enable_tracing=self.enable_tracing,
            enable_metrics=self.enable_metrics,
        )


def _parse_log_level(raw: Optional[str], default: LogLevel) -> LogLevel:
    if raw is None:
        return default
    try:
        return LogLevel(raw.strip().upper())
    except ValueError:
        logger.warning(f"Ignoring invalid {ENV_PREFIX}LOG_LEVEL={raw!r}, using {default.value}")
        return default


def _parse_bool(env: Mapping[str, str], key: str, default: bool) -> bool:
    raw = env.get(f"{ENV_PREFIX}{key}")
    if raw is None:
        return default
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    logger.warning(f"Ignoring invalid {ENV_PREFIX}{key}={raw!r}, using {default}")
    return default


def _parse_indent(raw: Optional[str], default: Optional[int]) -> Optional[int]:
    if raw is None:
        return default
    if raw.strip().lower() in ("", "none"):
        return None
    try:
        indent = int(raw)
    except ValueError:
        logger.warning(f"Ignoring invalid {ENV_PREFIX}JSON_INDENT={raw!r}, using {default}")
        return default
    return indent if indent >= 0 else default


__all__ = ["ModelConfig", "ENV_PREFIX"]
