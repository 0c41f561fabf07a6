"""
Observability Infrastructure

Provides structured logging, tracing, and metrics collection for bpmn_model.
Logging sinks are managed by loguru; library modules keep using
``logging.getLogger(__name__)`` and their records are routed into loguru
once the manager is initialized. Tracing and metrics use OpenTelemetry.

Nothing is configured on import: until ``ObservabilityManager.initialize``
is called, ``span`` yields ``None``, ``record_metric`` only logs, and
loguru output from ``bpmn_model`` stays disabled. Sinks always write to the
current ``sys.stderr`` so stdout is left to command output.
"""

import contextlib
import functools
import json
import logging
import sys
import time
import traceback
from enum import Enum
from typing import Any, Callable, Dict, Iterator, Optional, TypeVar, Union

from loguru import logger
from opentelemetry.sdk.metrics import MeterProvider
from opentelemetry.sdk.metrics.export import InMemoryMetricReader
from opentelemetry.sdk.resources import SERVICE_NAME, Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.trace import Span

F = TypeVar("F", bound=Callable[..., Any])


class LogLevel(str, Enum):
    """Log level enumeration."""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class ObservabilityConfig:
    """Configuration for observability."""

    def __init__(
        self,
        service_name: str = "bpmn-model",
        log_level: Union[str, LogLevel] = LogLevel.WARNING,
        json_logs: bool = False,
        enable_tracing: bool = True,
        enable_metrics: bool = True,
    ):
        """Initialize observability configuration."""
        self.service_name = service_name
        self.log_level = log_level.value if isinstance(log_level, LogLevel) else log_level.upper()
        self.json_logs = json_logs
        self.enable_tracing = enable_tracing
        self.enable_metrics = enable_metrics


class JSONFormatter:
    """Render a loguru record as a single JSON line."""

    def __call__(self, record: Dict[str, Any]) -> str:
        """Format log record as JSON."""
        log_data = {
            "timestamp": record["time"].isoformat(),
            "level": record["level"].name,
            "logger": record["name"],
            "function": record["function"],
            "line": record["line"],
            "message": record["message"],
        }

        if record["extra"]:
            log_data["extra"] = record["extra"]

        if record["exception"]:
            exc = record["exception"]
            log_data["exception"] = {
                "type": exc.type.__name__ if exc.type else None,
                "value": str(exc.value),
                "traceback": "".join(traceback.format_exception(exc.type, exc.value, exc.traceback)),
            }

        return json.dumps(log_data, default=str)


class InterceptHandler(logging.Handler):
    """Route stdlib ``logging`` records into loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level: Union[str, int] = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # Walk back past the logging module so loguru reports the caller
        frame, depth = logging.currentframe(), 2
        while frame is not None and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(level, record.getMessage())


class ObservabilityManager:
    """Centralized observability management."""

    _instance: Optional["ObservabilityManager"] = None

    def __init__(self, config: ObservabilityConfig):
        """Initialize observability manager."""
        self.config = config
        self.tracer = None
        self.meter = None
        self.metric_reader: Optional[InMemoryMetricReader] = None

        self._setup_logging()

        resource = Resource(attributes={SERVICE_NAME: config.service_name})
        if config.enable_tracing:
            self._setup_tracing(resource)
        if config.enable_metrics:
            self._setup_metrics(resource)

        logger.debug(
            f"Observability initialized: service={config.service_name}, "
            f"log_level={config.log_level}"
        )

    def _setup_logging(self) -> None:
        """Set up loguru sinks and bridge stdlib logging."""
        logger.remove()

        if self.config.json_logs:
            formatter = JSONFormatter()
            logger.add(
                lambda message: sys.stderr.write(formatter(message.record) + "\n"),
                level=self.config.log_level,
                colorize=False,
            )
        else:
            log_format = (
                "<level>{level: <8}</level> | "
                "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
                "<level>{message}</level>"
            )
            logger.add(
                lambda message: sys.stderr.write(message),
                format=log_format,
                level=self.config.log_level,
                colorize=sys.stderr.isatty(),
                backtrace=True,
                diagnose=False,
            )

        logger.enable("bpmn_model")
        logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)

    def _setup_tracing(self, resource: Resource) -> None:
        """Set up OpenTelemetry tracing."""
        self.tracer_provider = TracerProvider(resource=resource)
        self.tracer = self.tracer_provider.get_tracer("bpmn_model")
        logger.debug("OpenTelemetry tracing initialized")

    def _setup_metrics(self, resource: Resource) -> None:
        """Set up OpenTelemetry metrics."""
        self.metric_reader = InMemoryMetricReader()
        self.meter_provider = MeterProvider(resource=resource, metric_readers=[self.metric_reader])
        self.meter = self.meter_provider.get_meter("bpmn_model")

        self.counter = self.meter.create_counter(
            "bpmn_model_operations_total",
            description="Total number of encode/decode operations",
            unit="1",
        )
        self.histogram = self.meter.create_histogram(
            "bpmn_model_operation_duration_ms",
            description="Operation duration in milliseconds",
            unit="ms",
        )
        logger.debug("OpenTelemetry metrics initialized")

    @classmethod
    def initialize(cls, config: Optional[ObservabilityConfig] = None) -> "ObservabilityManager":
        """Initialize the singleton instance.

        An explicit config always replaces the current instance; without one
        the existing instance is returned (or a default one is created).
        """
        if config is not None or cls._instance is None:
            cls._instance = cls(config or ObservabilityConfig())
        return cls._instance

    @classmethod
    def current(cls) -> Optional["ObservabilityManager"]:
        """Get the singleton instance, if initialized."""
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        """Drop the singleton instance (sinks stay as configured)."""
        cls._instance = None


@contextlib.contextmanager
def span(name: str, attributes: Optional[Dict[str, Any]] = None) -> Iterator[Optional[Span]]:
    """Context manager for creating spans."""
    manager = ObservabilityManager.current()

    if manager is not None and manager.tracer is not None:
        with manager.tracer.start_as_current_span(name) as span_obj:
            if attributes:
                for key, value in attributes.items():
                    span_obj.set_attribute(key, value)
            yield span_obj
    else:
        yield None


def log_execution(
    level: Union[str, LogLevel] = LogLevel.DEBUG,
    include_args: bool = True,
    include_result: bool = False,
    include_duration: bool = True,
) -> Callable[[F], F]:
    """
    Decorator for logging function execution.

    Args:
        level: Logging level
        include_args: Whether to log function arguments
        include_result: Whether to log function result
        include_duration: Whether to log execution duration
    """
    log_level = level.value if isinstance(level, LogLevel) else level

    def decorator(func: F) -> F:
        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            func_name = f"{func.__module__}.{func.__qualname__}"
            log_data: Dict[str, Any] = {"function": func_name}

            if include_args:
                arg_names = func.__code__.co_varnames[: func.__code__.co_argcount]
                log_data["args"] = {k: str(v)[:200] for k, v in zip(arg_names, args)}
                log_data["kwargs"] = {k: str(v)[:200] for k, v in kwargs.items()}

            start_time = time.perf_counter()

            try:
                result = func(*args, **kwargs)
            except Exception as e:
                if include_duration:
                    log_data["duration_ms"] = (time.perf_counter() - start_time) * 1000
                log_data["error"] = str(e)
                logger.bind(**log_data).log(log_level, f"Function failed: {func_name}")
                raise

            if include_result:
                log_data["result"] = str(result)[:200]
            if include_duration:
                duration_ms = (time.perf_counter() - start_time) * 1000
                log_data["duration_ms"] = duration_ms
                record_metric(f"{func.__name__}_duration", duration_ms)

            logger.bind(**log_data).log(log_level, f"Function executed: {func_name}")
            return result

        return wrapper  # type: ignore

    return decorator


def record_metric(
    metric_name: str,
    value: Union[int, float],
    attributes: Optional[Dict[str, str]] = None,
) -> None:
    """
    Record a metric value with OpenTelemetry.

    Integer values (and names ending in ``_total``) go to the counter,
    everything else to the duration histogram.

    Args:
        metric_name: Name of the metric
        value: Metric value
        attributes: Optional attributes for the metric
    """
    manager = ObservabilityManager.current()
    metric_attributes = {"metric": metric_name, **(attributes or {})}

    if manager is not None and manager.meter is not None:
        if metric_name.endswith("_total") or isinstance(value, int):
            manager.counter.add(value, attributes=metric_attributes)
        else:
            manager.histogram.record(value, attributes=metric_attributes)

    logger.bind(metric=metric_name, value=value, attributes=attributes).trace(
        f"Metric recorded: {metric_name}={value}"
    )


class Timer:
    """Context manager for timing operations."""

    def __init__(self, name: str, log: bool = True):
        """Initialize timer."""
        self.name = name
        self.log = log
        self.start_time: float = 0
        self.elapsed: float = 0

    def __enter__(self) -> "Timer":
        """Enter context."""
        self.start_time = time.perf_counter()
        return self

    def __exit__(self, *args: Any) -> None:
        """Exit context."""
        self.elapsed = time.perf_counter() - self.start_time
        if self.log:
            logger.debug(f"Timer '{self.name}': {self.elapsed:.3f}s")
            record_metric(f"{self.name}_duration", self.elapsed * 1000)


__all__ = [
    "LogLevel",
    "ObservabilityConfig",
    "ObservabilityManager",
    "JSONFormatter",
    "InterceptHandler",
    "span",
    "log_execution",
    "record_metric",
    "Timer",
]
