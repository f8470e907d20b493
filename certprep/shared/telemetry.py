import logging
import sys
import time
import uuid
from collections.abc import Callable
from contextvars import ContextVar
from functools import wraps
from typing import Any, ParamSpec, TypeVar, cast

# --- Prometheus Imports ---
from prometheus_client import REGISTRY, Counter, Histogram

# --- Context for Correlation IDs ---
correlation_id_ctx: ContextVar[str] = ContextVar("correlation_id", default="system")

# --- Prometheus Metric Definitions ---
DURATION_METRIC_NAME = "certprep_operation_duration_seconds"
ANSWERS_METRIC_NAME = "certprep_answers"

OPERATION_DURATION: Histogram
ANSWERS_TOTAL: Counter


def _get_or_create(name: str, factory: Callable[[], Any]) -> Any:
    """Re-imports (test runs, reloads) must reuse the registered collector."""
    try:
        return factory()
    except ValueError:
        return REGISTRY._names_to_collectors[name]


OPERATION_DURATION = cast(
    Histogram,
    _get_or_create(
        DURATION_METRIC_NAME,
        lambda: Histogram(
            DURATION_METRIC_NAME,
            "Time spent in a study engine operation",
            ["component", "method"],
        ),
    ),
)

ANSWERS_TOTAL = cast(
    Counter,
    _get_or_create(
        # Counters register under the name without the "_total" suffix
        ANSWERS_METRIC_NAME,
        lambda: Counter(
            ANSWERS_METRIC_NAME, "Answers recorded by outcome", ["outcome"]
        ),
    ),
)

# --- Type Definitions for Decorator ---
P = ParamSpec("P")
R = TypeVar("R")


def measure_time(metric_name: str) -> Callable[[Callable[P, R]], Callable[P, R]]:
    """
    Decorator for timing methods + logging.
    Expects to wrap instance methods; the owner's `telemetry` attribute,
    if any, receives the timing log line.
    """

    def decorator(func: Callable[P, R]) -> Callable[P, R]:
        @wraps(func)
        def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
            start = time.perf_counter()
            self_obj: Any = args[0] if args else None

            component = type(self_obj).__name__ if self_obj is not None else "Unknown"
            telemetry = getattr(self_obj, "telemetry", None)

            try:
                result = func(*args, **kwargs)
            except Exception as e:
                duration = time.perf_counter() - start
                OPERATION_DURATION.labels(
                    component=component, method=func.__name__
                ).observe(duration)
                if telemetry:
                    telemetry.log_error(
                        f"💥 Failed: {metric_name}",
                        e,
                        duration_ms=round(duration * 1000, 2),
                    )
                raise

            duration = time.perf_counter() - start
            OPERATION_DURATION.labels(component=component, method=func.__name__).observe(
                duration
            )
            if telemetry:
                telemetry.log_debug(
                    f"⏱️ {metric_name}", duration_ms=round(duration * 1000, 2)
                )
            return result

        return wrapper

    return decorator


class Telemetry:
    """
    Facade for Logs, Metrics, and Tracing.
    """

    def __init__(self, component_name: str) -> None:
        self.component = component_name
        self.logger: logging.Logger
        self._setup_logger()

    def _setup_logger(self) -> None:
        """Initializes the logger. Handlers are attached only once per name."""
        self.logger = logging.getLogger(f"certprep.{self.component}")

        if not self.logger.handlers:
            handler = logging.StreamHandler(sys.stdout)
            formatter = logging.Formatter(
                "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
            )
            handler.setFormatter(formatter)
            self.logger.addHandler(handler)
            self.logger.setLevel(logging.INFO)

    @staticmethod
    def start_trace() -> str:
        c_id = str(uuid.uuid4())[:8]
        correlation_id_ctx.set(c_id)
        return c_id

    @staticmethod
    def get_trace_id() -> str:
        return correlation_id_ctx.get()

    @staticmethod
    def count_answer(is_correct: bool) -> None:
        ANSWERS_TOTAL.labels(outcome="correct" if is_correct else "incorrect").inc()

    def _format(self, event: str, kwargs: dict[str, Any]) -> str:
        return f"[{self.get_trace_id()}] {event} | {kwargs}"

    def log_debug(self, event: str, **kwargs: Any) -> None:
        self.logger.debug(self._format(event, kwargs))

    def log_info(self, event: str, **kwargs: Any) -> None:
        self.logger.info(self._format(event, kwargs))

    def log_warning(self, event: str, **kwargs: Any) -> None:
        self.logger.warning(self._format(event, kwargs))

    def log_error(self, event: str, error: Exception, **kwargs: Any) -> None:
        trace_id = self.get_trace_id()
        msg = f"[{trace_id}] ❌ {event} | Error: {str(error)} | {kwargs}"
        self.logger.error(msg, exc_info=True)
