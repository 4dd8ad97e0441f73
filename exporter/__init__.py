"""Runtime for synthetic browser checks exported as Prometheus metrics."""

from .config import ExporterConfig, load_config
from .errors import ActionError, ConfigLoadError, ExporterError, SessionInitError
from .executor import ActionDispatcher, ExecutionOutcome, RunExecutor, RunState
from .reporter import PrometheusSink, ResultReporter

__all__ = [
    "ActionDispatcher",
    "ActionError",
    "ConfigLoadError",
    "ExecutionOutcome",
    "ExporterConfig",
    "ExporterError",
    "PrometheusSink",
    "ResultReporter",
    "RunExecutor",
    "RunState",
    "SessionInitError",
    "load_config",
]
