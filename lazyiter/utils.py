"""
Utility functions for lazyiter

Exceptions, logging setup, configuration loading, and helpers for measuring
the time and memory cost of lazy pipelines.
"""

import gc
import os
import sys
import time
import logging
import tracemalloc
from typing import Any, Dict, List, Mapping, Optional, Tuple

from lazyiter.models import IterConfig, PerformanceReport, report_to_dict

logger = logging.getLogger(__name__)


# ---------- Exceptions ----------

class LazyIterError(Exception):
    """Base class for lazyiter errors."""
    pass


class NotIterable(LazyIterError, TypeError):
    """Raised when a value cannot be converted to an Iterator."""
    pass


class InvalidStep(LazyIterError, ValueError):
    """Raised when a bounded range is given a step of zero."""
    pass


class SealedMethodError(LazyIterError, TypeError):
    """Raised when a subclass overrides a sealed Iterator method."""
    pass


# ---------- Logging ----------

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - [%(funcName)s:%(lineno)d] - %(message)s'


def setup_logging(config: Optional[IterConfig] = None) -> logging.Logger:
    """Configure structured logging for lazyiter and return the package logger"""
    config = config or get_config()
    logging.basicConfig(
        level=config.numeric_log_level,
        format=LOG_FORMAT,
        handlers=[logging.StreamHandler(sys.stdout)]
    )
    package_logger = logging.getLogger('lazyiter')
    package_logger.setLevel(config.numeric_log_level)
    return package_logger


# ---------- Configuration ----------

ENV_PREFIX = "LAZYITER_"

_config: Optional[IterConfig] = None


def load_config(env: Optional[Mapping[str, str]] = None) -> IterConfig:
    """Build an IterConfig from LAZYITER_* environment variables"""
    env = os.environ if env is None else env
    values = {}
    for field_name in IterConfig.model_fields:
        key = ENV_PREFIX + field_name.upper()
        if key in env:
            values[field_name] = env[key]
    return IterConfig.model_validate(values)


def get_config() -> IterConfig:
    global _config
    if _config is None:
        _config = load_config()
    return _config


def set_config(config: Optional[IterConfig]) -> None:
    """Replace the process-wide configuration (None reloads it from the environment)"""
    global _config
    _config = config


# ---------- Performance measurement ----------

_performance_history: List[PerformanceReport] = []


def measure_performance(operation_name: str, func, *args, **kwargs) -> Tuple[Any, PerformanceReport]:
    """
    Run func under tracemalloc and return its result with a PerformanceReport

    A trace that is already running (a caller's, or an enclosing
    measurement's) is left running; only its peak is reset so the report
    covers this call alone.
    """

    # Start memory tracking unless someone else owns the trace
    owns_trace = not tracemalloc.is_tracing()
    gc.collect()
    if owns_trace:
        tracemalloc.start()
    else:
        tracemalloc.reset_peak()
    baseline = tracemalloc.get_traced_memory()[0]

    start_time = time.perf_counter()
    result = None
    error = None
    try:
        try:
            result = func(*args, **kwargs)
        except Exception as e:
            error = e
        execution_time_ms = (time.perf_counter() - start_time) * 1000
        _, peak = tracemalloc.get_traced_memory()
    finally:
        if owns_trace:
            tracemalloc.stop()

    report = PerformanceReport(
        operation=operation_name,
        execution_time_ms=execution_time_ms,
        memory_usage_mb=max(peak - baseline, 0) / 1024 / 1024,
        success=error is None,
        result_size=len(result) if hasattr(result, "__len__") else None,
        error=str(error) if error is not None else None,
        timestamp=time.time()
    )
    _performance_history.append(report)

    if error is not None:
        logger.error(f"Operation {operation_name} failed after {execution_time_ms:.2f} ms: {error}")
        raise error

    logger.debug(report.summary_line())
    return result, report


def get_performance_summary() -> Dict[str, Any]:
    """Get summary of all performance metrics"""
    count = len(_performance_history)
    if count == 0:
        return {
            "total_operations": 0,
            "failed_operations": 0,
            "total_time_ms": 0.0,
            "avg_time_ms": 0.0,
            "max_memory_mb": 0.0,
            "operations": []
        }

    total_time = sum(r.execution_time_ms for r in _performance_history)
    return {
        "total_operations": count,
        "failed_operations": sum(1 for r in _performance_history if not r.success),
        "total_time_ms": total_time,
        "avg_time_ms": total_time / count,
        "max_memory_mb": max(r.memory_usage_mb for r in _performance_history),
        "operations": [report_to_dict(r) for r in _performance_history]
    }


def clear_performance_metrics():
    """Clear all performance metrics"""
    _performance_history.clear()
