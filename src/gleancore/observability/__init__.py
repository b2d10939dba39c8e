"""Logging and metrics for the extraction engine."""

from __future__ import annotations

from typing import Any, Dict, Optional

import structlog

from .logging import configure_logging
from .metrics import METRICS

__all__ = ["configure_logging", "METRICS", "increment", "histogram", "export_prometheus"]

_logger = structlog.get_logger(__name__)


# Metric recording must never affect the caller.
def increment(name: str, value: float = 1.0, labels: Optional[Dict[str, Any]] = None) -> None:
    """Increment a counter metric."""
    if name not in METRICS:
        return
    try:
        metric = METRICS[name]
        if labels is not None:
            metric.labels(**labels).inc(value)
        else:
            metric.inc(value)
    except (ValueError, KeyError) as e:
        _logger.debug("metric_record_failed", metric=name, error=str(e))


def histogram(name: str, value: float, labels: Optional[Dict[str, Any]] = None) -> None:
    """Observe a histogram metric."""
    if name not in METRICS:
        return
    try:
        metric = METRICS[name]
        if labels is not None:
            metric.labels(**labels).observe(value)
        else:
            metric.observe(value)
    except (ValueError, KeyError) as e:
        _logger.debug("metric_record_failed", metric=name, error=str(e))


def export_prometheus() -> str:
    """Export metrics in Prometheus format."""
    from prometheus_client import generate_latest

    return generate_latest().decode("utf-8")
