"""
Defines Prometheus metrics for the extraction engine.
"""

from __future__ import annotations

from typing import Any, Dict

from prometheus_client import REGISTRY as _PROM_REGISTRY
from prometheus_client import Counter as _OrigCounter
from prometheus_client import Histogram as _OrigHistogram

# ---------------------------------------------------------------------------
# Duplicate-safe Prometheus metric wrappers
# ---------------------------------------------------------------------------
# Re-importing this module (test reloads, multiple entry points) must not
# register the same collector twice.


def _duplicate_safe_factory(metric_cls):
    """Return a factory that reuses an existing collector if already present."""

    def _factory(name: str, documentation: str, *args, **kwargs):  # type: ignore[no-untyped-def]
        existing = _PROM_REGISTRY._names_to_collectors.get(name)
        if existing is not None:
            return existing

        try:
            return metric_cls(name, documentation, *args, **kwargs)
        except ValueError:
            # Registration lost the race, fall back to the now-existing collector.
            return _PROM_REGISTRY._names_to_collectors[name]

    return _factory


Counter = _duplicate_safe_factory(_OrigCounter)
Histogram = _duplicate_safe_factory(_OrigHistogram)


def _create_metrics() -> Dict[str, Any]:
    return {
        "extractions": Counter(
            "gleancore_extractions_total",
            "Total number of extraction calls",
            ["outcome"],
        ),
        "extraction_duration_seconds": Histogram(
            "gleancore_extraction_duration_seconds",
            "Wall time of one extraction call",
            buckets=(0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0),
        ),
        "text_fallbacks": Counter(
            "gleancore_text_fallbacks_total",
            "Main-text fallback retries taken",
            ["stage"],
        ),
        "extracted_items": Histogram(
            "gleancore_extracted_items",
            "Number of items found per extraction",
            ["kind"],
            buckets=(0, 1, 2, 5, 10, 25, 50, 100, 250),
        ),
    }


METRICS: Dict[str, Any] = _create_metrics()
