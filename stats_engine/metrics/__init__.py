"""Metric catalog for goal tracking.

Submodules:
    catalog: Metric definitions, calculation types and the default catalog

Example:
    >>> from stats_engine.metrics import default_catalog
    >>> catalog = default_catalog()
    >>> [m.name for m in catalog.by_category("defense")]
    ['Blocks', 'Rebounds', 'Steals', 'Stocks']
"""

from __future__ import annotations

from stats_engine.metrics.catalog import (
    DEFAULT_METRICS,
    CalculationType,
    MetricCatalog,
    MetricDefinition,
    default_catalog,
)

__all__ = [
    "DEFAULT_METRICS",
    "CalculationType",
    "MetricCatalog",
    "MetricDefinition",
    "default_catalog",
]
