"""Evaluation module - IR metrics, metric name parsing and the evaluation CLI."""

from .metrics import (
    Series,
    WeightedPrecision,
    binary_relevance,
    identity,
    overlap,
    precision_at,
    rank_biased_precision
)
from .parse import DEFAULT_METRICS, MetricSpecError, parse_metric, parse_metrics

__all__ = [
    "Series",
    "WeightedPrecision",
    "binary_relevance",
    "identity",
    "overlap",
    "precision_at",
    "rank_biased_precision",
    "DEFAULT_METRICS",
    "MetricSpecError",
    "parse_metric",
    "parse_metrics"
]
