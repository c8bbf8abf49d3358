"""
Metric name parsing

Supported names:
- P@<k>      Precision at k, k >= 1
- RBP:<p>    Rank-Biased Precision, persistence p% with p in [0, 100]
"""

import re
from typing import Callable, List, Sequence, Tuple

from .metrics import precision_at, rank_biased_precision

Metric = Callable[[Sequence[int]], float]

DEFAULT_METRICS = [
    "P@10",
    "P@20",
    "P@30",
    "P@50",
    "P@100",
    "P@200",
    "P@500",
    "P@1000",
    "RBP:95"
]


# ASCII digits with an optional minus sign, nothing else
_INT = re.compile(r"-?[0-9]+")


class MetricSpecError(ValueError):
    """Raised for unknown or malformed metric names."""


def _parse_int(value: str, name: str) -> int:
    if not _INT.fullmatch(value):
        raise MetricSpecError(f"Failed to parse {name}")
    return int(value)


def parse_precision_at(k: str) -> Metric:
    parsed_k = _parse_int(k, f"P@{k}")
    if parsed_k < 1:
        raise MetricSpecError(f"Failed to parse P@{k} (k must be positive)")
    return precision_at(parsed_k)


def parse_rbp(p: str) -> Metric:
    parsed_p = _parse_int(p, f"RBP:{p}")
    if parsed_p < 0 or parsed_p > 100:
        raise MetricSpecError(f"Failed to parse RBP:{p} (p must be in [0, 100]%)")
    return rank_biased_precision(parsed_p / 100.0)


def parse_metric(name: str) -> Metric:
    """Map a metric name such as "P@10" or "RBP:95" to a metric function."""
    if name.startswith("P@"):
        return parse_precision_at(name[2:])
    if name.startswith("RBP:"):
        return parse_rbp(name[4:])
    raise MetricSpecError(f"Unrecognized metric: {name}")


def parse_metrics(names: List[str]) -> List[Tuple[str, Metric]]:
    """Parse several metric names into (name, metric) pairs, keeping order and repeats."""
    return [(name, parse_metric(name)) for name in names]
