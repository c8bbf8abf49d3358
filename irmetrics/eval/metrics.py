"""
Information Retrieval Metrics

Implements rank-based metrics as weighted precision:
- P@k (Precision at cutoff k)
- RBP (Rank-Biased Precision)

Both are a sum over ranks of weight(rank) * transform(relevance).
A new metric only needs a new weight sequence (finite, or a lazy Series).
"""

from itertools import count, islice
from typing import Callable, Iterable, Iterator, Optional, Sequence

import numpy as np
from loguru import logger


def identity(relevance: int) -> int:
    return relevance


def binary_relevance(relevance: int) -> int:
    """Any positive grade counts as relevant."""
    return 1 if relevance > 0 else 0


class Series:
    """
    Infinite sequence of weights computed on demand.

    Element i is f(i); nothing is materialized ahead of iteration.
    """

    def __init__(self, f: Callable[[int], float]):
        self.f = f

    def __iter__(self) -> Iterator[float]:
        return (self.f(n) for n in count())

    def __getitem__(self, n: int) -> float:
        if n < 0:
            raise IndexError("Series has no end to index from")
        return self.f(n)


class WeightedPrecision:
    """
    Weighted sum of transformed relevance values.

    score = sum_{i < n} weights[i] * transform(relevance[i])
    n = min(cutoff, len(relevance), len(weights))
    """

    def __init__(
        self,
        weights: Iterable[float],
        cutoff: Optional[int] = None,
        transform: Callable[[int], float] = identity
    ):
        """
        Args:
            weights: Weight per rank position; finite or a Series
            cutoff: Max number of ranks considered (None = unbounded)
            transform: Applied to each relevance value before weighting
        """
        self.weights = weights
        self.cutoff = cutoff
        self.transform = transform

    def __call__(self, relevances: Sequence[int]) -> float:
        # zip stops at the shorter of weights and relevances
        cutoff = None if self.cutoff is None else max(self.cutoff, 0)
        pairs = islice(zip(self.weights, relevances), cutoff)
        return float(sum(
            (weight * self.transform(rel) for weight, rel in pairs),
            0.0
        ))


def precision_at(k: int) -> WeightedPrecision:
    """
    Precision at k.

    P@k = |relevant docs in top k| / k

    Lists shorter than k are not renormalized: missing ranks count as
    non-relevant.
    """
    if k < 1:
        raise ValueError(f"k must be positive, got {k}")

    return WeightedPrecision(np.full(k, 1.0 / k), k, binary_relevance)


def rank_biased_precision(persistence: float) -> WeightedPrecision:
    """
    Rank-Biased Precision with persistence p.

    RBP = (1 - p) * sum_{i >= 0} p^i * rel_i
    """
    if not 0.0 <= persistence <= 1.0:
        raise ValueError(f"persistence must be in [0, 1], got {persistence}")

    weights = Series(lambda n: (1.0 - persistence) * persistence ** n)
    return WeightedPrecision(weights, None, binary_relevance)


def overlap(lhs: Sequence[str], rhs: Sequence[str]) -> float:
    """
    Overlap of two sorted document lists.

    overlap = |A ∩ B| / max(|A|, |B|)

    Both lists must already be sorted; the intersection is a merge walk.
    """
    longest = max(len(lhs), len(rhs))
    if longest == 0:
        return 0.0

    i = j = common = 0
    while i < len(lhs) and j < len(rhs):
        if lhs[i] < rhs[j]:
            i += 1
        elif rhs[j] < lhs[i]:
            j += 1
        else:
            common += 1
            i += 1
            j += 1

    return common / longest


if __name__ == "__main__":
    # Example usage
    relevances = [1, 1, 1, 0, 0, 1, 0]

    for k in (1, 4, 8):
        logger.info(f"P@{k}: {precision_at(k)(relevances):.4f}")

    for p in (0.5, 0.8, 0.95):
        logger.info(f"RBP({p}): {rank_biased_precision(p)(relevances):.6f}")
