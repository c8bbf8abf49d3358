"""TREC module - record parsing, grouping and relevance annotation."""

from .records import (
    TrecFormatError,
    TrecRel,
    TrecResult,
    read_trec_rels,
    read_trec_results
)
from .grouping import (
    annotate,
    annotate_single,
    group,
    group_by_query,
    relevance_lookup,
    relevance_sequences
)

__all__ = [
    "TrecFormatError",
    "TrecRel",
    "TrecResult",
    "read_trec_rels",
    "read_trec_results",
    "annotate",
    "annotate_single",
    "group",
    "group_by_query",
    "relevance_lookup",
    "relevance_sequences"
]
