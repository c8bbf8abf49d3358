"""
Grouping and relevance annotation

Groups ranked results by run, iteration and query, and joins them
against relevance judgments keyed on (query_id, document_id).
All groupings keep records in the order they were encountered.
"""

from typing import Dict, Iterable, Iterator, List, Tuple, TypeVar

from loguru import logger

from .records import TrecRel, TrecResult

R = TypeVar("R")

# run_id -> iteration -> query_id -> ranked results
Grouped = Dict[str, Dict[str, Dict[str, List[TrecResult]]]]


def group_by_query(records: Iterable[R]) -> Dict[str, List[R]]:
    """Group records (results or judgments) by query_id."""
    groups = {}

    for record in records:
        groups.setdefault(record.query_id, []).append(record)

    return groups


def group(records: Iterable[TrecResult]) -> Grouped:
    """Group results by run_id, then iteration, then query_id."""
    groups = {}

    for record in records:
        (
            groups
            .setdefault(record.run_id, {})
            .setdefault(record.iteration, {})
            .setdefault(record.query_id, [])
            .append(record)
        )

    return groups


def relevance_lookup(rels: Iterable[TrecRel]) -> Dict[str, Dict[str, int]]:
    """
    Build query_id -> document_id -> relevance.

    A later judgment for the same (query, document) pair overwrites
    an earlier one.
    """
    lookup = {}

    for qid, rels_for_query in group_by_query(rels).items():
        doc_rels = {}
        for rel in rels_for_query:
            doc_rels[rel.document_id] = rel.relevance
        lookup[qid] = doc_rels

    return lookup


def annotate_single(results: List[TrecResult], qrels: Dict[str, int]) -> None:
    """Set relevance on one query's results; unjudged documents get 0."""
    for result in results:
        result.relevance = qrels.get(result.document_id, 0)


def annotate(results: Iterable[TrecResult], rels: Iterable[TrecRel]) -> Grouped:
    """
    Group results hierarchically and attach relevance to each of them.

    Run and iteration only affect grouping: one set of judgments is
    shared by every run and iteration of a query.

    Returns:
        run_id -> iteration -> query_id -> results with relevance set
    """
    lookup = relevance_lookup(rels)
    grouped = group(results)

    for run_id, results_for_run in grouped.items():
        for iteration, results_for_iteration in results_for_run.items():
            for qid, results_for_query in results_for_iteration.items():
                if qid not in lookup:
                    logger.debug(f"No judgments for query {qid} (run {run_id})")
                annotate_single(results_for_query, lookup.get(qid, {}))

    return grouped


def relevance_sequences(
    annotated: Grouped
) -> Iterator[Tuple[str, str, str, List[int]]]:
    """Yield (run_id, iteration, query_id, relevances) in ranked-list order."""
    for run_id, results_for_run in annotated.items():
        for iteration, results_for_iteration in results_for_run.items():
            for qid, results_for_query in results_for_iteration.items():
                yield run_id, iteration, qid, [r.relevance for r in results_for_query]
