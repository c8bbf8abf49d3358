import pytest

from irmetrics.trec.grouping import (
    annotate,
    group,
    group_by_query,
    relevance_lookup,
    relevance_sequences
)
from irmetrics.trec.records import TrecRel, TrecResult

RESULT_LINES = [
    "q1 Q0 D1 1 10.0 R0",
    "q0 Q0 D2 1 9.0 R0",
    "q1 Q0 D3 2 8.0 R0",
    "q1 Q1 D1 1 7.0 R0",
    "q1 Q0 D2 1 6.0 R1",
    "q0 Q0 D4 2 5.0 R0",
]

REL_LINES = [
    "q1 0 D1 1",
    "q1 0 D2 2",
    "q1 0 D1 0",
    "q0 0 D4 3",
]


@pytest.fixture
def results():
    return [TrecResult.from_line(line) for line in RESULT_LINES]


@pytest.fixture
def rels():
    return [TrecRel.from_line(line) for line in REL_LINES]


def doc_ids(records):
    return [r.document_id for r in records]


def test_group_by_query(results):
    groups = group_by_query(results)
    assert list(groups) == ["q1", "q0"]
    assert doc_ids(groups["q1"]) == ["D1", "D3", "D1", "D2"]
    assert doc_ids(groups["q0"]) == ["D2", "D4"]


def test_group_by_query_works_for_judgments(rels):
    groups = group_by_query(rels)
    assert [len(g) for g in groups.values()] == [3, 1]


def test_group_is_hierarchical_and_ordered(results):
    groups = group(results)
    assert list(groups) == ["R0", "R1"]
    assert list(groups["R0"]) == ["Q0", "Q1"]
    assert list(groups["R0"]["Q0"]) == ["q1", "q0"]
    assert doc_ids(groups["R0"]["Q0"]["q1"]) == ["D1", "D3"]
    assert doc_ids(groups["R0"]["Q1"]["q1"]) == ["D1"]
    assert doc_ids(groups["R1"]["Q0"]["q1"]) == ["D2"]


def test_relevance_lookup_last_judgment_wins(rels):
    lookup = relevance_lookup(rels)
    assert lookup == {"q1": {"D1": 0, "D2": 2}, "q0": {"D4": 3}}


def test_annotate(results, rels):
    annotated = annotate(results, rels)
    relevance = {
        (run, it, qid): rel for run, it, qid, rel in relevance_sequences(annotated)
    }
    assert relevance == {
        ("R0", "Q0", "q1"): [0, 0],
        ("R0", "Q0", "q0"): [0, 3],
        ("R0", "Q1", "q1"): [0],
        ("R1", "Q0", "q1"): [2],
    }


def test_annotate_is_idempotent(results, rels):
    first = list(relevance_sequences(annotate(results, rels)))
    second = list(relevance_sequences(annotate(results, rels)))
    assert first == second


def test_annotate_mismatched_query_defaults_to_zero():
    rels = [TrecRel.from_line("q0 i0 D1 2"), TrecRel.from_line("q0 i0 D2 0")]
    results = [
        TrecResult.from_line("q1 Q0 D1 1 10.0 R0"),
        TrecResult.from_line("q1 Q0 D2 2 9.0 R0"),
    ]
    annotated = annotate(results, rels)
    assert [r.relevance for r in annotated["R0"]["Q0"]["q1"]] == [0, 0]


def test_annotate_matching_query():
    rels = [TrecRel.from_line("q0 i0 D1 2"), TrecRel.from_line("q0 i0 D2 0")]
    results = [
        TrecResult.from_line("q0 Q0 D1 1 10.0 R0"),
        TrecResult.from_line("q0 Q0 D2 2 9.0 R0"),
    ]
    annotated = annotate(results, rels)
    assert [r.relevance for r in annotated["R0"]["Q0"]["q0"]] == [2, 0]


def test_annotate_keeps_file_order_not_rank():
    results = [
        TrecResult.from_line("q0 Q0 D2 2 9.0 R0"),
        TrecResult.from_line("q0 Q0 D1 1 10.0 R0"),
    ]
    annotated = annotate(results, [TrecRel.from_line("q0 0 D1 1")])
    assert [r.rank for r in annotated["R0"]["Q0"]["q0"]] == [2, 1]
    assert [r.relevance for r in annotated["R0"]["Q0"]["q0"]] == [0, 1]


def test_annotate_empty():
    assert annotate([], []) == {}
