"""
TREC Record Model

Parses the two whitespace-delimited TREC formats:
- results (run) files: qid iteration docid rank score run_id
- relevance judgments (qrels): qid iteration docid relevance
"""

import re
from dataclasses import dataclass
from typing import List, Optional

from loguru import logger
from tqdm import tqdm

# ASCII digits only; int() and float() alone also take "1_0" and non-ASCII digits
_INT = re.compile(r"[+-]?[0-9]+")
_REAL = re.compile(
    r"[+-]?(?:(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?|inf|infinity|nan)",
    re.IGNORECASE
)


class TrecFormatError(ValueError):
    """Raised when a line cannot be read as a TREC record."""

    def __init__(
        self,
        reason: str,
        line_number: Optional[int] = None,
        path: Optional[str] = None
    ):
        self.reason = reason
        self.line_number = line_number
        self.path = path
        message = f"Error reading TREC format: {reason}"
        if line_number is not None:
            message += f" ({path or '<input>'}:{line_number})"
        super().__init__(message)


def _split_fields(line: str, expected: int) -> List[str]:
    fields = line.split()
    if len(fields) < expected:
        raise TrecFormatError("too few fields")
    if len(fields) > expected:
        raise TrecFormatError("too many fields")
    return fields


def _to_int(token: str, reason: str) -> int:
    if not _INT.fullmatch(token):
        raise TrecFormatError(reason)
    return int(token)


def _to_float(token: str, reason: str) -> float:
    if not _REAL.fullmatch(token):
        raise TrecFormatError(reason)
    return float(token)


@dataclass
class TrecResult:
    """A single retrieved document in a ranked list."""

    query_id: str
    iteration: str
    document_id: str
    rank: int
    score: float
    run_id: str
    # Filled in by annotate(); not part of the serialized line
    relevance: int = 0

    @classmethod
    def from_line(cls, line: str) -> "TrecResult":
        """
        Parse a results line.

        Format: qid iteration docid rank score run_id
        """
        query_id, iteration, document_id, rank, score, run_id = _split_fields(line, 6)

        rank = _to_int(rank, "invalid rank")
        score = _to_float(score, "invalid score")

        return cls(query_id, iteration, document_id, rank, score, run_id)


@dataclass(frozen=True)
class TrecRel:
    """A relevance judgment for a (query, document) pair."""

    query_id: str
    iteration: str
    document_id: str
    relevance: int

    @classmethod
    def from_line(cls, line: str) -> "TrecRel":
        """
        Parse a qrels line.

        Format: qid iteration docid relevance
        """
        query_id, iteration, document_id, relevance = _split_fields(line, 4)

        relevance = _to_int(relevance, "invalid relevance")

        return cls(query_id, iteration, document_id, relevance)


def _read_records(path: str, parse, desc: str, show_progress: bool) -> list:
    records = []

    with open(path, "r", encoding="utf-8", errors="surrogateescape") as f:
        iterator = tqdm(f, desc=desc) if show_progress else f
        for line_number, line in enumerate(iterator, 1):
            if not line.strip():
                continue
            try:
                records.append(parse(line))
            except TrecFormatError as e:
                raise TrecFormatError(e.reason, line_number, str(path)) from None

    logger.info(f"Read {len(records)} records from {path}")
    return records


def read_trec_results(path: str, show_progress: bool = False) -> List[TrecResult]:
    """Read a TREC results file, preserving line order."""
    return _read_records(path, TrecResult.from_line, "Reading results", show_progress)


def read_trec_rels(path: str, show_progress: bool = False) -> List[TrecRel]:
    """Read a TREC qrels file, preserving line order."""
    return _read_records(path, TrecRel.from_line, "Reading qrels", show_progress)
