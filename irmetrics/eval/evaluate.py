"""
Evaluation Script

Evaluates TREC run files against relevance judgments.
Prints one line per (run, iteration, metric) with the mean over queries:

    run_id <TAB> iteration <TAB> metric <TAB> score
"""

import argparse
import sys
from pathlib import Path
from typing import Dict, List, Optional, Tuple

import numpy as np
import yaml
from loguru import logger

from ..trec.grouping import Grouped, annotate, relevance_sequences
from ..trec.records import TrecFormatError, read_trec_rels, read_trec_results
from .parse import DEFAULT_METRICS, Metric, MetricSpecError, parse_metrics

Row = Tuple[str, str, str, float]


def load_config(path: Optional[str]) -> Dict:
    """Load YAML config, or an empty config when there is no file."""
    if path and Path(path).exists():
        with open(path) as f:
            return yaml.safe_load(f) or {}
    return {}


def evaluate_annotated(
    annotated: Grouped,
    metrics: List[Tuple[str, Metric]]
) -> List[Row]:
    """
    Average each metric over the queries of every (run, iteration).

    Args:
        annotated: Output of annotate()
        metrics: List of (metric name, metric function); repeats allowed

    Returns:
        List of (run_id, iteration, metric_name, mean score)
    """
    values = {}

    for run_id, iteration, qid, relevances in relevance_sequences(annotated):
        per_metric = values.setdefault((run_id, iteration), [[] for _ in metrics])
        for scores, (_, metric) in zip(per_metric, metrics):
            scores.append(metric(relevances))
        logger.debug(f"{run_id}/{iteration}/{qid}: {len(relevances)} results")

    rows = []
    for (run_id, iteration), per_metric in values.items():
        for (name, _), scores in zip(metrics, per_metric):
            rows.append((run_id, iteration, name, float(np.mean(scores))))

    return rows


def format_rows(rows: List[Row]) -> str:
    return "\n".join(
        f"{run_id}\t{iteration}\t{name}\t{score:.6g}"
        for run_id, iteration, name, score in rows
    )


def evaluate_files(
    qrels_path: str,
    results_path: str,
    metrics: List[Tuple[str, Metric]],
    show_progress: bool = True
) -> List[Row]:
    """Read both files, annotate results and evaluate them."""
    rels = read_trec_rels(qrels_path, show_progress=show_progress)
    results = read_trec_results(results_path, show_progress=show_progress)

    annotated = annotate(results, rels)
    logger.info(f"Evaluating {len(annotated)} runs with metrics: {[name for name, _ in metrics]}")

    return evaluate_annotated(annotated, metrics)


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        description="Evaluate search results with IR metrics."
    )
    parser.add_argument("qrels", type=str, help="Query relevance data in TREC format")
    parser.add_argument("results", type=str, help="Query results in TREC format")
    parser.add_argument(
        "-m", "--metric",
        type=str,
        nargs="+",
        action="extend",
        dest="metrics",
        help=f"List of metrics (default: {' '.join(DEFAULT_METRICS)})"
    )
    parser.add_argument("--config", type=str, default=None)
    parser.add_argument("--no_progress", action="store_true")
    args = parser.parse_args(argv)

    config = load_config(args.config)
    metric_names = args.metrics or config.get("metrics") or DEFAULT_METRICS

    # Metric names are validated before any file is touched
    try:
        metrics = parse_metrics(metric_names)
    except MetricSpecError as e:
        logger.error(str(e))
        return 1

    for path in (args.qrels, args.results):
        if not Path(path).is_file():
            logger.error(f"File not found: {path}")
            return 1

    try:
        rows = evaluate_files(
            args.qrels,
            args.results,
            metrics,
            show_progress=not args.no_progress
        )
    except TrecFormatError as e:
        logger.error(str(e))
        return 1

    if rows:
        print(format_rows(rows))

    return 0


if __name__ == "__main__":
    sys.exit(main())
