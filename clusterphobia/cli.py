"""
Command line entry point.

Usage:
    clusterphobia linkage points.csv --bits 20 --sort-by-curve --noise-skip-by 9
    clusterphobia linkage points.csv --binning --early-exit-ratio 50
    clusterphobia bcubed solution.txt gold.txt --alpha 0.5

Results are written as JSON to stdout, or to --output.
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from .clustering import from_delimited_string
from .core.metrics import BCubed
from .data import load_clustered_points
from .exceptions import ClusterphobiaError
from .linkage import SingleLinkage

logger = logging.getLogger(__name__)


def run_linkage(args: argparse.Namespace) -> Dict[str, Any]:
    """Estimate the linkage distance for a labelled point file."""
    dataset = load_clustered_points(args.data)
    bits = args.bits if args.bits is not None else dataset.bits_per_dimension

    linkage = SingleLinkage(len(dataset.points), bits)
    if args.sort_by_curve:
        linkage = linkage.with_need_to_sort_by_hilbert_curve()
    if args.binning:
        linkage = linkage.without_sort_distances_completely()
    if args.noise_skip_by is not None:
        linkage = linkage.with_noise_skip_by(args.noise_skip_by)
    if args.outlier_cluster_size is not None:
        linkage = linkage.with_outlier_cluster_size(args.outlier_cluster_size)
    if args.minimum_cluster_count is not None:
        linkage = linkage.with_minimum_cluster_count(args.minimum_cluster_count)
    if args.lowest_index_for_checking_growth_ratio is not None:
        linkage = linkage.with_lowest_index_for_checking_growth_ratio(
            args.lowest_index_for_checking_growth_ratio
        )
    if args.early_exit_ratio is not None:
        linkage = linkage.with_early_exit_ratio(args.early_exit_ratio)

    result = linkage.find(dataset.points)
    output = result.to_dict()
    output["num_points"] = len(dataset.points)
    output["gold_cluster_count"] = dataset.gold.cluster_count()
    output["config"] = linkage.resolved_config.to_dict()
    return output


def run_bcubed(args: argparse.Namespace) -> Dict[str, Any]:
    """Score a delimited partition file against a gold partition file."""
    solution = from_delimited_string(Path(args.solution).read_text().strip())
    gold = from_delimited_string(Path(args.gold).read_text().strip())
    score = BCubed.compare(solution, gold, alpha=args.alpha)
    return {
        "precision": score.precision,
        "recall": score.recall,
        "alpha": score.alpha,
        "similarity": score.similarity(),
        "solution_clusters": solution.cluster_count(),
        "gold_clusters": gold.cluster_count(),
    }


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="clusterphobia",
        description="Estimate single-linkage distances and score clusterings",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    parser.add_argument("--output", type=str, default=None, help="Write JSON here instead of stdout")
    subparsers = parser.add_subparsers(dest="command", required=True)

    linkage = subparsers.add_parser("linkage", help="Find the linkage distance for a point file")
    linkage.add_argument("data", type=str, help="CSV or Parquet file with id, coordinates, category")
    linkage.add_argument("--bits", type=int, default=None,
                         help="Bits per dimension (default: smallest that fits the data)")
    linkage.add_argument("--binning", action="store_true", help="Use the approximate O(N) search")
    linkage.add_argument("--sort-by-curve", action="store_true",
                         help="Sort points along the Hilbert curve first")
    linkage.add_argument("--noise-skip-by", type=int, default=None)
    linkage.add_argument("--outlier-cluster-size", type=int, default=None)
    linkage.add_argument("--minimum-cluster-count", type=int, default=None)
    linkage.add_argument("--lowest-index-for-checking-growth-ratio", type=int, default=None,
                         help="Ignore growth ratios below this sorted index (default: N/2)")
    linkage.add_argument("--early-exit-ratio", type=float, default=None,
                         help="Stop the bin walk past N/2 once a spread ratio exceeds this")
    linkage.set_defaults(handler=run_linkage)

    bcubed = subparsers.add_parser("bcubed", help="Score a partition against a gold partition")
    bcubed.add_argument("solution", type=str, help="File holding the partition to score")
    bcubed.add_argument("gold", type=str, help="File holding the gold partition")
    bcubed.add_argument("--alpha", type=float, default=0.5)
    bcubed.set_defaults(handler=run_bcubed)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Run the CLI and return a process exit code."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    try:
        output = args.handler(args)
    except (ClusterphobiaError, ValueError, FileNotFoundError) as e:
        logger.error("%s failed: %s", args.command, e)
        return 1

    text = json.dumps(output, indent=2, default=str)
    if args.output:
        path = Path(args.output)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text + "\n")
        print(f"Saved: {path}")
    else:
        print(text)
    return 0


if __name__ == "__main__":
    sys.exit(main())
