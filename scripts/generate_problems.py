#!/usr/bin/env python3
from __future__ import annotations

import argparse
import hashlib
import json
import logging
import pathlib
from datetime import datetime, timezone
from typing import Iterable

import numpy as np

logger = logging.getLogger(__name__)


def create_instance(num_cities: int, rng: np.random.Generator, max_weight: int, edge_density: float) -> dict:
    weights = rng.integers(1, max_weight + 1, size=(num_cities, num_cities)).astype(float)
    weights = np.triu(weights, 1)
    weights = weights + weights.T
    if edge_density < 1.0:
        keep = np.triu(rng.random((num_cities, num_cities)) < edge_density, 1)
        keep = keep | keep.T
        weights = np.where(keep, weights, 0.0)
    np.fill_diagonal(weights, 0.0)
    digest = hashlib.sha1(weights.tobytes()).hexdigest()
    return {
        "num_cities": num_cities,
        "problem_id": digest,
        "distance_matrix": weights.tolist(),
        "edge_density": edge_density,
    }


def parse_args(raw_args: Iterable[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Generate random symmetric weight-matrix TSP instances.")
    parser.add_argument(
        "--counts",
        nargs="+",
        type=int,
        default=[2, 3, 4, 5, 6, 7],
        help="City counts to generate.",
    )
    parser.add_argument(
        "--instances-per-count",
        type=int,
        default=10,
        help="How many instances to generate per city count.",
    )
    parser.add_argument(
        "--max-weight",
        type=int,
        default=50,
        help="Edge weights drawn uniformly from [1, max-weight].",
    )
    parser.add_argument(
        "--edge-density",
        type=float,
        default=1.0,
        help="Probability that an undirected edge is kept; dropped edges are written as 0.",
    )
    parser.add_argument(
        "--output",
        type=pathlib.Path,
        default=pathlib.Path("data/problems.jsonl"),
        help="Destination JSONL file.",
    )
    parser.add_argument("--seed", type=int, default=42, help="Random seed (default: 42).")
    parser.add_argument("--log-level", default="INFO", help="Logging level (default: INFO).")
    return parser.parse_args(raw_args)


def main(raw_args: Iterable[str] | None = None) -> None:
    args = parse_args(raw_args)
    logging.basicConfig(level=args.log_level.upper(), format="%(levelname)s %(name)s: %(message)s")
    rng = np.random.default_rng(args.seed)

    timestamp = datetime.now(timezone.utc).isoformat()
    args.output.parent.mkdir(parents=True, exist_ok=True)

    written = 0
    with args.output.open("w", encoding="utf-8") as fh:
        for count in args.counts:
            for _ in range(args.instances_per_count):
                instance = create_instance(count, rng, args.max_weight, args.edge_density)
                record = {
                    "created_at": timestamp,
                    "seed": args.seed,
                    **instance,
                }
                fh.write(json.dumps(record))
                fh.write("\n")
                written += 1
    logger.info("Wrote %d instances to %s", written, args.output)


if __name__ == "__main__":
    main()
