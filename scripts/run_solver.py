#!/usr/bin/env python3
from __future__ import annotations

import argparse
import hashlib
import json
import logging
import pathlib
import sys
from dataclasses import asdict
from typing import Iterable, Iterator

PROJECT_ROOT = pathlib.Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from ExactTSP import DEFAULT_MATRIX, ExactTSP, ExactTSPException, TraceRecorder, format_tour
from ExactTSP.solvers import SOLVER_REGISTRY, AlgorithmResult
from ExactTSP.utils.labels import display_cell, label_for

logger = logging.getLogger(__name__)


def parse_args(raw_args: Iterable[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Solve TSP instances exactly and record the outcomes.")
    parser.add_argument(
        "--problems",
        type=pathlib.Path,
        default=None,
        help="JSONL file containing problem instances (default: solve the built-in 4-city preset).",
    )
    parser.add_argument(
        "--results",
        type=pathlib.Path,
        default=None,
        help="Destination JSONL file for solver outcomes (appended to).",
    )
    parser.add_argument(
        "--solver",
        choices=sorted(SOLVER_REGISTRY.keys()),
        default="held_karp",
        help="Solver to run (default: held_karp).",
    )
    parser.add_argument("--max-cities", type=int, default=None, help="Override the solver's size ceiling.")
    parser.add_argument("--source", type=int, default=None, help="Source city, overriding the problem's own.")
    parser.add_argument("--symmetric", action="store_true", help="Treat every edge as undirected before solving.")
    parser.add_argument("--zero-is-edge", action="store_true", help="Treat a weight of 0 as a zero-cost edge.")
    parser.add_argument("--trace", action="store_true", help="Print every state improvement of the sweep.")
    parser.add_argument("--log-level", default="INFO", help="Logging level (default: INFO).")
    return parser.parse_args(raw_args)


def iter_jsonl(path: pathlib.Path) -> Iterator[dict]:
    with path.open("r", encoding="utf-8") as fh:
        for line in fh:
            line = line.strip()
            if not line:
                continue
            yield json.loads(line)


def ensure_problem_id(problem: dict) -> str:
    if "problem_id" in problem:
        return problem["problem_id"]
    payload = problem.get("distance_matrix")
    if payload is None:
        payload = problem.get("coordinates")
    digest = hashlib.sha1(json.dumps(payload, sort_keys=True, default=str).encode("utf-8")).hexdigest()
    problem["problem_id"] = digest
    return digest


def serialize_result(problem: dict, result: AlgorithmResult) -> dict:
    record = asdict(result)
    record.update(
        {
            "algorithm": result.name,
            "problem_id": problem["problem_id"],
            "num_cities": result.metadata.get("num_cities"),
        }
    )
    return record


def print_trace(recorder: TraceRecorder) -> None:
    for step, event in enumerate(recorder.improvements(), start=1):
        print(
            f"  step {step}: {label_for(event.last)} -> {label_for(event.next_city)} "
            f"cost {display_cell(event.old_cost)} -> {display_cell(event.new_cost)} "
            f"path {format_tour(event.path)}"
        )


def main(raw_args: Iterable[str] | None = None) -> int:
    args = parse_args(raw_args)
    logging.basicConfig(level=args.log_level.upper(), format="%(levelname)s %(name)s: %(message)s")

    solver_kwargs: dict = {}
    if args.zero_is_edge:
        solver_kwargs["zero_is_edge"] = True
    if args.max_cities is not None:
        solver_kwargs["max_cities"] = args.max_cities
    pipeline = ExactTSP(args.solver, **solver_kwargs)

    if args.problems is None:
        problems: Iterable[dict] = [{"problem_id": "default", "distance_matrix": DEFAULT_MATRIX}]
    elif not args.problems.exists():
        raise SystemExit(f"Problem file not found: {args.problems}")
    else:
        problems = iter_jsonl(args.problems)

    out = None
    if args.results is not None:
        args.results.parent.mkdir(parents=True, exist_ok=True)
        out = args.results.open("a", encoding="utf-8")

    solved = 0
    failed = 0
    try:
        for problem in problems:
            problem_id = ensure_problem_id(problem)
            if args.source is not None:
                problem["source"] = args.source
            if args.symmetric:
                problem["symmetric"] = True

            recorder = TraceRecorder() if args.trace else None
            try:
                result = pipeline.solve(problem, observer=recorder)
            except ExactTSPException as exc:
                failed += 1
                logger.error("Problem %s rejected: %s", problem_id, exc)
                if out is not None:
                    out.write(json.dumps({"problem_id": problem_id, "status": "invalid", "error": str(exc)}))
                    out.write("\n")
                continue

            solved += 1
            print(f"{result.name} on problem {problem_id} -> {result.status} "
                  f"cost={display_cell(result.cost)} tour={format_tour(result.path)}")
            if recorder is not None:
                print_trace(recorder)
            if out is not None:
                out.write(json.dumps(serialize_result(problem, result)))
                out.write("\n")
    finally:
        if out is not None:
            out.close()

    print(f"Completed {solved} runs. Rejected {failed} invalid problems.")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
