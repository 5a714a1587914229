#!/usr/bin/env python3
"""Benchmark script for behaviorgraph performance testing.

Times the decomposition pipeline on synthetic layered graphs.
Outputs results in JSON format compatible with github-action-benchmark.
"""

from __future__ import annotations

import argparse
import json
import random
import time
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from behaviorgraph.domain.model.function import FunctionMeta


def benchmark_import_time() -> float:
    """Measure import time of behaviorgraph package."""
    start = time.perf_counter()
    import behaviorgraph  # noqa: F401

    return time.perf_counter() - start


def synthetic_functions(unit_count: int, seed: int) -> tuple[FunctionMeta, ...]:
    """Layered acyclic input: each unit depends on up to three earlier units.

    Every unit also calls a shared helper, so the shared runtime is exercised.
    """
    from behaviorgraph.domain.model.function import BehaviorAttribute, FunctionMeta

    rng = random.Random(seed)
    functions: list[FunctionMeta] = []
    for i in range(unit_count):
        earlier = [f"Unit{j}" for j in range(i)]
        dependencies = tuple(rng.sample(earlier, min(3, len(earlier))))
        functions.append(
            FunctionMeta(
                name=f"unit{i}_start",
                attribute=BehaviorAttribute(name=f"Unit{i}", dependencies=dependencies),
                calls=("compute_shared",),
            )
        )
    functions.append(FunctionMeta(name="compute_shared"))
    return tuple(functions)


def benchmark_pipeline(unit_count: int, seed: int) -> float:
    """Measure one full pipeline run."""
    from behaviorgraph import DecompositionPipeline

    functions = synthetic_functions(unit_count, seed)
    pipeline = DecompositionPipeline.with_defaults()

    start = time.perf_counter()
    result = pipeline.run(functions)
    elapsed = time.perf_counter() - start

    if len(result.order) != unit_count:
        raise RuntimeError(f"expected {unit_count} ordered units, got {len(result.order)}")
    return elapsed


def main() -> None:
    """Run benchmarks and output results."""
    parser = argparse.ArgumentParser(description="Run behaviorgraph benchmarks")
    parser.add_argument(
        "--output",
        type=Path,
        default=Path("benchmark-results.json"),
        help="Output file for benchmark results",
    )
    parser.add_argument(
        "--sizes",
        type=int,
        nargs="+",
        default=[10, 100, 500],
        help="Unit counts to benchmark",
    )
    parser.add_argument("--seed", type=int, default=0, help="Random seed for graph shape")
    args = parser.parse_args()

    results = [
        {
            "name": "Import Time",
            "unit": "seconds",
            "value": benchmark_import_time(),
        }
    ]

    for size in args.sizes:
        results.append(
            {
                "name": f"Pipeline ({size} units)",
                "unit": "seconds",
                "value": benchmark_pipeline(size, args.seed),
            }
        )

    # Write results
    args.output.write_text(json.dumps(results, indent=2))
    print(f"Benchmark results written to {args.output}")
    for r in results:
        print(f"  {r['name']}: {r['value']:.4f} {r['unit']}")


if __name__ == "__main__":
    main()
