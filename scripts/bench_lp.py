#!/usr/bin/env python3
import json
import time
from pathlib import Path

from simplex_trace.lp.simplex import solve_primal
from simplex_trace.lp.dual import solve_dual
from simplex_trace.schemas import Problem
from scripts.generate_instances import generate_random_problem

EXAMPLES = Path(__file__).resolve().parent.parent / "examples"


def load_example(name: str) -> Problem:
    return Problem.model_validate(json.loads((EXAMPLES / name).read_text()))


def main() -> None:
    cases = [(f"examples/{path.name}", load_example(path.name)) for path in sorted(EXAMPLES.glob("*.json"))]
    for seed in range(3):
        cases.append((f"random-{seed}", generate_random_problem(3, 3, seed)))

    print("name,method,status,objective,iterations,time_ms")
    for name, problem in cases:
        for method, solver in (("primal", solve_primal), ("dual", solve_dual)):
            start = time.perf_counter()
            result = solver(problem)
            elapsed_ms = (time.perf_counter() - start) * 1000
            print(
                f"{name},{method},{result.status},{result.objective_value},"
                f"{len(result.iterations)},{elapsed_ms:.2f}"
            )


if __name__ == "__main__":
    main()
