#!/usr/bin/env python3
import argparse
import json
import random
from pathlib import Path
from typing import Any, Dict, List, Optional

from simplex_trace.lp import solve
from simplex_trace.schemas import Problem, Objective, Constraint, ObjectiveType


def generate_random_problem(
    num_vars: int,
    num_constraints: int,
    seed: Optional[int] = None,
    sense: ObjectiveType = "max",
) -> Problem:
    """
    Random LP with positive data.

    max: <= rows, so the slack basis is primal feasible (primal method).
    min: >= rows, so the slack basis is dual feasible (dual method).
    """
    rng = random.Random(seed)
    relation = "<=" if sense == "max" else ">="
    constraints: List[Constraint] = []
    for _ in range(num_constraints):
        coefficients = [round(rng.uniform(0.5, 5.0), 2) for _ in range(num_vars)]
        rhs = round(rng.uniform(num_vars * 2.0, num_vars * 6.0), 2)
        constraints.append(Constraint(coefficients=coefficients, relation=relation, rhs=rhs))
    objective = Objective(
        type=sense,
        coefficients=[round(rng.uniform(1.0, 4.0), 2) for _ in range(num_vars)],
    )
    return Problem(objective=objective, constraints=constraints)


def describe(problem: Problem, solve_it: bool) -> Dict[str, Any]:
    entry: Dict[str, Any] = {"problem": problem.model_dump()}
    if solve_it:
        result = solve(problem)
        entry.update(
            method=result.method,
            status=result.status,
            objective_value=result.objective_value,
            pivots=len(result.iterations) - 1,
        )
    return entry


def main() -> None:
    parser = argparse.ArgumentParser(description="Generate random LP instances for the tableau simplex.")
    parser.add_argument("--vars", type=int, default=3, help="Number of decision variables (1-10)")
    parser.add_argument("--constraints", type=int, default=3, help="Number of constraints (1-10)")
    parser.add_argument(
        "--sense",
        choices=["max", "min"],
        default="max",
        help="Objective sense; min instances use >= rows and suit the dual method",
    )
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    parser.add_argument("--count", type=int, default=1, help="Number of instances")
    parser.add_argument("--solve", action="store_true", help="Also solve each instance with the recommended method")
    parser.add_argument("--out", type=Path, default=None, help="Optional output file")
    args = parser.parse_args()

    for flag, value in (("--vars", args.vars), ("--constraints", args.constraints)):
        if not 1 <= value <= 10:
            parser.error(f"{flag} must be between 1 and 10")

    payload = [
        describe(
            generate_random_problem(args.vars, args.constraints, (args.seed or 0) + idx, args.sense),
            args.solve,
        )
        for idx in range(args.count)
    ]

    text = json.dumps(payload, indent=2)
    if args.out:
        Path(args.out).write_text(text)
    else:
        print(text)


if __name__ == "__main__":
    main()
