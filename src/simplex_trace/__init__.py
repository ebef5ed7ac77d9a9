"""Simplex Trace: tableau simplex solvers that record every pivot."""

from .lp import solve, solve_primal, solve_dual, recommend_method, parse_problem_spec
from .schemas import Problem, Objective, Constraint, Iteration, SimplexResult

__all__ = [
    "solve",
    "solve_primal",
    "solve_dual",
    "recommend_method",
    "parse_problem_spec",
    "Problem",
    "Objective",
    "Constraint",
    "Iteration",
    "SimplexResult",
]
