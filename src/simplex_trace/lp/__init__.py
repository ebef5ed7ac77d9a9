"""Tableau simplex solvers for Simplex Trace."""

from typing import Optional, Union

from .dual import solve_dual
from .parser import parse_problem_spec
from .simplex import solve_primal
from ..schemas import Method, Problem, SimplexResult


def recommend_method(problem: Union[Problem, dict]) -> Method:
    "Primal simplex for maximization, dual simplex for minimization."
    problem = Problem.model_validate(problem)
    return "primal" if problem.objective.type == "max" else "dual"


def solve(problem: Union[Problem, dict], method: Optional[str] = None) -> SimplexResult:
    problem = Problem.model_validate(problem)
    chosen = method or recommend_method(problem)
    if chosen == "primal":
        return solve_primal(problem)
    if chosen == "dual":
        return solve_dual(problem)
    raise ValueError(f"Unknown simplex method '{chosen}'; expected 'primal' or 'dual'.")


__all__ = ["solve_primal", "solve_dual", "solve", "recommend_method", "parse_problem_spec"]
