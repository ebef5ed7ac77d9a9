import logging

import numpy as np
from typing import List, Optional, Union

from .pivot import column_label, pivot, snapshot
from .simplex import MAX_ITERATIONS
from .solution import extract_solution, initial_basis_feasible
from .utils import create_initial_tableau, standardize_lp
from ..schemas import Iteration, Problem, SimplexResult

logger = logging.getLogger(__name__)


def find_dual_pivot_row(tableau: np.ndarray) -> Optional[int]:
    """Leaving row: most negative RHS, top-most on ties."""
    pivot_row: Optional[int] = None
    min_rhs = 0.0
    for i in range(tableau.shape[0] - 1):
        rhs = tableau[i, -1]
        if rhs < min_rhs:
            min_rhs = rhs
            pivot_row = i
    return pivot_row


def find_dual_pivot_column(tableau: np.ndarray, pivot_row: int) -> Optional[int]:
    """Entering column: minimum |reduced cost / entry| over strictly negative entries of the row."""
    row = tableau[pivot_row, :-1]
    objective_row = tableau[-1]
    pivot_column: Optional[int] = None
    min_ratio = np.inf
    for j, coefficient in enumerate(row):
        if coefficient < 0:
            ratio = abs(objective_row[j] / coefficient)
            if ratio < min_ratio:
                min_ratio = ratio
                pivot_column = j
    return pivot_column


def _is_dual_optimal(tableau: np.ndarray) -> bool:
    return bool(np.all(tableau[:-1, -1] >= 0) and np.all(tableau[-1, :-1] >= 0))


def solve_dual(problem: Union[Problem, dict]) -> SimplexResult:
    """
    Dual tableau simplex from the all-slack basis.

    Each step drives the most negative right-hand side out of the basis. When
    that row has no negative entry the dual is unbounded, which is reported as
    primal infeasibility; this method never reports an unbounded primal.
    """

    problem = Problem.model_validate(problem)
    standard, _, _ = standardize_lp(problem)
    tableau, basic_variables, non_basic_variables = create_initial_tableau(standard)
    feasible_start = initial_basis_feasible(tableau)

    iterations: List[Iteration] = [
        snapshot(
            tableau,
            basic_variables,
            non_basic_variables,
            "Initial tableau for the dual simplex method.",
        )
    ]

    optimal = False
    dual_unbounded = False
    count = 0
    while not optimal and not dual_unbounded and count < MAX_ITERATIONS:
        if _is_dual_optimal(tableau):
            optimal = True
            iterations.append(
                snapshot(
                    tableau,
                    basic_variables,
                    non_basic_variables,
                    "The solution is optimal: every right-hand side and every coefficient "
                    "in the objective row is non-negative.",
                    is_optimal=True,
                )
            )
            break

        pivot_row = find_dual_pivot_row(tableau)
        if pivot_row is None:
            optimal = True
            iterations.append(
                snapshot(
                    tableau,
                    basic_variables,
                    non_basic_variables,
                    "The solution is optimal: every right-hand side is non-negative.",
                    is_optimal=True,
                )
            )
            break

        pivot_column = find_dual_pivot_column(tableau, pivot_row)
        if pivot_column is None:
            dual_unbounded = True
            iterations.append(
                snapshot(
                    tableau,
                    basic_variables,
                    non_basic_variables,
                    "The problem is infeasible: no variable can enter the basis to remove the "
                    "negative right-hand side.",
                    pivot_row=pivot_row,
                    leaving_variable=basic_variables[pivot_row],
                    is_unbounded=True,
                )
            )
            break

        pivot_element = float(tableau[pivot_row, pivot_column])
        rhs = float(tableau[pivot_row, -1])
        entering = column_label(non_basic_variables, pivot_column)
        leaving = basic_variables[pivot_row]

        basic_variables[pivot_row] = entering
        pivot(tableau, pivot_row, pivot_column)
        logger.debug(
            "dual pivot: %s leaves, %s enters, element %.6g at (%d, %d)",
            leaving,
            entering,
            pivot_element,
            pivot_row,
            pivot_column,
        )

        explanation = (
            f"The leaving variable is {leaving} (row {pivot_row + 1}) because it has the most "
            f"negative right-hand side ({rhs:g}). "
            f"The entering variable is {entering} (column {pivot_column + 1}) because it gives the "
            f"minimum ratio, which keeps the objective row dual feasible. "
            f"The pivot element is {pivot_element:.2f} at row {pivot_row + 1}, column {pivot_column + 1}. "
            f"The pivot row was divided by the pivot element, then {entering} was eliminated from the other rows."
        )
        iterations.append(
            snapshot(
                tableau,
                basic_variables,
                non_basic_variables,
                explanation,
                pivot_row=pivot_row,
                pivot_column=pivot_column,
                pivot_element=pivot_element,
                entering_variable=entering,
                leaving_variable=leaving,
            )
        )
        count += 1

    if not optimal and not dual_unbounded:
        logger.warning("dual simplex stopped after %d iterations without terminating", count)

    solution, dual_solution, objective_value = extract_solution(
        tableau,
        basic_variables,
        standard.num_variables,
        standard.num_constraints,
        optimal,
    )

    result = SimplexResult(
        iterations=iterations,
        optimal=optimal,
        unbounded=False,
        infeasible=dual_unbounded,
        objective_value=objective_value,
        solution=solution,
        dual_solution=dual_solution,
        method="dual",
        initial_basis_feasible=feasible_start,
    )
    logger.info("dual simplex finished: %s after %d iterations", result.status, count)
    return result
