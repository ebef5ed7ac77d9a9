import logging

import numpy as np
from typing import List, Optional, Union

from .pivot import column_label, pivot, snapshot
from .solution import extract_solution, initial_basis_feasible
from .utils import create_initial_tableau, standardize_lp
from ..schemas import Iteration, Problem, SimplexResult

logger = logging.getLogger(__name__)

MAX_ITERATIONS = 100


def find_pivot_column(tableau: np.ndarray) -> Optional[int]:
    """Entering column: most negative reduced cost, left-most on ties."""
    objective_row = tableau[-1, :-1]
    pivot_column: Optional[int] = None
    min_value = 0.0
    for j, value in enumerate(objective_row):
        if value < min_value:
            min_value = value
            pivot_column = j
    return pivot_column


def find_pivot_row(tableau: np.ndarray, pivot_column: int) -> Optional[int]:
    """Leaving row: minimum RHS / entry over strictly positive entries, first on ties."""
    pivot_row: Optional[int] = None
    min_ratio = np.inf
    for i in range(tableau.shape[0] - 1):
        coefficient = tableau[i, pivot_column]
        if coefficient > 0:
            ratio = tableau[i, -1] / coefficient
            if ratio < min_ratio:
                min_ratio = ratio
                pivot_row = i
    return pivot_row


def simplex_iteration(
    tableau: np.ndarray,
    basic_variables: List[str],
    non_basic_variables: List[str],
) -> Iteration:
    """
    Run one primal simplex step on copies of the given state and return the
    resulting snapshot. The snapshot is terminal when it is optimal or
    unbounded; otherwise it carries the pivoted tableau and relabelled basis.
    """

    T = np.array(tableau, dtype=float)
    basic = list(basic_variables)
    non_basic = list(non_basic_variables)

    pivot_column = find_pivot_column(T)
    if pivot_column is None:
        return snapshot(
            T,
            basic,
            non_basic,
            "The solution is optimal: every coefficient in the objective row is non-negative.",
            is_optimal=True,
        )

    pivot_row = find_pivot_row(T, pivot_column)
    if pivot_row is None:
        return snapshot(
            T,
            basic,
            non_basic,
            "The problem is unbounded: no constraint limits the entering variable.",
            pivot_column=pivot_column,
            entering_variable=column_label(non_basic, pivot_column),
            is_unbounded=True,
        )

    pivot_element = float(T[pivot_row, pivot_column])
    reduced_cost = float(T[-1, pivot_column])
    ratio = float(T[pivot_row, -1]) / pivot_element
    entering = column_label(non_basic, pivot_column)
    leaving = basic[pivot_row]

    # Only the basic list is relabelled; column headers keep their initial names.
    basic[pivot_row] = entering
    pivot(T, pivot_row, pivot_column)
    logger.debug(
        "primal pivot: %s enters, %s leaves, element %.6g at (%d, %d)",
        entering,
        leaving,
        pivot_element,
        pivot_row,
        pivot_column,
    )

    explanation = (
        f"The entering variable is {entering} (column {pivot_column + 1}) because it has the most "
        f"negative coefficient ({reduced_cost:g}) in the objective row. "
        f"The leaving variable is {leaving} (row {pivot_row + 1}) because it gives the minimum "
        f"ratio ({ratio:.2f}). "
        f"The pivot element is {pivot_element:.2f} at row {pivot_row + 1}, column {pivot_column + 1}. "
        f"The pivot row was divided by the pivot element, then {entering} was eliminated from the other rows."
    )

    return snapshot(
        T,
        basic,
        non_basic,
        explanation,
        pivot_row=pivot_row,
        pivot_column=pivot_column,
        pivot_element=pivot_element,
        entering_variable=entering,
        leaving_variable=leaving,
    )


def solve_primal(problem: Union[Problem, dict]) -> SimplexResult:
    """
    Primal tableau simplex starting from the all-slack basis.
    Assumes that basis is feasible; no Phase I is attempted.
    """

    problem = Problem.model_validate(problem)
    standard, _, _ = standardize_lp(problem)
    tableau, basic_variables, non_basic_variables = create_initial_tableau(standard)

    feasible_start = initial_basis_feasible(tableau)
    explanation = "Initial tableau with the slack variables in the basis."
    if not feasible_start:
        logger.warning("primal simplex started from an infeasible basis (negative right-hand side)")
        explanation += (
            " Warning: some right-hand sides are negative, so the starting basis is not feasible"
            " and the primal method may not produce a meaningful result."
        )

    iterations: List[Iteration] = [
        snapshot(tableau, basic_variables, non_basic_variables, explanation)
    ]

    optimal = False
    unbounded = False
    count = 0
    while not optimal and not unbounded and count < MAX_ITERATIONS:
        step = simplex_iteration(tableau, basic_variables, non_basic_variables)
        iterations.append(step)

        tableau = np.array(step.tableau, dtype=float)
        basic_variables = list(step.basic_variables)
        non_basic_variables = list(step.non_basic_variables)

        optimal = step.is_optimal
        unbounded = step.is_unbounded
        count += 1

    if not optimal and not unbounded:
        logger.warning("primal simplex stopped after %d iterations without terminating", count)

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
        unbounded=unbounded,
        infeasible=False,
        objective_value=objective_value,
        solution=solution,
        dual_solution=dual_solution,
        method="primal",
        initial_basis_feasible=feasible_start,
    )
    logger.info("primal simplex finished: %s after %d iterations", result.status, count)
    return result
