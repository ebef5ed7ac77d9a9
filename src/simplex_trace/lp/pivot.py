import numpy as np
from typing import List, Optional

from ..schemas import Iteration


def pivot(tableau: np.ndarray, row: int, column: int) -> np.ndarray:
    """
    Gauss-Jordan step on one column, in place: scale the pivot row so the
    pivot element becomes 1, then clear the column in every other row
    (objective row included). Caller guarantees a nonzero pivot element.
    """

    tableau[row] = tableau[row] / tableau[row, column]
    for i in range(tableau.shape[0]):
        if i == row:
            continue
        factor = tableau[i, column]
        tableau[i] = tableau[i] - factor * tableau[row]
    return tableau


def column_label(non_basic_variables: List[str], column: int) -> str:
    # Headers only cover x1..xn; slack columns are named by position.
    if column < len(non_basic_variables):
        return non_basic_variables[column]
    return f"s{column - len(non_basic_variables) + 1}"


def snapshot(
    tableau: np.ndarray,
    basic_variables: List[str],
    non_basic_variables: List[str],
    explanation: str,
    *,
    pivot_row: Optional[int] = None,
    pivot_column: Optional[int] = None,
    pivot_element: Optional[float] = None,
    entering_variable: Optional[str] = None,
    leaving_variable: Optional[str] = None,
    is_optimal: bool = False,
    is_unbounded: bool = False,
) -> Iteration:
    """Freeze the current solver state into an Iteration that shares nothing with it."""

    return Iteration(
        tableau=tableau.tolist(),
        basic_variables=list(basic_variables),
        non_basic_variables=list(non_basic_variables),
        pivot_row=pivot_row,
        pivot_column=pivot_column,
        pivot_element=None if pivot_element is None else float(pivot_element),
        entering_variable=entering_variable,
        leaving_variable=leaving_variable,
        explanation=explanation,
        is_optimal=is_optimal,
        is_unbounded=is_unbounded,
    )
