import numpy as np
from typing import Dict, List, Optional, Sequence, Tuple, Union

TableauLike = Union[np.ndarray, Sequence[Sequence[float]]]


def extract_solution(
    tableau: TableauLike,
    basic_variables: List[str],
    num_variables: int,
    num_constraints: int,
    optimal: bool,
) -> Tuple[Dict[str, float], Dict[str, float], Optional[float]]:
    """
    Read primal values, shadow prices and the objective value off a tableau.

    Non-basic decision variables are 0; a basic one takes the RHS of the row it
    owns. Shadow prices are the objective-row entries under the slack columns.
    The objective value is only reported for an optimal tableau.
    """

    T = np.asarray(tableau, dtype=float)
    last = T.shape[1] - 1
    objective_row = T[-1]

    solution: Dict[str, float] = {f"x{j + 1}": 0.0 for j in range(num_variables)}
    for row, name in enumerate(basic_variables):
        if name in solution:
            solution[name] = float(T[row, last])

    dual_solution: Dict[str, float] = {
        f"y{i + 1}": float(objective_row[num_variables + i]) for i in range(num_constraints)
    }

    objective_value = float(objective_row[last]) if optimal else None
    return solution, dual_solution, objective_value


def initial_basis_feasible(tableau: TableauLike) -> bool:
    """True when the all-slack basis is primal feasible (no negative constraint RHS)."""
    T = np.asarray(tableau, dtype=float)
    return bool(np.all(T[:-1, -1] >= 0))
