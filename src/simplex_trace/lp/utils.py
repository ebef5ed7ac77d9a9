import numpy as np
from typing import Dict, Tuple, List

from ..schemas import Problem, Objective, Constraint


def standardize_lp(problem: Problem) -> Tuple[Problem, Dict[str, str], Dict[str, str]]:
    """
    Convert a general LP to the internal form: maximize, every row an equality
    that gets its own slack column. Return the standard problem and the
    original <-> standard variable-name mappings.
    """

    num_vars = problem.num_variables

    coefficients = list(problem.objective.coefficients)
    if problem.objective.type == "min":
        coefficients = [-c for c in coefficients]
    objective = Objective(type="max", coefficients=coefficients)

    constraints: List[Constraint] = []
    for cons in problem.constraints:
        if cons.relation == ">=":
            constraints.append(
                Constraint(
                    coefficients=[-a for a in cons.coefficients],
                    relation="=",
                    rhs=-cons.rhs,
                )
            )
        else:
            # <= and = rows keep their coefficients; a negative RHS is clamped to 0
            constraints.append(
                Constraint(
                    coefficients=list(cons.coefficients),
                    relation="=",
                    rhs=max(0.0, cons.rhs),
                )
            )

    original_to_standard: Dict[str, str] = {}
    standard_to_original: Dict[str, str] = {}
    for idx in range(num_vars):
        name = f"x{idx + 1}"
        original_to_standard[name] = name
        standard_to_original[name] = name

    return (
        Problem(objective=objective, constraints=constraints),
        original_to_standard,
        standard_to_original,
    )


def create_initial_tableau(problem: Problem) -> Tuple[np.ndarray, List[str], List[str]]:
    """
    Build the starting tableau for a standardized problem.

    Rows are the constraints followed by the objective row; columns are the
    decision variables, one slack per constraint, and the RHS. Slacks form the
    initial basis.
    """

    num_vars = problem.num_variables
    m = problem.num_constraints

    tableau = np.zeros((m + 1, num_vars + m + 1), dtype=float)
    for i, cons in enumerate(problem.constraints):
        tableau[i, :num_vars] = cons.coefficients
        tableau[i, num_vars + i] = 1.0
        tableau[i, -1] = cons.rhs

    # Objective row holds reduced costs, so the maximize coefficients are negated
    tableau[m, :num_vars] = [-c for c in problem.objective.coefficients]

    basic_variables = [f"s{i + 1}" for i in range(m)]
    non_basic_variables = [f"x{j + 1}" for j in range(num_vars)]
    return tableau, basic_variables, non_basic_variables
