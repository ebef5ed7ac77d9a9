import numpy as np
import pytest
from pydantic import ValidationError

from simplex_trace.schemas import Problem, Objective, Constraint
from simplex_trace.lp.utils import standardize_lp, create_initial_tableau


def make_mixed_problem() -> Problem:
    return Problem(
        objective=Objective(type="min", coefficients=[2.0, -1.0]),
        constraints=[
            Constraint(coefficients=[1.0, 1.0], relation="<=", rhs=4.0),
            Constraint(coefficients=[1.0, -3.0], relation=">=", rhs=2.0),
            Constraint(coefficients=[0.0, 1.0], relation="=", rhs=1.0),
            Constraint(coefficients=[1.0, 2.0], relation="<=", rhs=-5.0),
        ],
    )


def test_standard_form_is_maximize_with_equalities():
    standard, _, _ = standardize_lp(make_mixed_problem())

    assert standard.objective.type == "max"
    assert all(cons.relation == "=" for cons in standard.constraints)
    assert len(standard.constraints) == 4


def test_minimize_negates_objective():
    standard, _, _ = standardize_lp(make_mixed_problem())
    assert standard.objective.coefficients == [-2.0, 1.0]


def test_greater_equal_rows_are_negated():
    standard, _, _ = standardize_lp(make_mixed_problem())
    row = standard.constraints[1]
    assert row.coefficients == [-1.0, 3.0]
    assert row.rhs == -2.0


def test_negative_rhs_on_less_equal_is_clamped_to_zero():
    standard, _, _ = standardize_lp(make_mixed_problem())
    assert standard.constraints[3].coefficients == [1.0, 2.0]
    assert standard.constraints[3].rhs == 0.0
    assert standard.constraints[2].rhs == 1.0


def test_input_problem_is_left_untouched():
    problem = make_mixed_problem()
    before = problem.model_dump()
    standardize_lp(problem)
    assert problem.model_dump() == before


def test_variable_mappings_are_identities():
    _, original_to_standard, standard_to_original = standardize_lp(make_mixed_problem())
    assert original_to_standard == {"x1": "x1", "x2": "x2"}
    assert standard_to_original == {"x1": "x1", "x2": "x2"}


def test_relation_symbols_are_normalized():
    assert Constraint(coefficients=[1.0], relation="≤", rhs=1.0).relation == "<="
    assert Constraint(coefficients=[1.0], relation="≥", rhs=1.0).relation == ">="
    assert Constraint(coefficients=[1.0], relation="==", rhs=1.0).relation == "="


def test_unknown_relation_is_rejected():
    with pytest.raises(ValidationError):
        Constraint(coefficients=[1.0], relation="<", rhs=1.0)


def test_initial_tableau_layout():
    standard, _, _ = standardize_lp(make_mixed_problem())
    tableau, basic, non_basic = create_initial_tableau(standard)

    assert tableau.shape == (5, 2 + 4 + 1)
    assert basic == ["s1", "s2", "s3", "s4"]
    assert non_basic == ["x1", "x2"]

    np.testing.assert_array_equal(tableau[:4, 2:6], np.eye(4))
    np.testing.assert_array_equal(tableau[1], [-1.0, 3.0, 0.0, 1.0, 0.0, 0.0, -2.0])
    # objective row: negated maximize coefficients, zero slacks, zero RHS
    np.testing.assert_array_equal(tableau[-1], [2.0, -1.0, 0.0, 0.0, 0.0, 0.0, 0.0])
