import json
import logging
from pathlib import Path

import pytest

from simplex_trace.schemas import Problem, Objective, Constraint
from simplex_trace.lp import simplex
from simplex_trace.lp.simplex import solve_primal, find_pivot_column, find_pivot_row


def load_example(name: str) -> Problem:
    data = json.loads(Path(__file__).parent.parent.joinpath("examples", name).read_text())
    return Problem.model_validate(data)


def test_primal_solves_production_lp():
    result = solve_primal(load_example("production_lp.json"))

    assert result.method == "primal"
    assert result.optimal
    assert not result.unbounded and not result.infeasible
    assert result.status == "optimal"
    assert result.objective_value == pytest.approx(33.0)
    assert result.solution["x1"] == pytest.approx(3.0)
    assert result.solution["x2"] == pytest.approx(12.0)
    assert result.dual_solution["y1"] == pytest.approx(1.25)
    assert result.dual_solution["y2"] == pytest.approx(0.25)
    assert result.dual_solution["y3"] == pytest.approx(0.0, abs=1e-12)


def test_primal_trace_records_every_pivot():
    result = solve_primal(load_example("production_lp.json"))
    steps = result.iterations

    # initial snapshot, three pivots, terminal snapshot
    assert len(steps) == 5
    assert steps[0].pivot_row is None
    assert steps[0].basic_variables == ["s1", "s2", "s3"]

    first = steps[1]
    assert (first.pivot_row, first.pivot_column) == (2, 0)
    assert first.pivot_element == pytest.approx(3.0)
    assert first.entering_variable == "x1"
    assert first.leaving_variable == "s3"
    assert first.basic_variables == ["s1", "s2", "x1"]
    assert "x1" in first.explanation and "s3" in first.explanation
    assert "(8.00)" in first.explanation

    # a slack column re-enters on the third pivot
    third = steps[3]
    assert third.pivot_column == 4
    assert third.entering_variable == "s3"
    assert third.leaving_variable == "s2"
    assert third.basic_variables == ["x2", "s3", "x1"]

    assert steps[-1].is_optimal
    assert steps[-1].entering_variable is None


def test_non_basic_headers_never_change():
    result = solve_primal(load_example("production_lp.json"))
    for step in result.iterations:
        assert step.non_basic_variables == ["x1", "x2"]


def test_basis_and_shape_invariants_hold_for_every_iteration():
    result = solve_primal(load_example("production_lp.json"))
    for step in result.iterations:
        assert len(step.basic_variables) == 3
        assert len(step.tableau) == 4
        assert all(len(row) == 2 + 3 + 1 for row in step.tableau)


def test_pivot_column_is_unit_vector_after_each_pivot():
    result = solve_primal(load_example("production_lp.json"))
    for step in result.iterations:
        if step.pivot_element is None:
            continue
        column = [row[step.pivot_column] for row in step.tableau]
        for i, value in enumerate(column):
            assert value == (1.0 if i == step.pivot_row else 0.0)


def test_unbounded_detection():
    problem = Problem(
        objective=Objective(type="max", coefficients=[1.0, 0.0]),
        constraints=[Constraint(coefficients=[1.0, -1.0], relation="<=", rhs=1.0)],
    )
    result = solve_primal(problem)

    assert result.unbounded
    assert not result.optimal
    assert result.status == "unbounded"
    assert result.objective_value is None
    last = result.iterations[-1]
    assert last.is_unbounded
    assert last.pivot_column == 1
    assert last.entering_variable == "x2"
    assert last.pivot_row is None


def test_already_optimal_problem_keeps_initial_snapshot():
    problem = Problem(
        objective=Objective(type="min", coefficients=[1.0]),
        constraints=[Constraint(coefficients=[1.0], relation="<=", rhs=5.0)],
    )
    result = solve_primal(problem)

    assert result.optimal
    assert len(result.iterations) == 2
    assert result.solution == {"x1": 0.0}
    assert result.objective_value == 0.0


def test_infeasible_start_is_surfaced(caplog):
    problem = Problem(
        objective=Objective(type="max", coefficients=[1.0]),
        constraints=[
            Constraint(coefficients=[1.0], relation=">=", rhs=2.0),
            Constraint(coefficients=[1.0], relation="<=", rhs=4.0),
        ],
    )
    with caplog.at_level(logging.WARNING, logger="simplex_trace.lp.simplex"):
        result = solve_primal(problem)

    assert not result.initial_basis_feasible
    assert "not feasible" in result.iterations[0].explanation
    assert any("infeasible basis" in rec.getMessage() for rec in caplog.records)
    assert result.optimal
    assert result.solution["x1"] == pytest.approx(4.0)


def test_iteration_cap_stops_silently(monkeypatch):
    monkeypatch.setattr(simplex, "MAX_ITERATIONS", 1)
    result = solve_primal(load_example("production_lp.json"))

    assert len(result.iterations) == 2
    assert not result.optimal and not result.unbounded and not result.infeasible
    assert result.status == "iteration_limit"
    assert result.objective_value is None


def test_accepts_plain_dicts():
    data = json.loads(Path(__file__).parent.parent.joinpath("examples", "production_lp.json").read_text())
    result = solve_primal(data)
    assert result.objective_value == pytest.approx(33.0)


def test_selection_rules_break_ties_on_first_candidate():
    import numpy as np

    tableau = np.array(
        [
            [1.0, 2.0, 1.0, 0.0, 4.0],
            [2.0, 1.0, 0.0, 1.0, 8.0],
            [-5.0, -5.0, 0.0, 0.0, 0.0],
        ]
    )
    assert find_pivot_column(tableau) == 0
    # ratios 4/1 and 8/2 tie; the upper row wins
    assert find_pivot_row(tableau, 0) == 0

    tableau[-1] = [0.0, 1.0, 2.0, 0.0, 7.0]
    assert find_pivot_column(tableau) is None
