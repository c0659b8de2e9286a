"""
Tests for the matrix chain order planner
"""

import numpy as np
import pytest

import matchain as mc

REFERENCE_DIMS = [30, 35, 15, 5, 10, 20, 25]


def test_reference_chain_cost():
    plan = mc.plan_chain(REFERENCE_DIMS)
    assert plan.length == 6
    assert plan.min_cost == 15125
    assert plan.cost[2, 5] == 7125


def test_reference_chain_splits():
    plan = mc.plan_chain(REFERENCE_DIMS)
    assert plan.split_point(1, 6) == 3
    assert plan.split_point(1, 3) == 1
    assert plan.split_point(4, 6) == 5
    assert plan.parenthesization(list("ABCDEF")) == "((A(BC))((DE)F))"


def test_default_names_in_parenthesization():
    plan = mc.plan_chain([10, 100, 5, 50])
    assert plan.parenthesization() == "((A1A2)A3)"
    assert plan.min_cost == 7500


def test_diagonal_costs_are_zero():
    plan = mc.plan_chain(REFERENCE_DIMS)
    assert all(plan.cost[i, i] == 0 for i in range(1, 7))


def test_ties_pick_lowest_split():
    # Both (AB)C and A(BC) cost 16
    plan = mc.plan_chain([2, 2, 2, 2])
    assert plan.min_cost == 16
    assert plan.split_point(1, 3) == 1


def test_planning_is_deterministic():
    first = mc.plan_chain([5, 5, 5, 5, 5, 5])
    second = mc.plan_chain([5, 5, 5, 5, 5, 5])
    assert np.array_equal(first.split, second.split)
    assert np.array_equal(first.cost, second.cost)
    assert first.split_point(1, 5) == 1


def test_tables_are_read_only():
    plan = mc.plan_chain([2, 3, 4])
    with pytest.raises(ValueError):
        plan.cost[1, 2] = 0


def test_plan_needs_two_matrices():
    with pytest.raises(ValueError):
        mc.plan_chain([3, 4])


def test_planner_uses_matrix_shapes():
    matrices = [mc.Matrix(r, c, n) for (r, c, n) in [(10, 100, "A"), (100, 5, "B"), (5, 50, "C")]]
    plan = mc.ChainPlanner().plan(matrices)
    assert plan.dims == (10, 100, 5, 50)
    assert plan.min_cost == 7500


def test_planner_logs_tables(caplog):
    matrices = [mc.Matrix(2, 3, "A"), mc.Matrix(3, 4, "B"), mc.Matrix(4, 5, "C")]
    with caplog.at_level("DEBUG", logger="matchain.planner"):
        mc.ChainPlanner(log_tables=True).plan(matrices)
    assert "Cost table" in caplog.text
    assert "Split table" in caplog.text
