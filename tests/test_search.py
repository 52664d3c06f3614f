"""Tests for the backtracking search."""

import pytest

from src.bingo.board import ALL_CELLS, Board
from src.bingo.render import render_rows
from src.bingo.rules import (
    REFERENCE_RULES,
    Const,
    Not,
    RuleConfigurationError,
    RuleTable,
    asserts,
    cell,
    defines,
    free,
)
from src.bingo.search import iter_solutions, search, solve
from src.bingo.tristate import FALSE, TRUE, UNKNOWN
from src.utils.trace import Tracer


def _free_table(**overrides):
    return RuleTable(overrides.get(c.label, free(c.label)) for c in ALL_CELLS)


def test_unconstrained_depth_first_reaches_all_marked_board_first():
    result = search(_free_table(), strategy="depth", tracer=Tracer(enabled=False))
    assert result.status == "solved"
    assert render_rows(result.solutions[0]) == ["XXXXX"] * 5
    assert result.stats.expanded == 25
    assert result.stats.pruned == 0


def test_single_forced_solution():
    table = RuleTable(defines(c.label, Const(FALSE)) for c in ALL_CELLS)
    tracer = Tracer(enabled=True)
    result = search(table, find_all=True, tracer=tracer)
    assert [render_rows(b) for b in result.solutions] == [["     "] * 5]
    # Every marked child is pruned straight away.
    assert result.stats.pruned == 25
    assert tracer.summary()["num_prunes"] == 25
    assert tracer.summary()["num_solutions"] == 1


def test_contradictory_rule_means_no_solution():
    table = _free_table(A1=defines("A1", Not(cell("A1"))))
    for strategy in ("breadth", "depth"):
        result = search(table, strategy=strategy, tracer=Tracer(enabled=False))
        assert result.status == "unsolved"
        assert result.solutions == []
        assert result.stats.pruned == 2


def test_undecided_complete_board_is_fatal():
    table = _free_table(C5=asserts("C5", Const(UNKNOWN)))
    with pytest.raises(RuleConfigurationError):
        next(iter_solutions(table, strategy="depth", tracer=Tracer(enabled=False)))


def test_unknown_strategy_rejected():
    with pytest.raises(ValueError):
        next(iter_solutions(strategy="random"))


def test_reference_puzzle_has_exactly_two_solutions():
    result = search(REFERENCE_RULES, find_all=True, tracer=Tracer(enabled=False))
    rendered = [render_rows(board) for board in result.solutions]
    assert rendered == [
        [" X XX", "XXXXX", "  X X", " X XX", "X X X"],
        [" X  X", "XXXXX", "  X X", " X  X", "X X X"],
    ]
    assert result.stats.pruned > 0
    for board in result.solutions:
        assert board.is_complete()
        # Rebuilt from text, the board is re-derived from scratch.
        rebuilt = Board.from_rows(render_rows(board))
        assert rebuilt == board
        assert REFERENCE_RULES.is_valid(rebuilt) is TRUE


def test_first_solution_matches_between_strategies():
    first_depth = solve(REFERENCE_RULES, strategy="depth")
    first_breadth = solve(REFERENCE_RULES, strategy="breadth")
    assert len(first_depth) == 1
    assert len(first_breadth) == 1
    assert render_rows(first_depth[0]) == render_rows(first_breadth[0])
    assert render_rows(first_depth[0]) == [" X XX", "XXXXX", "  X X", " X XX", "X X X"]
