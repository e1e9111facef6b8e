"""Tests for the line-pattern evaluator."""

import random

import pytest

from gomokubot.agent.evaluator import (
    LIVE3,
    LIVE4,
    OPEN3,
    OPEN4,
    SITUATION_WEIGHTS,
    WIN5,
    LineEvaluator,
    Situation,
    classify,
    line_signature,
    tally_board,
)
from gomokubot.game.board import Board
from gomokubot.game.types import Player, Point

HORIZONTAL = (0, 1)
VERTICAL = (1, 0)
UP_RIGHT = (-1, 1)


def _row(black_cols, white_cols=(), x=7):
    b = Board()
    for y in black_cols:
        b.place(Point(x, y), Player.BLACK)
    for y in white_cols:
        b.place(Point(x, y), Player.WHITE)
    return b


class FixedRng:
    """Returns the queued jitter values in order."""

    def __init__(self, values):
        self.values = list(values)

    def randrange(self, n):
        return self.values.pop(0)


# ---------------------------------------------------------------------------
# Catalogs
# ---------------------------------------------------------------------------

class TestCatalogs:
    def test_window_widths(self):
        assert all(len(s) == 5 for s in WIN5)
        assert all(len(s) == 6 for s in LIVE4 | OPEN4)
        assert all(len(s) == 7 for s in LIVE3 | OPEN3)

    def test_literal_signatures(self):
        assert WIN5 == {"OOOOO"}
        assert LIVE4 == {".OOOO."}
        assert "XOOOO." in OPEN4
        assert "OO.OO." in OPEN4
        assert "..OOO.." in LIVE3
        assert "X.OOO.X" in OPEN3

    def test_dead_four_not_catalogued(self):
        assert "XOOOOX" not in LIVE4
        assert "XOOOOX" not in OPEN4


# ---------------------------------------------------------------------------
# Signatures
# ---------------------------------------------------------------------------

class TestSignature:
    def test_symbols(self):
        b = _row([6, 7], white_cols=[9])
        assert line_signature(b, Point(7, 7), HORIZONTAL, Player.BLACK) == "..OO.X."
        assert line_signature(b, Point(7, 9), HORIZONTAL, Player.WHITE) == "XX.O..."

    def test_off_board_is_blocked(self):
        b = Board()
        b.place(Point(0, 0), Player.BLACK)
        assert line_signature(b, Point(0, 0), HORIZONTAL, Player.BLACK) == "XXXO..."
        assert line_signature(b, Point(0, 0), VERTICAL, Player.BLACK) == "XXXO..."
        assert line_signature(b, Point(0, 0), UP_RIGHT, Player.BLACK) == "XXXOXXX"

    def test_far_edge(self):
        b = Board()
        b.place(Point(14, 14), Player.WHITE)
        assert line_signature(b, Point(14, 14), HORIZONTAL, Player.WHITE) == "...OXXX"

    def test_corner_stones_tally_without_error(self):
        b = Board()
        for pt in (Point(0, 0), Point(0, 14), Point(14, 0), Point(14, 14)):
            b.place(pt, Player.BLACK)
        tally = tally_board(b)
        assert all(tally.count(Player.BLACK, s) == 0 for s in Situation)


# ---------------------------------------------------------------------------
# Classification
# ---------------------------------------------------------------------------

class TestClassify:
    def test_win5_with_open_flanks(self):
        b = _row([5, 6, 7, 8, 9])
        sig = line_signature(b, Point(7, 7), HORIZONTAL, Player.BLACK)
        assert sig == ".OOOOO."
        assert classify(sig) is Situation.WIN5

    def test_live_four(self):
        assert classify("..OOOO.") is Situation.LIVE4

    def test_open_four_blocked_by_opponent(self):
        b = _row([6, 7, 8, 9], white_cols=[5])
        sig = line_signature(b, Point(7, 7), HORIZONTAL, Player.BLACK)
        assert classify(sig) is Situation.OPEN4

    def test_open_four_blocked_by_edge(self):
        b = Board()
        for y in range(4):
            b.place(Point(3, y), Player.BLACK)
        sig = line_signature(b, Point(3, 1), HORIZONTAL, Player.BLACK)
        assert sig == "XXOOOO."
        assert classify(sig) is Situation.OPEN4

    def test_broken_four(self):
        assert classify(".OO.OO.") is Situation.OPEN4

    def test_live_three(self):
        assert classify("..OOO..") is Situation.LIVE3
        assert classify("..OO.O.") is Situation.LIVE3

    def test_open_three(self):
        b = _row([6, 7, 8], white_cols=[5])
        sig = line_signature(b, Point(7, 7), HORIZONTAL, Player.BLACK)
        assert sig == ".XOOO.."
        assert classify(sig) is Situation.OPEN3

    def test_win_beats_four(self):
        assert classify("OOOOOO.") is Situation.WIN5

    def test_nothing(self):
        assert classify("...O...") is None
        assert classify("XXOOOXX") is None


# ---------------------------------------------------------------------------
# Tally and score
# ---------------------------------------------------------------------------

class TestTally:
    def test_live_three_credits_each_stone(self):
        tally = tally_board(_row([6, 7, 8]))
        assert tally.count(Player.BLACK, Situation.LIVE3) == 3
        assert tally.weighted(Player.BLACK) == 3 * SITUATION_WEIGHTS[Situation.LIVE3]
        assert tally.weighted(Player.WHITE) == 0

    def test_five_credits_center(self):
        tally = tally_board(_row([5, 6, 7, 8, 9]))
        assert tally.count(Player.BLACK, Situation.WIN5) == 1

    def test_two_patterns_never_populated(self):
        tally = tally_board(_row([6, 7], white_cols=[9, 10]))
        assert tally.count(Player.BLACK, Situation.SELF2) == 0
        assert tally.count(Player.WHITE, Situation.ENEMY2) == 0

    def test_as_dict(self):
        d = tally_board(_row([6, 7, 8])).as_dict(Player.BLACK)
        assert d["live3"] == 3
        assert set(d) == {s.value for s in Situation}


class TestLineEvaluator:
    def test_own_perspective(self):
        ev = LineEvaluator(Player.BLACK, jitter=0)
        assert ev.evaluate(_row([6, 7, 8])) == 3000

    def test_opponent_is_weighted(self):
        ev = LineEvaluator(Player.WHITE, jitter=0)
        assert ev.evaluate(_row([6, 7, 8])) == pytest.approx(-3600)

    def test_jitter_added_to_both_sides(self):
        ev = LineEvaluator(Player.BLACK, rng=FixedRng([7, 3]))
        assert ev.evaluate(_row([6, 7, 8])) == pytest.approx(3007 - 1.2 * 3)

    def test_jitter_range(self):
        ev = LineEvaluator(Player.BLACK, rng=random.Random(0))
        for _ in range(50):
            value = ev.evaluate(Board())
            assert -1.2 * 19 <= value <= 19

    def test_seeded_jitter_repeats(self):
        board = _row([6, 7, 8], white_cols=[5])
        a = LineEvaluator(Player.BLACK, rng=random.Random(11))
        b = LineEvaluator(Player.BLACK, rng=random.Random(11))
        assert [a.evaluate(board) for _ in range(5)] == [b.evaluate(board) for _ in range(5)]

    def test_win_dominates(self):
        ev = LineEvaluator(Player.BLACK, jitter=0)
        assert ev.evaluate(_row([5, 6, 7, 8, 9])) > 1_000_000
