import random

import pytest

from gomokubot.agent.minimax_agent import MinimaxAgent, decide
from gomokubot.agent.random_agent import RandomAgent
from gomokubot.agent.search import NoLegalMoveError, SearchConfig
from gomokubot.game.board import BOARD_SIZE, Board, GomokuGameState
from gomokubot.game.types import Player, Point


def _full_board():
    grid = [[1 + (x // 2 + y) % 2 for y in range(BOARD_SIZE)] for x in range(BOARD_SIZE)]
    return Board.from_grid(grid)


class TestRandomAgent:
    def test_returns_legal_move(self):
        g = GomokuGameState()
        agent = RandomAgent(seed=0)
        for _ in range(10):
            move = agent.select_move(g)
            assert isinstance(move, Point)
            assert g.board.is_empty(move)
            g.apply_move(move)

    def test_name(self):
        assert RandomAgent().name == "RandomAgent"

    def test_seeded(self):
        g = GomokuGameState()
        assert RandomAgent(seed=4).select_move(g) == RandomAgent(seed=4).select_move(g)


class TestDecide:
    def test_empty_board_plays_center(self):
        assert decide(Player.BLACK, Board()) == Point(7, 7)

    def test_returns_empty_cell_and_leaves_board(self):
        board = Board()
        board.place(Point(7, 7), Player.BLACK)
        board.place(Point(7, 8), Player.WHITE)
        before = board.copy()
        move = decide(Player.BLACK, board, config=SearchConfig(depth=2), rng=random.Random(0))
        assert board == before
        assert board.in_bounds(move)
        assert board.is_empty(move)

    def test_seeded_runs_agree(self):
        board = Board()
        board.place(Point(7, 7), Player.BLACK)
        board.place(Point(8, 8), Player.WHITE)
        a = decide(Player.BLACK, board, rng=random.Random(9))
        b = decide(Player.BLACK, board, rng=random.Random(9))
        assert a == b

    def test_full_board_raises(self):
        with pytest.raises(NoLegalMoveError):
            decide(Player.BLACK, _full_board())


class TestMinimaxAgent:
    def test_default_depth(self):
        assert MinimaxAgent().depth == 3

    def test_name(self):
        assert MinimaxAgent(SearchConfig(depth=4)).name == "MinimaxAgent(d=4)"

    def test_plays_for_side_to_move(self):
        g = GomokuGameState()
        agent = MinimaxAgent(SearchConfig(depth=2), seed=1)
        g.apply_move(agent.select_move(g))
        assert g.moves[0].point == Point(7, 7)
        move = agent.select_move(g)
        assert g.board.is_empty(move)
        assert abs(move.x - 7) <= 2 and abs(move.y - 7) <= 2
        assert g.board.occupied_count == 1

    def test_finds_winning_move(self):
        g = GomokuGameState()
        for black, white in [((7, 6), (0, 0)), ((7, 7), (0, 2)), ((7, 8), (0, 4)), ((7, 9), (0, 6))]:
            g.apply_move(Point(*black))
            g.apply_move(Point(*white))
        move = MinimaxAgent(seed=0).select_move(g)
        assert move in (Point(7, 5), Point(7, 10))
        g.apply_move(move)
        assert g.winner is Player.BLACK

    def test_beats_random_agent(self):
        g = GomokuGameState()
        bot = MinimaxAgent(SearchConfig(depth=2), seed=0)
        rand = RandomAgent(seed=0)
        while not g.is_over and len(g.moves) < 80:
            agent = bot if g.current_player is Player.BLACK else rand
            g.apply_move(agent.select_move(g))
        assert g.winner is Player.BLACK
