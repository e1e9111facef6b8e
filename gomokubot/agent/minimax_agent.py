"""Minimax agent: one alpha-beta search per move over the candidate frontier."""

from __future__ import annotations

import logging
import random
from typing import Optional

from gomokubot.agent.base import Agent
from gomokubot.agent.candidates import CandidateMoveSet
from gomokubot.agent.search import AlphaBetaSearch, NoLegalMoveError, SearchConfig
from gomokubot.game.board import Board, GomokuGameState, format_point
from gomokubot.game.types import Player, Point

logger = logging.getLogger(__name__)


def decide(
    player: Player,
    board: Board,
    config: Optional[SearchConfig] = None,
    rng: Optional[random.Random] = None,
) -> Point:
    """Choose the next move for `player` on `board`.

    The board is searched in place and left as it was found.
    """
    if board.is_full:
        raise NoLegalMoveError("board is full")
    candidates = CandidateMoveSet.from_board(board)
    search = AlphaBetaSearch(player, config=config, rng=rng)
    move = search.search(board, candidates)
    logger.info(
        "%s plays %s (%d,%d) after %d nodes",
        player, format_point(move), move.x, move.y, search.stats.nodes,
    )
    return move


class MinimaxAgent(Agent):
    """Alpha-beta agent with line-pattern evaluation."""

    def __init__(self, config: Optional[SearchConfig] = None, seed: Optional[int] = None) -> None:
        self.config = config or SearchConfig()
        self.rng = random.Random(seed)

    @property
    def depth(self) -> int:
        return self.config.depth

    @property
    def name(self) -> str:
        return f"MinimaxAgent(d={self.depth})"

    def select_move(self, game_state: GomokuGameState) -> Point:
        board = game_state.board.copy()
        return decide(game_state.current_player, board, config=self.config, rng=self.rng)
