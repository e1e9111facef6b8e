from __future__ import annotations

import random
from typing import Optional

from gomokubot.game.board import GomokuGameState
from gomokubot.game.types import Point

from .base import Agent


class RandomAgent(Agent):
    def __init__(self, seed: Optional[int] = None) -> None:
        self.rng = random.Random(seed)

    def select_move(self, game_state: GomokuGameState) -> Point:
        moves = game_state.legal_moves()
        assert moves, "No legal moves available"
        return self.rng.choice(moves)
