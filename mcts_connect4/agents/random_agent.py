"""Uniform random baseline agent."""

from __future__ import annotations

from typing import Optional

import numpy as np

from mcts_connect4.agents.base import Agent
from mcts_connect4.engine import Position, legal_moves
from mcts_connect4.errors import NoLegalMoveError


class RandomAgent(Agent):
    def __init__(self, name: str, seed: Optional[int] = None) -> None:
        self.name = name
        self.rng = np.random.default_rng(seed)

    def select_move(self, position: Position) -> int:
        legal = legal_moves(position)
        if not legal:
            raise NoLegalMoveError("no legal moves available")
        return int(legal[int(self.rng.integers(len(legal)))])
