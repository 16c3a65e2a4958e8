"""Abstract base class for Connect-4 agents."""

from __future__ import annotations

import abc

from mcts_connect4.engine import Position


class Agent(abc.ABC):
    name: str

    @abc.abstractmethod
    def select_move(self, position: Position) -> int:
        raise NotImplementedError
