"""Agent that picks moves with Monte Carlo Tree Search."""

from __future__ import annotations

from typing import Optional, Tuple

import numpy as np

from mcts_connect4.agents.base import Agent
from mcts_connect4.config import MCTSConfig
from mcts_connect4.engine import Position
from mcts_connect4.search import choose_move_parallel, find_immediate_win, require_open_position, search
from mcts_connect4.search.node import Node


class MCTSAgent(Agent):
    """
    Runs one search per move with a fixed budget and its own seeded generator.

    A fresh tree is built for every move; nothing carries over between turns.
    With ``workers > 1`` the search runs root-parallel in worker processes.
    """

    def __init__(self, name: str, config: Optional[MCTSConfig] = None) -> None:
        self.name = name
        self.config = config if config is not None else MCTSConfig()
        self.config.validate()
        self.rng = np.random.default_rng(self.config.seed)

    def select_move(self, position: Position) -> int:
        move, _ = self.select_move_with_root(position)
        return move

    def select_move_with_root(self, position: Position) -> Tuple[int, Optional[Node]]:
        """
        Return the chosen column and the root of the tree that chose it.

        The root is None when an immediate win was taken or the search ran
        root-parallel, since no single tree decided the move then.
        """

        cfg = self.config
        require_open_position(position)

        winning = find_immediate_win(position)
        if winning is not None:
            return winning, None

        if cfg.workers > 1:
            move = choose_move_parallel(
                position,
                cfg.iterations,
                cfg.exploration_constant,
                workers=cfg.workers,
                seed=int(self.rng.integers(2**31)),
            )
            return move, None

        root = search(position, cfg.iterations, cfg.exploration_constant, rng=self.rng)
        return int(root.most_visited_child().move), root
