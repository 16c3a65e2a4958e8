"""Monte Carlo Tree Search for Connect-4."""

from mcts_connect4.search.mcts import (
    ChildStats,
    backpropagate,
    choose_move,
    find_immediate_win,
    require_open_position,
    rollout,
    root_statistics,
    search,
)
from mcts_connect4.search.node import Node, ucb1
from mcts_connect4.search.parallel import choose_move_parallel, merge_visit_counts

__all__ = [
    "ChildStats",
    "Node",
    "backpropagate",
    "choose_move",
    "choose_move_parallel",
    "find_immediate_win",
    "merge_visit_counts",
    "require_open_position",
    "rollout",
    "root_statistics",
    "search",
    "ucb1",
]
