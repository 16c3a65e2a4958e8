"""UCT Monte Carlo Tree Search over Connect-4 positions."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

import numpy as np
from loguru import logger

from mcts_connect4.engine import Position, Status, clone, legal_moves, make, outcome_value, win_status
from mcts_connect4.errors import NoLegalMoveError
from mcts_connect4.search.node import Node


@dataclass(frozen=True)
class ChildStats:
    move: int
    visits: int
    mean_score: float


def find_immediate_win(position: Position) -> Optional[int]:
    """Return the lowest column that wins on the spot for the side to move."""

    target = win_status(position.side_to_move)
    for col in legal_moves(position):
        probe = clone(position)
        make(probe, col)
        if probe.status is target:
            return col
    return None


def rollout(position: Position, rng: np.random.Generator) -> int:
    """
    Play uniformly random moves on a copy until the game is decided.

    Returns +1 if PLAYER_A wins, -1 if PLAYER_B wins and 0 for a draw.
    """

    s = clone(position)
    while s.status is Status.ONGOING:
        legal = legal_moves(s)
        make(s, legal[int(rng.integers(len(legal)))])
    return outcome_value(s.status)


def backpropagate(node: Node, outcome: int) -> None:
    """
    Push one rollout result from ``node`` up to the root.

    The value starts as the outcome seen by the player who moved into
    ``node`` and changes sign at every level, because consecutive levels
    belong to opposite movers.
    """

    value = float(outcome * node.mover)
    cur: Optional[Node] = node
    while cur is not None:
        cur.visit_count += 1
        cur.win_score += value
        value = -value
        cur = cur.parent


def require_open_position(position: Position) -> None:
    if position.status is not Status.ONGOING:
        raise NoLegalMoveError(f"no legal moves: game is {position.status.value}")


def search(
    position: Position,
    iterations: int,
    exploration_constant: float,
    rng: Optional[np.random.Generator] = None,
) -> Node:
    """Grow a fresh tree rooted at a copy of ``position`` and return its root."""

    require_open_position(position)
    if iterations < 0:
        raise ValueError("iterations must be >= 0")
    if rng is None:
        rng = np.random.default_rng()

    root = Node.root(position)

    for _ in range(iterations):
        node = root

        # Selection
        while node.is_fully_expanded and node.children:
            node = node.best_child(exploration_constant)

        # Expansion (one step)
        if not node.is_fully_expanded:
            node = node.expand()

        # Simulation
        outcome = rollout(node.position, rng)

        # Backpropagation
        backpropagate(node, outcome)

    if not root.children:
        root.expand()

    return root


def root_statistics(root: Node) -> List[ChildStats]:
    stats = [ChildStats(move=int(ch.move), visits=ch.visit_count, mean_score=ch.mean_score()) for ch in root.children]
    return sorted(stats, key=lambda st: st.move)


def choose_move(
    position: Position,
    iterations: int,
    exploration_constant: float,
    rng: Optional[np.random.Generator] = None,
) -> int:
    """
    Pick a column for the side to move.

    An immediate win is taken without searching. Otherwise the most visited
    root child after ``iterations`` rounds wins, which is more robust than
    the best mean score.
    """

    require_open_position(position)

    winning = find_immediate_win(position)
    if winning is not None:
        logger.debug("immediate win available at column {}", winning)
        return winning

    root = search(position, iterations, exploration_constant, rng)
    best = root.most_visited_child()
    logger.debug(
        "mcts chose column {} after {} iterations (visits: {})",
        best.move,
        iterations,
        {st.move: st.visits for st in root_statistics(root)},
    )
    return int(best.move)
