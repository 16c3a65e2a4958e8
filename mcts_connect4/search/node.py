"""Search tree node and UCB1 child selection."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import List, Optional

from mcts_connect4.engine import Position, clone, legal_moves, make, other
from mcts_connect4.errors import SearchPreconditionError


@dataclass(eq=False)
class Node:
    """
    One visited position in the search tree.

    ``win_score`` is accumulated from the point of view of ``mover``, the
    player whose move produced this node. That is the perspective the parent
    needs when it ranks its children, since the parent's side to move is the
    mover of every child.
    """

    position: Position
    parent: Optional["Node"] = None
    move: Optional[int] = None
    mover: int = 0
    children: List["Node"] = field(default_factory=list)
    untried_moves: List[int] = field(default_factory=list)
    visit_count: int = 0
    win_score: float = 0.0

    @classmethod
    def root(cls, position: Position) -> "Node":
        snapshot = clone(position)
        return cls(
            position=snapshot,
            mover=other(snapshot.side_to_move),
            untried_moves=legal_moves(snapshot),
        )

    @property
    def is_fully_expanded(self) -> bool:
        return not self.untried_moves

    def mean_score(self) -> float:
        return 0.0 if self.visit_count == 0 else self.win_score / self.visit_count

    def expand(self) -> "Node":
        if not self.untried_moves:
            raise SearchPreconditionError("no untried moves available to expand")

        col = self.untried_moves.pop()
        next_position = clone(self.position)
        mover = next_position.side_to_move
        make(next_position, col)

        child = Node(
            position=next_position,
            parent=self,
            move=col,
            mover=mover,
            untried_moves=legal_moves(next_position),
        )
        self.children.append(child)
        return child

    def best_child(self, exploration_constant: float) -> "Node":
        if not self.children:
            raise SearchPreconditionError("node has no children to select from")

        best = self.children[0]
        best_score = -math.inf
        for child in self.children:
            score = ucb1(child, self.visit_count, exploration_constant)
            # Strict comparison keeps the first maximum on ties.
            if score > best_score:
                best_score = score
                best = child
        return best

    def most_visited_child(self) -> "Node":
        if not self.children:
            raise SearchPreconditionError("root was never expanded")

        best = self.children[0]
        for child in self.children[1:]:
            if child.visit_count > best.visit_count:
                best = child
        return best


def ucb1(child: Node, parent_visits: int, exploration_constant: float) -> float:
    """
    exploitation + c * sqrt(ln(N_parent) / N_child)

    Unvisited children score +inf so they are always tried first. A parent
    with no visits contributes no exploration term (ln(0) is undefined).
    """

    if child.visit_count == 0:
        return math.inf
    exploitation = child.win_score / child.visit_count
    if parent_visits <= 0:
        return exploitation
    return exploitation + exploration_constant * math.sqrt(math.log(parent_visits) / child.visit_count)
