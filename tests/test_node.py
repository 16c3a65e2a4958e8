import math

import pytest

from mcts_connect4.engine import PLAYER_A, PLAYER_B, clone, new_game, play_moves
from mcts_connect4.errors import SearchPreconditionError
from mcts_connect4.search.mcts import backpropagate
from mcts_connect4.search.node import Node, ucb1


@pytest.fixture
def root_node() -> Node:
    return Node.root(new_game())


def test_root_node_init(root_node):
    assert root_node.parent is None
    assert root_node.move is None
    assert root_node.children == []
    assert root_node.untried_moves == list(range(7))
    assert root_node.visit_count == 0
    assert root_node.win_score == 0.0
    # the root is credited to the player who moved into it
    assert root_node.mover == PLAYER_B


def test_root_owns_a_copy():
    s = play_moves([3])
    root = Node.root(s)
    root.expand()
    assert root.position == s
    assert root.position.board is not s.board


def test_expand_pops_last_untried_move(root_node):
    child = root_node.expand()
    assert child.move == 6
    assert child.mover == PLAYER_A
    assert child.parent is root_node
    assert root_node.children == [child]
    assert root_node.untried_moves == [0, 1, 2, 3, 4, 5]
    assert int(child.position.heights[6]) == 1
    assert int(root_node.position.heights[6]) == 0
    assert child.untried_moves == list(range(7))


def test_expand_until_exhausted(root_node):
    moves = [root_node.expand().move for _ in range(7)]
    assert moves == [6, 5, 4, 3, 2, 1, 0]
    assert root_node.is_fully_expanded
    with pytest.raises(SearchPreconditionError):
        root_node.expand()


def test_terminal_child_has_no_untried_moves():
    root = Node.root(play_moves([0, 6, 1, 6, 2, 5]))
    root.untried_moves = [3]
    child = root.expand()
    assert child.untried_moves == []
    assert child.is_fully_expanded


def test_ucb1_score():
    parent = Node.root(new_game())
    parent.visit_count = 10
    child = parent.expand()
    child.visit_count = 5
    child.win_score = 2.0
    expected = 0.4 + math.sqrt(2) * math.sqrt(math.log(10) / 5)
    assert ucb1(child, parent.visit_count, math.sqrt(2)) == pytest.approx(expected)


def test_ucb1_unvisited_child_is_infinite(root_node):
    child = root_node.expand()
    assert ucb1(child, 10, 1.41) == math.inf


def test_ucb1_parent_without_visits_has_no_exploration_term(root_node):
    child = root_node.expand()
    child.visit_count = 4
    child.win_score = -2.0
    assert ucb1(child, 0, 1.41) == pytest.approx(-0.5)


def test_best_child_prefers_unvisited(root_node):
    root_node.visit_count = 20
    visited = root_node.expand()
    visited.visit_count = 19
    visited.win_score = 19.0
    unvisited = root_node.expand()
    assert root_node.best_child(1.41) is unvisited


def test_best_child_tie_keeps_first(root_node):
    root_node.visit_count = 6
    first = root_node.expand()
    second = root_node.expand()
    for child in (first, second):
        child.visit_count = 3
        child.win_score = 1.0
    assert root_node.best_child(1.41) is first


def test_best_child_balances_exploitation(root_node):
    root_node.visit_count = 100
    strong = root_node.expand()
    strong.visit_count = 50
    strong.win_score = 40.0
    weak = root_node.expand()
    weak.visit_count = 50
    weak.win_score = -40.0
    assert root_node.best_child(1.41) is strong
    assert root_node.best_child(0.0) is strong


def test_best_child_without_children(root_node):
    with pytest.raises(SearchPreconditionError):
        root_node.best_child(1.41)


def test_most_visited_child(root_node):
    a = root_node.expand()
    b = root_node.expand()
    c = root_node.expand()
    a.visit_count, b.visit_count, c.visit_count = 3, 9, 9
    assert root_node.most_visited_child() is b


def test_backpropagate_flips_sign_each_level(root_node):
    child = root_node.expand()  # X moved
    grandchild = child.expand()  # O moved
    assert grandchild.mover == PLAYER_B

    # X wins the rollout
    backpropagate(grandchild, +1)
    assert grandchild.win_score == -1.0
    assert child.win_score == 1.0
    assert root_node.win_score == -1.0
    assert [n.visit_count for n in (root_node, child, grandchild)] == [1, 1, 1]

    # draws only count visits
    backpropagate(child, 0)
    assert child.visit_count == 2
    assert child.win_score == 1.0
    assert root_node.visit_count == 2
    assert root_node.win_score == -1.0


def test_backpropagate_credits_the_mover(root_node):
    child = root_node.expand()
    backpropagate(child, -1)  # O wins
    assert child.win_score == -1.0
    assert child.mean_score() == -1.0
    assert root_node.win_score == 1.0


def test_mean_score_of_unvisited_node(root_node):
    assert root_node.mean_score() == 0.0
    assert clone(root_node.position) == root_node.position
