import sys
from typing import List

import numpy as np
import pytest
from loguru import logger

from mcts_connect4.agents.base import Agent
from mcts_connect4.engine import COLUMNS, PLAYER_A, PLAYER_B, ROWS, Position, Status, legal_moves


def _g(i: int) -> int:
    # 1, 1, -1, -1 repeating: never more than two equal stones in a row.
    return PLAYER_A if i % 4 in (0, 1) else PLAYER_B


def drawn_board() -> np.ndarray:
    """
    A full 7x6 board (21 X, 21 O) with no four in a row.

    Columns 0-5 follow g(r + 2c); column 6 is shifted to g(r + 1) so the
    stone counts balance.
    """

    board = np.zeros((COLUMNS, ROWS), dtype=np.int8)
    for c in range(COLUMNS):
        for r in range(ROWS):
            board[c, r] = _g(r + 1) if c == COLUMNS - 1 else _g(r + 2 * c)
    return board


@pytest.fixture
def almost_drawn() -> Position:
    """O to move with only the top of column 6 left; that move draws."""

    board = drawn_board()
    assert int(board[6, 5]) == PLAYER_B
    board[6, 5] = 0
    heights = np.full((COLUMNS,), ROWS, dtype=np.int16)
    heights[6] = ROWS - 1
    return Position(
        board=board,
        heights=heights,
        side_to_move=PLAYER_B,
        status=Status.ONGOING,
        last_column=5,
        ply=COLUMNS * ROWS - 1,
    )


class FirstLegalAgent(Agent):
    def __init__(self, name: str = "first-legal") -> None:
        self.name = name
        self.seen: List[int] = []

    def select_move(self, position: Position) -> int:
        col = legal_moves(position)[0]
        self.seen.append(col)
        return col


@pytest.fixture
def first_legal_agent() -> FirstLegalAgent:
    return FirstLegalAgent()


@pytest.fixture(autouse=True)
def _reset_loguru():
    yield
    logger.remove()
    logger.add(sys.stderr)
