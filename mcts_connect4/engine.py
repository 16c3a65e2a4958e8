"""
Connect-4 game engine on the fixed 7x6 board.

A Position is mutated in place by make/unmake. The board is stored
column-major: board[c, r] with row 0 at the bottom, so heights[c] is both the
number of stones in column c and the row the next stone lands on.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Iterable, List

import numpy as np

from mcts_connect4.errors import IllegalMoveError, IndexOutOfRangeError

COLUMNS = 7
ROWS = 6
CONNECT = 4

EMPTY = 0
PLAYER_A = +1
PLAYER_B = -1

_AXES = ((1, 0), (0, 1), (1, 1), (1, -1))


class Status(enum.Enum):
    ONGOING = "ongoing"
    PLAYER_A_WIN = "player_a_win"
    PLAYER_B_WIN = "player_b_win"
    DRAW = "draw"


@dataclass(eq=False)
class Position:
    board: np.ndarray  # shape (COLUMNS, ROWS), dtype=int8
    heights: np.ndarray  # shape (COLUMNS,), dtype=int16
    side_to_move: int  # PLAYER_A or PLAYER_B
    status: Status
    last_column: int = -1
    ply: int = 0

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Position):
            return NotImplemented
        return (
            np.array_equal(self.board, other.board)
            and np.array_equal(self.heights, other.heights)
            and self.side_to_move == other.side_to_move
            and self.status is other.status
            and self.last_column == other.last_column
            and self.ply == other.ply
        )

    def __str__(self) -> str:
        return render_board(self)


def new_game() -> Position:
    return Position(
        board=np.zeros((COLUMNS, ROWS), dtype=np.int8),
        heights=np.zeros((COLUMNS,), dtype=np.int16),
        side_to_move=PLAYER_A,
        status=Status.ONGOING,
    )


def other(player: int) -> int:
    return PLAYER_B if player == PLAYER_A else PLAYER_A


def win_status(player: int) -> Status:
    return Status.PLAYER_A_WIN if player == PLAYER_A else Status.PLAYER_B_WIN


def status(position: Position) -> Status:
    return position.status


def legal_moves(position: Position) -> List[int]:
    """Open columns in ascending order; empty once the game is decided."""

    if position.status is not Status.ONGOING:
        return []
    return np.nonzero(position.heights < ROWS)[0].tolist()


def _check_column(column: int) -> None:
    if column < 0 or column >= COLUMNS:
        raise IndexOutOfRangeError(f"column {column} out of range [0, {COLUMNS})")


def make(position: Position, column: int) -> None:
    """
    Drop a stone for the side to move into ``column``.

    1) Place the stone at (column, heights[column]) and bump the height
    2) A line of CONNECT through that stone ends the game for the mover
    3) Otherwise a full board is a draw
    4) Otherwise the turn passes to the opponent
    """

    _check_column(column)
    if position.status is not Status.ONGOING:
        raise IllegalMoveError(f"game already decided ({position.status.value})")
    if position.heights[column] >= ROWS:
        raise IllegalMoveError(f"illegal move: column {column} is full")

    row = int(position.heights[column])
    position.board[column, row] = position.side_to_move
    position.heights[column] += 1
    position.last_column = column
    position.ply += 1

    if win_check(position, column):
        position.status = win_status(position.side_to_move)
    elif position.ply >= COLUMNS * ROWS:
        position.status = Status.DRAW
    else:
        position.side_to_move = other(position.side_to_move)


def unmake(position: Position, column: int, previous_column: int = -1) -> None:
    """
    Undo the most recent make on ``column``.

    The engine keeps no move stack, so the caller must only undo the latest
    move. ``previous_column`` restores ``last_column`` when the caller tracks
    it; the board, heights, side and status are restored regardless.
    """

    _check_column(column)
    if position.heights[column] <= 0:
        raise IllegalMoveError(f"cannot unmake: column {column} is empty")

    # make only passes the turn while the game stays open.
    if position.status is Status.ONGOING:
        position.side_to_move = other(position.side_to_move)

    position.heights[column] -= 1
    position.board[column, int(position.heights[column])] = EMPTY
    position.status = Status.ONGOING
    position.last_column = previous_column
    position.ply -= 1


def clone(position: Position) -> Position:
    return Position(
        board=position.board.copy(),
        heights=position.heights.copy(),
        side_to_move=position.side_to_move,
        status=position.status,
        last_column=position.last_column,
        ply=position.ply,
    )


def _count_dir(board: np.ndarray, col: int, row: int, dc: int, dr: int) -> int:
    start = int(board[col, row])
    c, r = col + dc, row + dr
    count = 0
    while 0 <= c < COLUMNS and 0 <= r < ROWS:
        if int(board[c, r]) != start:
            break
        count += 1
        c += dc
        r += dr
    return count


def win_check(position: Position, last_column: int) -> bool:
    """True if the top stone of ``last_column`` completes a line of CONNECT."""

    row = int(position.heights[last_column]) - 1
    if row < 0 or int(position.board[last_column, row]) == EMPTY:
        return False

    for dc, dr in _AXES:
        extra = _count_dir(position.board, last_column, row, dc, dr) + _count_dir(
            position.board, last_column, row, -dc, -dr
        )
        if extra >= CONNECT - 1:
            return True
    return False


def outcome_value(s: Status) -> int:
    """+1 if PLAYER_A won, -1 if PLAYER_B won, 0 for a draw or an open game."""

    if s is Status.PLAYER_A_WIN:
        return PLAYER_A
    if s is Status.PLAYER_B_WIN:
        return PLAYER_B
    return 0


def play_moves(columns: Iterable[int]) -> Position:
    position = new_game()
    for col in columns:
        make(position, int(col))
    return position


def render_board(position: Position) -> str:
    sym = {PLAYER_A: "X", PLAYER_B: "O", EMPTY: "."}
    lines: List[str] = []
    for r in range(ROWS - 1, -1, -1):
        lines.append(" ".join(sym[int(position.board[c, r])] for c in range(COLUMNS)))
    lines.append("-" * (2 * COLUMNS - 1))
    lines.append(" ".join(str(c) for c in range(COLUMNS)))
    return "\n".join(lines)
