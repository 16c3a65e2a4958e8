"""Connect-4 package (engine + MCTS search + agents + CLI)."""

from mcts_connect4.config import MCTSConfig
from mcts_connect4.engine import (
    COLUMNS,
    PLAYER_A,
    PLAYER_B,
    ROWS,
    Position,
    Status,
    clone,
    legal_moves,
    make,
    new_game,
    render_board,
    status,
    unmake,
)
from mcts_connect4.errors import (
    Connect4Error,
    IllegalMoveError,
    IndexOutOfRangeError,
    NoLegalMoveError,
    SearchPreconditionError,
)
from mcts_connect4.search import choose_move

__all__ = [
    "COLUMNS",
    "PLAYER_A",
    "PLAYER_B",
    "ROWS",
    "Connect4Error",
    "IllegalMoveError",
    "IndexOutOfRangeError",
    "MCTSConfig",
    "NoLegalMoveError",
    "Position",
    "SearchPreconditionError",
    "Status",
    "choose_move",
    "clone",
    "legal_moves",
    "make",
    "new_game",
    "render_board",
    "status",
    "unmake",
]
