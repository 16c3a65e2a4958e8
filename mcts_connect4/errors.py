"""Exception types raised by the Connect-4 engine and the MCTS search."""

from __future__ import annotations


class Connect4Error(Exception):
    """Base class for every error raised by this package."""


class IllegalMoveError(Connect4Error, ValueError):
    """Move targets a full column, an empty column (unmake) or a decided game."""


class IndexOutOfRangeError(Connect4Error, IndexError):
    """Column index outside the board."""


class NoLegalMoveError(Connect4Error, ValueError):
    """A move was requested for a position that is already decided."""


class SearchPreconditionError(Connect4Error, RuntimeError):
    """
    Internal search invariant failure.

    Raised when the tree tries to expand a node that has nothing left to
    expand. This is a programming error, not a recoverable condition.
    """
