"""Game loop and AI-vs-AI series bookkeeping."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional

from loguru import logger
from tqdm import trange

from mcts_connect4.agents.base import Agent
from mcts_connect4.engine import PLAYER_A, Position, Status, make, new_game, outcome_value

MoveCallback = Callable[[Position, int, int], None]


@dataclass
class SeriesResult:
    """Results from the first agent's perspective."""

    wins: int = 0
    draws: int = 0
    losses: int = 0

    @property
    def games(self) -> int:
        return self.wins + self.draws + self.losses

    def score(self) -> float:
        if self.games == 0:
            return 0.0
        return (self.wins + 0.5 * self.draws) / self.games


def play_game(
    x_agent: Agent,
    o_agent: Agent,
    *,
    start: Optional[Position] = None,
    on_move: Optional[MoveCallback] = None,
) -> Position:
    """
    Alternate the two agents until the game is decided.

    ``on_move(position, player, column)`` is called after every move with
    the updated position. The agents only ever see the live position; each
    one is responsible for not mutating it.
    """

    s = start if start is not None else new_game()
    while s.status is Status.ONGOING:
        player = s.side_to_move
        agent = x_agent if player == PLAYER_A else o_agent
        col = agent.select_move(s)
        make(s, col)
        if on_move is not None:
            on_move(s, player, col)
    return s


def play_series(
    first: Agent,
    second: Agent,
    games: int,
    *,
    alternate: bool = True,
    progress: bool = True,
) -> SeriesResult:
    """
    Play ``games`` games between two agents.

    With ``alternate`` the agents swap colours every game to cancel out the
    first-player advantage.
    """

    if games < 0:
        raise ValueError("games must be >= 0")

    result = SeriesResult()
    for g in trange(games, desc=f"{first.name} vs {second.name}", leave=False, disable=not progress):
        first_is_x = (g % 2 == 0) or not alternate
        x_agent, o_agent = (first, second) if first_is_x else (second, first)
        final = play_game(x_agent, o_agent)

        value = outcome_value(final.status)
        if value == 0:
            result.draws += 1
        elif (value == PLAYER_A) == first_is_x:
            result.wins += 1
        else:
            result.losses += 1
        logger.debug("game {}: {} in {} plies", g + 1, final.status.value, final.ply)

    logger.info(
        "{} vs {}: {} wins, {} draws, {} losses",
        first.name,
        second.name,
        result.wins,
        result.draws,
        result.losses,
    )
    return result
