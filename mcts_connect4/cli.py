"""Terminal front end: human/random/MCTS players on one board."""

from __future__ import annotations

from typing import List, Optional

import typer
from rich.console import Console

from mcts_connect4.agents import Agent, HumanAgent, MCTSAgent, RandomAgent
from mcts_connect4.arena import play_game, play_series
from mcts_connect4.config import DEFAULT_EXPLORATION, DEFAULT_ITERATIONS, MCTSConfig
from mcts_connect4.engine import (
    COLUMNS,
    PLAYER_A,
    Position,
    Status,
    legal_moves,
    new_game,
    play_moves,
    render_board,
)
from mcts_connect4.errors import Connect4Error
from mcts_connect4.logs import configure_logging
from mcts_connect4.search import root_statistics
from mcts_connect4.search.node import Node

app = typer.Typer(no_args_is_help=True)
console = Console()

AGENT_CHOICES = ("human", "random", "mcts")


def player_symbol(player: int) -> str:
    return "X" if player == PLAYER_A else "O"


def parse_moves(raw: str) -> List[int]:
    """Parse a compact move string such as ``"3344"`` or ``"3,3,4,4"``."""

    cleaned = raw.replace(",", "").replace(" ", "")
    if not cleaned.isdigit():
        raise ValueError(f"moves must be column digits, got {raw!r}")
    return [int(ch) for ch in cleaned]


def _parse_column(raw: str) -> Optional[int]:
    raw = raw.strip()
    if not raw:
        return None
    try:
        col = int(raw)
    except ValueError:
        return None

    if 0 <= col < COLUMNS:
        return col
    if 1 <= col <= COLUMNS:
        return col - 1
    return None


def prompt_for_human_move(position: Position, name: str) -> int:
    legal = legal_moves(position)
    prompt = f"{name} ({player_symbol(position.side_to_move)}) to move. Column {legal}: "

    while True:
        col = _parse_column(console.input(prompt))
        if col is None:
            console.print("Enter a column index (0-based or 1-based).")
            continue
        if col not in legal:
            console.print("Illegal move: column full or out of range.")
            continue
        return col


def describe_result(position: Position) -> str:
    if position.status is Status.DRAW:
        return "Result: draw"
    if position.status is Status.PLAYER_A_WIN:
        return "Result: X wins"
    if position.status is Status.PLAYER_B_WIN:
        return "Result: O wins"
    return "Result: in progress"


def _pick_seed(base: Optional[int], *, offset: int = 0) -> Optional[int]:
    if base is not None:
        return base + offset
    return None


def build_agent(choice: str, side: str, config: MCTSConfig) -> Agent:
    label = side.upper()
    if choice == "human":
        return HumanAgent(f"Player {label}", prompt_for_human_move)
    if choice == "random":
        return RandomAgent(f"Random {label}", seed=config.seed)
    if choice == "mcts":
        try:
            return MCTSAgent(f"MCTS {label}", config)
        except ValueError as exc:
            raise typer.BadParameter(str(exc)) from exc

    raise typer.BadParameter(f"agent must be one of {', '.join(AGENT_CHOICES)}, got {choice!r}")


def _side_config(
    base: MCTSConfig, iterations: Optional[int], seed: Optional[int], offset: int
) -> MCTSConfig:
    return MCTSConfig(
        iterations=iterations if iterations is not None else base.iterations,
        exploration_constant=base.exploration_constant,
        seed=_pick_seed(seed, offset=offset),
        workers=base.workers,
    )


def _validated_config(iterations: int, exploration: float, workers: int) -> MCTSConfig:
    config = MCTSConfig(iterations=iterations, exploration_constant=exploration, workers=workers)
    try:
        config.validate()
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc
    return config


def print_root_children(root: Optional[Node], move: int) -> None:
    if root is None:
        console.print(f"no tree searched (immediate win or root-parallel); chosen column: {move}")
        return
    console.print("root children (column -> visits, mean score):")
    for st in root_statistics(root):
        console.print(f"  {st.move} -> {st.visits}, {st.mean_score:.3f}")
    console.print(f"chosen column: {move}")


class InspectingAgent(Agent):
    """Prints the root statistics of the search that picked each MCTS move."""

    def __init__(self, inner: Agent) -> None:
        self.inner = inner
        self.name = inner.name

    def select_move(self, position: Position) -> int:
        if not isinstance(self.inner, MCTSAgent):
            return self.inner.select_move(position)
        move, root = self.inner.select_move_with_root(position)
        print_root_children(root, move)
        return move


@app.command()
def play(
    x: str = typer.Option("human", "--x", help="Agent for X: human|random|mcts."),
    o: str = typer.Option("mcts", "--o", help="Agent for O: human|random|mcts."),
    iterations: int = typer.Option(DEFAULT_ITERATIONS, help="MCTS iterations per move."),
    iterations_x: Optional[int] = typer.Option(None, help="MCTS iterations for X (overrides --iterations)."),
    iterations_o: Optional[int] = typer.Option(None, help="MCTS iterations for O (overrides --iterations)."),
    exploration: float = typer.Option(DEFAULT_EXPLORATION, help="UCB1 exploration constant."),
    workers: int = typer.Option(1, help="Root-parallel worker processes per MCTS move."),
    seed: Optional[int] = typer.Option(None, help="Base random seed (X uses seed, O uses seed+1)."),
    moves: Optional[str] = typer.Option(None, help="Opening moves to play first, e.g. 3344."),
    inspect_root: bool = typer.Option(False, "--inspect-root", help="Print the MCTS root statistics behind each AI move."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
) -> None:
    """Play one game: human vs human, human vs AI or AI vs AI."""

    configure_logging(verbose)
    base = _validated_config(iterations, exploration, workers)

    try:
        start = play_moves(parse_moves(moves)) if moves else None
    except (ValueError, Connect4Error) as exc:
        raise typer.BadParameter(f"invalid --moves: {exc}") from exc

    x_agent = build_agent(x, "x", _side_config(base, iterations_x, seed, 0))
    o_agent = build_agent(o, "o", _side_config(base, iterations_o, seed, 1))

    position = start if start is not None else new_game()
    console.print(render_board(position))
    console.print("")

    def on_move(s: Position, player: int, col: int) -> None:
        console.print(f"Move: {player_symbol(player)} -> col {col}, row {int(s.heights[col]) - 1}")
        console.print(render_board(s))
        console.print("")

    if inspect_root:
        x_agent, o_agent = InspectingAgent(x_agent), InspectingAgent(o_agent)

    final = play_game(x_agent, o_agent, start=position, on_move=on_move)
    console.print(describe_result(final))


@app.command()
def arena(
    first: str = typer.Option("mcts", help="First agent: random|mcts."),
    second: str = typer.Option("random", help="Second agent: random|mcts."),
    games: int = typer.Option(10, help="Number of games to play."),
    iterations: int = typer.Option(DEFAULT_ITERATIONS, help="MCTS iterations per move for the first agent."),
    iterations_second: Optional[int] = typer.Option(None, help="MCTS iterations for the second agent."),
    exploration: float = typer.Option(DEFAULT_EXPLORATION, help="UCB1 exploration constant."),
    workers: int = typer.Option(1, help="Root-parallel worker processes per MCTS move."),
    seed: Optional[int] = typer.Option(0, help="Base random seed."),
    no_alternate: bool = typer.Option(False, "--no-alternate", help="First agent always plays X."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
) -> None:
    """Play an AI-vs-AI series and report wins/draws/losses for the first agent."""

    configure_logging(verbose)
    for choice in (first, second):
        if choice == "human":
            raise typer.BadParameter("arena only runs computer agents (random|mcts)")
    if games < 0:
        raise typer.BadParameter("games must be >= 0")

    base = _validated_config(iterations, exploration, workers)
    a = build_agent(first, "1", _side_config(base, None, seed, 0))
    b = build_agent(second, "2", _side_config(base, iterations_second, seed, 1))

    result = play_series(a, b, games, alternate=not no_alternate)
    console.print(
        f"{a.name} vs {b.name}: wins={result.wins} draws={result.draws} "
        f"losses={result.losses} score={result.score():.3f}"
    )


def main(argv: Optional[List[str]] = None) -> None:
    app(args=argv)


if __name__ == "__main__":
    main()
