"""Human-in-the-loop agent that defers input handling to a prompt function."""

from __future__ import annotations

from typing import Callable

from mcts_connect4.agents.base import Agent
from mcts_connect4.engine import Position

PromptFn = Callable[[Position, str], int]


class HumanAgent(Agent):
    def __init__(self, name: str, prompt_fn: PromptFn) -> None:
        self.name = name
        self.prompt_fn = prompt_fn

    def select_move(self, position: Position) -> int:
        return self.prompt_fn(position, self.name)
