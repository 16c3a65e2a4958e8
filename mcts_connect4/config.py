"""Search settings shared by the MCTS agent, the arena and the CLI."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

DEFAULT_ITERATIONS = 1000
DEFAULT_EXPLORATION = 1.41


@dataclass(frozen=True)
class MCTSConfig:
    iterations: int = DEFAULT_ITERATIONS
    exploration_constant: float = DEFAULT_EXPLORATION
    seed: Optional[int] = None
    workers: int = 1

    def validate(self) -> None:
        if self.iterations < 0:
            raise ValueError("iterations must be >= 0")
        if self.exploration_constant < 0:
            raise ValueError("exploration_constant must be >= 0")
        if self.workers < 1:
            raise ValueError("workers must be >= 1")
