"""Agent implementations for Connect-4."""

from mcts_connect4.agents.base import Agent
from mcts_connect4.agents.human import HumanAgent
from mcts_connect4.agents.mcts_agent import MCTSAgent
from mcts_connect4.agents.random_agent import RandomAgent

__all__ = ["Agent", "HumanAgent", "MCTSAgent", "RandomAgent"]
