"""Root-parallel MCTS: independent trees per worker, merged by visit count."""

from __future__ import annotations

from concurrent.futures import ProcessPoolExecutor
from typing import Dict, List, Optional

import numpy as np
from loguru import logger

from mcts_connect4.engine import Position
from mcts_connect4.search.mcts import find_immediate_win, require_open_position, root_statistics, search


def _visit_counts(
    position: Position,
    iterations: int,
    exploration_constant: float,
    seed: np.random.SeedSequence,
) -> Dict[int, int]:
    root = search(position, iterations, exploration_constant, np.random.default_rng(seed))
    return {st.move: st.visits for st in root_statistics(root)}


def merge_visit_counts(per_tree: List[Dict[int, int]]) -> Dict[int, int]:
    merged: Dict[int, int] = {}
    for counts in per_tree:
        for move, visits in counts.items():
            merged[move] = merged.get(move, 0) + visits
    return merged


def choose_move_parallel(
    position: Position,
    iterations: int,
    exploration_constant: float,
    *,
    workers: int,
    seed: Optional[int] = None,
) -> int:
    """
    Run ``workers`` trees of ``iterations`` rounds each and vote by visits.

    Trees share nothing, so no locking is needed. Ties go to the lowest
    column.
    """

    require_open_position(position)
    if workers < 1:
        raise ValueError("workers must be >= 1")

    winning = find_immediate_win(position)
    if winning is not None:
        return winning

    seeds = np.random.SeedSequence(seed).spawn(workers)
    if workers == 1:
        per_tree = [_visit_counts(position, iterations, exploration_constant, seeds[0])]
    else:
        with ProcessPoolExecutor(max_workers=workers) as pool:
            futures = [
                pool.submit(_visit_counts, position, iterations, exploration_constant, s) for s in seeds
            ]
            per_tree = [f.result() for f in futures]

    merged = merge_visit_counts(per_tree)
    best = min(merged, key=lambda move: (-merged[move], move))
    logger.debug("root-parallel search over {} trees chose column {} (visits: {})", workers, best, merged)
    return best
