"""
Configuration for the MCTS draughts engine.
"""

import math
from dataclasses import dataclass
from typing import Optional


@dataclass
class MCTSConfig:
    """
    A single configuration object for a search.

    Passed to ``MCTS`` and filled in by the command line and HTTP front ends.
    """

    # --- Selection ---
    exploration: float = math.sqrt(2.0)  # C in the UCT formula

    # --- Simulation ---
    max_playout_plies: int = 1000  # Random playouts stop here even if undecided

    # --- Search loop ---
    search_ms: int = 1000  # Default time budget
    seed: Optional[int] = None  # Fixed seed for reproducible searches
