"""
Team Template Agent
===================

Your agent must provide one of:
1. A `Crack2048Agent` class with an `act(obs, info) -> action` method
2. A standalone `act(obs, info) -> action` function

The info argument is optional: `act(obs)` is accepted too.

Actions are direction ids: 0=UP, 1=DOWN, 2=LEFT, 3=RIGHT.
"""

from __future__ import annotations

from typing import Any, Dict, Optional
import numpy as np


class Crack2048Agent:
    """
    Uniform random agent over the legal moves.

    Replace the strategy in `act()` with your own logic.
    """

    def __init__(self):
        self.rng = np.random.default_rng()

    def act(self, obs: Dict[str, np.ndarray], info: Optional[Dict[str, Any]] = None) -> int:
        """
        Choose an action based on the observation.

        Args:
            obs: Dictionary containing game state.
            info: Info dict; "legal_moves" lists the directions that change the board.

        Returns:
            action: Direction id in [0, 4).
        """
        legal = (info or {}).get("legal_moves") or [0, 1, 2, 3]
        return int(self.rng.choice(legal))

    def reset(self) -> None:
        """Called when a new episode starts (optional)."""
        pass


def act(obs: Dict[str, np.ndarray], info: Optional[Dict[str, Any]] = None) -> int:
    """Standalone act function (alternative to class-based agent)."""
    legal = (info or {}).get("legal_moves") or [0, 1, 2, 3]
    return int(np.random.choice(legal))
