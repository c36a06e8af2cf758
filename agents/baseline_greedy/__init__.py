"""
Baseline Greedy Agent Package

A one-ply heuristic agent that takes the move with the largest immediate
merge score. Serves as a benchmark and example.
"""

from .agent import Crack2048Agent, create_agent

__all__ = ["Crack2048Agent", "create_agent"]
