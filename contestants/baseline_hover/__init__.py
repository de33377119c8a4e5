"""
Baseline Hover Agent Package

A simple heuristic agent that steers the worm toward the middle of the
cave gap. Serves as a benchmark and example.
"""

from .agent import WormAgent, create_agent

__all__ = ["WormAgent", "create_agent"]
