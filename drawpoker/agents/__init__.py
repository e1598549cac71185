"""
DrawPoker Agents - Input Sources

This module provides the agent interface the game reads answers from,
plus terminal, scripted and random implementations.
"""

from drawpoker.agents.base import BaseAgent, HumanAgent
from drawpoker.agents.scripted_agent import ScriptedAgent, RandomAgent

__all__ = ["BaseAgent", "HumanAgent", "ScriptedAgent", "RandomAgent"]
