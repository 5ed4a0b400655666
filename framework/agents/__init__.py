"""Baseline agent implementations."""

from .random_agent import RandomAgent
from .scripted_agent import ScriptedAgent

__all__ = ["RandomAgent", "ScriptedAgent"]
