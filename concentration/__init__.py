"""Concentration package exports."""

from .concentration_board import Board, Card, CardState
from .concentration_config import SessionConfig
from .concentration_engine import TurnEngine
from .concentration_moves import Flip, MoveType
from .concentration_policy import AIDecisionPolicy
from .concentration_recall import AIMemoryModel
from .concentration_result import GameOutcome, TerminationReason
from .concentration_score import ScoreTracker
from .concentration_session import GameSession
from .concentration_state import CardView, Owner, Phase, SessionSnapshot

__all__ = [
    "AIDecisionPolicy",
    "AIMemoryModel",
    "Board",
    "Card",
    "CardState",
    "CardView",
    "Flip",
    "GameOutcome",
    "GameSession",
    "MoveType",
    "Owner",
    "Phase",
    "ScoreTracker",
    "SessionConfig",
    "SessionSnapshot",
    "TerminationReason",
    "TurnEngine",
]
