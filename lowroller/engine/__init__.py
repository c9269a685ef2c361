"""
Low Roller Game Engine.

Pure Python rules engine with no I/O: seeded dice rolling, pick
validation, score accounting, round scoring and bot decisions.
"""

from lowroller.engine.base import (
    BotLevel,
    Phase,
    PhaseKind,
    Player,
    PlayerId,
    State,
)
from lowroller.engine.bots import BotDecision, amateur_policy, bot_pick, pro_policy
from lowroller.engine.errors import (
    EmptyOrInactivePickError,
    EmptyPickError,
    EngineError,
    IndexOutOfRangeError,
    InvalidPhaseError,
    NoActiveRollError,
    NoDiceRemainingError,
)
from lowroller.engine.events import Event, EventType, state_digest
from lowroller.engine.low_roller import LowRollerEngine
from lowroller.engine.rules import REROLL_EV, face_score, sum_score
from lowroller.engine.session import Action, ActionKind, GameSession

__all__ = [
    # Models
    "BotLevel",
    "Phase",
    "PhaseKind",
    "Player",
    "PlayerId",
    "State",
    "Event",
    "EventType",
    "state_digest",
    # Rules
    "REROLL_EV",
    "face_score",
    "sum_score",
    # Engines
    "LowRollerEngine",
    "BotDecision",
    "amateur_policy",
    "pro_policy",
    "bot_pick",
    "GameSession",
    "Action",
    "ActionKind",
    # Errors
    "EngineError",
    "InvalidPhaseError",
    "NoDiceRemainingError",
    "EmptyOrInactivePickError",
    "EmptyPickError",
    "NoActiveRollError",
    "IndexOutOfRangeError",
]
