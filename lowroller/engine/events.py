"""
Low Roller - Event Definitions

Events are the engine's only output besides the mutated State. Each event
type carries its own typed payload; the payload union is discriminated on
``kind`` so a serialized event round-trips to the right payload class.
"""

import hashlib
from enum import Enum
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

from lowroller.engine.base import PlayerId, State


class EventType(str, Enum):
    """Events that can be emitted by the engine."""
    ROLL = "Roll"
    PICK = "Pick"
    END_TURN = "EndTurn"
    TIMEOUT_AUTOPLAY = "TimeoutAutoplay"
    # Reserved: never emitted by the current rules.
    SUDDEN_DEATH_ROLL = "SuddenDeathRoll"
    GAME_END = "GameEnd"


AUTOPLAY_POLICY_TAG = "amateur_v1"


class RollPayload(BaseModel):
    kind: Literal["Roll"] = "Roll"
    faces: tuple[int, ...]

    model_config = ConfigDict(frozen=True)


class PickPayload(BaseModel):
    """Offsets banked (ascending, unique) and their scored values."""
    kind: Literal["Pick"] = "Pick"
    picked: tuple[int, ...]
    values: tuple[int, ...]

    model_config = ConfigDict(frozen=True)


class EndTurnPayload(BaseModel):
    kind: Literal["EndTurn"] = "EndTurn"
    player_idx: int
    player_id: PlayerId
    total: int

    model_config = ConfigDict(frozen=True)


class TimeoutAutoplayPayload(BaseModel):
    """The pick applied on the player's behalf and the policy that chose it."""
    kind: Literal["TimeoutAutoplay"] = "TimeoutAutoplay"
    chosen: PickPayload
    policy: str = AUTOPLAY_POLICY_TAG

    model_config = ConfigDict(frozen=True)


EventPayload = Annotated[
    Union[RollPayload, PickPayload, EndTurnPayload, TimeoutAutoplayPayload],
    Field(discriminator="kind"),
]


class Event(BaseModel):
    """
    One entry of the session event log.

    Attributes:
        seq: events_seq after the increment that produced this event
        ty: Event type
        payload: Type-specific details
        state_hash: Digest of the State right after the transition
    """
    seq: int
    ty: EventType
    payload: EventPayload
    state_hash: str

    model_config = ConfigDict(frozen=True)


def state_digest(state: State) -> str:
    """SHA-256 hex digest over the State's JSON serialization."""
    return hashlib.sha256(state.model_dump_json().encode("utf-8")).hexdigest()


def emit(state: State, ty: EventType, payload: BaseModel) -> Event:
    """Advance the event counter and build the event for the current state."""
    state.events_seq += 1
    return Event(
        seq=state.events_seq,
        ty=ty,
        payload=payload,
        state_hash=state_digest(state),
    )
