"""
Low Roller - Game State Model

Entity definitions shared by the turn engine, the bot policies and the
session layer. Everything is a Pydantic model so hosts can serialize a
session with ``model_dump_json()`` and restore it with
``model_validate_json()``.

Player and State are mutable: the engine updates one State in place per
call and the host enforces single-writer access. Phase is frozen and is
replaced wholesale on transition.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from lowroller.engine.rules import NUM_DICE, sum_score

PlayerId = str


class BotLevel(str, Enum):
    """Which policy a bot seat plays."""
    AMATEUR = "Amateur"
    PRO = "Pro"


class PhaseKind(str, Enum):
    """Game phases. Normal is initial; the other two are terminal."""
    NORMAL = "Normal"
    SUDDEN_DEATH = "SuddenDeath"
    FINISHED = "Finished"


class Phase(BaseModel):
    """
    Current phase of a session.

    Attributes:
        kind: Normal, SuddenDeath or Finished
        tied: Tied player ids in seat order (SuddenDeath only)
    """
    kind: PhaseKind = PhaseKind.NORMAL
    tied: tuple[PlayerId, ...] = ()

    model_config = ConfigDict(frozen=True)

    @classmethod
    def normal(cls) -> "Phase":
        return cls(kind=PhaseKind.NORMAL)

    @classmethod
    def sudden_death(cls, tied: list[PlayerId] | tuple[PlayerId, ...]) -> "Phase":
        return cls(kind=PhaseKind.SUDDEN_DEATH, tied=tuple(tied))

    @classmethod
    def finished(cls) -> "Phase":
        return cls(kind=PhaseKind.FINISHED)

    @property
    def is_normal(self) -> bool:
        return self.kind is PhaseKind.NORMAL

    @property
    def is_terminal(self) -> bool:
        return self.kind is not PhaseKind.NORMAL


class Player(BaseModel):
    """
    A seat in the session.

    Attributes:
        id: Opaque unique identifier
        display: Display name
        is_bot: Whether the seat is driven by a bot policy
        bot_level: Policy used when is_bot is set
        wager_cents: Entry amount added to the pot
        total_score: Running total, always sum of picks (lower is better)
        picks: Banked scored values in order (a rolled 3 is stored as 0)
    """
    id: PlayerId
    display: str
    is_bot: bool = False
    bot_level: BotLevel | None = None
    wager_cents: int = Field(default=0, ge=0)
    total_score: int = Field(default=0, ge=0)
    picks: list[int] = Field(default_factory=list)

    @property
    def has_picked(self) -> bool:
        """True once the player has banked at least one die."""
        return len(self.picks) > 0

    def recompute_total(self) -> int:
        """Rebuild total_score from the full pick history."""
        self.total_score = sum_score(self.picks)
        return self.total_score


class State(BaseModel):
    """
    Complete state of one session.

    Attributes:
        seed: Root seed fixing all randomness for the session
        players: Seats in turn order (shuffled once at init)
        turn_idx: Index of the active seat
        remaining_dice: Dice left to roll this turn
        last_faces: Faces of the pending roll (empty between rolls)
        must_pick_at_least_one: The pending roll still needs a pick
        pot_cents: Sum of all wagers
        phase: Current phase
        events_seq: Sequence number of the last emitted event
        per_turn_deadline_ms: Host-owned deadline, recorded only
        leader_to_beat: Best opponent total used by bot heuristics
    """
    seed: int
    players: list[Player]
    turn_idx: int = 0
    remaining_dice: int = NUM_DICE
    last_faces: list[int] = Field(default_factory=list)
    must_pick_at_least_one: bool = False
    pot_cents: int = 0
    phase: Phase = Field(default_factory=Phase.normal)
    events_seq: int = 0
    per_turn_deadline_ms: int | None = None
    leader_to_beat: int | None = None

    @property
    def current_player(self) -> Player:
        return self.players[self.turn_idx]

    @property
    def awaiting_pick(self) -> bool:
        """True between a roll and the pick that answers it."""
        return len(self.last_faces) > 0

    def player_by_id(self, player_id: PlayerId) -> Player:
        """Look up a seat by id."""
        for player in self.players:
            if player.id == player_id:
                return player
        raise KeyError(player_id)
