"""
Low Roller - Game Session

Host-side convenience layer around one State. A GameSession keeps the
ordered event log and the log of calls that produced it, drives bot seats
one step at a time, and can rebuild a session from its seed, its seats and
its action log to verify an event stream (same seq, type and state hash for
every event).

A GameSession is single-writer: the host must not call into one instance
from two threads at once.
"""

import logging
from enum import Enum
from typing import Iterable, Sequence

from pydantic import BaseModel, ConfigDict

from lowroller.config.settings import Settings, get_settings
from lowroller.engine.base import BotLevel, Player, State
from lowroller.engine.bots import bot_pick
from lowroller.engine.errors import InvalidPhaseError, NoActiveRollError
from lowroller.engine.events import Event, EventType
from lowroller.engine.low_roller import LowRollerEngine
from lowroller.engine.rng import bot_rng
from lowroller.engine.validators import validate_players

logger = logging.getLogger(__name__)


class ActionKind(str, Enum):
    """Calls recorded in a session's action log."""
    ROLL = "roll"
    PICK = "pick"
    END_TURN = "end_turn"
    TIMEOUT = "timeout"
    BOT_PICK = "bot_pick"


class Action(BaseModel):
    """One recorded call; ``indices`` is only set for PICK."""
    kind: ActionKind
    indices: tuple[int, ...] = ()

    model_config = ConfigDict(frozen=True)


class GameSession:
    """Owns one State plus its event and action logs."""

    def __init__(
        self,
        state: State,
        players: Sequence[Player],
        settings: Settings | None = None,
    ) -> None:
        self.state = state
        self.initial_players = [player.model_copy(deep=True) for player in players]
        self.settings = settings or get_settings()
        self.events: list[Event] = []
        self.actions: list[Action] = []
        self._unread = 0

    @classmethod
    def create(
        cls,
        seed: int,
        players: Sequence[Player],
        settings: Settings | None = None,
    ) -> "GameSession":
        """
        Validate the seats and start a session.

        Raises:
            ValueError: If the seat list is invalid for the configured bounds
        """
        settings = settings or get_settings()
        validate_players(players, settings.min_players, settings.max_players)

        state = LowRollerEngine.init_game(seed, players)
        state.per_turn_deadline_ms = settings.turn_deadline_ms

        logger.info(
            "Session started: seed=%s seats=%d pot=%d",
            seed, len(state.players), state.pot_cents,
        )
        return cls(state, players, settings)

    # -- Engine calls ----------------------------------------------------

    def roll(self) -> Event:
        event = LowRollerEngine.roll(self.state)
        return self._record(Action(kind=ActionKind.ROLL), event)

    def pick(self, indices: Iterable[int]) -> Event:
        indices = tuple(indices)
        event = LowRollerEngine.pick(self.state, indices)
        return self._record(Action(kind=ActionKind.PICK, indices=indices), event)

    def end_turn_if_done(self) -> Event | None:
        event = LowRollerEngine.end_turn_if_done(self.state)
        return self._record(Action(kind=ActionKind.END_TURN), event)

    def timeout_autoplay(self) -> Event:
        event = LowRollerEngine.timeout_autoplay(self.state)
        return self._record(Action(kind=ActionKind.TIMEOUT), event)

    def bot_pick(self) -> Event:
        """
        Let the active bot seat choose and bank dice from the pending roll.

        The seat's own level is used (Amateur when unset), with a generator
        derived from the seed and the event counter.

        Raises:
            InvalidPhaseError: If the active seat is not a bot
            NoActiveRollError: If there is no pending roll
        """
        player = self.state.current_player
        if not player.is_bot:
            raise InvalidPhaseError(f"Seat {player.id!r} is not a bot.")
        if not self.state.awaiting_pick:
            raise NoActiveRollError("No roll for the bot to pick from.")

        level = player.bot_level or BotLevel.AMATEUR
        rng = bot_rng(self.state.seed, self.state.events_seq)
        self.state.leader_to_beat = LowRollerEngine.compute_leader_to_beat(self.state)
        decision = bot_pick(self.state, level, rng)

        logger.debug("Bot %s (%s) picks %s", player.id, level.value, decision.pick_indices)
        event = LowRollerEngine.pick(self.state, decision.pick_indices)
        return self._record(Action(kind=ActionKind.BOT_PICK), event)

    # -- Bot driver ------------------------------------------------------

    @property
    def is_over(self) -> bool:
        return self.state.phase.is_terminal

    @property
    def bot_to_act(self) -> bool:
        """True when the game is live and the active seat is a bot."""
        return not self.is_over and self.state.current_player.is_bot

    def bot_step(self) -> list[Event]:
        """
        Advance a bot seat by one step: roll when no roll is pending,
        otherwise pick and end the turn if all dice are banked.

        Returns:
            Events emitted by this step
        """
        if not self.bot_to_act:
            raise InvalidPhaseError("No bot to act.")

        if not self.state.awaiting_pick:
            return [self.roll()]

        emitted = [self.bot_pick()]
        end = self.end_turn_if_done()
        if end is not None:
            emitted.append(end)
        return emitted

    def play_bot_turn(self) -> list[Event]:
        """Run the active bot's whole turn."""
        if not self.bot_to_act:
            raise InvalidPhaseError("No bot to act.")

        seat = self.state.turn_idx
        emitted: list[Event] = []
        while self.bot_to_act and self.state.turn_idx == seat:
            step = self.bot_step()
            emitted.extend(step)
            if step[-1].ty is EventType.END_TURN:
                break
        return emitted

    def play_bots(self) -> list[Event]:
        """Run consecutive bot turns until a human seat is up or the game ends."""
        emitted: list[Event] = []
        while self.bot_to_act:
            emitted.extend(self.play_bot_turn())
        return emitted

    # -- Event log -------------------------------------------------------

    def pop_events(self) -> list[Event]:
        """Events emitted since the last call."""
        fresh = self.events[self._unread:]
        self._unread = len(self.events)
        return fresh

    def _record(self, action: Action, event: Event | None) -> Event | None:
        self.actions.append(action)
        if event is not None:
            self.events.append(event)
        return event

    # -- Replay ----------------------------------------------------------

    @classmethod
    def replay(
        cls,
        seed: int,
        players: Sequence[Player],
        actions: Sequence[Action],
        settings: Settings | None = None,
    ) -> "GameSession":
        """Rebuild a session by re-applying an action log."""
        session = cls.create(seed, players, settings)
        for action in actions:
            if action.kind is ActionKind.ROLL:
                session.roll()
            elif action.kind is ActionKind.PICK:
                session.pick(action.indices)
            elif action.kind is ActionKind.END_TURN:
                session.end_turn_if_done()
            elif action.kind is ActionKind.TIMEOUT:
                session.timeout_autoplay()
            elif action.kind is ActionKind.BOT_PICK:
                session.bot_pick()
        return session

    def first_divergence(self, expected: Sequence[Event]) -> int | None:
        """
        Index of the first event that differs from ``expected``.

        Events are compared on seq, type and state hash. A length mismatch
        diverges at the end of the shorter log.
        """
        for i, (ours, theirs) in enumerate(zip(self.events, expected)):
            if (ours.seq, ours.ty, ours.state_hash) != (theirs.seq, theirs.ty, theirs.state_hash):
                return i
        if len(self.events) != len(expected):
            return min(len(self.events), len(expected))
        return None

    def verify(self, expected: Sequence[Event]) -> bool:
        """True when ``expected`` matches this session's event log exactly."""
        divergence = self.first_divergence(expected)
        if divergence is not None:
            logger.warning("Event log diverges at index %d", divergence)
        return divergence is None
