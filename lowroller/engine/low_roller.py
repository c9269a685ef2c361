"""
Low Roller - Turn Engine

State machine driving a session from the first roll to a Finished or
SuddenDeath phase. All methods are class methods that take the session
State, mutate it in place and return the emitted Event.

Turn flow:
    roll -> pick -> (roll -> pick)* -> end_turn_if_done
    A turn ends once every one of the 7 dice has been banked. After the
    last seat in turn order ends its turn the round is scored: a single
    lowest total finishes the game, a shared lowest total starts sudden
    death among the tied players (re-run by the host with init_game).
"""

import logging
from typing import Iterable, Sequence

from lowroller.engine.base import Phase, PhaseKind, Player, State
from lowroller.engine.bots import amateur_policy
from lowroller.engine.errors import (
    InvalidPhaseError,
    NoActiveRollError,
    NoDiceRemainingError,
)
from lowroller.engine.events import (
    AUTOPLAY_POLICY_TAG,
    EndTurnPayload,
    Event,
    EventType,
    PickPayload,
    RollPayload,
    TimeoutAutoplayPayload,
    emit,
)
from lowroller.engine.rng import autoplay_rng, roll_faces, roll_rng, shuffle_rng
from lowroller.engine.rules import NUM_DICE, face_score
from lowroller.engine.validators import validate_faces, validate_pick_indices

logger = logging.getLogger(__name__)


class LowRollerEngine:
    """
    Rules engine for Low Roller.

    The engine stores nothing: every call operates on the State passed in.
    Callers must serialize calls per State.
    """

    NUM_DICE = NUM_DICE

    @classmethod
    def init_game(cls, seed: int, players: Sequence[Player]) -> State:
        """
        Create a session.

        Turn order is a seeded shuffle of ``players``, so it is reproducible
        from the seed alone.

        Args:
            seed: Root seed for every random stream of the session
            players: Seats to play; copied, not shared

        Returns:
            Fresh State in the Normal phase
        """
        seats = [player.model_copy(deep=True) for player in players]
        pot_cents = sum(player.wager_cents for player in seats)
        shuffle_rng(seed).shuffle(seats)

        state = State(
            seed=seed,
            players=seats,
            turn_idx=0,
            remaining_dice=cls.NUM_DICE,
            last_faces=[],
            must_pick_at_least_one=False,
            pot_cents=pot_cents,
            phase=Phase.normal(),
            events_seq=0,
            per_turn_deadline_ms=None,
            leader_to_beat=None,
        )
        logger.debug(
            "Game initialised: seed=%s order=%s pot=%d",
            seed, [p.id for p in seats], pot_cents,
        )
        return state

    @classmethod
    def roll(cls, state: State) -> Event:
        """
        Roll every remaining die for the active player.

        Raises:
            InvalidPhaseError: If the game is over or a roll awaits a pick
            NoDiceRemainingError: If no dice are left this turn
        """
        if not state.phase.is_normal:
            raise InvalidPhaseError(f"Cannot roll in phase {state.phase.kind.value}.")
        if state.remaining_dice <= 0:
            raise NoDiceRemainingError("No dice left to roll.")
        if state.awaiting_pick:
            raise InvalidPhaseError("Must set aside at least one die before rolling again.")

        rng = roll_rng(state.seed, state.events_seq)
        state.last_faces = validate_faces(roll_faces(rng, state.remaining_dice))
        state.must_pick_at_least_one = True

        logger.debug("%s rolled %s", state.current_player.id, state.last_faces)
        return emit(state, EventType.ROLL, RollPayload(faces=tuple(state.last_faces)))

    @classmethod
    def pick(cls, state: State, indices: Iterable[int]) -> Event:
        """
        Bank dice from the pending roll.

        Offsets are deduplicated and sorted. All of them are validated before
        the State is touched, so a rejected pick leaves it unchanged.

        Args:
            state: Session state with a pending roll
            indices: Offsets into ``state.last_faces``

        Raises:
            NoActiveRollError: If there is no pending roll
            EmptyPickError: If ``indices`` is empty
            IndexOutOfRangeError: If an offset is outside the roll
        """
        picked = validate_pick_indices(list(indices), state.last_faces)
        values = [face_score(state.last_faces[i]) for i in picked]

        player = state.current_player
        player.picks.extend(values)
        player.recompute_total()

        chosen = set(picked)
        remaining = [face for i, face in enumerate(state.last_faces) if i not in chosen]
        state.remaining_dice = len(remaining)
        state.last_faces = []
        state.must_pick_at_least_one = False

        logger.debug(
            "%s banked %s (total %d, %d dice left)",
            player.id, values, player.total_score, state.remaining_dice,
        )
        return emit(
            state,
            EventType.PICK,
            PickPayload(picked=tuple(picked), values=tuple(values)),
        )

    @classmethod
    def end_turn_if_done(cls, state: State) -> Event | None:
        """
        End the active turn once every die has been banked.

        Returns:
            The EndTurn event, or None while dice remain
        """
        if state.remaining_dice != 0:
            return None

        ended_idx = state.turn_idx
        ended = state.players[ended_idx]
        event = emit(
            state,
            EventType.END_TURN,
            EndTurnPayload(player_idx=ended_idx, player_id=ended.id, total=ended.total_score),
        )

        last_seat = ended_idx == len(state.players) - 1
        state.turn_idx = (ended_idx + 1) % len(state.players)
        state.remaining_dice = cls.NUM_DICE
        state.last_faces = []
        state.must_pick_at_least_one = False

        if last_seat:
            state.phase = cls._score_round(state)

        return event

    @classmethod
    def _score_round(cls, state: State) -> Phase:
        """Phase after the last seat's turn: Finished or SuddenDeath."""
        low = min(player.total_score for player in state.players)
        lows = [player.id for player in state.players if player.total_score == low]

        if len(lows) > 1:
            logger.info("Round tied at %d between %s: sudden death", low, lows)
            return Phase.sudden_death(lows)

        logger.info("Round won by %s with %d", lows[0], low)
        return Phase.finished()

    @classmethod
    def compute_leader_to_beat(cls, state: State) -> int | None:
        """
        Lowest total among other players who have banked at least one die.

        Returns:
            That total, or None when no opponent has picked yet
        """
        current_id = state.current_player.id
        totals = [
            player.total_score
            for player in state.players
            if player.id != current_id and player.has_picked
        ]
        return min(totals) if totals else None

    @classmethod
    def timeout_autoplay(cls, state: State) -> Event:
        """
        Pick on behalf of a player who missed the turn deadline.

        Always uses the Amateur policy, whatever the seat's bot level.

        Raises:
            InvalidPhaseError: If the game is over
            NoActiveRollError: If there is no pending roll to pick from
        """
        if not state.phase.is_normal:
            raise InvalidPhaseError(f"Cannot autoplay in phase {state.phase.kind.value}.")
        if not state.awaiting_pick:
            raise NoActiveRollError("No roll to autoplay from.")

        rng = autoplay_rng(state.seed, state.events_seq)
        state.leader_to_beat = cls.compute_leader_to_beat(state)
        decision = amateur_policy(state, rng)

        logger.info(
            "Timeout autoplay for %s: picking %s",
            state.current_player.id, decision,
        )
        picked = cls.pick(state, decision)
        return Event(
            seq=picked.seq,
            ty=EventType.TIMEOUT_AUTOPLAY,
            payload=TimeoutAutoplayPayload(chosen=picked.payload, policy=AUTOPLAY_POLICY_TAG),
            state_hash=picked.state_hash,
        )

    @classmethod
    def sudden_death_players(cls, state: State) -> list[Player]:
        """
        Seats for the sudden-death re-run: the tied players in seat order,
        with picks, totals and wagers cleared.

        Raises:
            InvalidPhaseError: If the State is not in sudden death
        """
        if state.phase.kind is not PhaseKind.SUDDEN_DEATH:
            raise InvalidPhaseError("No sudden death to start.")

        return [
            state.player_by_id(player_id).model_copy(
                update={"picks": [], "total_score": 0, "wager_cents": 0},
                deep=True,
            )
            for player_id in state.phase.tied
        ]
