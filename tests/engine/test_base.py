"""
Low Roller - Model and Validation Tests

Tests for the state models, events, and validation utilities.
"""

import pytest
from pydantic import ValidationError

from lowroller.engine.base import BotLevel, Phase, PhaseKind, Player, State
from lowroller.engine.errors import (
    EmptyOrInactivePickError,
    EmptyPickError,
    IndexOutOfRangeError,
    NoActiveRollError,
)
from lowroller.engine.events import (
    EndTurnPayload,
    Event,
    EventType,
    PickPayload,
    RollPayload,
    TimeoutAutoplayPayload,
    emit,
    state_digest,
)
from lowroller.engine.validators import (
    validate_faces,
    validate_pick_indices,
    validate_player_count,
    validate_players,
)


class TestEnums:
    def test_bot_levels(self):
        assert {level.value for level in BotLevel} == {"Amateur", "Pro"}

    def test_event_types(self):
        expected = {"Roll", "Pick", "EndTurn", "TimeoutAutoplay", "SuddenDeathRoll", "GameEnd"}
        assert {e.value for e in EventType} == expected


class TestPhase:
    def test_default_is_normal(self):
        phase = Phase()
        assert phase.kind is PhaseKind.NORMAL
        assert phase.is_normal
        assert not phase.is_terminal

    def test_sudden_death_keeps_order(self):
        phase = Phase.sudden_death(["c", "a"])
        assert phase.kind is PhaseKind.SUDDEN_DEATH
        assert phase.tied == ("c", "a")
        assert phase.is_terminal

    def test_finished(self):
        assert Phase.finished().is_terminal

    def test_frozen(self):
        with pytest.raises(ValidationError):
            Phase.finished().kind = PhaseKind.NORMAL


class TestPlayer:
    def test_defaults(self):
        player = Player(id="p", display="P")
        assert player.total_score == 0
        assert player.picks == []
        assert not player.has_picked
        assert player.bot_level is None

    def test_negative_wager_rejected(self):
        with pytest.raises(ValidationError):
            Player(id="p", display="P", wager_cents=-1)

    def test_recompute_total_from_history(self):
        player = Player(id="p", display="P", picks=[0, 4, 1])
        assert player.recompute_total() == 5
        assert player.total_score == 5


class TestState:
    def test_round_trips_through_json(self, state_factory):
        state = state_factory([3, 5, 1], picks={"b": [2, 0]}, leader_to_beat=2)
        restored = State.model_validate_json(state.model_dump_json())
        assert restored == state
        assert restored.phase == state.phase

    def test_player_by_id(self, state_factory):
        state = state_factory()
        assert state.player_by_id("b").display == "B"
        with pytest.raises(KeyError):
            state.player_by_id("zz")

    def test_awaiting_pick(self, state_factory):
        assert state_factory([4]).awaiting_pick
        assert not state_factory().awaiting_pick


class TestEvents:
    def test_emit_increments_sequence(self, state_factory):
        state = state_factory()
        first = emit(state, EventType.ROLL, RollPayload(faces=(1, 2)))
        second = emit(state, EventType.PICK, PickPayload(picked=(0,), values=(1,)))
        assert (first.seq, second.seq) == (1, 2)
        assert state.events_seq == 2

    def test_state_hash_is_sha256_of_state(self, state_factory):
        state = state_factory()
        event = emit(state, EventType.ROLL, RollPayload(faces=(6,)))
        assert event.state_hash == state_digest(state)
        assert len(event.state_hash) == 64

    def test_digest_distinguishes_states(self, state_factory):
        # Same turn index, dice count and pick count; different totals.
        one = state_factory(picks={"a": [1]}, remaining_dice=6)
        two = state_factory(picks={"a": [6]}, remaining_dice=6)
        assert state_digest(one) != state_digest(two)

    def test_event_is_immutable(self, state_factory):
        event = emit(state_factory(), EventType.ROLL, RollPayload(faces=(1,)))
        with pytest.raises(ValidationError):
            event.seq = 99

    def test_payload_union_round_trip(self):
        event = Event(
            seq=3,
            ty=EventType.TIMEOUT_AUTOPLAY,
            payload=TimeoutAutoplayPayload(chosen=PickPayload(picked=(1, 2), values=(0, 0))),
            state_hash="x",
        )
        restored = Event.model_validate_json(event.model_dump_json())
        assert isinstance(restored.payload, TimeoutAutoplayPayload)
        assert restored.payload.chosen.picked == (1, 2)
        assert restored.payload.policy == "amateur_v1"

    def test_end_turn_payload_round_trip(self):
        event = Event(
            seq=1,
            ty=EventType.END_TURN,
            payload=EndTurnPayload(player_idx=0, player_id="a", total=9),
            state_hash="x",
        )
        restored = Event.model_validate(event.model_dump())
        assert isinstance(restored.payload, EndTurnPayload)
        assert restored.payload.total == 9


class TestValidatePickIndices:
    def test_dedupes_and_sorts(self):
        assert validate_pick_indices([4, 1, 4, 0], [1, 2, 3, 4, 5]) == [0, 1, 4]

    def test_no_roll(self):
        with pytest.raises(NoActiveRollError):
            validate_pick_indices([0], [])

    def test_empty_selection(self):
        with pytest.raises(EmptyPickError):
            validate_pick_indices([], [1, 2])

    def test_both_empty_errors_share_a_kind(self):
        assert issubclass(NoActiveRollError, EmptyOrInactivePickError)
        assert issubclass(EmptyPickError, EmptyOrInactivePickError)

    @pytest.mark.parametrize("bad", [None, "1", 1.0, True])
    def test_non_integer_offsets(self, bad):
        with pytest.raises(IndexOutOfRangeError):
            validate_pick_indices([0, bad], [1, 2, 3])

    @pytest.mark.parametrize("bad", [3, 10, -1])
    def test_out_of_range(self, bad):
        with pytest.raises(IndexOutOfRangeError, match=f"Pick index {bad}"):
            validate_pick_indices([0, bad], [1, 2, 3])


class TestValidateFaces:
    def test_valid(self):
        assert validate_faces((1, 6, 3)) == [1, 6, 3]

    @pytest.mark.parametrize("face", [0, 7])
    def test_invalid(self, face):
        with pytest.raises(ValueError, match="must be between 1 and 6"):
            validate_faces([1, face])


class TestValidatePlayers:
    def test_count_bounds(self):
        assert validate_player_count(2) == 2
        with pytest.raises(ValueError, match="Player count must be 2-8"):
            validate_player_count(1)
        with pytest.raises(ValueError):
            validate_player_count(9)

    def test_duplicate_ids(self):
        players = [Player(id="x", display="X"), Player(id="x", display="Y")]
        with pytest.raises(ValueError, match="Duplicate player id"):
            validate_players(players)

    def test_bot_needs_level(self):
        players = [Player(id="x", display="X", is_bot=True), Player(id="y", display="Y")]
        with pytest.raises(ValueError, match="no bot level"):
            validate_players(players)

    def test_scored_player_rejected(self):
        players = [Player(id="x", display="X", picks=[1], total_score=1), Player(id="y", display="Y")]
        with pytest.raises(ValueError, match="already has a score"):
            validate_players(players)

    def test_valid_list(self, two_humans):
        assert validate_players(two_humans) == two_humans
