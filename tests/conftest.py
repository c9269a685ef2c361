"""
Low Roller - Test Configuration and Fixtures

Common fixtures and state builders for all test modules.
"""

import pytest

from lowroller.config.settings import Settings
from lowroller.engine.base import BotLevel, Phase, Player, State


class FixedRng:
    """Stand-in generator returning a fixed draw and counting calls."""

    def __init__(self, value: int = 1) -> None:
        self.value = value
        self.calls = 0

    def randrange(self, n: int) -> int:
        self.calls += 1
        return self.value % n


def make_state(
    faces: list[int] | tuple[int, ...] = (),
    *,
    picks: dict[str, list[int]] | None = None,
    seats: tuple[str, ...] = ("a", "b"),
    turn_idx: int = 0,
    remaining_dice: int | None = None,
    leader_to_beat: int | None = None,
    seed: int = 7,
) -> State:
    """Build a State directly, bypassing the seat shuffle."""
    picks = picks or {}
    players = []
    for seat in seats:
        player = Player(id=seat, display=seat.upper(), picks=list(picks.get(seat, [])))
        player.recompute_total()
        players.append(player)

    faces = list(faces)
    return State(
        seed=seed,
        players=players,
        turn_idx=turn_idx,
        remaining_dice=len(faces) if remaining_dice is None else remaining_dice,
        last_faces=faces,
        must_pick_at_least_one=bool(faces),
        pot_cents=0,
        phase=Phase.normal(),
        leader_to_beat=leader_to_beat,
    )


# =============================================================================
# PLAYER FIXTURES
# =============================================================================

@pytest.fixture
def two_humans() -> list[Player]:
    """Two human seats wagering 100 cents each."""
    return [
        Player(id="p1", display="Alice", wager_cents=100),
        Player(id="p2", display="Bob", wager_cents=100),
    ]


@pytest.fixture
def three_bots() -> list[Player]:
    """Three bot seats of mixed levels."""
    return [
        Player(id="b1", display="Bot One", is_bot=True, bot_level=BotLevel.AMATEUR, wager_cents=50),
        Player(id="b2", display="Bot Two", is_bot=True, bot_level=BotLevel.PRO, wager_cents=75),
        Player(id="b3", display="Bot Three", is_bot=True, bot_level=BotLevel.AMATEUR, wager_cents=25),
    ]


@pytest.fixture
def settings() -> Settings:
    """Settings independent of the environment."""
    return Settings(
        _env_file=None,
        debug=False,
        log_level="INFO",
        turn_deadline_ms=None,
        min_players=2,
        max_players=8,
    )


@pytest.fixture
def fixed_rng():
    return FixedRng


@pytest.fixture
def state_factory():
    return make_state
