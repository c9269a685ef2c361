"""
Low Roller - Bot Policies

Decision functions that choose which dice a bot banks from the pending
roll. Policies read the State and a seeded generator and return offsets
into ``state.last_faces``; they never mutate the State. The caller (the
turn engine or the session driver) applies the result through ``pick``.

Both policies share two rules:
    - Every 3 on the table scores 0, so all of them are banked at once and
      nothing else is considered.
    - Otherwise the single lowest-scoring die is the fallback, with the
      first occurrence winning ties.

The expected-value line assumes every die still to be re-rolled is worth
REROLL_EV; it is a heuristic, not an exact expectation.
"""

import random
import sys
from dataclasses import dataclass
from typing import Callable

from lowroller.engine.base import BotLevel, State
from lowroller.engine.errors import NoActiveRollError
from lowroller.engine.rules import ZERO_FACE, face_score, projected_score, sum_score

Policy = Callable[[State, random.Random], list[int]]

POLICIES: dict[BotLevel, Policy] = {}

# Amateurs shuffle their output order one time in five.
REVERSE_ODDS = 5


def register_policy(level: BotLevel) -> Callable[[Policy], Policy]:
    """Register a policy function for a bot level."""
    def decorator(fn: Policy) -> Policy:
        POLICIES[level] = fn
        return fn
    return decorator


@dataclass(frozen=True)
class BotDecision:
    """Offsets a bot chose to bank, in the order the policy produced them."""
    level: BotLevel
    pick_indices: tuple[int, ...]


def _faces(state: State) -> list[int]:
    if not state.last_faces:
        raise NoActiveRollError("Bot asked to pick without a pending roll.")
    return state.last_faces


def zero_offsets(faces: list[int]) -> list[int]:
    """Offsets of every face that scores 0."""
    return [i for i, face in enumerate(faces) if face == ZERO_FACE]


def ones_offsets(faces: list[int], exclude: int | None = None) -> list[int]:
    """Offsets of every 1, optionally skipping one offset."""
    return [i for i, face in enumerate(faces) if face == 1 and i != exclude]


def lowest_offset(faces: list[int]) -> int:
    """Offset of the lowest-scoring face; the first one wins ties."""
    lowest = 0
    for i in range(1, len(faces)):
        if face_score(faces[i]) < face_score(faces[lowest]):
            lowest = i
    return lowest


def banked_total(state: State) -> int:
    """Score already banked by the active player before this pick."""
    return sum_score(state.current_player.picks)


@register_policy(BotLevel.AMATEUR)
def amateur_policy(state: State, rng: random.Random) -> list[int]:
    """
    Amateur bot: bank the 3s, else the lowest die, and sweep up the 1s when
    the projection still beats the leader.

    Args:
        state: Session state with a pending roll
        rng: Seeded generator; consumed for the order reversal

    Returns:
        Non-empty list of offsets (order not significant)
    """
    faces = _faces(state)

    zeros = zero_offsets(faces)
    if zeros:
        return zeros

    lowest = lowest_offset(faces)
    picks = [lowest]

    if state.leader_to_beat is not None:
        extra_ones = ones_offsets(faces, exclude=lowest)
        remaining_after = state.remaining_dice - len(picks)
        added = len(extra_ones) + face_score(faces[lowest])
        ev_line = projected_score(banked_total(state), added, remaining_after)
        if ev_line <= state.leader_to_beat:
            picks.extend(extra_ones)

    if len(faces) > 1 and rng.randrange(REVERSE_ODDS) == 0:
        picks.reverse()

    return picks


@register_policy(BotLevel.PRO)
def pro_policy(state: State, rng: random.Random) -> list[int]:
    """
    Pro bot: bank the 3s, else bank every 1 when the projection stays at or
    under the leader, else the lowest die. Deterministic; ``rng`` is unused.
    """
    faces = _faces(state)

    zeros = zero_offsets(faces)
    if zeros:
        return zeros

    leader = state.leader_to_beat if state.leader_to_beat is not None else sys.maxsize
    ones = ones_offsets(faces)
    remaining_if_bank_ones = state.remaining_dice - len(ones)
    ev_line = projected_score(banked_total(state), len(ones), remaining_if_bank_ones)
    if ones and ev_line <= leader:
        return ones

    return [lowest_offset(faces)]


def bot_pick(state: State, level: BotLevel, rng: random.Random) -> BotDecision:
    """Run the policy registered for ``level`` against the pending roll."""
    policy = POLICIES[BotLevel(level)]
    return BotDecision(level=BotLevel(level), pick_indices=tuple(policy(state, rng)))
