"""
Low Roller - Input Validation Utilities

Validation helpers for engine inputs. Validators either return normalized
data or raise an EngineError (pick offsets) / ValueError (setup data).
"""

from typing import Iterable, Sequence

from lowroller.engine.base import Player
from lowroller.engine.errors import (
    EmptyPickError,
    IndexOutOfRangeError,
    NoActiveRollError,
)
from lowroller.engine.rules import FACES


def validate_pick_indices(indices: Iterable[int], faces: Sequence[int]) -> list[int]:
    """
    Validate a selection against the pending roll.

    Args:
        indices: Offsets into ``faces``; duplicates allowed
        faces: Faces of the pending roll

    Returns:
        Deduplicated offsets in ascending order

    Raises:
        NoActiveRollError: If there is no pending roll
        EmptyPickError: If the selection is empty
        IndexOutOfRangeError: If an offset is outside the roll
    """
    if not faces:
        raise NoActiveRollError("No roll to pick from.")

    candidates = list(indices)
    for idx in candidates:
        if not isinstance(idx, int) or isinstance(idx, bool):
            raise IndexOutOfRangeError(idx, len(faces))

    unique = sorted(set(candidates))
    if not unique:
        raise EmptyPickError("Must pick at least one die.")

    for idx in unique:
        if not (0 <= idx < len(faces)):
            raise IndexOutOfRangeError(idx, len(faces))

    return unique


def validate_faces(faces: Sequence[int]) -> list[int]:
    """
    Validate rolled faces.

    Raises:
        ValueError: If any face is not between 1 and 6
    """
    for i, face in enumerate(faces):
        if face not in FACES:
            raise ValueError(f"Die face at index {i} is {face}, must be between 1 and 6.")
    return list(faces)


def validate_player_count(count: int, min_players: int = 2, max_players: int = 8) -> int:
    """
    Validate number of seats.

    Raises:
        ValueError: If count is outside [min_players, max_players]
    """
    if not isinstance(count, int):
        raise ValueError(f"Player count must be an integer, got {type(count).__name__}.")

    if not (min_players <= count <= max_players):
        raise ValueError(f"Player count must be {min_players}-{max_players}, got {count}.")

    return count


def validate_players(
    players: Sequence[Player],
    min_players: int = 2,
    max_players: int = 8,
) -> list[Player]:
    """
    Validate a seat list before a session is created.

    Raises:
        ValueError: On a bad seat count, duplicate ids, a bot without a
            level, or a player that already carries picks
    """
    validate_player_count(len(players), min_players, max_players)

    seen: set[str] = set()
    for player in players:
        if player.id in seen:
            raise ValueError(f"Duplicate player id {player.id!r}.")
        seen.add(player.id)
        if player.is_bot and player.bot_level is None:
            raise ValueError(f"Bot player {player.id!r} has no bot level.")
        if player.picks or player.total_score:
            raise ValueError(f"Player {player.id!r} already has a score.")

    return list(players)
