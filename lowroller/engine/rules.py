"""
Low Roller - Scoring Rules

Pure scoring helpers. Every face scores its value except 3, which scores 0
("low roller" rule). Lower totals are better.
"""

from typing import Iterable

NUM_DICE = 7
FACES = (1, 2, 3, 4, 5, 6)
ZERO_FACE = 3

# Assumed value of each die that will still be re-rolled later in the turn.
# Bots use it as a flat estimate; the exact expectation is lower.
REROLL_EV = 3.0


def face_score(face: int) -> int:
    """Score of a single die face (3 -> 0, anything else -> face)."""
    return 0 if face == ZERO_FACE else face


def sum_score(faces: Iterable[int]) -> int:
    """Sum of ``face_score`` over a sequence of faces."""
    return sum(face_score(face) for face in faces)


def projected_score(banked: int, added: int, dice_left: int) -> int:
    """
    Heuristic end-of-turn score used by the bot policies.

    Args:
        banked: Total already banked this game
        added: Value of the dice about to be banked
        dice_left: Dice still to be re-rolled afterwards

    Returns:
        banked + added + round(REROLL_EV * dice_left)
    """
    return banked + added + round(REROLL_EV * dice_left)
