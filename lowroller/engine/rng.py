"""
Low Roller - Seeded Generators

Every random stream in a session is derived from the root seed, so the
same seed and the same call sequence always reproduce the same game.
Sub-seeds are keyed off the event counter with a distinct prime per
stream so the streams do not correlate.
"""

import random

MASK64 = (1 << 64) - 1

SHUFFLE_SALT = 0x5EED
ROLL_PRIME = 7919
AUTOPLAY_PRIME = 104729
BOT_PRIME = 15485863


def _derive(seed: int, events_seq: int, prime: int) -> random.Random:
    sub_seed = (seed & MASK64) ^ ((events_seq * prime) & MASK64)
    return random.Random(sub_seed)


def shuffle_rng(seed: int) -> random.Random:
    """Generator for the one-off seat shuffle in init_game."""
    return random.Random((seed & MASK64) ^ SHUFFLE_SALT)


def roll_rng(seed: int, events_seq: int) -> random.Random:
    """Generator for the roll emitted after ``events_seq`` events."""
    return _derive(seed, events_seq, ROLL_PRIME)


def autoplay_rng(seed: int, events_seq: int) -> random.Random:
    """Generator for a timeout autoplay decision."""
    return _derive(seed, events_seq, AUTOPLAY_PRIME)


def bot_rng(seed: int, events_seq: int) -> random.Random:
    """Generator for a scheduled bot decision made by the session driver."""
    return _derive(seed, events_seq, BOT_PRIME)


def roll_faces(rng: random.Random, count: int) -> list[int]:
    """Roll ``count`` six-sided dice."""
    return [rng.randint(1, 6) for _ in range(count)]
