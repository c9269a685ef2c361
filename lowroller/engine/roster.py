"""
Low Roller - Bot Roster and Display Names

Named bot identities per level, plus validation that keeps human players
from taking a bot's or the house's name.
"""

import random
from dataclasses import dataclass

from lowroller.engine.base import BotLevel, Player

MAX_NAME_ATTEMPTS = 100


@dataclass(frozen=True)
class BotIdentity:
    """A named bot persona."""
    name: str
    level: BotLevel
    slot: int


AMATEURS: tuple[BotIdentity, ...] = tuple(
    BotIdentity(name=name, level=BotLevel.AMATEUR, slot=slot)
    for slot, name in enumerate(
        (
            "Dicey McRollface",
            "Bet Midler",
            "Snake Eyes Sally",
            "Sir Lose-A-Lot",
            "Bluffalo Bill",
            "Risky Biscuit",
            "Rollin' Stones",
        ),
        start=1,
    )
)

PROS: tuple[BotIdentity, ...] = tuple(
    BotIdentity(name=name, level=BotLevel.PRO, slot=slot)
    for slot, name in enumerate(
        (
            "High Roller Hank",
            "Bot Damon",
            "The Count of Monte Crisco",
            "Win Diesel",
            "Lady Luckless",
            "Pair O'Dice Hilton",
            "Monte Carlo Monetball",
        ),
        start=1,
    )
)

HOUSE_NAMES = ("Casino", "House", "The House")

_RESERVED: frozenset[str] = frozenset(
    name.lower() for name in HOUSE_NAMES + tuple(b.name for b in AMATEURS + PROS)
)


def roster(level: BotLevel) -> tuple[BotIdentity, ...]:
    """All bot identities for a level."""
    return PROS if level == BotLevel.PRO else AMATEURS


def pick_identity(
    level: BotLevel,
    rng: random.Random,
    avoiding: set[str] | frozenset[str] = frozenset(),
) -> BotIdentity:
    """Choose a bot identity, preferring names not already at the table."""
    pool = roster(level)
    unused = [bot for bot in pool if bot.name not in avoiding]
    return rng.choice(unused or list(pool))


def make_bot(player_id: str, level: BotLevel, rng: random.Random, **kwargs) -> Player:
    """Build a bot seat with a roster name."""
    avoiding = kwargs.pop("avoiding", frozenset())
    identity = pick_identity(level, rng, avoiding)
    return Player(
        id=player_id,
        display=identity.name,
        is_bot=True,
        bot_level=level,
        **kwargs,
    )


def is_valid_name(name: str) -> bool:
    """True for a non-blank name that is not reserved (case-insensitive)."""
    normalized = name.strip().lower()
    return bool(normalized) and normalized not in _RESERVED


def sanitize_name(name: str, fallback: str = "Player") -> str:
    """
    Clean a human player's display name.

    Blank names become ``fallback``; reserved names get a numeric suffix
    (" 1", " 2", ...) until a free one is found.
    """
    trimmed = name.strip()
    if not trimmed:
        return fallback

    if is_valid_name(trimmed):
        return trimmed

    for counter in range(1, MAX_NAME_ATTEMPTS + 1):
        candidate = f"{trimmed} {counter}"
        if is_valid_name(candidate):
            return candidate

    return fallback
