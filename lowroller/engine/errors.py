"""
Low Roller - Engine Errors

Every error here is a caller contract violation: the host reached a call it
must never make. The engine never recovers from them internally.
"""


class EngineError(Exception):
    """Base class for all rules-engine contract violations."""


class InvalidPhaseError(EngineError):
    """Operation attempted outside the phase (or turn step) it is valid in."""


class NoDiceRemainingError(EngineError):
    """Roll attempted with zero dice left this turn."""


class EmptyOrInactivePickError(EngineError):
    """Pick attempted with no active roll or with an empty selection."""


class NoActiveRollError(EmptyOrInactivePickError):
    """There is no pending roll to pick from."""


class EmptyPickError(EmptyOrInactivePickError):
    """The selection contains no offsets."""


class IndexOutOfRangeError(EngineError):
    """A selection offset falls outside the current roll."""

    def __init__(self, index: int, size: int) -> None:
        self.index = index
        self.size = size
        super().__init__(
            f"Pick index {index} is out of range. Must be between 0 and {size - 1}."
        )
