# gridbet/errors.py
"""
Error taxonomy for round loading and grid scoring.

Short grids and duplicate-bet exhaustion are recognised edge cases, not
exceptions: the first yields free (None) cells, the second pads the
favourite bet. See gridbet.grid and gridbet.bets.
"""
from __future__ import annotations


class GridBetError(Exception):
    """Base class for everything gridbet raises on purpose."""


class InvalidResultCode(GridBetError, ValueError):
    """A result character outside {"0", "1", "2"}."""

    def __init__(self, code: object):
        super().__init__(f"Invalid result code: {code!r}")
        self.code = code


class InvalidOutcome(GridBetError, ValueError):
    """A prediction symbol outside {"1", "X", "2"}."""

    def __init__(self, outcome: object):
        super().__init__(f"Invalid outcome: {outcome!r}")
        self.outcome = outcome


class MalformedRound(GridBetError, ValueError):
    """Round data that breaks the odds/teams/result length contract."""

    def __init__(self, date: str, reason: str):
        super().__init__(f"Malformed round {date}: {reason}")
        self.date = date
        self.reason = reason


class OutOfRangeMatchIndex(GridBetError, IndexError):
    """A grid cell mapped past the end of a round's odds or result."""

    def __init__(self, match_index: int, size: int):
        super().__init__(f"Match index {match_index} out of range (size {size})")
        self.match_index = match_index
        self.size = size


class ProbabilityError(GridBetError, ArithmeticError):
    """A probability triple that cannot be normalised (non-positive sum)."""
