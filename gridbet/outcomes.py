# gridbet/outcomes.py
from __future__ import annotations

from typing import List, Sequence, Tuple

from gridbet.errors import InvalidOutcome, InvalidResultCode, OutOfRangeMatchIndex, ProbabilityError

Triple = Tuple[float, float, float]
Outcome = str  # "1" | "X" | "2"

# Fixed outcome order: home, draw, away. Also the tie-break order.
OUTCOMES: Tuple[str, str, str] = ("1", "X", "2")

_RESULT_TO_OUTCOME = {"0": "1", "1": "X", "2": "2"}
_OUTCOME_TO_RESULT = {v: k for k, v in _RESULT_TO_OUTCOME.items()}


# --------------------------
# Result codes <-> outcome symbols
# --------------------------

def result_code_to_outcome(code: str) -> Outcome:
    """Map a stored result character ("0"/"1"/"2") to "1"/"X"/"2"."""
    try:
        return _RESULT_TO_OUTCOME[code]
    except (KeyError, TypeError):
        raise InvalidResultCode(code) from None


def outcome_to_result_code(outcome: Outcome) -> str:
    try:
        return _OUTCOME_TO_RESULT[outcome]
    except (KeyError, TypeError):
        raise InvalidOutcome(outcome) from None


def odds_for_prediction(odds: Sequence[float], match_index: int, outcome: Outcome) -> float:
    """
    Decimal odds for `outcome` of match `match_index` in a flat
    [home0, draw0, away0, home1, ...] odds list.

    Raises OutOfRangeMatchIndex when the round has no market for that match;
    the evaluator turns that into a neutral multiplier.
    """
    offset = int(outcome_to_result_code(outcome))
    idx = match_index * 3 + offset
    if match_index < 0 or idx >= len(odds):
        raise OutOfRangeMatchIndex(match_index, len(odds) // 3)
    return float(odds[idx])


# --------------------------
# Probabilities
# --------------------------

def normalize_triple(triple: Sequence[float]) -> Triple:
    a, b, c = (float(x) for x in triple)
    if min(a, b, c) < 0:
        raise ProbabilityError(f"negative probability in {(a, b, c)}")
    s = a + b + c
    if not s > 0:
        raise ProbabilityError(f"probabilities sum to {s}, cannot normalise {(a, b, c)}")
    return a / s, b / s, c / s


def implied_probabilities(odds: Sequence[float]) -> List[Triple]:
    """Bookmaker-implied (1/odds, margin removed) triple for every match."""
    out: List[Triple] = []
    for i in range(0, len(odds) - len(odds) % 3, 3):
        h, d, a = odds[i], odds[i + 1], odds[i + 2]
        if h <= 0 or d <= 0 or a <= 0:
            raise ProbabilityError(f"non-positive odds at match {i // 3}: {(h, d, a)}")
        out.append(normalize_triple((1.0 / h, 1.0 / d, 1.0 / a)))
    return out


def select_outcome(probs: Sequence[float], r: float) -> Outcome:
    """Inverse-CDF pick over (home, draw, away) for a uniform draw `r`."""
    if r < probs[0]:
        return "1"
    if r < probs[0] + probs[1]:
        return "X"
    return "2"


def favorite_outcome(probs: Sequence[float]) -> Outcome:
    # max() returns the first maximum, so ties go home > draw > away
    best = max(range(3), key=lambda i: probs[i])
    return OUTCOMES[best]
