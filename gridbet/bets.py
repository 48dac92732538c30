# gridbet/bets.py
"""
Grid bets and the generator contract every strategy goes through.

A generator receives the round, the grid selection (original match indices in
grid-position order) and one probability triple per selected match, plus the
seeded random source, and returns the bets for that round.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import List, Optional, Protocol, Sequence, Set, Tuple

from gridbet.grid import TOTAL_CELLS
from gridbet.outcomes import OUTCOMES, favorite_outcome, select_outcome
from gridbet.rng import RandomSource
from gridbet.rounds import Round

log = logging.getLogger(__name__)

DEFAULT_BETS_COUNT = 50
DEFAULT_ATTEMPTS_FACTOR = 20

Prediction = Optional[str]


@dataclass(frozen=True)
class Bet:
    """Nine predictions ("1"/"X"/"2", None = free cell), wagered `repeat_count` times."""
    predictions: Tuple[Prediction, ...]
    repeat_count: int = 1

    def __post_init__(self):
        if len(self.predictions) != TOTAL_CELLS:
            raise ValueError(f"a bet needs {TOTAL_CELLS} predictions, got {len(self.predictions)}")
        for p in self.predictions:
            if p is not None and p not in OUTCOMES:
                raise ValueError(f"invalid prediction {p!r}")
        if self.repeat_count < 1:
            raise ValueError("repeat_count must be >= 1")

    @property
    def key(self) -> Tuple[Prediction, ...]:
        return self.predictions

    def as_string(self) -> str:
        return "".join(p or "-" for p in self.predictions)

    @classmethod
    def from_string(cls, s: str, repeat_count: int = 1) -> "Bet":
        return cls(tuple(None if c == "-" else c for c in s), repeat_count)


@dataclass(frozen=True)
class RoundBets:
    date: str
    selected: Tuple[int, ...]
    bets: Tuple[Bet, ...]

    @property
    def wagers(self) -> int:
        return sum(b.repeat_count for b in self.bets)


def _pad(picks: Sequence[Prediction]) -> Tuple[Prediction, ...]:
    # short grid: positions with no selected match become free cells
    return tuple(picks[:TOTAL_CELLS]) + (None,) * (TOTAL_CELLS - min(len(picks), TOTAL_CELLS))


def favorite_bet(probabilities: Sequence[Sequence[float]], repeat_count: int = 1) -> Bet:
    """The deterministic bet: most likely outcome at every grid position."""
    return Bet(_pad([favorite_outcome(p) for p in probabilities]), repeat_count)


class BetGenerator(Protocol):
    def generate(self, round: Round, selected: Sequence[int],
                 probabilities: Sequence[Sequence[float]],
                 random: RandomSource) -> List[Bet]:
        ...


@dataclass(frozen=True)
class SampledBetGenerator:
    """
    Favourite bet plus probability-weighted samples, de-duplicated.

    With `upset_chance` set, each position keeps its favourite unless a draw
    falls under `upset_chance`, in which case that position is sampled.
    If `count` unique bets cannot be found within `count * attempts_factor`
    draws, the shortfall is added to the favourite bet's repeat_count.
    """
    count: int = DEFAULT_BETS_COUNT
    attempts_factor: int = DEFAULT_ATTEMPTS_FACTOR
    upset_chance: Optional[float] = None

    def _sample(self, probabilities: Sequence[Sequence[float]], random: RandomSource) -> Bet:
        picks: List[str] = []
        for probs in probabilities:
            if self.upset_chance is None or random() < self.upset_chance:
                picks.append(select_outcome(probs, random()))
            else:
                picks.append(favorite_outcome(probs))
        return Bet(_pad(picks))

    def generate(self, round: Round, selected: Sequence[int],
                 probabilities: Sequence[Sequence[float]],
                 random: RandomSource) -> List[Bet]:
        fav = favorite_bet(probabilities)
        bets: List[Bet] = [fav]
        seen: Set[Tuple[Prediction, ...]] = {fav.key}

        attempts = 0
        max_attempts = self.count * self.attempts_factor
        while len(bets) < self.count and attempts < max_attempts:
            bet = self._sample(probabilities, random)
            if bet.key not in seen:
                seen.add(bet.key)
                bets.append(bet)
            attempts += 1

        missing = self.count - len(bets)
        if missing > 0:
            log.warning("%s: only %d/%d unique bets after %d attempts; favourite bet repeated %d more times",
                        round.date, len(bets), self.count, attempts, missing)
            bets[0] = replace(fav, repeat_count=fav.repeat_count + missing)
        return bets


@dataclass(frozen=True)
class LockBetGenerator:
    """A single favourite bet wagered `count` times."""
    count: int = DEFAULT_BETS_COUNT

    def generate(self, round: Round, selected: Sequence[int],
                 probabilities: Sequence[Sequence[float]],
                 random: RandomSource) -> List[Bet]:
        return [favorite_bet(probabilities, repeat_count=self.count)]
