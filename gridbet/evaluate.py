# gridbet/evaluate.py
"""
Scoring of grid bets against a played round.

Every bet wagers all lines at one unit each. A line pays the product of the
decimal odds of the three predicted outcomes on it when all three are right.
Cells that cannot be resolved (no mapped match, result or odds past the end
of the round data) count as correct with a neutral x1 multiplier; such cells
are tallied in `recoveries` so reports can flag them.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from gridbet.bets import Bet, RoundBets
from gridbet.errors import InvalidResultCode, MalformedRound, OutOfRangeMatchIndex
from gridbet.grid import GRID_MATCH_COUNT, STANDARD_LINES, TOTAL_CELLS, GridLine, Selector, match_mapping, select_best_matches
from gridbet.outcomes import odds_for_prediction, result_code_to_outcome
from gridbet.rounds import Round, finalized

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class BetResult:
    """Outcome of a single wager of `bet`; `repeat_count` is applied by the round totals."""
    bet: Bet
    correct_cells: Tuple[bool, ...]
    correct_lines: Tuple[str, ...]
    winnings: float
    cost: float
    recoveries: int = 0

    @property
    def profit(self) -> float:
        return self.winnings - self.cost


@dataclass(frozen=True)
class RoundAccuracy:
    date: str
    line_hits: Tuple[int, ...]
    total_bets: int
    total_winnings: float
    total_cost: float
    profit: float
    best_bet: Optional[BetResult]
    max_possible_winnings: float
    recoveries: int = 0


@dataclass
class _CellView:
    """Per-round resolution of the grid: actual outcome and odds lookup per cell."""
    round: Round
    mapping: Mapping[int, int]
    recoveries: int = field(default=0)

    def actual(self, position: int) -> Optional[str]:
        idx = self.mapping.get(position)
        if idx is None:
            return None
        result = self.round.result or ""
        if idx < 0 or idx >= len(result):
            self.recoveries += 1
            log.debug("%s: cell %d -> match %d has no result", self.round.date, position, idx)
            return None
        return result_code_to_outcome(result[idx])

    def odds(self, position: int, prediction: Optional[str]) -> float:
        idx = self.mapping.get(position)
        if prediction is None or idx is None:
            return 1.0
        try:
            return odds_for_prediction(self.round.odds, idx, prediction)
        except OutOfRangeMatchIndex:
            self.recoveries += 1
            log.debug("%s: cell %d -> match %d has no odds", self.round.date, position, idx)
            return 1.0


def _require_result(round: Round) -> None:
    if round.result is None:
        raise MalformedRound(round.date, "round has no result to score against")


def _score(view: _CellView, bet: Bet, lines: Sequence[GridLine]) -> BetResult:
    start = view.recoveries
    correct: List[bool] = []
    for pos in range(TOTAL_CELLS):
        pred = bet.predictions[pos]
        if pred is None:
            correct.append(True)
            continue
        actual = view.actual(pos)
        correct.append(actual is None or actual == pred)

    cell_odds = [view.odds(pos, bet.predictions[pos]) for pos in range(TOTAL_CELLS)]

    hit_ids: List[str] = []
    winnings = 0.0
    for line in lines:
        if all(correct[p] for p in line.positions):
            hit_ids.append(line.id)
            payout = 1.0
            for p in line.positions:
                payout *= cell_odds[p]
            winnings += payout

    return BetResult(
        bet=bet,
        correct_cells=tuple(correct),
        correct_lines=tuple(hit_ids),
        winnings=winnings,
        cost=float(len(lines)),
        recoveries=view.recoveries - start,
    )


def evaluate_bet(round: Round, bet: Bet,
                 mapping: Optional[Mapping[int, int]] = None,
                 lines: Sequence[GridLine] = STANDARD_LINES) -> BetResult:
    """Score one bet; the grid mapping is recomputed from the round unless given."""
    _require_result(round)
    if mapping is None:
        mapping = match_mapping(round.probabilities)
    return _score(_CellView(round, mapping), bet, lines)


def perfect_bet(round: Round, mapping: Mapping[int, int]) -> Bet:
    """The bet that predicts the actual result at every mapped cell."""
    view = _CellView(round, mapping)
    return Bet(tuple(view.actual(pos) for pos in range(TOTAL_CELLS)))


def max_possible_winnings(round: Round,
                          mapping: Optional[Mapping[int, int]] = None,
                          lines: Sequence[GridLine] = STANDARD_LINES) -> float:
    _require_result(round)
    if mapping is None:
        mapping = match_mapping(round.probabilities)
    return evaluate_bet(round, perfect_bet(round, mapping), mapping, lines).winnings


def calculate_accuracy(round: Round, bets: Iterable[Bet],
                       lines: Sequence[GridLine] = STANDARD_LINES,
                       selector: Selector = select_best_matches) -> RoundAccuracy:
    """
    Score every bet of a round and aggregate.

    line_hits[k] counts wagers with exactly k correct lines. Totals and
    recoveries count every wager of a repeated bet; the best bet is the first
    one with the strictly highest profit for a single wager.
    """
    _require_result(round)
    mapping: Dict[int, int] = match_mapping(round.probabilities, selector=selector)
    view = _CellView(round, mapping)
    recoveries = 0

    line_hits = [0] * (len(lines) + 1)
    total_bets = 0
    total_winnings = 0.0
    total_cost = 0.0
    best: Optional[BetResult] = None

    for bet in bets:
        res = _score(view, bet, lines)
        n = bet.repeat_count
        line_hits[len(res.correct_lines)] += n
        total_bets += n
        total_winnings += res.winnings * n
        total_cost += res.cost * n
        recoveries += res.recoveries * n
        if best is None or res.profit > best.profit:
            best = res

    max_win = max_possible_winnings(round, mapping, lines)
    return RoundAccuracy(
        date=round.date,
        line_hits=tuple(line_hits),
        total_bets=total_bets,
        total_winnings=total_winnings,
        total_cost=total_cost,
        profit=total_winnings - total_cost,
        best_bet=best,
        max_possible_winnings=max_win,
        recoveries=recoveries,
    )


def backtest(rounds: Iterable[Round], round_bets: Iterable[RoundBets],
             lines: Sequence[GridLine] = STANDARD_LINES,
             selector: Selector = select_best_matches) -> List[RoundAccuracy]:
    """
    Score generated bets for every scorable round, keyed by date.

    Unplayed or malformed rounds are left out; a round with an invalid
    result character is logged and left out rather than scored partially.
    """
    by_date = {rb.date: rb for rb in round_bets}
    out: List[RoundAccuracy] = []
    for r in finalized(rounds):
        rb = by_date.get(r.date)
        bets = rb.bets if rb else ()
        if rb is not None:
            expected = tuple(selector(r.probabilities, GRID_MATCH_COUNT))
            if rb.selected != expected:
                log.warning("%s: bets were generated for grid %s but the round maps to %s",
                            r.date, list(rb.selected), list(expected))
        try:
            out.append(calculate_accuracy(r, bets, lines, selector))
        except InvalidResultCode as e:
            log.error("excluding round %s: %s", r.date, e)
    return out
