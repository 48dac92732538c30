# gridbet/strategies.py
"""
Probability adjusters and the named strategies built from them.

An adjuster sees one selected match at a time and returns the (home, draw,
away) triple the bet generator should use. Every strategy selects its grid
with the same selector the evaluator is given, so generated bets and scores
refer to the same cells.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Optional, Protocol, Sequence

from gridbet.bets import BetGenerator, LockBetGenerator, RoundBets, SampledBetGenerator
from gridbet.evaluate import RoundAccuracy, backtest
from gridbet.grid import GRID_MATCH_COUNT, Selector, select_best_matches
from gridbet.outcomes import Triple, favorite_outcome, normalize_triple
from gridbet.rng import create_random, round_seed
from gridbet.rounds import Round, Team, finalized
from gridbet.team_history import TeamHistory, find_team, team_form

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class MatchContext:
    round: Round
    match_index: int
    probabilities: Triple  # bookmaker-implied

    @property
    def teams(self) -> Optional[Team]:
        if 0 <= self.match_index < len(self.round.teams):
            return self.round.teams[self.match_index]
        return None


class ProbabilityAdjuster(Protocol):
    def adjust(self, match: MatchContext) -> Triple:
        ...


# --------------------------
# Adjusters
# --------------------------

@dataclass(frozen=True)
class ImpliedProbabilities:
    """No adjustment: sample straight from the bookmaker's implied odds."""

    def adjust(self, match: MatchContext) -> Triple:
        return match.probabilities


@dataclass(frozen=True)
class WeightParams:
    home_boost: float = 1.0
    draw_penalty: float = 1.0
    away_adjust: float = 1.0


@dataclass(frozen=True)
class WeightedAdjuster:
    params: WeightParams = WeightParams()

    def adjust(self, match: MatchContext) -> Triple:
        h, d, a = match.probabilities
        p = self.params
        return normalize_triple((h * p.home_boost, d * p.draw_penalty, a * p.away_adjust))


# draws never picked
SIMPLE_FAVORITE = WeightParams(home_boost=1.5, draw_penalty=0.0, away_adjust=1.0)
ULTRA_CONSERVATIVE = WeightParams(home_boost=1.8, draw_penalty=0.1, away_adjust=0.9)
HOME_BIAS = WeightParams(home_boost=2.5, draw_penalty=0.0, away_adjust=0.8)
PURE_FAVORITE = WeightParams(home_boost=1.3, draw_penalty=0.2, away_adjust=1.0)


@dataclass(frozen=True)
class TeamIntelParams:
    away_value_form_diff: float = 0.5
    away_value_min_odds: float = 0.35
    away_min_away_form: float = 0.4
    h2h_override_threshold: float = 0.7
    h2h_min_home_odds: float = 0.35


_ONE_HOT = {"1": (1.0, 0.0, 0.0), "X": (0.0, 1.0, 0.0), "2": (0.0, 0.0, 1.0)}


@dataclass(frozen=True)
class TeamIntelligenceAdjuster:
    """
    Ultra-conservative favourite, overridden by club history:

    * away pick when the away side's recent form beats the home side's by
      `away_value_form_diff`, the market gives the away side at least
      `away_value_min_odds` and it wins at least `away_min_away_form` away;
    * back to home when the home side's head-to-head record reaches
      `h2h_override_threshold` and the market gives home `h2h_min_home_odds`.

    Returns a one-hot triple for the chosen outcome.
    """
    histories: Mapping[str, TeamHistory] = field(default_factory=dict)
    params: TeamIntelParams = TeamIntelParams()
    base: WeightParams = ULTRA_CONSERVATIVE

    def pick(self, match: MatchContext) -> str:
        probs = match.probabilities
        pick = favorite_outcome(WeightedAdjuster(self.base).adjust(match))
        teams = match.teams
        if teams is None:
            return pick
        home = find_team(teams.home, self.histories)
        away = find_team(teams.away, self.histories)
        if home is None or away is None:
            return pick

        p = self.params
        hf = team_form(home, match.round.date, teams.away)
        af = team_form(away, match.round.date, teams.home)

        if (pick == "1"
                and af.recent_form - hf.recent_form >= p.away_value_form_diff
                and probs[2] >= p.away_value_min_odds
                and af.away_form >= p.away_min_away_form):
            pick = "2"
        if (pick == "2"
                and hf.head_to_head >= p.h2h_override_threshold
                and probs[0] >= p.h2h_min_home_odds):
            pick = "1"
        return pick

    def adjust(self, match: MatchContext) -> Triple:
        return _ONE_HOT[self.pick(match)]


# --------------------------
# Strategies
# --------------------------

@dataclass(frozen=True)
class Strategy:
    name: str
    adjuster: ProbabilityAdjuster
    generator: BetGenerator
    selector: Selector = select_best_matches

    def adjusted(self, round: Round, selected: Sequence[int]) -> List[Triple]:
        implied = round.probabilities
        return [
            normalize_triple(self.adjuster.adjust(MatchContext(round, idx, implied[idx])))
            for idx in selected
        ]

    def generate(self, round: Round, base_seed: Optional[int] = None) -> RoundBets:
        """Bets for one round, reproducible from (date, base_seed)."""
        selected = self.selector(round.probabilities, GRID_MATCH_COUNT)
        probs = self.adjusted(round, selected)
        random = create_random(round_seed(round.date, base_seed))
        bets = self.generator.generate(round, selected, probs, random)
        return RoundBets(date=round.date, selected=tuple(selected), bets=tuple(bets))

    def run(self, rounds: Sequence[Round], base_seed: Optional[int] = None) -> List[RoundAccuracy]:
        """Generate and score bets for every scorable round with the same grid selection."""
        scorable = finalized(rounds)
        round_bets = [self.generate(r, base_seed) for r in scorable]
        return backtest(scorable, round_bets, selector=self.selector)


def default_strategies(bets_count: int = 50,
                       histories: Optional[Mapping[str, TeamHistory]] = None) -> List[Strategy]:
    """The random baseline plus the favourite family; team intelligence when histories exist."""
    out = [
        Strategy("random", ImpliedProbabilities(), SampledBetGenerator(count=bets_count)),
        Strategy("simple_favorite", WeightedAdjuster(SIMPLE_FAVORITE),
                 SampledBetGenerator(count=bets_count, attempts_factor=50, upset_chance=0.05)),
        Strategy("ultra_conservative", WeightedAdjuster(ULTRA_CONSERVATIVE),
                 SampledBetGenerator(count=bets_count, attempts_factor=50, upset_chance=0.02)),
        Strategy("home_bias", WeightedAdjuster(HOME_BIAS),
                 SampledBetGenerator(count=bets_count, attempts_factor=50, upset_chance=0.03)),
        Strategy("pure_favorite", WeightedAdjuster(PURE_FAVORITE), LockBetGenerator(count=bets_count)),
    ]
    if histories:
        out.append(Strategy("team_intelligence", TeamIntelligenceAdjuster(dict(histories)),
                            LockBetGenerator(count=bets_count)))
    return out


def strategy_map(strategies: Sequence[Strategy]) -> Dict[str, Strategy]:
    return {s.name: s for s in strategies}
