# gridbet/summary.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Mapping, Optional

import numpy as np
import pandas as pd

from gridbet.evaluate import BetResult, RoundAccuracy

BASELINE = "random"


@dataclass(frozen=True)
class Summary:
    total_bets: int
    total_winnings: float
    total_cost: float
    profit: float
    roi: float
    avg_winnings_per_bet: float
    avg_cost_per_bet: float
    avg_profit_per_bet: float
    line_hits_distribution: List[int]
    best_overall_bet: Optional[BetResult]
    profitable_dates: int
    total_dates: int
    total_max_possible_winnings: float
    recoveries: int = 0

    def to_dict(self) -> Dict[str, Any]:
        best = self.best_overall_bet
        return {
            "total_bets": self.total_bets,
            "total_winnings": round(self.total_winnings, 4),
            "total_cost": round(self.total_cost, 4),
            "profit": round(self.profit, 4),
            "roi": round(self.roi, 4),
            "avg_winnings_per_bet": round(self.avg_winnings_per_bet, 4),
            "avg_cost_per_bet": round(self.avg_cost_per_bet, 4),
            "avg_profit_per_bet": round(self.avg_profit_per_bet, 4),
            "line_hits_distribution": list(self.line_hits_distribution),
            "best_overall_bet": None if best is None else {
                "predictions": best.bet.as_string(),
                "correct_lines": len(best.correct_lines),
                "winnings": round(best.winnings, 4),
                "profit": round(best.profit, 4),
            },
            "profitable_dates": self.profitable_dates,
            "total_dates": self.total_dates,
            "total_max_possible_winnings": round(self.total_max_possible_winnings, 4),
            "recoveries": self.recoveries,
        }


def _line_hits_sum(results: List[RoundAccuracy]) -> List[int]:
    if not results:
        return []
    width = max(len(r.line_hits) for r in results)
    acc = np.zeros(width, dtype=np.int64)
    for r in results:
        acc[:len(r.line_hits)] += np.asarray(r.line_hits, dtype=np.int64)
    return [int(x) for x in acc]


def summarize(results: Iterable[RoundAccuracy]) -> Summary:
    """Fold per-round accuracy into totals; the order of rounds does not matter."""
    results = list(results)
    total_bets = sum(r.total_bets for r in results)
    total_winnings = float(sum(r.total_winnings for r in results))
    total_cost = float(sum(r.total_cost for r in results))
    profit = total_winnings - total_cost
    roi = (profit / total_cost) * 100.0 if total_cost > 0 else 0.0

    best: Optional[BetResult] = None
    for r in results:
        if r.best_bet is not None and (best is None or r.best_bet.profit > best.profit):
            best = r.best_bet

    def per_bet(x: float) -> float:
        return x / total_bets if total_bets > 0 else 0.0

    return Summary(
        total_bets=total_bets,
        total_winnings=total_winnings,
        total_cost=total_cost,
        profit=profit,
        roi=roi,
        avg_winnings_per_bet=per_bet(total_winnings),
        avg_cost_per_bet=per_bet(total_cost),
        avg_profit_per_bet=per_bet(profit),
        line_hits_distribution=_line_hits_sum(results),
        best_overall_bet=best,
        profitable_dates=sum(1 for r in results if r.profit > 0),
        total_dates=len(results),
        total_max_possible_winnings=float(sum(r.max_possible_winnings for r in results)),
        recoveries=sum(r.recoveries for r in results),
    )


def rank_strategies(summaries: Mapping[str, Summary], baseline: str = BASELINE) -> pd.DataFrame:
    """One row per strategy, best ROI first, with the ROI gap to the baseline."""
    cols = ["strategy", "roi", "profit", "total_bets", "total_cost", "total_winnings",
            "profitable_dates", "total_dates", "recoveries", "vs_baseline"]
    if not summaries:
        return pd.DataFrame(columns=cols)
    df = pd.DataFrame([
        {"strategy": name, "roi": s.roi, "profit": s.profit, "total_bets": s.total_bets,
         "total_cost": s.total_cost, "total_winnings": s.total_winnings,
         "profitable_dates": s.profitable_dates, "total_dates": s.total_dates,
         "recoveries": s.recoveries}
        for name, s in summaries.items()
    ])
    base = summaries.get(baseline)
    df["vs_baseline"] = df["roi"] - base.roi if base is not None else np.nan
    df = df.sort_values("roi", ascending=False, kind="mergesort").reset_index(drop=True)
    return df[cols]
