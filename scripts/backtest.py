# scripts/backtest.py
from __future__ import annotations

import json
import sys
import datetime as _dt
from typing import Dict

from gridbet import log as logmod
from gridbet.config import BacktestConfig
from gridbet.rounds import load_rounds
from gridbet.strategies import default_strategies, strategy_map
from gridbet.summary import Summary, rank_strategies, summarize
from gridbet.team_history import load_team_histories


def main(argv: list[str] | None = None) -> int:
    """Backtest every registered strategy (or the ones named on the command line)."""
    cfg = BacktestConfig.from_env()
    logmod.setup(cfg.log_level)
    wanted = list(sys.argv[1:] if argv is None else argv)

    rounds = load_rounds(cfg.data_dir)
    if not rounds:
        print(f"[backtest] no finalized rounds in {cfg.data_dir}")
        return 1

    histories = load_team_histories(cfg.teams_dir)
    strategies = strategy_map(default_strategies(cfg.bets_count, histories))
    unknown = [w for w in wanted if w not in strategies]
    if unknown:
        print(f"[backtest] unknown strategies {unknown}; available: {sorted(strategies)}")
        return 2
    names = wanted or list(strategies)

    summaries: Dict[str, Summary] = {}
    for name in names:
        results = strategies[name].run(rounds, base_seed=cfg.seed)
        summaries[name] = summarize(results)
        s = summaries[name]
        caveat = f" ({s.recoveries} cells recovered)" if s.recoveries else ""
        print(f"[backtest] {name:<20} ROI {s.roi:+8.2f}%  profit {s.profit:+10.2f}  "
              f"profitable {s.profitable_dates}/{s.total_dates}{caveat}")

    cfg.reports_dir.mkdir(parents=True, exist_ok=True)
    table = rank_strategies(summaries)
    csv_path = cfg.reports_dir / "strategy_ranking.csv"
    table.to_csv(csv_path, index=False)

    out = {
        "generated_utc": _dt.datetime.now(_dt.timezone.utc).isoformat(),
        "rounds": len(rounds),
        "bets_count": cfg.bets_count,
        "seed": cfg.seed,
        "strategies": {n: s.to_dict() for n, s in summaries.items()},
    }
    json_path = cfg.reports_dir / "backtest_summary.json"
    json_path.write_text(json.dumps(out, indent=2), encoding="utf-8")

    print(table.to_string(index=False, float_format=lambda x: f"{x:.2f}"))
    print(f"[backtest] wrote {csv_path}, {json_path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
