# scripts/add_lines.py
"""
Annotate one round file with its grid, the 27 line picks and the bets of a
strategy, e.g.:

    python scripts/add_lines.py 2025-08-23 [strategy]
"""
from __future__ import annotations

import json
import sys
from pathlib import Path

from gridbet import log as logmod
from gridbet.config import BacktestConfig
from gridbet.errors import MalformedRound
from gridbet.grid import COL1, COL2, COL3, GRID_SIZE
from gridbet.rounds import load_round
from gridbet.strategies import default_strategies, strategy_map
from gridbet.team_history import load_team_histories

DEFAULT_STRATEGY = "ultra_conservative"


class UnknownStrategy(LookupError):
    pass


def annotate(path: Path, strategy_name: str, cfg: BacktestConfig) -> dict:
    rnd = load_round(path)
    strategies = strategy_map(default_strategies(cfg.bets_count, load_team_histories(cfg.teams_dir)))
    if strategy_name not in strategies:
        raise UnknownStrategy(strategy_name)
    strategy = strategies[strategy_name]

    rb = strategy.generate(rnd, base_seed=cfg.seed)
    favourite = rb.bets[0].predictions
    implied = rnd.probabilities
    adjusted = strategy.adjusted(rnd, rb.selected)

    picks = []
    for pos, idx in enumerate(rb.selected):
        t = rnd.teams[idx]
        picks.append({
            "position": pos,
            "matchIndex": idx,
            "homeTeam": t.home,
            "awayTeam": t.away,
            "pick": favourite[pos],
            "probs": [round(p, 4) for p in implied[idx]],
            "adjustedProbs": [round(p, 4) for p in adjusted[pos]],
            "odds": list(rnd.odds[idx * 3: idx * 3 + 3]),
        })

    data = rnd.to_dict()
    data["lines"] = [[favourite[a], favourite[b], favourite[c]]
                     for a in COL1 for b in COL2 for c in COL3]
    data["grid"] = {"strategy": strategy_name, "selectedMatches": list(rb.selected), "picks": picks}
    data["bets"] = [b.as_string() for b in rb.bets for _ in range(b.repeat_count)]
    return data


def main(argv: list[str] | None = None) -> int:
    args = list(sys.argv[1:] if argv is None else argv)
    cfg = BacktestConfig.from_env()
    logmod.setup(cfg.log_level)
    if not args:
        print("Usage: python scripts/add_lines.py <date> [strategy]")
        return 1

    name = args[0].replace(".json", "")
    strategy_name = args[1] if len(args) > 1 else DEFAULT_STRATEGY
    path = cfg.data_dir / f"{name}.json"
    try:
        data = annotate(path, strategy_name, cfg)
    except FileNotFoundError:
        print(f"[add_lines] missing {path}")
        return 1
    except MalformedRound as e:
        print(f"[add_lines] {e}")
        return 1
    except UnknownStrategy:
        print(f"[add_lines] unknown strategy {strategy_name!r}")
        return 2

    for row in range(GRID_SIZE):
        cells = data["grid"]["picks"][row * GRID_SIZE:(row + 1) * GRID_SIZE]
        print("  ".join(f"{c['position']}: {c['pick']} {c['homeTeam'][:12]:<12} v {c['awayTeam'][:12]:<12}"
                        for c in cells))
    path.write_text(json.dumps(data, indent=2), encoding="utf-8")
    print(f"[add_lines] wrote {len(data['lines'])} lines and {len(data['bets'])} bets to {path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
