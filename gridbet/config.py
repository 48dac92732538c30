# gridbet/config.py
from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

DEFAULT_BETS_COUNT = 50
DEFAULT_SEED = 42


def _int_env(env: Mapping[str, str], key: str, default: int) -> int:
    raw = (env.get(key) or "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{key} must be an integer, got {raw!r}") from None


@dataclass(frozen=True)
class BacktestConfig:
    """Paths and knobs for a backtest run, usually taken from the environment."""
    data_dir: Path = Path("data/rounds")
    teams_dir: Path = Path("data/teams")
    reports_dir: Path = Path("reports")
    bets_count: int = DEFAULT_BETS_COUNT
    seed: int = DEFAULT_SEED
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "BacktestConfig":
        env = os.environ if environ is None else environ
        bets_count = _int_env(env, "GRIDBET_BETS_COUNT", DEFAULT_BETS_COUNT)
        if bets_count < 1:
            raise ValueError(f"GRIDBET_BETS_COUNT must be >= 1, got {bets_count}")
        return cls(
            data_dir=Path(env.get("GRIDBET_DATA_DIR") or "data/rounds"),
            teams_dir=Path(env.get("GRIDBET_TEAMS_DIR") or "data/teams"),
            reports_dir=Path(env.get("GRIDBET_REPORTS_DIR") or "reports"),
            bets_count=bets_count,
            seed=_int_env(env, "GRIDBET_SEED", DEFAULT_SEED),
            log_level=(env.get("LOG_LEVEL") or "INFO").upper(),
        )
