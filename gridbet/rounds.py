# gridbet/rounds.py
from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Tuple

from gridbet.errors import MalformedRound
from gridbet.outcomes import Triple, implied_probabilities

log = logging.getLogger(__name__)

_DATE_RE = re.compile(r"(\d{4}-\d{2}-\d{2})")
_KNOWN_KEYS = {"teams", "odds", "result"}


@dataclass(frozen=True)
class Team:
    home: str
    away: str


@dataclass(frozen=True)
class Round:
    """
    One date's fixtures with flat 1X2 odds and, once played, the result string.

    Probabilities are always derived from the odds; they are never read from
    or written back to the file.
    """
    date: str
    teams: Tuple[Team, ...]
    odds: Tuple[float, ...]
    result: Optional[str] = None
    extras: Dict[str, Any] = field(default_factory=dict, compare=False, hash=False)

    @property
    def match_count(self) -> int:
        return len(self.teams)

    @property
    def is_finalized(self) -> bool:
        return self.result is not None

    @property
    def probabilities(self) -> List[Triple]:
        return implied_probabilities(self.odds)

    def validate(self) -> "Round":
        """Raise MalformedRound if the round cannot be scored as a whole."""
        if len(self.odds) != 3 * len(self.teams):
            raise MalformedRound(self.date, f"{len(self.odds)} odds for {len(self.teams)} matches")
        bad = [o for o in self.odds if not o > 1.0]
        if bad:
            raise MalformedRound(self.date, f"odds must be > 1.0, got {bad[:3]}")
        if self.result is not None and len(self.result) != len(self.teams):
            raise MalformedRound(self.date, f"result has {len(self.result)} chars for {len(self.teams)} matches")
        return self

    @classmethod
    def from_dict(cls, data: Dict[str, Any], date: str) -> "Round":
        try:
            teams = tuple(Team(home=str(t["1"]), away=str(t["2"])) for t in data.get("teams") or [])
            odds = tuple(float(o) for o in data.get("odds") or [])
        except (KeyError, TypeError, ValueError) as e:
            raise MalformedRound(date, f"unreadable teams/odds ({e!r})") from e
        result = data.get("result")
        extras = {k: v for k, v in data.items() if k not in _KNOWN_KEYS}
        return cls(date=date, teams=teams, odds=odds,
                   result=None if result is None else str(result), extras=extras)

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {
            "teams": [{"1": t.home, "2": t.away} for t in self.teams],
            "odds": list(self.odds),
        }
        if self.result is not None:
            out["result"] = self.result
        out.update(self.extras)
        return out


# --------------------------
# Loading
# --------------------------

def date_from_filename(path: Path) -> str:
    m = _DATE_RE.search(path.stem)
    return m.group(1) if m else path.stem


def load_round(path: Path) -> Round:
    """Read and validate a single round file."""
    path = Path(path)
    date = date_from_filename(path)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise MalformedRound(date, f"invalid JSON ({e})") from e
    if not isinstance(data, dict):
        raise MalformedRound(date, "top-level JSON is not an object")
    return Round.from_dict(data, date).validate()


def load_rounds(data_dir: Path, finalized_only: bool = True) -> Tuple[Round, ...]:
    """
    Load every `*.json` round in `data_dir`, sorted by date.

    Malformed files are skipped with a warning; with `finalized_only`,
    rounds that have not been played (no result) are dropped too.
    """
    rounds: List[Round] = []
    for p in sorted(Path(data_dir).glob("*.json")):
        try:
            r = load_round(p)
        except MalformedRound as e:
            log.warning("skipping %s: %s", p.name, e)
            continue
        if finalized_only and not r.is_finalized:
            log.debug("skipping %s: no result yet", p.name)
            continue
        rounds.append(r)
    rounds.sort(key=lambda r: r.date)
    log.info("loaded %d rounds from %s", len(rounds), data_dir)
    return tuple(rounds)


def finalized(rounds: Iterable[Round]) -> List[Round]:
    """Rounds that can be scored: played and structurally valid."""
    out = []
    for r in rounds:
        if not r.is_finalized:
            continue
        try:
            out.append(r.validate())
        except MalformedRound as e:
            log.warning("excluding round from backtest: %s", e)
    return out
