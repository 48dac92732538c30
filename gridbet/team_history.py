# gridbet/team_history.py
from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Tuple

log = logging.getLogger(__name__)


# --------------------------
# Canonicalisation & lookup
# --------------------------

_ALIAS_OVERRIDES = {
    "wolverhampton": "wolves",
    "wolverhampton wanderers": "wolves",
    "tottenham hotspur": "tottenham",
    "newcastle united": "newcastle",
    "queens park rangers": "qpr",
    "west bromwich albion": "west brom",
    "west bromwich": "west brom",
    "sheffield wednesday": "sheffield weds",
    "brighton and hove albion": "brighton",
    "nottm forest": "nottingham forest",
}

_CANON_RE = re.compile(r"[^a-z0-9]+")


def canon_team(name: str) -> str:
    """Normalise a team display name to a lookup key."""
    if not name:
        return ""
    s = name.lower().strip()
    s = s.replace("&", "and")
    s = re.sub(r"\b(?:afc|a\.?f\.?c\.?|fc)\b", "", s)
    s = _CANON_RE.sub(" ", s).strip()
    s = re.sub(r"\s+", " ", s)
    return _ALIAS_OVERRIDES.get(s, s)


@dataclass(frozen=True)
class TeamMatch:
    date: str
    opponent: str
    is_home: bool
    goals_for: int
    goals_against: int
    result: str  # "W" | "D" | "L"


@dataclass(frozen=True)
class TeamHistory:
    team_name: str
    matches: Tuple[TeamMatch, ...]  # most recent first

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "TeamHistory":
        matches = tuple(
            TeamMatch(
                date=str(m["date"]),
                opponent=str(m.get("opponent", "")),
                is_home=bool(m.get("isHome")),
                goals_for=int(m.get("goalsFor", 0)),
                goals_against=int(m.get("goalsAgainst", 0)),
                result=str(m.get("result", "")),
            )
            for m in data.get("matches") or []
        )
        return cls(team_name=str(data["teamName"]), matches=matches)


def load_team_histories(teams_dir: Path) -> Dict[str, TeamHistory]:
    """Read every per-team file under `teams_dir`, keyed by canonical name."""
    out: Dict[str, TeamHistory] = {}
    d = Path(teams_dir)
    if not d.is_dir():
        log.warning("team history dir %s missing; team-aware strategies get no data", d)
        return out
    for p in sorted(d.glob("*.json")):
        if "-all" in p.stem or p.stem == "all-leagues":
            continue
        try:
            th = TeamHistory.from_dict(json.loads(p.read_text(encoding="utf-8")))
        except (json.JSONDecodeError, KeyError, TypeError, ValueError) as e:
            log.warning("skipping team file %s: %r", p.name, e)
            continue
        out[canon_team(th.team_name)] = th
    log.info("loaded %d team histories from %s", len(out), d)
    return out


def find_team(name: str, histories: Mapping[str, TeamHistory]) -> Optional[TeamHistory]:
    c = canon_team(name)
    if not c:
        return None
    if c in histories:
        return histories[c]
    for key, th in histories.items():
        if c in key or key in c:
            return th
    return None


# --------------------------
# Form
# --------------------------

@dataclass(frozen=True)
class TeamForm:
    recent_form: float = 0.5   # win rate, last 5
    home_form: float = 0.5     # win rate, last 10 at home
    away_form: float = 0.5     # win rate, last 10 away
    draw_rate: float = 0.25    # last 10
    goal_diff: float = 0.0     # per game, last 5
    head_to_head: float = 0.5  # win rate vs opponent, last 6 meetings


def _win_rate(matches, default: float) -> float:
    if not matches:
        return default
    return sum(1 for m in matches if m.result == "W") / len(matches)


def team_form(history: TeamHistory, before_date: str, opponent: Optional[str] = None) -> TeamForm:
    """Form from matches strictly before `before_date` (ISO dates compare as strings)."""
    prior = [m for m in history.matches if m.date < before_date]
    if not prior:
        return TeamForm()

    last5 = prior[:5]
    last10 = prior[:10]
    home = [m for m in prior if m.is_home][:10]
    away = [m for m in prior if not m.is_home][:10]

    h2h = 0.5
    if opponent:
        opp = canon_team(opponent)
        meetings = []
        for m in prior:
            oc = canon_team(m.opponent)
            if opp and oc and (opp in oc or oc in opp):
                meetings.append(m)
        h2h = _win_rate(meetings[:6], 0.5)

    return TeamForm(
        recent_form=_win_rate(last5, 0.5),
        home_form=_win_rate(home, 0.5),
        away_form=_win_rate(away, 0.5),
        draw_rate=sum(1 for m in last10 if m.result == "D") / len(last10),
        goal_diff=sum(m.goals_for - m.goals_against for m in last5) / max(len(last5), 1),
        head_to_head=h2h,
    )
