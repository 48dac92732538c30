import json
from gridbet.team_history import (TeamForm, TeamHistory, canon_team, find_team,
                                  load_team_histories, team_form)

def _history(name, rows):
    return TeamHistory.from_dict({"teamName": name, "matches": [
        {"date": d, "opponent": o, "isHome": h, "goalsFor": gf, "goalsAgainst": ga, "result": r}
        for d, o, h, gf, ga, r in rows]})

def test_canon_team():
    assert canon_team("Brighton & Hove Albion FC") == "brighton"
    assert canon_team("Wolverhampton Wanderers") == "wolves"
    assert canon_team("AFC Bournemouth") == "bournemouth"
    assert canon_team("  Leeds   United ") == "leeds united"
    assert canon_team("") == ""

def test_find_team_direct_and_partial():
    th = _history("Leeds United", [])
    hist = {"leeds united": th}
    assert find_team("Leeds United FC", hist) is th
    assert find_team("Leeds", hist) is th
    assert find_team("Arsenal", hist) is None

def test_load_team_histories(tmp_path):
    (tmp_path / "leeds.json").write_text(json.dumps({"teamName": "Leeds United", "matches": []}))
    (tmp_path / "premier-all.json").write_text(json.dumps({"teamName": "Everyone", "matches": []}))
    (tmp_path / "broken.json").write_text("{")
    (tmp_path / "nameless.json").write_text(json.dumps({"matches": []}))
    hist = load_team_histories(tmp_path)
    assert list(hist) == ["leeds united"]
    assert load_team_histories(tmp_path / "missing") == {}

def test_team_form_neutral_without_history():
    th = _history("A", [("2025-09-01", "B", True, 1, 0, "W")])
    assert team_form(th, "2025-08-01") == TeamForm()

def test_team_form_values():
    th = _history("A", [
        ("2025-08-20", "B", True, 2, 0, "W"),
        ("2025-08-13", "C", False, 1, 1, "D"),
        ("2025-08-06", "B", False, 0, 1, "L"),
        ("2025-07-30", "D", True, 3, 1, "W"),
    ])
    f = team_form(th, "2025-08-23", opponent="B")
    assert f.recent_form == 0.5 and f.home_form == 1.0 and f.away_form == 0.0
    assert f.draw_rate == 0.25 and f.goal_diff == 0.75 and f.head_to_head == 0.5
